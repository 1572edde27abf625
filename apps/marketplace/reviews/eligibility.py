"""Marketplace Reviews - Who may rate whom.

Pure rules shared by ``ReviewService`` on the server and the portal
``ReviewSubmitter``: the reviewer and the target stand on opposite sides of
the marketplace, and the review ``type`` names the side being rated.
"""
from dataclasses import dataclass
from typing import Dict, Optional

from apps.common.core.iri import make_iri

ROLE_CLIENT = 'client'
ROLE_MASTER = 'master'
MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ''
    code: str = ''

    def __bool__(self) -> bool:
        return self.allowed


ALLOWED = Decision(True)


def review_type_for(actor_role: Optional[str]) -> Optional[str]:
    """The side a reviewer with ``actor_role`` rates, or None when they cannot review."""
    if actor_role == ROLE_MASTER:
        return ROLE_CLIENT
    if actor_role == ROLE_CLIENT:
        return ROLE_MASTER
    return None


def can_review(actor_id, actor_role: Optional[str], target_id, target_role: Optional[str]) -> Decision:
    if actor_id is None:
        return Decision(False, 'You must be signed in to leave a review', 'AUTHENTICATION_ERROR')
    if target_id is None:
        return Decision(False, 'Review target not found', 'USER_NOT_FOUND')
    if str(actor_id) == str(target_id):
        return Decision(False, 'You cannot review yourself', 'SELF_REVIEW_FORBIDDEN')
    rated_side = review_type_for(actor_role)
    if rated_side is None:
        return Decision(False, 'Only clients and masters can leave reviews', 'ROLE_MISMATCH')
    if target_role != rated_side:
        return Decision(False, f'A {actor_role} can only review a {rated_side}', 'ROLE_MISMATCH')
    return ALLOWED


def validate_rating(rating) -> Decision:
    if isinstance(rating, bool) or not isinstance(rating, int) or not MIN_RATING <= rating <= MAX_RATING:
        return Decision(False, 'Rating must be between 1 and 5', 'INVALID_RATING')
    return ALLOWED


def can_complain(actor_id, actor_role: Optional[str], respondent_id) -> Decision:
    if actor_id is None:
        return Decision(False, 'You must be signed in to file a complaint', 'AUTHENTICATION_ERROR')
    if actor_role not in (ROLE_CLIENT, ROLE_MASTER):
        return Decision(False, 'Only clients and masters can file complaints', 'ROLE_MISMATCH')
    if respondent_id is None:
        return Decision(False, 'Respondent not found', 'USER_NOT_FOUND')
    if str(actor_id) == str(respondent_id):
        return Decision(False, 'You cannot complain about yourself', 'SELF_ACTION_FORBIDDEN')
    return ALLOWED


def build_review_payload(actor_id, actor_role: str, target_id, rating: int, description: str, ticket_id) -> Dict:
    """Body of ``POST /api/reviews`` with the directional roles filled in."""
    rated_side = review_type_for(actor_role)
    if rated_side == ROLE_CLIENT:
        master_id, client_id = actor_id, target_id
    else:
        master_id, client_id = target_id, actor_id
    return {
        'type': rated_side,
        'rating': rating,
        'description': description,
        'ticket': make_iri('tickets', ticket_id),
        'master': make_iri('users', master_id),
        'client': make_iri('users', client_id),
    }
