"""Portal - Review and complaint submission.

Eligibility is checked locally before any request is sent. Once the record
exists, attached photos are uploaded one by one; failed uploads are reported
on the result and never undo the record.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from apps.common.core.iri import make_iri, parse_reference
from apps.marketplace.reviews.eligibility import (
    MAX_RATING, MIN_RATING, Decision, build_review_payload, can_complain, can_review, validate_rating,
)
from apps.marketplace.tickets.directory import active_tickets_query
from .client import ApiClient, ApiError

logger = logging.getLogger('apps.portal')

OTHER_REASON = {'id': 1, 'code': 'other', 'title': 'Другое'}


class IneligibleError(Exception):
    """The actor may not submit; raised before any network call."""

    def __init__(self, message: str, code: str = 'INELIGIBLE'):
        self.message = message
        self.code = code
        super().__init__(message)

    @classmethod
    def from_decision(cls, decision: Decision) -> 'IneligibleError':
        return cls(decision.reason, decision.code or 'INELIGIBLE')


@dataclass
class SubmissionResult:
    record_id: Optional[int] = None
    uploaded: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)
    warning: Optional[str] = None
    error: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.record_id is not None and self.error is None

    @property
    def partial(self) -> bool:
        return self.success and bool(self.failed)


@dataclass
class ReviewDraft:
    description: str = ''
    rating: int = 0
    photos: List[str] = field(default_factory=list)

    def set_rating(self, rating: int) -> None:
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f'Rating must be between {MIN_RATING} and {MAX_RATING}')
        self.rating = rating

    def add_photo(self, path: str) -> None:
        self.photos.append(path)

    def remove_photo(self, path: str) -> None:
        if path in self.photos:
            self.photos.remove(path)

    def discard(self) -> None:
        self.description = ''
        self.rating = 0
        self.photos = []


@dataclass
class ComplaintDraft:
    reason: str = ''
    description: str = ''
    title: str = ''
    photos: List[str] = field(default_factory=list)

    def add_photo(self, path: str) -> None:
        self.photos.append(path)

    def remove_photo(self, path: str) -> None:
        if path in self.photos:
            self.photos.remove(path)

    def discard(self) -> None:
        self.reason = ''
        self.description = ''
        self.title = ''
        self.photos = []


def upload_photos(client: ApiClient, collection: str, record_id, photos: List[str], result: SubmissionResult) -> SubmissionResult:
    """Sequential best-effort uploads to ``/api/<collection>/<id>/upload-photo``."""
    for path in photos:
        try:
            client.upload(f'/api/{collection}/{record_id}/upload-photo', path)
        except ApiError as e:
            logger.error(f"Photo upload failed for {collection}/{record_id} ({path}): {e}")
            result.failed.append(path)
        else:
            result.uploaded.append(path)
    if result.failed:
        result.warning = f'Saved, but only {len(result.uploaded)} of {len(photos)} photos were uploaded'
    return result


class ReviewSubmitter:

    def __init__(self, client: ApiClient):
        self.client = client

    def check(self, target_id, target_role: Optional[str], draft: ReviewDraft) -> None:
        session = self.client.session_state.current()
        actor_id = session.user_id if session.is_authenticated else None
        decision = can_review(actor_id, session.role, target_id, target_role)
        if not decision:
            raise IneligibleError.from_decision(decision)
        decision = validate_rating(draft.rating)
        if not decision:
            raise IneligibleError.from_decision(decision)
        if not draft.description.strip():
            raise IneligibleError('Please write a few words about the experience', 'MISSING_REQUIRED_FIELDS')

    def find_active_ticket(self, target_id) -> Optional[int]:
        """First active ticket of the target the actor can relate to."""
        role = self.client.session_state.current().role
        tickets = self.client.get_collection('/api/tickets', active_tickets_query(role, target_id))
        return tickets[0]['id'] if tickets else None

    def submit(self, target_id, target_role: Optional[str], draft: ReviewDraft) -> SubmissionResult:
        self.check(target_id, target_role, draft)
        session = self.client.session_state.current()

        try:
            ticket_id = self.find_active_ticket(target_id)
        except ApiError as e:
            logger.error(f"Active ticket lookup failed for {target_id}: {e}")
            return SubmissionResult(error=e.message)
        if ticket_id is None:
            raise IneligibleError('There is no active ticket between you and this user', 'NO_ACTIVE_TICKET')

        payload = build_review_payload(session.user_id, session.role, target_id, draft.rating,
                                       draft.description.strip(), ticket_id)
        try:
            record = self.client.post('/api/reviews', payload)
        except ApiError as e:
            logger.error(f"Review submission failed for {target_id}: {e}")
            return SubmissionResult(error=e.message)

        result = upload_photos(self.client, 'reviews', record['id'], draft.photos, SubmissionResult(record_id=record['id']))
        draft.discard()
        logger.info(f"Review {record['id']} submitted about {target_id}")
        return result


class ComplaintSubmitter:

    def __init__(self, client: ApiClient):
        self.client = client
        self._reasons: Optional[List[Dict[str, Any]]] = None

    def reasons(self) -> List[Dict[str, Any]]:
        """Server catalogue; the single ``other`` reason when it cannot be loaded."""
        if self._reasons is None:
            try:
                self._reasons = self.client.get_collection('/api/appeals/reasons') or [dict(OTHER_REASON)]
            except ApiError as e:
                logger.error(f"Complaint reasons unavailable: {e}")
                return [dict(OTHER_REASON)]
        return self._reasons

    def _matching_chat(self, chats: List[Dict], actor_id: str, respondent_id: str) -> Optional[int]:
        forward = reverse = None
        for chat in chats:
            if chat.get('ticket'):
                continue
            author = parse_reference(chat.get('author'), 'users')
            reply_author = parse_reference(chat.get('replyAuthor'), 'users')
            if (author, reply_author) == (actor_id, respondent_id) and forward is None:
                forward = chat['id']
            elif (author, reply_author) == (respondent_id, actor_id) and reverse is None:
                reverse = chat['id']
        return forward if forward is not None else reverse

    def find_or_create_chat(self, respondent_id) -> int:
        actor_id = self.client.session_state.current().user_id
        respondent_id = str(respondent_id)
        chats = self.client.get_collection('/api/chats', {'participant': respondent_id})
        chat_id = self._matching_chat(chats, actor_id, respondent_id)
        if chat_id is not None:
            return chat_id
        try:
            return self.client.post('/api/chats', {'replyAuthor': make_iri('users', respondent_id)})['id']
        except ApiError as e:
            if e.status != 409:
                raise
        # created concurrently; query again
        chats = self.client.get_collection('/api/chats', {'participant': respondent_id})
        chat_id = self._matching_chat(chats, actor_id, respondent_id)
        if chat_id is None:
            raise ApiError('Chat already exists but could not be found', 409)
        return chat_id

    def submit(self, respondent_id, draft: ComplaintDraft, ticket_id=None, respondent_name: str = '') -> SubmissionResult:
        session = self.client.session_state.current()
        actor_id = session.user_id if session.is_authenticated else None
        decision = can_complain(actor_id, session.role, respondent_id)
        if not decision:
            raise IneligibleError.from_decision(decision)
        if not draft.reason or not draft.description.strip():
            raise IneligibleError('Please fill in all required fields', 'MISSING_REQUIRED_FIELDS')
        if draft.reason not in [reason['code'] for reason in self.reasons()]:
            raise IneligibleError('Wrong complaint reason', 'INVALID_COMPLAINT_REASON')

        payload = {
            'title': draft.title.strip() or f'Жалоба на пользователя {respondent_name or respondent_id}'.strip(),
            'description': draft.description.strip(),
            'complaintReason': draft.reason,
            'respondent': make_iri('users', respondent_id),
        }
        if ticket_id is not None:
            payload.update(type='ticket', ticket=make_iri('tickets', ticket_id))
        else:
            try:
                chat_id = self.find_or_create_chat(respondent_id)
            except ApiError as e:
                logger.error(f"Could not open a chat with {respondent_id} for a complaint: {e}")
                return SubmissionResult(error=e.message)
            payload.update(type='chat', chat=make_iri('chats', chat_id))

        try:
            record = self.client.post('/api/appeals', payload)
        except ApiError as e:
            logger.error(f"Complaint submission failed for {respondent_id}: {e}")
            return SubmissionResult(error=e.message)

        result = upload_photos(self.client, 'appeals', record['id'], draft.photos, SubmissionResult(record_id=record['id']))
        draft.discard()
        logger.info(f"Complaint {record['id']} filed against {respondent_id}")
        return result
