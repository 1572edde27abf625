"""Portal - Profile View composition."""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from apps.common.geography.formatting import format_full_address, format_short_address
from .client import ApiClient, ApiError
from .directory import with_addresses

logger = logging.getLogger('apps.portal')


@dataclass
class ProfileViewModel:
    profile: Optional[Dict[str, Any]] = None
    addresses: List[Dict[str, str]] = field(default_factory=list)
    reviews: List[Dict[str, Any]] = field(default_factory=list)
    tickets: List[Dict[str, Any]] = field(default_factory=list)
    reviews_count: int = 0
    rating: float = 0
    is_favorite: bool = False

    @property
    def found(self) -> bool:
        return self.profile is not None


class ProfileView:

    def __init__(self, client: ApiClient):
        self.client = client

    def _load(self, what: str, path: str, params: Optional[Dict] = None) -> List[Dict[str, Any]]:
        try:
            return self.client.get_collection(path, params)
        except ApiError as e:
            logger.error(f"Profile {what} unavailable ({path}): {e}")
            return []

    def compose(self, user_id) -> ProfileViewModel:
        """Profile, reviews about the user and their active tickets; missing parts come back empty."""
        view = ProfileViewModel()
        try:
            view.profile = self.client.get(f'/api/users/{user_id}')
        except ApiError as e:
            logger.error(f"Profile {user_id} unavailable: {e}")
            return view

        view.is_favorite = bool(view.profile.get('isFavorite'))
        view.addresses = [
            {'full': format_full_address(address), 'short': format_short_address(address)}
            for address in view.profile.get('addresses') or []
        ]
        view.reviews = self._load('reviews', '/api/reviews', {'about': str(user_id)})
        view.reviews_count = len(view.reviews)
        if view.reviews:
            view.rating = round(sum(review.get('rating', 0) for review in view.reviews) / len(view.reviews), 2)

        tickets = view.profile.get('activeTickets')
        if tickets is None:
            side = 'master' if view.profile.get('role') == 'master' else 'author'
            tickets = self._load('tickets', '/api/tickets', {'active': 'true', side: str(user_id)})
        view.tickets = [with_addresses(ticket) for ticket in tickets]
        return view

    def toggle_favorite(self, view: ProfileViewModel) -> bool:
        """Add the shown member to the viewer's favorites or drop them from it; returns the new state."""
        user_iri = f"/api/users/{view.profile['id']}"
        collection = 'masters' if view.profile.get('role') == 'master' else 'clients'
        try:
            favorite = self.client.get('/api/favorites/me')
        except ApiError as e:
            if e.status != 404:
                raise
            self.client.post('/api/favorites', {collection: [user_iri]})
            view.is_favorite = True
            return True

        members = [f"/api/users/{ref['id']}" for ref in favorite.get(collection) or []]
        if user_iri in members:
            members.remove(user_iri)
        else:
            members.append(user_iri)
        self.client.patch(f"/api/favorites/{favorite['id']}", {collection: members})
        view.is_favorite = user_iri in members
        logger.info(f"Favorites of the viewer: {user_iri} {'added' if view.is_favorite else 'removed'}")
        return view.is_favorite
