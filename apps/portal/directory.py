"""Portal - Ticket/Service Directory.

Builds the role-dependent ``/api/tickets`` query, then applies the time
window and sort locally. Failures yield an empty list.
"""
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from apps.common.geography.formatting import format_full_address, format_short_address
from apps.marketplace.tickets.directory import (
    SECONDARY_NONE, DirectoryToggles, arrange, build_directory_query, filter_by_kind,
)
from .client import ApiClient, ApiError

logger = logging.getLogger('apps.portal')


def with_addresses(item: Dict[str, Any]) -> Dict[str, Any]:
    """Copy of a ticket with ``fullAddress``/``shortAddress`` rendered from its first address."""
    addresses = item.get('addresses') or []
    first = addresses[0] if addresses else None
    result = dict(item)
    result['fullAddress'] = format_full_address(first)
    result['shortAddress'] = format_short_address(first)
    return result


class DirectoryClient:

    def __init__(self, client: ApiClient):
        self.client = client

    def query(self, category_id=None, subcategory_id=None, toggles: Optional[DirectoryToggles] = None) -> Dict[str, str]:
        session = self.client.session_state.current()
        role = session.role if session.is_authenticated else None
        return build_directory_query(role, session.user_id, category_id, subcategory_id, toggles)

    def fetch(self, category_id=None, subcategory_id=None, toggles: Optional[DirectoryToggles] = None,
              window: str = 'all', sort: str = 'newest', secondary: str = SECONDARY_NONE,
              now: Optional[datetime] = None) -> List[Dict[str, Any]]:
        params = self.query(category_id, subcategory_id, toggles)
        try:
            items = self.client.get_collection('/api/tickets', params)
        except ApiError as e:
            logger.error(f"Directory fetch failed for {params}: {e}")
            return []
        if not self.client.session_state.current().is_authenticated:
            items = filter_by_kind(items, toggles)
        return [with_addresses(item) for item in arrange(items, window, sort, secondary, now)]
