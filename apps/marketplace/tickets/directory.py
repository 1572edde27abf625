"""Marketplace Tickets - Directory query, time window and sort rules.

Pure functions shared by the ``/api/tickets`` endpoint and the portal client.
Directory items are the serialized ticket dictionaries returned by the API.
"""
import functools
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone as dt_timezone
from decimal import Decimal
from typing import Any, Callable, Dict, Iterable, List, Optional

ROLE_CLIENT = 'client'
ROLE_MASTER = 'master'

SORT_KEYS = ('newest', 'oldest', 'price-asc', 'price-desc', 'reviews-asc', 'reviews-desc', 'rating-asc', 'rating-desc')
SECONDARY_NONE = 'none'
TIME_WINDOWS = ('all', 'today', 'yesterday', 'week', 'month')


@dataclass
class DirectoryToggles:
    """Anonymous visitors' "services only" / "announcements only" switches; at most one is on."""
    only_services: bool = False
    only_announcements: bool = False

    def toggle_services(self) -> 'DirectoryToggles':
        self.only_services = not self.only_services
        if self.only_services:
            self.only_announcements = False
        return self

    def toggle_announcements(self) -> 'DirectoryToggles':
        self.only_announcements = not self.only_announcements
        if self.only_announcements:
            self.only_services = False
        return self


def build_directory_query(role: Optional[str], actor_id=None, category_id=None, subcategory_id=None,
                          toggles: Optional[DirectoryToggles] = None) -> Dict[str, str]:
    """Query parameters for ``GET /api/tickets`` as seen by the given actor.

    Clients browse masters' services, masters browse clients' requests; the
    actor's own tickets are excluded. Anonymous visitors see every active
    ticket, optionally narrowed by the toggles.
    """
    params: Dict[str, str] = {'active': 'true'}
    if category_id is not None:
        params['category'] = str(category_id)
    if subcategory_id is not None:
        params['subcategory'] = str(subcategory_id)

    if role == ROLE_CLIENT:
        params['service'] = 'true'
        params['exists[master]'] = 'true'
        if actor_id is not None:
            params['exclude[master]'] = str(actor_id)
    elif role == ROLE_MASTER:
        params['service'] = 'false'
        params['exists[author]'] = 'true'
        if actor_id is not None:
            params['exclude[author]'] = str(actor_id)
    elif toggles is not None:
        if toggles.only_services:
            params['service'] = 'true'
        elif toggles.only_announcements:
            params['service'] = 'false'
    return params


def active_tickets_query(actor_role: str, target_id) -> Dict[str, str]:
    """Active tickets of the target that an actor of ``actor_role`` can relate to.

    A client looks at the target master's services, a master at the target
    client's requests.
    """
    if actor_role == ROLE_CLIENT:
        return {'service': 'true', 'active': 'true', 'exists[author]': 'false', 'exists[master]': 'true', 'master': str(target_id)}
    return {'service': 'false', 'active': 'true', 'exists[master]': 'false', 'exists[author]': 'true', 'author': str(target_id)}


# --- item accessors ---------------------------------------------------------

def _parse_datetime(value) -> Optional[datetime]:
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        return value
    text = str(value)
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def item_created_at(item: Dict[str, Any]) -> Optional[datetime]:
    return _parse_datetime(item.get('createdAt', item.get('created_at')))


def _number(value) -> float:
    if value is None or value == '':
        return 0.0
    try:
        return float(Decimal(str(value)))
    except (ArithmeticError, ValueError):
        return 0.0


def _timestamp(item: Dict[str, Any]) -> float:
    created = item_created_at(item)
    if created is None:
        return 0.0
    if created.tzinfo is None:
        created = created.astimezone()
    return created.timestamp()


_SORT_VALUES: Dict[str, Callable[[Dict[str, Any]], float]] = {
    'newest': _timestamp,
    'oldest': _timestamp,
    'price': lambda item: _number(item.get('budget')),
    'reviews': lambda item: _number(item.get('reviewsCount')),
    'rating': lambda item: _number(item.get('rating')),
}


def compare_items(a: Dict[str, Any], b: Dict[str, Any], sort_key: str) -> int:
    if sort_key not in SORT_KEYS:
        return 0
    if sort_key in ('newest', 'oldest'):
        field, descending = sort_key, sort_key == 'newest'
    else:
        field, direction = sort_key.rsplit('-', 1)
        descending = direction == 'desc'
    left, right = _SORT_VALUES[field](a), _SORT_VALUES[field](b)
    if left == right:
        return 0
    result = -1 if left < right else 1
    return -result if descending else result


def sort_items(items: Iterable[Dict[str, Any]], primary: str = 'newest', secondary: str = SECONDARY_NONE) -> List[Dict[str, Any]]:
    """Stable sort by the primary key; the secondary key only breaks primary ties."""
    def comparator(a, b):
        result = compare_items(a, b, primary)
        if result == 0 and secondary != SECONDARY_NONE:
            result = compare_items(a, b, secondary)
        return result

    return sorted(items, key=functools.cmp_to_key(comparator))


# --- time window ------------------------------------------------------------

def _local(value: datetime, tz) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def in_time_window(created: Optional[datetime], window: str, now: datetime) -> bool:
    if window == 'all' or window not in TIME_WINDOWS:
        return True
    if created is None:
        return False
    tz = now.tzinfo or dt_timezone.utc
    now = _local(now, tz)
    created = _local(created, tz)
    start_of_today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if window == 'today':
        return start_of_today <= created < start_of_today + timedelta(days=1)
    if window == 'yesterday':
        return start_of_today - timedelta(days=1) <= created < start_of_today
    if window == 'week':
        return created >= now - timedelta(days=7)
    return created >= now - timedelta(days=30)


def filter_by_time(items: Iterable[Dict[str, Any]], window: str, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    now = now or datetime.now().astimezone()
    return [item for item in items if in_time_window(item_created_at(item), window, now)]


def filter_by_kind(items: Iterable[Dict[str, Any]], toggles: Optional[DirectoryToggles]) -> List[Dict[str, Any]]:
    items = list(items)
    if toggles is None:
        return items
    if toggles.only_services:
        return [item for item in items if item.get('service') is True]
    if toggles.only_announcements:
        return [item for item in items if item.get('service') is False]
    return items


def arrange(items: Iterable[Dict[str, Any]], window: str = 'all', primary: str = 'newest',
            secondary: str = SECONDARY_NONE, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """Time window first, then sort."""
    return sort_items(filter_by_time(items, window, now), primary, secondary)
