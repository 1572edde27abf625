"""Common Geography - Address formatting.

Works on ORM rows, API dictionaries (``{"city": {"title": ...}}``) and plain
strings alike, so the server and the portal client render addresses the same
way.
"""
from typing import Any, List, Mapping, Optional

ADDRESS_ORDER = ('province', 'city', 'district', 'suburb', 'settlement', 'community', 'village')
SHORT_ORDER = ('city', 'district')
ADDRESS_NOT_SPECIFIED = 'Адрес не указан'


def _title(component: Any) -> str:
    if component is None:
        return ''
    if isinstance(component, str):
        return component.strip()
    if isinstance(component, Mapping):
        return str(component.get('title') or '').strip()
    return str(getattr(component, 'title', '') or '').strip()


def _component(address: Any, key: str) -> Any:
    if isinstance(address, Mapping):
        return address.get(key)
    return getattr(address, key, None)


def address_parts(address: Any, order=ADDRESS_ORDER, street: Optional[str] = None) -> List[str]:
    """Non-empty component titles in display order, repeated titles dropped."""
    parts: List[str] = []
    seen = set()
    titles = [_title(_component(address, key)) for key in order]
    if street is not None:
        titles.append(street.strip())
    for title in titles:
        key = title.casefold()
        if title and key not in seen:
            seen.add(key)
            parts.append(title)
    return parts


def format_full_address(address: Any, street: Optional[str] = None) -> str:
    if address is None:
        return street.strip() if street else ''
    return ', '.join(address_parts(address, street=street))


def format_short_address(address: Any) -> str:
    if address is None:
        return ADDRESS_NOT_SPECIFIED
    return ', '.join(address_parts(address, order=SHORT_ORDER)) or ADDRESS_NOT_SPECIFIED
