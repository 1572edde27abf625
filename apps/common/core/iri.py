"""Common Core - Resource references.

Resources reference each other by IRI (``/api/<collection>/<id>``). Write
endpoints accept either the IRI or the bare id.
"""
import re
import uuid
from typing import Optional

_IRI_RE = re.compile(r'^/api/(?P<collection>[\w-]+)/(?P<id>[\w-]+)/?$')


def make_iri(collection: str, pk) -> Optional[str]:
    if pk is None:
        return None
    return f"/api/{collection}/{pk}"


def parse_reference(value, collection: str) -> Optional[str]:
    """Return the id carried by an IRI or raw id, or None when absent/foreign."""
    if value is None or value == '':
        return None
    if isinstance(value, int):
        return str(value)
    value = str(value).strip()
    match = _IRI_RE.match(value)
    if match:
        if match.group('collection') != collection:
            return None
        return match.group('id')
    if '/' in value:
        return None
    return value


def is_uuid(value) -> bool:
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True
