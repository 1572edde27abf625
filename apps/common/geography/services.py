"""Common Geography - Services.

Read-only lookups over the geography reference data (cached) and resolution
of address payloads into persisted ``Address`` rows.
"""
import logging
from typing import Dict, List, Optional

from django.core.cache import cache
from django.db import transaction

from apps.common.core.exceptions import InvalidAddress
from apps.common.core.iri import parse_reference
from .models import Address, City, Community, District, Province, Settlement, Suburb, Village

logger = logging.getLogger('apps.geography')

# Cache timeout in seconds
CACHE_TIMEOUT = 3600 * 24
VERSION_KEY = 'geography:version'

# level -> (model, collection, parent field)
LEVELS = {
    'province': (Province, 'provinces', None),
    'city': (City, 'cities', 'province'),
    'suburb': (Suburb, 'suburbs', 'city'),
    'district': (District, 'districts', 'province'),
    'settlement': (Settlement, 'settlements', 'district'),
    'community': (Community, 'communities', 'district'),
    'village': (Village, 'villages', 'settlement'),
}
COLLECTIONS = {collection: level for level, (_, collection, _) in LEVELS.items()}


class GeographySelector:
    """Read-only queries with cache versioning."""

    @staticmethod
    def _version() -> int:
        return cache.get_or_set(VERSION_KEY, 1, None)

    @staticmethod
    def invalidate() -> None:
        try:
            cache.incr(VERSION_KEY)
        except ValueError:
            cache.set(VERSION_KEY, 2, None)
        logger.info("Geography cache invalidated")

    @staticmethod
    def list_level(level: str, parent_id: Optional[int] = None) -> List:
        model, _, parent_field = LEVELS[level]
        cache_key = f'geography:{GeographySelector._version()}:{level}:{parent_id}'
        result = cache.get(cache_key)
        if result is None:
            qs = model.objects.all()
            if parent_field and parent_id is not None:
                qs = qs.filter(**{f'{parent_field}_id': parent_id})
            if level == 'city':
                qs = qs.prefetch_related('suburbs')
            elif level == 'district':
                qs = qs.prefetch_related('settlements__villages', 'communities')
            result = list(qs)
            cache.set(cache_key, result, CACHE_TIMEOUT)
        return result

    @staticmethod
    def get(level: str, pk: int):
        model = LEVELS[level][0]
        return model.objects.filter(pk=pk).first()



class AddressService:

    @staticmethod
    def parse_payload(payload: Dict) -> Dict[str, int]:
        if not isinstance(payload, dict):
            raise InvalidAddress('Address must be an object')
        ids = {}
        for level, (_, collection, _) in LEVELS.items():
            raw = payload.get(level)
            if raw in (None, ''):
                continue
            pk = parse_reference(raw, collection)
            if pk is None or not str(pk).isdigit():
                raise InvalidAddress(f'Invalid {level} reference', details={'field': level, 'value': raw})
            ids[level] = int(pk)
        if 'province' not in ids:
            raise InvalidAddress('Province is required', details={'field': 'province'})
        return ids

    @staticmethod
    @transaction.atomic
    def resolve_payload(payload: Dict) -> Address:
        """Validate the hierarchy of a selector payload and find or create the Address."""
        ids = AddressService.parse_payload(payload)
        objects = {}
        for level, pk in ids.items():
            obj = GeographySelector.get(level, pk)
            if obj is None:
                raise InvalidAddress(f'{level.capitalize()} not found', details={'field': level, 'id': pk})
            objects[level] = obj

        for level, obj in objects.items():
            parent_field = LEVELS[level][2]
            if parent_field is None:
                continue
            parent = objects.get(parent_field)
            if parent is None or getattr(obj, f'{parent_field}_id') != parent.pk:
                raise InvalidAddress(
                    f'{level.capitalize()} does not belong to the selected {parent_field}',
                    details={'field': level, 'id': obj.pk},
                )

        lookup = {level: objects.get(level) for level in LEVELS}
        address, created = Address.objects.get_or_create(**lookup)
        if created:
            logger.info(f"Address created: {address.id} ({address.full_address})")
        return address

    @staticmethod
    def resolve_many(payloads: List[Dict]) -> List[Address]:
        return [AddressService.resolve_payload(payload) for payload in payloads or []]
