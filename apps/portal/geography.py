"""Portal - Geography Data Provider.

Loads the reference lists through the API once per session and turns them
into the ``GeoCatalog`` the address selector works on.
"""
import logging
from typing import Dict, List, Optional

from apps.common.geography.selector import (
    TICKET_FLOW, AddressSelector, GeoCatalog, GeoNode, SelectorConfig,
)
from .client import ApiClient

logger = logging.getLogger('apps.portal')


def _node(item: Dict, parent_id: Optional[int] = None) -> GeoNode:
    return GeoNode(int(item['id']), item.get('title', ''), parent_id)


class GeographyProvider:

    def __init__(self, client: ApiClient):
        self.client = client
        self._provinces: Optional[List[GeoNode]] = None
        self._catalogs: Dict[int, GeoCatalog] = {}

    def provinces(self) -> List[GeoNode]:
        if self._provinces is None:
            self._provinces = [_node(item) for item in self.client.get_collection('/api/provinces')]
        return self._provinces

    def catalog(self, province_id: int) -> GeoCatalog:
        """Everything under one province; cities and districts embed their children."""
        if province_id in self._catalogs:
            return self._catalogs[province_id]
        params = {'province': province_id}
        cities = self.client.get_collection('/api/cities', params)
        districts = self.client.get_collection('/api/districts', params)

        levels: Dict[str, List[GeoNode]] = {
            'provinces': [node for node in self.provinces() if node.id == province_id],
            'cities': [], 'suburbs': [], 'districts': [], 'settlements': [], 'communities': [], 'villages': [],
        }
        for city in cities:
            levels['cities'].append(_node(city, province_id))
            levels['suburbs'].extend(_node(suburb, int(city['id'])) for suburb in city.get('suburbs') or [])
        for district in districts:
            district_id = int(district['id'])
            levels['districts'].append(_node(district, province_id))
            levels['communities'].extend(_node(item, district_id) for item in district.get('communities') or [])
            for settlement in district.get('settlements') or []:
                levels['settlements'].append(_node(settlement, district_id))
                levels['villages'].extend(_node(item, int(settlement['id'])) for item in settlement.get('villages') or [])

        catalog = GeoCatalog.from_nodes(**levels)
        self._catalogs[province_id] = catalog
        logger.debug(f"Geography catalog loaded for province {province_id}: "
                     f"{len(levels['cities'])} cities, {len(levels['districts'])} districts")
        return catalog

    def full_catalog(self) -> GeoCatalog:
        """All provinces merged into one catalog."""
        merged: Dict[str, List[GeoNode]] = {}
        for province in self.provinces():
            catalog = self.catalog(province.id)
            for level in ('provinces', 'cities', 'suburbs', 'districts', 'settlements', 'communities', 'villages'):
                merged.setdefault(level, []).extend(getattr(catalog, level).values())
        return GeoCatalog.from_nodes(**merged)

    def selector(self, province_id: Optional[int] = None, config: SelectorConfig = TICKET_FLOW,
                 address: Optional[Dict] = None) -> AddressSelector:
        """Selector over one province (or all of them), optionally hydrated from an address."""
        catalog = self.catalog(province_id) if province_id is not None else self.full_catalog()
        if address:
            return AddressSelector.from_address(catalog, address, config)
        return AddressSelector(catalog, config)

    def clear(self) -> None:
        self._provinces = None
        self._catalogs.clear()
