"""Common Geography - Address Selector.

One cascading selection state machine shared by every flow that edits a
location (ticket create/edit, service edit, profile city page). Flow
differences are expressed through ``SelectorConfig`` only.

The selector works on an in-memory ``GeoCatalog`` and never performs I/O.
Ids that are not in the catalog, or that do not hang under the currently
selected parent, are ignored.
"""
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, List, Optional

from apps.common.core.iri import make_iri


@dataclass(frozen=True)
class GeoNode:
    id: int
    title: str
    parent_id: Optional[int] = None


LEVELS = ('provinces', 'cities', 'suburbs', 'districts', 'settlements', 'communities', 'villages')


@dataclass
class GeoCatalog:
    """Loaded geography reference lists, indexed by id."""
    provinces: Dict[int, GeoNode] = field(default_factory=dict)
    cities: Dict[int, GeoNode] = field(default_factory=dict)
    suburbs: Dict[int, GeoNode] = field(default_factory=dict)
    districts: Dict[int, GeoNode] = field(default_factory=dict)
    settlements: Dict[int, GeoNode] = field(default_factory=dict)
    communities: Dict[int, GeoNode] = field(default_factory=dict)
    villages: Dict[int, GeoNode] = field(default_factory=dict)

    @classmethod
    def from_nodes(cls, **levels: Iterable[GeoNode]) -> 'GeoCatalog':
        unknown = set(levels) - set(LEVELS)
        if unknown:
            raise TypeError(f"Unknown geography levels: {sorted(unknown)}")
        return cls(**{name: {node.id: node for node in nodes} for name, nodes in levels.items()})

    def children(self, level: str, parent_id: Optional[int]) -> List[GeoNode]:
        if parent_id is None:
            return []
        return [node for node in getattr(self, level).values() if node.parent_id == parent_id]

    def belongs(self, level: str, node_id: Optional[int], parent_id: Optional[int]) -> bool:
        node = getattr(self, level).get(node_id)
        return node is not None and parent_id is not None and node.parent_id == parent_id

    def title(self, level: str, node_id: Optional[int]) -> str:
        node = getattr(self, level).get(node_id)
        return node.title if node else ''


@dataclass(frozen=True)
class SelectorConfig:
    """Behavioural switches of a selection flow."""
    # city and district branches cannot both be populated
    exclusive_branches: bool = True
    multiple_suburbs: bool = True
    multiple_districts: bool = True
    # settlement and community are alternatives under a district
    exclusive_subdivisions: bool = True


TICKET_FLOW = SelectorConfig()
EDIT_SERVICE_FLOW = SelectorConfig(multiple_districts=False)
CITY_PAGE_FLOW = SelectorConfig(exclusive_branches=False, exclusive_subdivisions=False)


@dataclass
class AddressValue:
    province_id: Optional[int] = None
    city_id: Optional[int] = None
    suburb_ids: List[int] = field(default_factory=list)
    district_ids: List[int] = field(default_factory=list)
    settlement_id: Optional[int] = None
    community_id: Optional[int] = None
    village_id: Optional[int] = None

    @property
    def is_empty(self) -> bool:
        return self == AddressValue()

    def copy(self) -> 'AddressValue':
        return replace(self, suburb_ids=list(self.suburb_ids), district_ids=list(self.district_ids))


def _toggle(current: Optional[int], node_id: int) -> Optional[int]:
    return None if current == node_id else node_id


def _toggle_member(ids: List[int], node_id: int, multiple: bool) -> List[int]:
    if node_id in ids:
        return [i for i in ids if i != node_id]
    if multiple:
        return ids + [node_id]
    return [node_id]


class AddressSelector:
    """Cascading province -> city/district -> subdivision -> village selection."""

    def __init__(self, catalog: GeoCatalog, config: SelectorConfig = TICKET_FLOW, value: Optional[AddressValue] = None):
        self.catalog = catalog
        self.config = config
        self.value = value.copy() if value else AddressValue()

    @classmethod
    def from_address(cls, catalog: GeoCatalog, address: Dict[str, Optional[int]], config: SelectorConfig = TICKET_FLOW) -> 'AddressSelector':
        """Hydrate from a persisted address given as ``{level_singular: id}``."""
        selector = cls(catalog, config)
        steps = (
            ('province', selector.select_province),
            ('city', selector.select_city),
            ('suburb', selector.select_suburb),
            ('district', selector.select_district),
            ('settlement', selector.select_settlement),
            ('community', selector.select_community),
            ('village', selector.select_village),
        )
        for key, select in steps:
            node_id = address.get(key)
            if node_id is not None:
                select(int(node_id))
        return selector

    # --- province -----------------------------------------------------------

    def select_province(self, province_id: int) -> 'AddressSelector':
        if province_id not in self.catalog.provinces:
            return self
        self.value = AddressValue(province_id=_toggle(self.value.province_id, province_id))
        return self

    # --- city branch --------------------------------------------------------

    def select_city(self, city_id: int) -> 'AddressSelector':
        if not self.catalog.belongs('cities', city_id, self.value.province_id):
            return self
        self.value.city_id = _toggle(self.value.city_id, city_id)
        self.value.suburb_ids = []
        if self.config.exclusive_branches:
            self._clear_district_branch()
        return self

    def select_suburb(self, suburb_id: int) -> 'AddressSelector':
        if not self.catalog.belongs('suburbs', suburb_id, self.value.city_id):
            return self
        self.value.suburb_ids = _toggle_member(self.value.suburb_ids, suburb_id, self.config.multiple_suburbs)
        return self

    # --- district branch ----------------------------------------------------

    def select_district(self, district_id: int) -> 'AddressSelector':
        if not self.catalog.belongs('districts', district_id, self.value.province_id):
            return self
        self.value.district_ids = _toggle_member(self.value.district_ids, district_id, self.config.multiple_districts)
        self._clear_subdivisions()
        if self.config.exclusive_branches:
            self.value.city_id = None
            self.value.suburb_ids = []
        return self

    def select_settlement(self, settlement_id: int) -> 'AddressSelector':
        if not self._under_selected_district('settlements', settlement_id):
            return self
        self.value.settlement_id = _toggle(self.value.settlement_id, settlement_id)
        self.value.village_id = None
        if self.config.exclusive_subdivisions:
            self.value.community_id = None
        return self

    def select_community(self, community_id: int) -> 'AddressSelector':
        if not self._under_selected_district('communities', community_id):
            return self
        self.value.community_id = _toggle(self.value.community_id, community_id)
        if self.config.exclusive_subdivisions:
            self.value.settlement_id = None
            self.value.village_id = None
        return self

    def select_village(self, village_id: int) -> 'AddressSelector':
        if not self.catalog.belongs('villages', village_id, self.value.settlement_id):
            return self
        self.value.village_id = _toggle(self.value.village_id, village_id)
        return self

    def reset(self) -> 'AddressSelector':
        self.value = AddressValue()
        return self

    # --- options for the next step -----------------------------------------

    def city_options(self) -> List[GeoNode]:
        return self.catalog.children('cities', self.value.province_id)

    def district_options(self) -> List[GeoNode]:
        return self.catalog.children('districts', self.value.province_id)

    def suburb_options(self) -> List[GeoNode]:
        return self.catalog.children('suburbs', self.value.city_id)

    def settlement_options(self) -> List[GeoNode]:
        return [n for d in self.value.district_ids for n in self.catalog.children('settlements', d)]

    def community_options(self) -> List[GeoNode]:
        return [n for d in self.value.district_ids for n in self.catalog.children('communities', d)]

    def village_options(self) -> List[GeoNode]:
        return self.catalog.children('villages', self.value.settlement_id)

    # --- serialization ------------------------------------------------------

    def build_address_payload(self) -> Optional[Dict[str, str]]:
        """Wire form of the selection, or None when no province is chosen."""
        value = self.value
        if value.province_id is None:
            return None
        suburb_id = value.suburb_ids[0] if value.suburb_ids else None
        return self._payload(suburb_id, self._subdivision_district() or self._first_district())

    def build_address_payloads(self) -> List[Dict[str, str]]:
        """One payload per selected suburb or district (multi-select flows)."""
        value = self.value
        if value.province_id is None:
            return []
        if value.city_id is not None and len(value.suburb_ids) > 1:
            return [self._payload(suburb_id, None if self.config.exclusive_branches else self._first_district())
                    for suburb_id in value.suburb_ids]
        if value.city_id is None and len(value.district_ids) > 1:
            return [self._payload(None, district_id) for district_id in value.district_ids]
        return [self.build_address_payload()]

    def _first_district(self) -> Optional[int]:
        return self.value.district_ids[0] if self.value.district_ids else None

    def _subdivision_district(self) -> Optional[int]:
        for level, node_id in (('settlements', self.value.settlement_id), ('communities', self.value.community_id)):
            node = getattr(self.catalog, level).get(node_id)
            if node is not None:
                return node.parent_id
        return None

    def _payload(self, suburb_id: Optional[int], district_id: Optional[int]) -> Dict[str, str]:
        value = self.value
        payload = {'province': make_iri('provinces', value.province_id)}
        if value.city_id is not None:
            payload['city'] = make_iri('cities', value.city_id)
            if suburb_id is not None:
                payload['suburb'] = make_iri('suburbs', suburb_id)
            if self.config.exclusive_branches:
                return payload
        if district_id is not None:
            payload['district'] = make_iri('districts', district_id)
            subdivision_here = self.catalog.belongs('settlements', value.settlement_id, district_id)
            community_here = self.catalog.belongs('communities', value.community_id, district_id)
            if subdivision_here:
                payload['settlement'] = make_iri('settlements', value.settlement_id)
                if value.village_id is not None:
                    payload['village'] = make_iri('villages', value.village_id)
            elif community_here:
                payload['community'] = make_iri('communities', value.community_id)
        return payload

    def _clear_district_branch(self):
        self.value.district_ids = []
        self._clear_subdivisions()

    def _clear_subdivisions(self):
        self.value.settlement_id = None
        self.value.community_id = None
        self.value.village_id = None

    def _under_selected_district(self, level: str, node_id: int) -> bool:
        node = getattr(self.catalog, level).get(node_id)
        return node is not None and node.parent_id in self.value.district_ids
