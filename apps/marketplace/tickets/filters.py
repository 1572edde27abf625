"""Marketplace Tickets - Ticket Filters."""
from django_filters import rest_framework as filters

from apps.common.core.iri import is_uuid, parse_reference
from apps.common.core.models import search_key
from .models import Ticket


class TicketFilter(filters.FilterSet):
    category = filters.CharFilter(method='filter_category')
    subcategory = filters.CharFilter(method='filter_subcategory')
    active = filters.BooleanFilter(field_name='active')
    service = filters.BooleanFilter(field_name='service')
    author = filters.CharFilter(method='filter_user')
    master = filters.CharFilter(method='filter_user')
    description = filters.CharFilter(method='filter_description')
    province = filters.CharFilter(method='filter_geography')
    city = filters.CharFilter(method='filter_geography')
    district = filters.CharFilter(method='filter_geography')
    suburb = filters.CharFilter(method='filter_geography')
    settlement = filters.CharFilter(method='filter_geography')
    community = filters.CharFilter(method='filter_geography')
    village = filters.CharFilter(method='filter_geography')

    class Meta:
        model = Ticket
        fields = ['active', 'service']

    def filter_category(self, queryset, name, value):
        pk = parse_reference(value, 'categories')
        if pk is None or not pk.isdigit():
            return queryset.none()
        return queryset.filter(category_id=int(pk))

    def filter_subcategory(self, queryset, name, value):
        pk = parse_reference(value, 'occupations')
        if pk is None or not pk.isdigit():
            return queryset.none()
        return queryset.filter(subcategory_id=int(pk))

    def filter_user(self, queryset, name, value):
        pk = parse_reference(value, 'users')
        if pk is None or not is_uuid(pk):
            return queryset.none()
        return queryset.filter(**{f'{name}_id': pk})

    def filter_geography(self, queryset, name, value):
        value = value.strip()
        if value.isdigit():
            return queryset.filter(**{f'addresses__{name}_id': int(value)}).distinct()
        return queryset.filter(**{f'addresses__{name}__search_text__contains': search_key(value)}).distinct()

    def filter_description(self, queryset, name, value):
        return queryset.filter(search_text__contains=search_key(value))


def _exclude_user(queryset, name, value):
    pk = parse_reference(value, 'users')
    if pk is None or not is_uuid(pk):
        return queryset
    return queryset.exclude(**{f'{name}_id': pk})


# Bracketed query parameters (exists[author], exclude[master], budget[gte]...)
# cannot be declared as class attributes.
for _party in ('author', 'master'):
    TicketFilter.base_filters[f'exists[{_party}]'] = filters.BooleanFilter(field_name=_party, lookup_expr='isnull', exclude=True)
    TicketFilter.base_filters[f'exclude[{_party}]'] = filters.CharFilter(field_name=_party, method=_exclude_user)
for _lookup in ('gt', 'gte', 'lt', 'lte'):
    TicketFilter.base_filters[f'budget[{_lookup}]'] = filters.NumberFilter(field_name='budget', lookup_expr=_lookup)

