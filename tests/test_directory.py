"""Directory query construction, time windows and sorting."""
from datetime import datetime, timedelta, timezone

import pytest

from apps.marketplace.tickets.directory import (
    DirectoryToggles, active_tickets_query, arrange, build_directory_query, filter_by_kind,
    filter_by_time, sort_items,
)

NOW = datetime(2024, 5, 15, 12, 0, tzinfo=timezone.utc)


def _item(item_id, created=None, **fields):
    item = {'id': item_id, **fields}
    if created is not None:
        item['createdAt'] = created.isoformat().replace('+00:00', 'Z')
    return item


class TestQuery:

    def test_master_sees_client_requests_in_category(self):
        assert build_directory_query('master', 'actor-1', category_id=5) == {
            'active': 'true',
            'category': '5',
            'service': 'false',
            'exists[author]': 'true',
            'exclude[author]': 'actor-1',
        }

    def test_client_sees_master_services(self):
        query = build_directory_query('client', 'actor-2', category_id=5, subcategory_id=7)

        assert query['service'] == 'true'
        assert query['exists[master]'] == 'true'
        assert query['exclude[master]'] == 'actor-2'
        assert query['subcategory'] == '7'
        assert 'exclude[author]' not in query

    def test_anonymous_sees_everything_active(self):
        assert build_directory_query(None, category_id=3) == {'active': 'true', 'category': '3'}

    def test_anonymous_toggles(self):
        toggles = DirectoryToggles().toggle_services()
        assert build_directory_query(None, toggles=toggles)['service'] == 'true'

        toggles.toggle_announcements()
        assert build_directory_query(None, toggles=toggles)['service'] == 'false'

    def test_toggles_ignored_for_members(self):
        toggles = DirectoryToggles(only_announcements=True)

        assert build_directory_query('client', 'actor', toggles=toggles)['service'] == 'true'

    def test_toggles_are_mutually_exclusive(self):
        toggles = DirectoryToggles().toggle_services().toggle_announcements()

        assert (toggles.only_services, toggles.only_announcements) == (False, True)
        toggles.toggle_announcements()
        assert (toggles.only_services, toggles.only_announcements) == (False, False)

    def test_active_tickets_of_a_target(self):
        assert active_tickets_query('client', 'm-1')['master'] == 'm-1'
        assert active_tickets_query('master', 'c-1') == {
            'service': 'false', 'active': 'true', 'exists[master]': 'false', 'exists[author]': 'true', 'author': 'c-1',
        }


class TestSort:

    def test_secondary_key_breaks_primary_ties(self):
        created = NOW - timedelta(hours=1)
        cheap = _item(1, created, budget='100.00')
        expensive = _item(2, created, budget='500.00')

        assert [i['id'] for i in sort_items([cheap, expensive], 'newest', 'price-desc')] == [2, 1]

    def test_sort_is_stable_without_secondary_key(self):
        created = NOW - timedelta(hours=1)
        items = [_item(1, created, budget=100), _item(2, created, budget=500)]

        assert [i['id'] for i in sort_items(items, 'newest')] == [1, 2]

    def test_secondary_key_only_applies_on_ties(self):
        newer_cheap = _item(1, NOW - timedelta(hours=1), budget=10)
        older_expensive = _item(2, NOW - timedelta(days=1), budget=1000)

        assert [i['id'] for i in sort_items([older_expensive, newer_cheap], 'newest', 'price-desc')] == [1, 2]

    def test_missing_budget_counts_as_zero(self):
        items = [_item(1, budget=50), _item(2, budget=None), _item(3, budget='7.5')]

        assert [i['id'] for i in sort_items(items, 'price-asc')] == [2, 3, 1]

    @pytest.mark.parametrize('key,expected', [
        ('reviews-desc', [2, 1, 3]),
        ('reviews-asc', [3, 1, 2]),
        ('rating-desc', [3, 2, 1]),
        ('rating-asc', [1, 2, 3]),
    ])
    def test_owner_statistics_keys(self, key, expected):
        items = [
            _item(1, reviewsCount=3, rating=2.5),
            _item(2, reviewsCount=10, rating=4.0),
            _item(3, reviewsCount=0, rating=4.8),
        ]

        assert [i['id'] for i in sort_items(items, key)] == expected

    def test_oldest_first(self):
        items = [_item(1, NOW), _item(2, NOW - timedelta(days=3)), _item(3, NOW - timedelta(days=1))]

        assert [i['id'] for i in sort_items(items, 'oldest')] == [2, 3, 1]


class TestTimeWindow:

    @pytest.fixture
    def items(self):
        return [
            _item('today', NOW.replace(hour=1)),
            _item('yesterday', NOW.replace(hour=0) - timedelta(hours=1)),
            _item('five-days', NOW - timedelta(days=5)),
            _item('twenty-days', NOW - timedelta(days=20)),
            _item('forty-days', NOW - timedelta(days=40)),
            _item('undated'),
        ]

    @pytest.mark.parametrize('window,expected', [
        ('today', ['today']),
        ('yesterday', ['yesterday']),
        ('week', ['today', 'yesterday', 'five-days']),
        ('month', ['today', 'yesterday', 'five-days', 'twenty-days']),
    ])
    def test_windows(self, items, window, expected):
        assert [i['id'] for i in filter_by_time(items, window, NOW)] == expected

    def test_all_keeps_undated_items(self, items):
        assert len(filter_by_time(items, 'all', NOW)) == len(items)

    def test_arrange_filters_then_sorts(self, items):
        result = arrange(items, window='week', primary='oldest', now=NOW)

        assert [i['id'] for i in result] == ['five-days', 'yesterday', 'today']


def test_filter_by_kind():
    items = [_item(1, service=True), _item(2, service=False)]

    assert filter_by_kind(items, DirectoryToggles(only_services=True)) == [items[0]]
    assert filter_by_kind(items, DirectoryToggles(only_announcements=True)) == [items[1]]
    assert filter_by_kind(items, None) == items
