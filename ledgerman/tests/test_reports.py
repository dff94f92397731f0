"""
Tests for sales reports.
"""

from datetime import date, timedelta

import pytest

from ledgerman import inventory
from ledgerman.services.reports import period_start


pytestmark = [pytest.mark.django_db, pytest.mark.usefixtures('no_autosync')]


@pytest.fixture
def boots(user):
    category = inventory.create_category(user, 'Boots')
    return inventory.create_item(user, category, 'Trail Boot')


@pytest.fixture
def sales(user, item, boots, today, yesterday):
    """
    Yesterday: bought 10 Air Runner at 1000, sold 4 at 3000.
    Today: sold 2 Air Runner at 2500 and 1 Trail Boot without a price.
    40 days ago: sold 1 Trail Boot at 9000.
    """
    inventory.record(user, item, 'PURCHASE', 10, price=1000, date=yesterday)
    inventory.record(user, item, 'IN', 10, date=yesterday)
    inventory.record(user, item, 'OUT', 4, price=3000, date=yesterday)
    inventory.record(user, item, 'OUT', 2, price=2500, date=today)
    inventory.record(user, boots, 'IN', 5, date=today - timedelta(days=40))
    inventory.record(user, boots, 'OUT', 1, price=9000, date=today - timedelta(days=40))
    inventory.record(user, boots, 'OUT', 1, date=today)


class TestPeriod:

    @pytest.mark.parametrize('date_range,expected', [
        ('7days', date(2026, 3, 8)),
        ('30days', date(2026, 2, 13)),
        ('90days', date(2025, 12, 15)),
        ('1year', date(2025, 3, 15)),
        ('forever', date(2026, 3, 8)),
    ])
    def test_period_start(self, date_range, expected):
        assert period_start(date_range, today=date(2026, 3, 15)) == expected

    def test_leap_day(self):
        assert period_start('1year', today=date(2028, 2, 29)) == date(2027, 2, 28)


@pytest.mark.usefixtures('sales')
class TestReports:

    def test_sales_analysis(self, user, today, yesterday):
        assert inventory.reports.sales_analysis(user) == [
            {'date': yesterday, 'sales': 12000, 'profit': 2000},
            {'date': today, 'sales': 5000, 'profit': 5000},
        ]

    def test_profit_analysis(self, user):
        assert inventory.reports.profit_analysis(user) == {
            'total_revenue': 17000,
            'total_cost': 10000,
            'total_profit': 7000,
            'profit_margin': 41.18,
        }

    def test_longer_period_includes_older_sales(self, user):
        assert inventory.reports.profit_analysis(user, '90days')['total_revenue'] == 26000

    def test_inventory_turnover(self, user, item, boots):
        rows = inventory.reports.inventory_turnover(user)

        assert [(r['item'], r['turnover'], r['current_stock'], r['sold_in_period']) for r in rows] == [
            (item, 1.5, 4, 6),
            (boots, 0.33, 3, 1),
        ]

    def test_top_products(self, user):
        assert inventory.reports.top_products(user) == [
            {'name': 'Air Runner', 'value': 6},
            {'name': 'Trail Boot', 'value': 1},
        ]

    def test_category_breakdown(self, user):
        assert inventory.reports.category_breakdown(user) == [
            {'name': 'Sneakers', 'value': 85.7},
            {'name': 'Boots', 'value': 14.3},
        ]


def test_empty_reports(user):
    assert inventory.reports.sales_analysis(user) == []
    assert inventory.reports.profit_analysis(user)['profit_margin'] == 0
    assert inventory.reports.inventory_turnover(user) == []
    assert inventory.reports.category_breakdown(user) == []
