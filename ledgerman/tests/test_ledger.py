"""
Tests for the ledger calculator.
"""

import random
from types import SimpleNamespace

import pytest

from ledgerman import inventory
from ledgerman.services.ledger import (
    LedgerTotals,
    StockLedger,
    calc_stock_and_pending,
    sum_by_type,
    totals_from_sums,
)


def mv(type, count):
    return SimpleNamespace(type=type, count=count)


class TestCalcStockAndPending:
    """Pure arithmetic, no database."""

    def test_empty(self):
        assert calc_stock_and_pending([]) == LedgerTotals(stock=0, pending_in=0)

    def test_in_minus_out(self):
        totals = calc_stock_and_pending([mv('IN', 10), mv('OUT', 3), mv('IN', 2)])
        assert totals.stock == 9
        assert totals.pending_in == 0

    def test_purchase_does_not_touch_stock(self):
        totals = calc_stock_and_pending([mv('PURCHASE', 20)])
        assert totals.stock == 0
        assert totals.pending_in == 20

    def test_pending_in_is_purchases_minus_ins(self):
        totals = calc_stock_and_pending([mv('PURCHASE', 20), mv('IN', 5), mv('OUT', 4)])
        assert totals.stock == 1
        assert totals.pending_in == 15

    def test_pending_in_never_negative(self):
        totals = calc_stock_and_pending([mv('PURCHASE', 3), mv('IN', 10)])
        assert totals.pending_in == 0

    def test_order_does_not_matter(self):
        movements = (
            [mv('IN', n) for n in (4, 8, 15)]
            + [mv('OUT', n) for n in (1, 2)]
            + [mv('PURCHASE', n) for n in (16, 23)]
        )
        expected = LedgerTotals(stock=27 - 3, pending_in=max(0, 39 - 27))

        rng = random.Random(42)
        for _ in range(10):
            rng.shuffle(movements)
            assert calc_stock_and_pending(movements) == expected

    def test_accepts_dicts_and_lowercase_types(self):
        totals = calc_stock_and_pending([
            {'type': 'in', 'count': 5},
            {'type': 'out', 'count': 2},
        ])
        assert totals.stock == 3

    def test_unknown_types_are_ignored(self):
        assert sum_by_type([mv('ADJUST', 7)]) == {'IN': 0, 'OUT': 0, 'PURCHASE': 0}

    def test_stock_can_be_negative(self):
        """The calculator reports history as-is; prevention happens on write."""
        assert totals_from_sums({'IN': 1, 'OUT': 3}).stock == -2


@pytest.mark.django_db
class TestStockLedger:
    """Database aggregates agree with the pure calculator."""

    def test_totals_match_calculator(self, user, item, no_autosync):
        inventory.record(user, item, 'IN', 10)
        inventory.record(user, item, 'OUT', 4)
        inventory.record(user, item, 'PURCHASE', 12, price=900)
        inventory.record(user, item, 'IN', 3)

        from_db = StockLedger.totals(item)
        from_rows = calc_stock_and_pending(StockLedger.movements(item))

        assert from_db == from_rows == LedgerTotals(stock=9, pending_in=0)

    def test_exclude_leaves_one_movement_out(self, user, item, no_autosync):
        inventory.record(user, item, 'IN', 10)
        out = inventory.record(user, item, 'OUT', 4).movement

        assert StockLedger.stock(item) == 6
        assert StockLedger.stock(item, exclude=out) == 10
        assert StockLedger.stock(item, exclude=out.pk) == 10

    def test_items_are_independent(self, user, category, item, no_autosync):
        other = inventory.create_item(user, category, 'Court Classic')
        inventory.record(user, item, 'IN', 10)
        inventory.record(user, other, 'IN', 1)

        assert inventory.stock(item) == 10
        assert inventory.stock(other) == 1
