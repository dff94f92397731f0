"""
Ledger calculator: derive stock figures from movements.

Pure functions work on any iterable of movements (model instances or
dicts); StockLedger runs the same arithmetic over database aggregates.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from django.db.models import Sum

from ledgerman.models.enums import MovementType
from ledgerman.models.movement import Movement


@dataclass(frozen=True)
class LedgerTotals:
    """Derived quantities for one item."""

    stock: int
    pending_in: int

    def as_dict(self) -> dict[str, int]:
        return {'stock': self.stock, 'pending_in': self.pending_in}


def _get(movement: Any, name: str):
    if isinstance(movement, Mapping):
        return movement.get(name)
    return getattr(movement, name, None)


def sum_by_type(movements: Iterable[Any]) -> dict[str, int]:
    """Total count per movement type. Unknown types are ignored."""
    sums = {t: 0 for t in MovementType.values}
    for m in movements:
        kind = str(_get(m, 'type') or '').upper()
        if kind in sums:
            sums[kind] += int(_get(m, 'count') or 0)
    return sums


def totals_from_sums(sums: Mapping[str, int]) -> LedgerTotals:
    """
    stock      = IN - OUT            (PURCHASE never counts)
    pending_in = max(0, PURCHASE - IN)

    pending_in is an aggregate over all purchases, not a per-order balance.
    """
    received = sums.get(MovementType.IN, 0) or 0
    issued = sums.get(MovementType.OUT, 0) or 0
    ordered = sums.get(MovementType.PURCHASE, 0) or 0
    return LedgerTotals(
        stock=received - issued,
        pending_in=max(0, ordered - received),
    )


def calc_stock_and_pending(movements: Iterable[Any]) -> LedgerTotals:
    """Totals for a list of movements. Order does not matter."""
    return totals_from_sums(sum_by_type(movements))


class StockLedger:
    """Read-only ledger queries backed by the database."""

    @classmethod
    def sums(cls, item, exclude=None) -> dict[str, int]:
        """Sum of count grouped by type for one item."""
        qs = Movement.objects.filter(item=item)
        if exclude is not None:
            qs = qs.exclude(pk=getattr(exclude, 'pk', exclude))

        sums = {t: 0 for t in MovementType.values}
        for row in qs.values('type').annotate(total=Sum('count')).order_by():
            sums[row['type']] = row['total'] or 0
        return sums

    @classmethod
    def totals(cls, item, exclude=None) -> LedgerTotals:
        """Current stock and pending inbound for an item."""
        return totals_from_sums(cls.sums(item, exclude=exclude))

    @classmethod
    def stock(cls, item, exclude=None) -> int:
        """
        On-hand stock for an item.

        Args:
            item: Item instance or pk
            exclude: Movement (or pk) to leave out, used when editing it
        """
        return cls.totals(item, exclude=exclude).stock

    @classmethod
    def movements(cls, item):
        """Movements of an item in ledger order (date, id)."""
        return Movement.objects.filter(item=item).order_by('date', 'id')
