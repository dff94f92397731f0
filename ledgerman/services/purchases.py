"""
Purchase arrivals: receive goods against an outstanding PURCHASE.

Each arrival is an IN movement whose ``fulfills`` points at the purchase.
The sum of arrivals never exceeds the purchase count: the requested
quantity is clamped to what is still owed.
"""

import logging
from dataclasses import dataclass

from django.db import transaction
from django.db.models import Q, Sum
from django.utils import timezone

from ledgerman.exceptions import LedgerError
from ledgerman.models.enums import MovementType
from ledgerman.models.movement import Movement
from ledgerman.services.items import get_item
from ledgerman.services.ledger import StockLedger
from ledgerman.services.movements import to_date
from ledgerman.services.sync import InventorySync
from ledgerman.services.validation import parse_number

logger = logging.getLogger('ledgerman')


@dataclass(frozen=True)
class ArrivalResult:
    """Outcome of arrive(). movement is None when nothing was owed."""

    movement: Movement | None
    remaining: int
    stock: int
    pending_in: int


def arrived_quantity(purchase) -> int:
    """Sum of IN counts recorded against a purchase."""
    return Movement.objects.arrivals_for(purchase).aggregate(
        t=Sum('count'),
    )['t'] or 0


def remaining_quantity(purchase) -> int:
    return max(0, purchase.count - arrived_quantity(purchase))


def _resolve_count(requested, remaining: int) -> int:
    """All of remaining when omitted, else clamped into [1, remaining]."""
    number = parse_number(requested)
    if number is None:
        return remaining
    if not number.is_finite():
        raise LedgerError('INVALID_QUANTITY', requested=requested)
    return max(1, min(remaining, int(number)))


class PurchaseArrivals:
    """Purchase fulfillment methods."""

    @classmethod
    def get_purchase(cls, user, purchase_id) -> Movement:
        try:
            purchase = Movement.objects.get(pk=getattr(purchase_id, 'pk', purchase_id), user=user)
        except (Movement.DoesNotExist, ValueError, TypeError):
            raise LedgerError('NOT_FOUND', what='purchase', id=purchase_id) from None
        if purchase.type != MovementType.PURCHASE:
            raise LedgerError('NOT_A_PURCHASE', id=purchase.pk, type=purchase.type)
        return purchase

    @classmethod
    def remaining(cls, user, purchase_id) -> int:
        """Quantity still owed on a purchase."""
        return remaining_quantity(cls.get_purchase(user, purchase_id))

    @classmethod
    def arrive(cls, user, purchase_id, count=None, date=None, memo=None) -> ArrivalResult:
        """
        Record an arrival against a purchase.

        Args:
            count: Units received. None = everything still owed (bulk).
            date: Arrival date (None = today)
            memo: Free text

        Returns:
            ArrivalResult. When the purchase is already fully received,
            movement is None and remaining is 0.

        Raises:
            LedgerError('NOT_FOUND'): Purchase missing
            LedgerError('NOT_A_PURCHASE'): Movement is IN or OUT

        Concurrency:
            - Runs under transaction.atomic()
            - Locks the Item row, so two arrivals cannot both take the
              last remaining units
        """
        purchase = cls.get_purchase(user, purchase_id)

        with transaction.atomic():
            item = get_item(user, purchase.item_id, for_update=True)
            remaining = remaining_quantity(purchase)

            if remaining <= 0:
                totals = StockLedger.totals(item)
                logger.info(
                    "ledger.purchase.already_arrived",
                    extra={"purchase_id": purchase.pk},
                )
                return ArrivalResult(None, 0, totals.stock, totals.pending_in)

            quantity = _resolve_count(count, remaining)
            movement = Movement.objects.create(
                user=user,
                item=item,
                type=MovementType.IN,
                count=quantity,
                price=None,
                date=to_date(date) or timezone.localdate(),
                memo=str(memo).strip() if memo else '',
                fulfills=purchase,
            )
            totals = StockLedger.totals(item)
            remaining_after = remaining_quantity(purchase)

        logger.info(
            "ledger.purchase.arrived",
            extra={
                "purchase_id": purchase.pk,
                "movement_id": movement.pk,
                "count": quantity,
                "remaining": remaining_after,
            },
        )
        InventorySync.autosync_on_commit(user, item)
        return ArrivalResult(movement, remaining_after, totals.stock, totals.pending_in)

    @classmethod
    def outstanding(cls, user, item=None) -> list[tuple[Movement, int]]:
        """Purchases with something still owed, as (purchase, remaining)."""
        qs = Movement.objects.purchases().filter(user=user).annotate(
            _arrived=Sum('arrivals__count', filter=Q(arrivals__type=MovementType.IN)),
        ).order_by('date', 'id')
        if item is not None:
            qs = qs.filter(item=get_item(user, item))

        result = []
        for purchase in qs:
            remaining = max(0, purchase.count - (purchase._arrived or 0))
            if remaining > 0:
                result.append((purchase, remaining))
        return result
