"""
Stock movements: record, edit and delete ledger entries.

Every write follows the same order: normalize, lock the item row, check
stock, write, recompute. Nothing is written when a check fails.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime

from django.db import transaction
from django.utils import timezone
from django.utils.dateparse import parse_date, parse_datetime

from ledgerman.exceptions import LedgerError
from ledgerman.models.enums import MovementType
from ledgerman.models.movement import Movement
from ledgerman.services.items import get_item
from ledgerman.services.ledger import StockLedger
from ledgerman.services.sync import InventorySync
from ledgerman.services.validation import normalize_movement
from ledgerman.services.warehouses import get_warehouse

logger = logging.getLogger('ledgerman')

# Marks "argument not given" where None is a meaningful value (price=None clears it)
UNSET = object()


@dataclass(frozen=True)
class MovementResult:
    """A written (or deleted) movement plus the item's fresh totals."""

    movement: Movement | None
    stock: int
    pending_in: int


def to_date(value) -> date | None:
    """Date from a date, datetime or 'YYYY-MM-DD...' string; None if unparseable."""
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        parsed = parse_date(text[:10])
    except ValueError:
        parsed = None
    if parsed is None:
        try:
            dt = parse_datetime(text)
        except ValueError:
            dt = None
        parsed = dt.date() if dt else None
    return parsed


def _check_stock(item, count: int, exclude=None) -> None:
    current = StockLedger.stock(item, exclude=exclude)
    if count > current:
        raise LedgerError('INSUFFICIENT_STOCK', stock=current, requested=count)


class StockMovements:
    """State-changing ledger methods."""

    @classmethod
    def record(cls, user, item, type, count=None, price=None,
               date=None, memo='', warehouse=None) -> MovementResult:
        """
        Record a movement for an item.

        Raises:
            LedgerError('NOT_FOUND'): Item missing or owned by someone else
            LedgerError('INSUFFICIENT_STOCK'): OUT count above on-hand stock
            LedgerError: Any validation error from normalize_movement()

        Concurrency:
            - Runs under transaction.atomic()
            - Locks the Item row so concurrent OUTs cannot both pass the check
        """
        normalized = normalize_movement(type, count, price)

        with transaction.atomic():
            item = get_item(user, item, for_update=True)
            wh = get_warehouse(user, warehouse) if warehouse is not None else None

            if normalized.type == MovementType.OUT:
                _check_stock(item, normalized.count)

            movement = Movement.objects.create(
                user=user,
                item=item,
                type=normalized.type,
                count=normalized.count,
                price=normalized.price,
                date=to_date(date) or timezone.localdate(),
                memo=memo or '',
                warehouse=wh,
            )
            totals = StockLedger.totals(item)

        logger.info(
            "ledger.movement.created",
            extra={
                "item_id": item.pk,
                "movement_id": movement.pk,
                "type": movement.type,
                "count": movement.count,
                "stock": totals.stock,
            },
        )
        InventorySync.autosync_on_commit(user, item)
        return MovementResult(movement, totals.stock, totals.pending_in)

    @classmethod
    def update(cls, user, movement_id, type=None, count=None, price=UNSET,
               date=None, memo=None, warehouse=UNSET) -> MovementResult:
        """
        Edit a movement. Omitted fields keep their current value.

        An OUT is checked against stock computed without the edited movement,
        so shrinking an OUT (or turning an IN into an OUT) is judged fairly.
        """
        with transaction.atomic():
            try:
                existing = Movement.objects.select_related('item').get(
                    pk=getattr(movement_id, 'pk', movement_id), user=user,
                )
            except (Movement.DoesNotExist, ValueError, TypeError):
                raise LedgerError('NOT_FOUND', what='movement', id=movement_id) from None

            item = get_item(user, existing.item_id, for_update=True)

            normalized = normalize_movement(
                type if type is not None else existing.type,
                count if count is not None else existing.count,
                existing.price if price is UNSET else price,
            )

            if normalized.type == MovementType.OUT:
                _check_stock(item, normalized.count, exclude=existing)

            existing.type = normalized.type
            existing.count = normalized.count
            existing.price = normalized.price
            if normalized.type != MovementType.IN:
                existing.fulfills = None
            parsed = to_date(date)
            if parsed:
                existing.date = parsed
            if memo is not None:
                existing.memo = memo
            if warehouse is not UNSET:
                existing.warehouse = (
                    get_warehouse(user, warehouse) if warehouse is not None else None
                )
            existing.save()
            totals = StockLedger.totals(item)

        logger.info(
            "ledger.movement.updated",
            extra={
                "item_id": item.pk,
                "movement_id": existing.pk,
                "type": existing.type,
                "count": existing.count,
                "stock": totals.stock,
            },
        )
        InventorySync.autosync_on_commit(user, item)
        return MovementResult(existing, totals.stock, totals.pending_in)

    @classmethod
    def delete(cls, user, movement_id) -> MovementResult:
        """Delete a movement and return the item's recomputed totals."""
        with transaction.atomic():
            try:
                existing = Movement.objects.get(
                    pk=getattr(movement_id, 'pk', movement_id), user=user,
                )
            except (Movement.DoesNotExist, ValueError, TypeError):
                raise LedgerError('NOT_FOUND', what='movement', id=movement_id) from None

            item = get_item(user, existing.item_id, for_update=True)
            pk = existing.pk
            existing.delete()
            totals = StockLedger.totals(item)

        logger.info(
            "ledger.movement.deleted",
            extra={"item_id": item.pk, "movement_id": pk, "stock": totals.stock},
        )
        InventorySync.autosync_on_commit(user, item)
        return MovementResult(None, totals.stock, totals.pending_in)
