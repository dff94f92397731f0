"""
Warehouses: locations, transfers between them, and stock audits.

Transfers and audits are bookkeeping records; they do not write ledger
movements, so on-hand stock is unaffected.
"""

import logging

from django.db import transaction
from django.db.models import Q

from ledgerman.exceptions import LedgerError
from ledgerman.models.warehouse import StockAudit, StockTransfer, Warehouse
from ledgerman.services.items import get_item

logger = logging.getLogger('ledgerman')


def get_warehouse(user, warehouse) -> Warehouse:
    try:
        return Warehouse.objects.get(pk=getattr(warehouse, 'pk', warehouse), user=user)
    except (Warehouse.DoesNotExist, ValueError, TypeError):
        raise LedgerError('INVALID_WAREHOUSE', id=getattr(warehouse, 'pk', warehouse)) from None


def _positive(raw, field: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise LedgerError('INVALID_QUANTITY', field=field, requested=raw) from None
    if value <= 0:
        raise LedgerError('INVALID_QUANTITY', field=field, requested=raw)
    return value


def _non_negative(raw, field: str) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise LedgerError('INVALID_QUANTITY', field=field, requested=raw) from None
    if value < 0:
        raise LedgerError('INVALID_QUANTITY', field=field, requested=raw)
    return value


class Warehouses:
    """Warehouse, transfer and audit methods."""

    @classmethod
    def create(cls, user, name: str, location: str = '', description: str = '') -> Warehouse:
        name = (name or '').strip()
        if not name:
            raise LedgerError('NAME_REQUIRED', what='warehouse')
        return Warehouse.objects.create(
            user=user,
            name=name,
            location=(location or '').strip(),
            description=(description or '').strip(),
        )

    @classmethod
    def update(cls, user, warehouse, name: str, location: str = '',
               description: str = '') -> Warehouse:
        wh = get_warehouse(user, warehouse)
        name = (name or '').strip()
        if not name:
            raise LedgerError('NAME_REQUIRED', what='warehouse')
        wh.name = name
        wh.location = (location or '').strip()
        wh.description = (description or '').strip()
        wh.save()
        return wh

    @classmethod
    def delete(cls, user, warehouse) -> None:
        """
        Delete a warehouse that has no history.

        Raises:
            LedgerError('INVALID_WAREHOUSE'): Unknown warehouse
            LedgerError('WAREHOUSE_IN_USE'): Transfers or audits reference it
        """
        with transaction.atomic():
            wh = get_warehouse(user, warehouse)
            in_use = (
                StockTransfer.objects.filter(Q(from_warehouse=wh) | Q(to_warehouse=wh)).exists()
                or StockAudit.objects.filter(warehouse=wh).exists()
            )
            if in_use:
                raise LedgerError('WAREHOUSE_IN_USE', id=wh.pk)
            warehouse_id = wh.pk
            wh.delete()
        logger.info("ledger.warehouse.deleted", extra={"warehouse_id": warehouse_id, "user_id": user.pk})

    @classmethod
    def transfer(cls, user, item, from_warehouse, to_warehouse, quantity,
                 reason: str = '') -> StockTransfer:
        """
        Record a transfer of an item between two of the user's warehouses.

        Raises:
            LedgerError('SAME_WAREHOUSE'): Source equals destination
            LedgerError('INVALID_QUANTITY'): quantity <= 0
            LedgerError('NOT_FOUND'): Unknown item
            LedgerError('INVALID_WAREHOUSE'): Unknown warehouse
        """
        source_id = getattr(from_warehouse, 'pk', from_warehouse)
        dest_id = getattr(to_warehouse, 'pk', to_warehouse)
        if source_id == dest_id:
            raise LedgerError('SAME_WAREHOUSE', warehouse=source_id)
        qty = _positive(quantity, 'quantity')

        with transaction.atomic():
            transfer = StockTransfer.objects.create(
                user=user,
                item=get_item(user, item),
                from_warehouse=get_warehouse(user, source_id),
                to_warehouse=get_warehouse(user, dest_id),
                quantity=qty,
                reason=(reason or '').strip(),
            )
        logger.info(
            "ledger.transfer.created",
            extra={
                "transfer_id": transfer.pk,
                "item_id": transfer.item_id,
                "from": source_id,
                "to": dest_id,
                "qty": qty,
            },
        )
        return transfer

    @classmethod
    def audit(cls, user, item, warehouse, expected_quantity, actual_quantity,
              notes: str = '') -> StockAudit:
        """Record a physical count; difference = actual - expected."""
        expected = _non_negative(expected_quantity, 'expected_quantity')
        actual = _non_negative(actual_quantity, 'actual_quantity')

        audit = StockAudit.objects.create(
            user=user,
            item=get_item(user, item),
            warehouse=get_warehouse(user, warehouse),
            expected_quantity=expected,
            actual_quantity=actual,
            difference=actual - expected,
            notes=(notes or '').strip(),
        )
        if audit.difference:
            logger.warning(
                "ledger.audit.mismatch",
                extra={"audit_id": audit.pk, "item_id": audit.item_id, "difference": audit.difference},
            )
        return audit

    @classmethod
    def transfers_for(cls, user, item=None):
        qs = StockTransfer.objects.filter(user=user).select_related('from_warehouse', 'to_warehouse')
        if item is not None:
            qs = qs.filter(item=get_item(user, item))
        return qs

    @classmethod
    def audits_for(cls, user, item=None, warehouse=None):
        """A user's audits, newest first, optionally for one item or warehouse."""
        qs = StockAudit.objects.filter(user=user).select_related('item', 'warehouse')
        if item is not None:
            qs = qs.filter(item=get_item(user, item))
        if warehouse is not None:
            qs = qs.filter(warehouse=get_warehouse(user, warehouse))
        return qs.order_by('-created_at', '-id')
