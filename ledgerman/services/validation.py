"""
Movement validator: normalize raw movement input before it is saved.

Rules per type:
- IN:       price is always dropped
- PURCHASE: price required, > 0, truncated to an integer
- OUT:      price optional; when present >= 0, truncated to an integer

Stock sufficiency is not checked here; that needs the ledger.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from ledgerman.exceptions import LedgerError
from ledgerman.models.enums import MovementType

logger = logging.getLogger('ledgerman')


@dataclass(frozen=True)
class NormalizedMovement:
    type: str
    count: int
    price: int | None


def parse_number(raw) -> Decimal | None:
    """Parse a number; None for missing/blank, NaN for garbage."""
    if raw is None:
        return None
    if isinstance(raw, bool):
        return Decimal('NaN')
    if isinstance(raw, str):
        raw = raw.strip()
        if raw == '':
            return None
    try:
        return Decimal(str(raw))
    except (InvalidOperation, ValueError):
        return Decimal('NaN')


def normalize_type(raw) -> str:
    """Return the canonical movement type or raise INVALID_TYPE."""
    value = str(raw if raw is not None else '').strip().upper()
    if value not in MovementType.values:
        raise LedgerError('INVALID_TYPE', type=raw)
    return value


def normalize_count(raw) -> int:
    """
    Positive integer quantity.

    Missing means 1. The sign is ignored: direction comes from the type.
    """
    number = parse_number(raw)
    if number is None:
        return 1
    if not number.is_finite():
        raise LedgerError('INVALID_QUANTITY', requested=raw)
    count = int(abs(number))
    if count < 1:
        raise LedgerError('INVALID_QUANTITY', requested=raw)
    return count


def normalize_price(movement_type: str, raw) -> int | None:
    """Apply the per-type price rule."""
    if movement_type == MovementType.IN:
        if raw not in (None, ''):
            logger.debug("ledger.movement.in_price_dropped", extra={"price": str(raw)})
        return None

    number = parse_number(raw)

    if movement_type == MovementType.PURCHASE:
        if number is None or not number.is_finite() or number <= 0:
            raise LedgerError('PRICE_REQUIRED', price=raw)
        price = int(number)
        if price < 1:
            raise LedgerError('PRICE_REQUIRED', price=raw)
        return price

    # OUT
    if number is None:
        return None
    if not number.is_finite() or number < 0:
        raise LedgerError('INVALID_PRICE', price=raw)
    return int(number)


def normalize_movement(type, count=None, price=None) -> NormalizedMovement:
    """
    Validate and normalize proposed movement fields.

    Raises:
        LedgerError('INVALID_TYPE'): Unknown type
        LedgerError('INVALID_QUANTITY'): Count not a finite non-zero number
        LedgerError('PRICE_REQUIRED'): PURCHASE without a positive price
        LedgerError('INVALID_PRICE'): OUT with a negative or non-numeric price
    """
    movement_type = normalize_type(type)
    return NormalizedMovement(
        type=movement_type,
        count=normalize_count(count),
        price=normalize_price(movement_type, price),
    )
