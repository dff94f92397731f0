"""
Exceptions for Ledgerman.

All errors are LedgerError with a structured code for programmatic handling.
"""

from typing import Any


class BaseError(Exception):
    """
    Exception with a machine-readable code, a message and context data.

    Subclasses provide ``_default_messages`` so callers only pass the code
    and the context:

        raise LedgerError('INSUFFICIENT_STOCK', stock=3, requested=5)
    """

    _default_messages: dict[str, str] = {}

    def __init__(self, code: str, message: str | None = None, **data: Any):
        self.code = code
        self.message = message or self._default_messages.get(code, code)
        self.data = data
        super().__init__(f"[{code}] {self.message}")

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': dict(self.data),
        }


class LedgerError(BaseError):
    """
    Structured exception for ledger and sync operations.

    Usage:
        try:
            inventory.record(user, item, 'OUT', 11)
        except LedgerError as e:
            if e.code == 'INSUFFICIENT_STOCK':
                print(f"Only {e.stock} on hand")

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_TYPE': 'Invalid movement type (IN/OUT/PURCHASE)',
        'INVALID_QUANTITY': 'Invalid quantity (must be a positive number)',
        'PRICE_REQUIRED': 'PURCHASE requires a price greater than zero',
        'INVALID_PRICE': 'Invalid price (must be zero or greater)',
        'INSUFFICIENT_STOCK': 'Not enough stock on hand',
        'NOT_FOUND': 'Record not found',
        'NOT_A_PURCHASE': 'Movement is not a PURCHASE',
        'INVALID_PROVIDER': 'Unknown sales channel provider',
        'INVALID_MODE': 'Invalid inventory policy mode (NORMAL/EXCLUSIVE)',
        'INVALID_WAREHOUSE': 'Warehouse not found',
        'SAME_WAREHOUSE': 'Source and destination warehouses must differ',
        'NAME_REQUIRED': 'Name is required',
        'DUPLICATE_NAME': 'Another record already uses this name',
        'INVALID_SORT_ORDER': 'Sort order must be a whole number',
        'PROTECTED_CATEGORY': 'The uncategorized category cannot be deleted',
        'BARCODE_REQUIRED': 'Barcode is required',
        'WAREHOUSE_IN_USE': 'Warehouse has transfers or audits and cannot be deleted',
        'CREDENTIALS_REQUIRED': 'Channel credentials must be a mapping',
    }

    @property
    def stock(self) -> int:
        """Shortcut for data['stock']."""
        return self.data.get('stock', 0)

    @property
    def requested(self) -> int:
        """Shortcut for data['requested']."""
        return self.data.get('requested', 0)
