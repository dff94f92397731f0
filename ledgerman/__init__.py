"""
Django Ledgerman: stock ledger and sales-channel inventory sync.

Usage:
    from ledgerman import inventory, LedgerError

    inventory.record(user, item, 'IN', 10)
    inventory.record(user, item, 'OUT', 3)
    inventory.totals(item)          # LedgerTotals(stock=7, pending_in=0)
    inventory.sync_item(user, item)
    inventory.run_due(user)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'inventory':
        from ledgerman.service import Inventory
        return Inventory
    elif name == 'LedgerError':
        from ledgerman.exceptions import LedgerError
        return LedgerError
    elif name == 'Category':
        from ledgerman.models.category import Category
        return Category
    elif name == 'Item':
        from ledgerman.models.item import Item
        return Item
    elif name == 'Movement':
        from ledgerman.models.movement import Movement
        return Movement
    elif name == 'InventoryPolicy':
        from ledgerman.models.policy import InventoryPolicy
        return InventoryPolicy
    elif name == 'ChannelListing':
        from ledgerman.models.listing import ChannelListing
        return ChannelListing
    elif name == 'ChannelConnection':
        from ledgerman.models.connection import ChannelConnection
        return ChannelConnection
    elif name == 'SyncJob':
        from ledgerman.models.job import SyncJob
        return SyncJob
    elif name == 'MovementType':
        from ledgerman.models.enums import MovementType
        return MovementType
    elif name == 'Provider':
        from ledgerman.models.enums import Provider
        return Provider
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'inventory',
    'LedgerError',
    'Category',
    'Item',
    'Movement',
    'InventoryPolicy',
    'ChannelListing',
    'ChannelConnection',
    'SyncJob',
    'MovementType',
    'Provider',
]

__version__ = '0.1.0'
