"""
Ledgerman Models.

Core models for the stock ledger and channel sync:
- Category: User-defined grouping of items
- Item: Trackable product/variant
- Movement: Append-only ledger (IN, OUT, PURCHASE)
- InventoryPolicy: Per-item channel visibility rules
- ChannelListing: Item ↔ external channel mapping
- ChannelConnection: Per-channel credentials of a user
- SyncJob: Durable "publish quantity" work unit
- Warehouse, StockTransfer, StockAudit: Multi-location bookkeeping
"""

from ledgerman.models.category import Category
from ledgerman.models.connection import ChannelConnection
from ledgerman.models.enums import InventoryMode, MovementType, Provider, SyncJobStatus
from ledgerman.models.item import Item
from ledgerman.models.job import SyncJob
from ledgerman.models.listing import ChannelListing
from ledgerman.models.movement import Movement
from ledgerman.models.policy import InventoryPolicy
from ledgerman.models.warehouse import StockAudit, StockTransfer, Warehouse

__all__ = [
    'MovementType',
    'Provider',
    'InventoryMode',
    'SyncJobStatus',
    'Category',
    'Item',
    'Movement',
    'InventoryPolicy',
    'ChannelListing',
    'ChannelConnection',
    'SyncJob',
    'Warehouse',
    'StockTransfer',
    'StockAudit',
]
