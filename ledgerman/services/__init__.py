"""
Ledger services: modular organization of inventory operations.

Re-exports the public classes:
    from ledgerman.services import StockLedger, StockMovements, PurchaseArrivals, ...
"""

from ledgerman.services.connections import ChannelConnections
from ledgerman.services.items import ItemCatalog
from ledgerman.services.ledger import LedgerTotals, StockLedger, calc_stock_and_pending
from ledgerman.services.movements import MovementResult, StockMovements
from ledgerman.services.purchases import ArrivalResult, PurchaseArrivals
from ledgerman.services.reports import Reports
from ledgerman.services.sync import InventorySync, SyncPlan, SyncRunResult, backoff_minutes
from ledgerman.services.validation import NormalizedMovement, normalize_movement
from ledgerman.services.visibility import SyncTarget, VisibilityPolicies, VisibilityPolicy, compute_targets
from ledgerman.services.warehouses import Warehouses

__all__ = [
    'ChannelConnections',
    'ItemCatalog',
    'LedgerTotals',
    'StockLedger',
    'calc_stock_and_pending',
    'MovementResult',
    'StockMovements',
    'ArrivalResult',
    'PurchaseArrivals',
    'Reports',
    'InventorySync',
    'SyncPlan',
    'SyncRunResult',
    'backoff_minutes',
    'NormalizedMovement',
    'normalize_movement',
    'SyncTarget',
    'VisibilityPolicies',
    'VisibilityPolicy',
    'compute_targets',
    'Warehouses',
]
