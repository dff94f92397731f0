"""
Inventory Service: The single public interface for ledger and sync operations.

Usage:
    from ledgerman import inventory, LedgerError

    inventory.record(user, item, 'PURCHASE', 20, price=1500)
    inventory.arrive(user, purchase.pk, count=5)
    inventory.totals(item)             # LedgerTotals(stock=5, pending_in=15)
    inventory.set_policy(user, item, mode='EXCLUSIVE', exclusive_provider='NAVER')
    inventory.sync_item(user, item)
    inventory.run_due(user, limit=20)
"""

from ledgerman.models.enums import MovementType
from ledgerman.models.movement import Movement
from ledgerman.services import alerts
from ledgerman.services.connections import ChannelConnections
from ledgerman.services.items import ItemCatalog, get_item
from ledgerman.services.ledger import LedgerTotals, StockLedger
from ledgerman.services.movements import StockMovements
from ledgerman.services.purchases import PurchaseArrivals
from ledgerman.services.reports import Reports
from ledgerman.services.sync import InventorySync
from ledgerman.services.visibility import VisibilityPolicies
from ledgerman.services.warehouses import Warehouses


class Inventory(
    StockMovements,
    PurchaseArrivals,
    VisibilityPolicies,
    InventorySync,
    ItemCatalog,
    ChannelConnections,
):
    """
    Single interface for all ledger operations.

    Parameter convention: (user, item, ...). The user is already
    authenticated; every lookup is scoped to it.

    IMPORTANT: All state-changing methods run in atomic transactions and
    lock the item row. See each method's docstring.
    """

    warehouses = Warehouses
    reports = Reports

    # ══════════════════════════════════════════════════════════════
    # QUERIES
    # ══════════════════════════════════════════════════════════════

    @classmethod
    def totals(cls, item) -> LedgerTotals:
        """Current stock and pending inbound, recomputed from movements."""
        return StockLedger.totals(item)

    @classmethod
    def stock(cls, item) -> int:
        return StockLedger.stock(item)

    @classmethod
    def movements(cls, user, item):
        """An item's movements in ledger order."""
        return StockLedger.movements(get_item(user, item))

    @classmethod
    def list_movements(cls, user, type=None, price_missing: bool = False):
        """
        A user's movements, newest first.

        Args:
            type: Only IN, OUT or PURCHASE (anything else = all types)
            price_missing: Only movements without a price
        """
        qs = Movement.objects.filter(user=user).select_related('item')
        kind = str(type or '').upper()
        if kind in MovementType.values:
            qs = qs.filter(type=kind)
        if price_missing:
            qs = qs.filter(price__isnull=True)
        return qs.order_by('-date', '-id')

    @classmethod
    def low_stock(cls, user, item=None):
        return alerts.check_low_stock(user=user, item=item)

    @classmethod
    def dashboard(cls, user, threshold: int | None = None) -> dict[str, int]:
        return alerts.dashboard(user, threshold=threshold)
