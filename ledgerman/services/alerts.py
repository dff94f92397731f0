"""
Low-stock alerts and dashboard figures.

Usage:
    from ledgerman.services.alerts import check_low_stock

    # Run periodically or after stock changes
    triggered = check_low_stock(user)
    # Returns list of (Item, current_stock) tuples
"""

import logging
from datetime import timedelta

from django.db.models import Q, Sum
from django.utils import timezone

from ledgerman.conf import ledgerman_settings
from ledgerman.models.enums import MovementType
from ledgerman.models.item import Item
from ledgerman.models.movement import Movement

logger = logging.getLogger('ledgerman')


def _items_with_stock(qs):
    """Annotate IN/OUT sums so stock is computed without N+1 queries."""
    return qs.annotate(
        _in=Sum('movements__count', filter=Q(movements__type=MovementType.IN)),
        _out=Sum('movements__count', filter=Q(movements__type=MovementType.OUT)),
    )


def _stock(item) -> int:
    return (item._in or 0) - (item._out or 0)


def check_low_stock(user=None, item=None) -> list[tuple[Item, int]]:
    """
    Items with alerts enabled whose stock is at or below their threshold.

    Args:
        user: Only this user's items (None = everyone)
        item: Only this item

    Returns:
        List of (item, current_stock) tuples for triggered alerts.
    """
    qs = Item.objects.filter(low_stock_alert=True)
    if user is not None:
        qs = qs.filter(user=user)
    if item is not None:
        qs = qs.filter(pk=getattr(item, 'pk', item))

    triggered = []
    for candidate in _items_with_stock(qs).order_by('id'):
        threshold = candidate.low_stock_threshold
        if threshold is None:
            threshold = ledgerman_settings.DEFAULT_LOW_STOCK_THRESHOLD
        stock = _stock(candidate)
        if stock <= threshold:
            triggered.append((candidate, stock))
            logger.warning(
                "ledger.alert.low_stock",
                extra={
                    "item_id": candidate.pk,
                    "threshold": threshold,
                    "stock": stock,
                },
            )
    return triggered


def dashboard(user, threshold: int | None = None, days: int = 7) -> dict[str, int]:
    """
    Summary counts for a user.

    Returns:
        total_items, low_stock_items (stock <= threshold, every item),
        recent_in, recent_out (movements dated within the last ``days``)
    """
    if threshold is None:
        threshold = ledgerman_settings.DEFAULT_LOW_STOCK_THRESHOLD
    items = list(_items_with_stock(Item.objects.filter(user=user)))
    since = timezone.localdate() - timedelta(days=days)
    recent = Movement.objects.filter(user=user, date__gte=since)

    return {
        'total_items': len(items),
        'low_stock_items': sum(1 for i in items if _stock(i) <= threshold),
        'recent_in': recent.filter(type=MovementType.IN).count(),
        'recent_out': recent.filter(type=MovementType.OUT).count(),
    }
