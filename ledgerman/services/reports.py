"""
Sales reports: read-only aggregates over a user's movements.

Revenue is OUT price * count, cost is PURCHASE price * count; movements
without a price contribute nothing. Every report covers a trailing period
('7days', '30days', '90days' or '1year'; anything else means 7 days).
"""

from datetime import date, timedelta

from django.db.models import F, IntegerField, Q, Sum
from django.db.models.functions import Coalesce
from django.utils import timezone

from ledgerman.conf import ledgerman_settings
from ledgerman.models.enums import MovementType
from ledgerman.models.item import Item
from ledgerman.models.movement import Movement

PERIOD_DAYS = {
    '7days': 7,
    '30days': 30,
    '90days': 90,
}


def period_start(date_range: str = '7days', today: date | None = None) -> date:
    """First day covered by a report period."""
    today = today or timezone.localdate()
    if date_range == '1year':
        try:
            return today.replace(year=today.year - 1)
        except ValueError:  # Feb 29
            return today.replace(year=today.year - 1, day=28)
    return today - timedelta(days=PERIOD_DAYS.get(date_range, 7))


def _amount():
    return Coalesce(
        Sum(F('price') * F('count'), output_field=IntegerField()),
        0,
        output_field=IntegerField(),
    )


class Reports:
    """Read-only report queries. No locking."""

    @classmethod
    def _movements(cls, user, date_range: str, today: date | None = None):
        return Movement.objects.filter(user=user, date__gte=period_start(date_range, today))

    @classmethod
    def sales_analysis(cls, user, date_range: str = '7days',
                       today: date | None = None) -> list[dict]:
        """
        Daily sales and profit, oldest day first.

        Returns:
            [{'date': date, 'sales': int, 'profit': int}, ...] for every day
            with an OUT or PURCHASE; profit = sales - purchase cost that day.
        """
        rows = (
            cls._movements(user, date_range, today)
            .filter(type__in=[MovementType.OUT, MovementType.PURCHASE])
            .values('date', 'type')
            .annotate(amount=_amount())
            .order_by()
        )
        days: dict[date, dict[str, int]] = {}
        for row in rows:
            day = days.setdefault(row['date'], {'sales': 0, 'cost': 0})
            key = 'sales' if row['type'] == MovementType.OUT else 'cost'
            day[key] += row['amount']

        return [
            {'date': day, 'sales': totals['sales'], 'profit': totals['sales'] - totals['cost']}
            for day, totals in sorted(days.items())
        ]

    @classmethod
    def profit_analysis(cls, user, date_range: str = '7days',
                        today: date | None = None) -> dict:
        """Total revenue, cost, profit and margin (percent, 2 decimals)."""
        qs = cls._movements(user, date_range, today)
        revenue = qs.filter(type=MovementType.OUT).aggregate(t=_amount())['t']
        cost = qs.filter(type=MovementType.PURCHASE).aggregate(t=_amount())['t']
        profit = revenue - cost
        return {
            'total_revenue': revenue,
            'total_cost': cost,
            'total_profit': profit,
            'profit_margin': round(profit / revenue * 100, 2) if revenue > 0 else 0,
        }

    @classmethod
    def inventory_turnover(cls, user, date_range: str = '7days',
                           today: date | None = None, limit: int = 10) -> list[dict]:
        """
        Items sold fastest relative to what is on hand.

        turnover = units sold in the period / current stock, 2 decimals.
        Items without stock or without sales are left out.
        """
        since = period_start(date_range, today)
        items = Item.objects.filter(user=user).annotate(
            _in=Sum('movements__count', filter=Q(movements__type=MovementType.IN)),
            _out=Sum('movements__count', filter=Q(movements__type=MovementType.OUT)),
            _sold=Sum('movements__count', filter=Q(
                movements__type=MovementType.OUT, movements__date__gte=since,
            )),
        )

        result = []
        for item in items:
            stock = (item._in or 0) - (item._out or 0)
            sold = item._sold or 0
            turnover = round(sold / stock, 2) if stock > 0 else 0
            if turnover > 0:
                result.append({
                    'item': item,
                    'name': item.name,
                    'turnover': turnover,
                    'current_stock': stock,
                    'sold_in_period': sold,
                })
        result.sort(key=lambda row: row['turnover'], reverse=True)
        return result[:limit]

    @classmethod
    def top_products(cls, user, date_range: str = '7days',
                     today: date | None = None, limit: int = 5) -> list[dict]:
        """Best sellers by units sold, grouped by item name."""
        rows = (
            cls._movements(user, date_range, today)
            .filter(type=MovementType.OUT)
            .values('item__name')
            .annotate(value=Sum('count'))
            .order_by('-value', 'item__name')[:limit]
        )
        return [{'name': row['item__name'], 'value': row['value']} for row in rows]

    @classmethod
    def category_breakdown(cls, user, date_range: str = '7days',
                           today: date | None = None) -> list[dict]:
        """Share of units sold per category (percent, 1 decimal), largest first."""
        rows = list(
            cls._movements(user, date_range, today)
            .filter(type=MovementType.OUT)
            .values('item__category__name')
            .annotate(units=Sum('count'))
            .order_by('-units', 'item__category__name')
        )
        total = sum(row['units'] for row in rows)
        return [
            {
                'name': row['item__category__name'] or ledgerman_settings.UNCATEGORIZED_NAME,
                'value': round(row['units'] / total * 100, 1) if total else 0,
            }
            for row in rows
        ]
