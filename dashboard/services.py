"""
Dashboard — Service Layer

Read-only aggregates over products and movements. Day boundaries are
calendar days in settings.TIME_ZONE.

@file dashboard/services.py
"""

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal

from django.conf import settings
from django.db.models import Count, DecimalField, ExpressionWrapper, F, Q, Sum
from django.db.models.functions import TruncDate
from django.utils import timezone

from catalog.models import Product, ProductType
from stock.models import StockMovement

_MONEY = DecimalField(max_digits=20, decimal_places=2)
_CENT = Decimal('0.01')


def _money(value) -> Decimal:
    return Decimal(value or 0).quantize(_CENT)


class DashboardService:
    """Dashboard metrics: counters, today's trade, trend and distribution."""

    @staticmethod
    def get_stats() -> dict:
        today = timezone.localdate()
        entry = Q(type=StockMovement.MovementType.ENTRY)
        exit_ = Q(type=StockMovement.MovementType.EXIT)
        cost = ExpressionWrapper(F('quantity') * F('product__cost_price'), output_field=_MONEY)
        sale = ExpressionWrapper(F('quantity') * F('product__sale_price'), output_field=_MONEY)

        totals = StockMovement.objects.filter(created_at__date=today).order_by().aggregate(
            purchases=Sum('quantity', filter=entry),
            sales=Sum('quantity', filter=exit_),
            purchases_value=Sum(cost, filter=entry),
            sales_value=Sum(sale, filter=exit_),
            sales_cost=Sum(cost, filter=exit_),
        )
        purchases = totals['purchases'] or 0
        sales = totals['sales'] or 0
        sales_value = _money(totals['sales_value'])
        profit = sales_value - _money(totals['sales_cost'])
        margin = (profit / sales_value * 100).quantize(_CENT) if sales_value > 0 else Decimal('0')

        return {
            'total_products': Product.objects.count(),
            'total_product_types': ProductType.objects.count(),
            'low_stock_products': Product.objects.filter(
                quantity__lte=settings.LOW_STOCK_THRESHOLD,
            ).count(),
            'today_purchases': purchases,
            'today_sales': sales,
            'today_balance': purchases - sales,
            'today_purchases_value': _money(totals['purchases_value']),
            'today_sales_value': sales_value,
            'today_profit': profit,
            'today_profit_margin': margin,
        }

    @staticmethod
    def get_recent_movements(limit: int | None = None):
        limit = limit or settings.RECENT_MOVEMENTS_LIMIT
        return (
            StockMovement.objects
            .select_related('product')
            .order_by('-created_at', '-id')[:limit]
        )

    @staticmethod
    def get_stock_trend(days: int | None = None) -> list[dict]:
        """Entries, exits and balance for each of the last `days` days, oldest first."""
        days = days or settings.STOCK_TREND_DAYS
        today = timezone.localdate()
        dates = [today - timedelta(days=offset) for offset in range(days - 1, -1, -1)]

        rows = (
            StockMovement.objects
            .filter(created_at__date__gte=dates[0], created_at__date__lte=today)
            .annotate(day=TruncDate('created_at'))
            .values('day', 'type')
            .annotate(total=Sum('quantity'))
            .order_by()
        )
        totals = {(row['day'], row['type']): row['total'] for row in rows}

        trend = []
        for day in dates:
            entries = totals.get((day, StockMovement.MovementType.ENTRY), 0)
            exits = totals.get((day, StockMovement.MovementType.EXIT), 0)
            trend.append({
                'date': day.strftime('%d/%m'),
                'entries': entries,
                'exits': exits,
                'balance': entries - exits,
            })
        return trend

    @staticmethod
    def get_product_type_distribution() -> list[dict]:
        """
        Product count per product type, largest first. Percentages are
        shares of all products, untyped ones included.
        """
        total = Product.objects.count()
        if not total:
            return []

        types = (
            ProductType.objects
            .annotate(value=Count('products'))
            .filter(value__gt=0)
            .order_by('-value', 'name')
        )
        return [
            {
                'id': product_type.pk,
                'name': product_type.name,
                'value': product_type.value,
                'percentage': int(
                    (Decimal(product_type.value) * 100 / total).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
                ),
            }
            for product_type in types
        ]
