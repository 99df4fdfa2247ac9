"""
Dashboard — Views

Read-only metric endpoints for the dashboard screen.

@file dashboard/views.py
"""

from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from stock.serializers import RecentMovementSerializer

from .serializers import (
    DashboardStatsSerializer,
    ProductTypeShareSerializer,
    StockTrendPointSerializer,
)
from .services import DashboardService


class DashboardViewSet(viewsets.ViewSet):
    """Aggregated inventory metrics."""

    @action(detail=False, methods=['get'], url_path='stats')
    def stats(self, request):
        return Response(DashboardStatsSerializer(DashboardService.get_stats()).data)

    @action(detail=False, methods=['get'], url_path='recent-movements')
    def recent_movements(self, request):
        movements = DashboardService.get_recent_movements()
        return Response(RecentMovementSerializer(movements, many=True).data)

    @action(detail=False, methods=['get'], url_path='stock-trend')
    def stock_trend(self, request):
        trend = DashboardService.get_stock_trend()
        return Response(StockTrendPointSerializer(trend, many=True).data)

    @action(detail=False, methods=['get'], url_path='product-type-distribution')
    def product_type_distribution(self, request):
        distribution = DashboardService.get_product_type_distribution()
        return Response(ProductTypeShareSerializer(distribution, many=True).data)
