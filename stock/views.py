"""
Stock — Views

Movement endpoints. Every write goes through StockService so the
product's quantity is adjusted in the same transaction.

@file stock/views.py
"""

from django_filters.rest_framework import DjangoFilterBackend
from rest_framework import mixins, status, viewsets
from rest_framework.response import Response

from .filters import StockMovementFilter
from .models import StockMovement
from .serializers import (
    StockMovementAmendSerializer,
    StockMovementCreateSerializer,
    StockMovementReadSerializer,
    StockMovementSummarySerializer,
)
from .services import StockService


class StockMovementViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    """
    List (with summary), retrieve, record, amend and remove movements.

    The list is not paginated: it returns every movement in the requested
    date range, newest first, plus totals for that range.
    """

    filter_backends = [DjangoFilterBackend]
    filterset_class = StockMovementFilter
    pagination_class = None

    def get_queryset(self):
        return (
            StockMovement.objects
            .select_related('product__product_type')
            .order_by('-created_at', '-id')
        )

    def get_serializer_class(self):
        if self.action == 'create':
            return StockMovementCreateSerializer
        if self.action == 'partial_update':
            return StockMovementAmendSerializer
        return StockMovementReadSerializer

    def list(self, request, *args, **kwargs):
        queryset = self.filter_queryset(self.get_queryset())
        summary = StockService.summarize(queryset)
        return Response({
            'movements': StockMovementReadSerializer(queryset, many=True).data,
            'summary': StockMovementSummarySerializer(summary).data,
        })

    def create(self, request, *args, **kwargs):
        ser = StockMovementCreateSerializer(data=request.data)
        ser.is_valid(raise_exception=True)
        movement = StockService.record_movement(
            product_id=ser.validated_data['product_id'],
            movement_type=ser.validated_data['type'],
            quantity=ser.validated_data['quantity'],
            notes=ser.validated_data.get('notes') or '',
            actor=request.user,
        )
        return Response(
            StockMovementReadSerializer(movement).data,
            status=status.HTTP_201_CREATED,
        )

    def partial_update(self, request, *args, **kwargs):
        movement = self.get_object()
        ser = StockMovementAmendSerializer(data=request.data, context={'movement': movement})
        ser.is_valid(raise_exception=True)
        notes = ser.validated_data.get('notes')
        if 'notes' in ser.validated_data and notes is None:
            notes = ''
        movement = StockService.amend_movement(
            movement_id=movement.pk,
            quantity=ser.validated_data.get('quantity'),
            movement_type=ser.validated_data.get('type'),
            notes=notes,
            actor=request.user,
        )
        return Response(StockMovementReadSerializer(movement).data)

    def perform_destroy(self, instance):
        StockService.remove_movement(movement_id=instance.pk, actor=self.request.user)
