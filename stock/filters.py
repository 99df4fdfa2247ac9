"""
Stock — Filters

Date-range filtering for movement listings. start_date and end_date are
inclusive calendar days in the configured time zone.

@file stock/filters.py
"""

import django_filters

from .models import StockMovement


class StockMovementFilter(django_filters.FilterSet):
    start_date = django_filters.DateFilter(field_name='created_at', lookup_expr='date__gte')
    end_date = django_filters.DateFilter(field_name='created_at', lookup_expr='date__lte')
    product = django_filters.NumberFilter(field_name='product_id')
    product_type = django_filters.NumberFilter(field_name='product__product_type_id')
    type = django_filters.ChoiceFilter(choices=StockMovement.MovementType.choices)

    class Meta:
        model = StockMovement
        fields = ['start_date', 'end_date', 'product', 'product_type', 'type']
