"""
Stock — Django Admin Configuration

Read-only list of StockMovement. Recording, amending and removing
movements must go through StockService so product quantities follow.

@file stock/admin.py
"""

from django.contrib import admin
from django.utils.translation import gettext_lazy as _

from .models import StockMovement


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'product', 'type', 'quantity', 'notes', 'created_at',
    )
    list_filter = ('type', 'created_at', 'product__product_type')
    search_fields = ('product__name', 'notes')
    readonly_fields = (
        'id', 'product', 'type', 'quantity', 'notes',
        'created_at', 'updated_at',
    )
    list_select_related = ('product',)
    show_full_result_count = False
    list_per_page = 50
    date_hierarchy = 'created_at'
    ordering = ('-created_at',)

    fieldsets = (
        (_('Movement'), {
            'fields': ('id', 'product', 'type', 'quantity', 'notes'),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at'),
        }),
    )

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
