"""
Catalog — Django Admin Configuration

Admin for ProductType and Product. Product quantity is read-only here:
stock changes go through the movement ledger.

@file catalog/admin.py
"""

from django.conf import settings
from django.contrib import admin
from django.db.models import Count
from django.utils.html import format_html
from django.utils.translation import gettext_lazy as _

from .models import Product, ProductType


@admin.register(ProductType)
class ProductTypeAdmin(admin.ModelAdmin):
    list_display = ('name', 'description', 'products_count', 'created_at')
    search_fields = ('name',)
    readonly_fields = ('id', 'created_at', 'updated_at')
    ordering = ('name',)

    def get_queryset(self, request):
        return super().get_queryset(request).annotate(_products_count=Count('products'))

    @admin.display(description=_('Products'), ordering='_products_count')
    def products_count(self, obj):
        return obj._products_count


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = (
        'name', 'product_type', 'formatted_cost', 'formatted_sale',
        'stock_badge', 'expiration_date', 'supplier', 'updated_at',
    )
    list_filter = ('product_type', 'expiration_date')
    search_fields = ('name', 'supplier', 'product_type__name')
    readonly_fields = (
        'id', 'quantity', 'initial_quantity', 'created_at', 'updated_at',
    )
    raw_id_fields = ('product_type',)
    list_select_related = ('product_type',)
    show_full_result_count = False
    list_per_page = 30
    ordering = ('name',)

    fieldsets = (
        (_('Identification'), {
            'fields': ('id', 'name', 'description', 'product_type', 'supplier'),
        }),
        (_('Pricing'), {
            'fields': ('cost_price', 'sale_price'),
        }),
        (_('Stock'), {
            'fields': ('quantity', 'initial_quantity', 'expiration_date'),
        }),
        (_('Audit'), {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',),
        }),
    )

    @admin.display(description=_('Cost'), ordering='cost_price')
    def formatted_cost(self, obj):
        return f'{obj.cost_price:,.2f}'

    @admin.display(description=_('Sale'), ordering='sale_price')
    def formatted_sale(self, obj):
        return f'{obj.sale_price:,.2f}'

    @admin.display(description=_('Stock'), ordering='quantity')
    def stock_badge(self, obj):
        if obj.quantity == 0:
            color = '#dc2626'
        elif obj.quantity <= settings.LOW_STOCK_THRESHOLD:
            color = '#f97316'
        else:
            color = '#22c55e'
        return format_html(
            '<span style="background:{};color:#fff;padding:2px 8px;'
            'border-radius:4px;font-size:11px;font-weight:600;">{}</span>',
            color, obj.quantity,
        )
