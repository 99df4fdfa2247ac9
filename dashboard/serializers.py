"""
Dashboard — Serializers

@file dashboard/serializers.py
"""

from rest_framework import serializers


class DashboardStatsSerializer(serializers.Serializer):
    total_products = serializers.IntegerField()
    total_product_types = serializers.IntegerField()
    low_stock_products = serializers.IntegerField()
    today_purchases = serializers.IntegerField()
    today_sales = serializers.IntegerField()
    today_balance = serializers.IntegerField()
    today_purchases_value = serializers.DecimalField(max_digits=20, decimal_places=2)
    today_sales_value = serializers.DecimalField(max_digits=20, decimal_places=2)
    today_profit = serializers.DecimalField(max_digits=20, decimal_places=2)
    today_profit_margin = serializers.DecimalField(max_digits=12, decimal_places=2)


class StockTrendPointSerializer(serializers.Serializer):
    date = serializers.CharField()
    entries = serializers.IntegerField()
    exits = serializers.IntegerField()
    balance = serializers.IntegerField()


class ProductTypeShareSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    value = serializers.IntegerField()
    percentage = serializers.IntegerField()
