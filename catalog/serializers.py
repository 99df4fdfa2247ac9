"""
Catalog — Serializers

Read and write serializers for ProductType and Product.

@file catalog/serializers.py
"""

from rest_framework import serializers

from .models import Product, ProductType


# ---------------------------------------------------------------------------
# ProductType
# ---------------------------------------------------------------------------

class ProductTypeReadSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductType
        fields = ['id', 'name', 'description', 'created_at', 'updated_at']
        read_only_fields = fields


class ProductTypeWriteSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductType
        fields = ['name', 'description']
        extra_kwargs = {
            # Duplicate names are reported by the service as 409.
            'name': {'validators': []},
        }

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name cannot be blank.')
        return value


class ProductTypeSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductType
        fields = ['id', 'name', 'description']
        read_only_fields = fields


# ---------------------------------------------------------------------------
# Product
# ---------------------------------------------------------------------------

class ProductReadSerializer(serializers.ModelSerializer):
    product_type_id = serializers.IntegerField(read_only=True, allow_null=True)
    product_type = ProductTypeSummarySerializer(read_only=True)
    # Uncapped: a tiny cost price gives margins far beyond the price columns' width.
    profit_value = serializers.DecimalField(max_digits=None, decimal_places=2, read_only=True)
    profit_margin = serializers.DecimalField(max_digits=None, decimal_places=2, read_only=True)

    class Meta:
        model = Product
        fields = [
            'id', 'name', 'description',
            'cost_price', 'sale_price', 'profit_value', 'profit_margin',
            'quantity', 'initial_quantity',
            'expiration_date', 'supplier',
            'product_type_id', 'product_type',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class ProductWriteSerializer(serializers.ModelSerializer):
    product_type_id = serializers.PrimaryKeyRelatedField(
        source='product_type', queryset=ProductType.objects.all(),
        required=False, allow_null=True,
    )

    class Meta:
        model = Product
        fields = [
            'name', 'description', 'cost_price', 'sale_price',
            'quantity', 'expiration_date', 'supplier', 'product_type_id',
        ]
        extra_kwargs = {
            'name': {'validators': []},
        }

    def validate_name(self, value):
        value = value.strip()
        if not value:
            raise serializers.ValidationError('Name cannot be blank.')
        return value

