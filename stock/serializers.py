"""
Stock — Serializers

Movements are read with their product (and product type) denormalized for
display. Write serializers only validate input; the ledger applies it.

@file stock/serializers.py
"""

from rest_framework import serializers

from catalog.models import Product, ProductType

from .models import StockMovement


class MovementProductTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = ProductType
        fields = ['id', 'name']
        read_only_fields = fields


class MovementProductSerializer(serializers.ModelSerializer):
    product_type = MovementProductTypeSerializer(read_only=True)

    class Meta:
        model = Product
        fields = ['id', 'name', 'cost_price', 'sale_price', 'product_type']
        read_only_fields = fields


class StockMovementReadSerializer(serializers.ModelSerializer):
    product_id = serializers.IntegerField(read_only=True)
    product = MovementProductSerializer(read_only=True)
    type_display = serializers.CharField(source='get_type_display', read_only=True)

    class Meta:
        model = StockMovement
        fields = [
            'id', 'type', 'type_display', 'quantity',
            'product_id', 'product', 'notes',
            'created_at', 'updated_at',
        ]
        read_only_fields = fields


class StockMovementCreateSerializer(serializers.Serializer):
    type = serializers.ChoiceField(choices=StockMovement.MovementType.choices)
    quantity = serializers.IntegerField(min_value=1)
    product_id = serializers.IntegerField(min_value=1)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True, default='')


class StockMovementAmendSerializer(serializers.Serializer):
    """A movement never changes product; product_id may only repeat the current one."""

    type = serializers.ChoiceField(choices=StockMovement.MovementType.choices, required=False)
    quantity = serializers.IntegerField(min_value=1, required=False)
    notes = serializers.CharField(required=False, allow_blank=True, allow_null=True)

    def validate(self, attrs):
        movement = self.context.get('movement')
        requested = self.initial_data.get('product_id')
        if requested is not None and (movement is None or str(requested) != str(movement.product_id)):
            raise serializers.ValidationError({
                'product_id': 'A movement cannot be moved to another product.',
            })
        return attrs


class StockMovementSummarySerializer(serializers.Serializer):
    entries = serializers.IntegerField()
    exits = serializers.IntegerField()
    balance = serializers.IntegerField()
    entries_value = serializers.DecimalField(max_digits=20, decimal_places=2)
    exits_value = serializers.DecimalField(max_digits=20, decimal_places=2)


class RecentMovementSerializer(serializers.ModelSerializer):
    product = serializers.SerializerMethodField()

    class Meta:
        model = StockMovement
        fields = ['id', 'product', 'type', 'quantity', 'created_at']
        read_only_fields = fields

    def get_product(self, obj):
        return {'name': obj.product.name}
