"""
Order serializers.
"""
from rest_framework import serializers
from ..models import Order, OrderItem, OrderAdjustment


class OrderItemSerializer(serializers.ModelSerializer):
    """Serializer for order line items"""

    class Meta:
        model = OrderItem
        fields = ['id', 'variant', 'quantity', 'price', 'amount', 'created_at']
        read_only_fields = fields


class OrderAdjustmentSerializer(serializers.ModelSerializer):
    """Serializer for order adjustments"""

    class Meta:
        model = OrderAdjustment
        fields = ['id', 'label', 'amount', 'mandatory', 'created_at']
        read_only_fields = fields


class OrderSerializer(serializers.ModelSerializer):
    """Serializer for order detail"""
    items = OrderItemSerializer(many=True, read_only=True)
    adjustments = OrderAdjustmentSerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'number', 'email', 'state', 'item_total', 'adjustment_total', 'total',
            'items', 'adjustments', 'created_at', 'completed_at'
        ]
        read_only_fields = fields


class OrderCreateSerializer(serializers.Serializer):
    """Serializer for opening a cart"""

    email = serializers.EmailField(required=False, allow_blank=True, default='')


class OrderItemCreateSerializer(serializers.Serializer):
    """Serializer for adding a variant to an open order"""

    number = serializers.CharField(max_length=50)
    variant_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)


class OrderNumberSerializer(serializers.Serializer):
    """Serializer for actions addressed by order number"""

    number = serializers.CharField(max_length=50)
