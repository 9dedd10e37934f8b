"""
Order serializers module.
"""
from .order_serializers import (
    OrderItemSerializer, OrderAdjustmentSerializer, OrderSerializer,
    OrderCreateSerializer, OrderItemCreateSerializer, OrderNumberSerializer
)

__all__ = [
    'OrderItemSerializer',
    'OrderAdjustmentSerializer',
    'OrderSerializer',
    'OrderCreateSerializer',
    'OrderItemCreateSerializer',
    'OrderNumberSerializer',
]
