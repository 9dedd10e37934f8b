"""
Order models module.
"""
from .order import Order
from .order_item import OrderItem
from .order_adjustment import OrderAdjustment

__all__ = [
    'Order',
    'OrderItem',
    'OrderAdjustment',
]
