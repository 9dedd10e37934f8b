"""
Order views module.
"""
from .order_views import CreateOrderView, GetOrderDetailView, AddItemView, CompleteOrderView

__all__ = [
    'CreateOrderView',
    'GetOrderDetailView',
    'AddItemView',
    'CompleteOrderView',
]
