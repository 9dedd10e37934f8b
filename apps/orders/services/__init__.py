"""
Order services module.
"""
from .order_service import OrderService

__all__ = [
    'OrderService',
]
