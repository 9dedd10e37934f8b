"""
Product models module.
"""
from .product import Product
from .variant import ProductVariant

__all__ = [
    'Product',
    'ProductVariant',
]
