"""
Gift card models module.
"""
from .gift_card import GiftCard, GiftCardQuerySet, default_expiration_date
from .calculator import GiftCardCalculator
from .transaction import GiftCardTransaction

__all__ = [
    'GiftCard',
    'GiftCardQuerySet',
    'GiftCardCalculator',
    'GiftCardTransaction',
    'default_expiration_date',
]
