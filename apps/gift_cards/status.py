"""
Gift card lifecycle status.

The status is derived, never stored: it is a pure function of the current
balance, the expiration date and the evaluation instant.
"""
from decimal import Decimal

from django.db import models


class GiftCardStatus(models.TextChoices):
    ACTIVE = 'active', 'Active'
    REDEEMED = 'redeemed', 'Redeemed'
    EXPIRED = 'expired', 'Expired'


# Rank used by the status-then-date listing
STATUS_SORT_ORDER = {
    GiftCardStatus.ACTIVE: 1,
    GiftCardStatus.REDEEMED: 2,
    GiftCardStatus.EXPIRED: 3,
}


def is_expired(expiration_date, now):
    return now > expiration_date


def evaluate_status(current_value, expiration_date, now):
    """
    Expiration takes precedence over balance: a card that is both past
    its expiration date and fully spent reports ``expired``.
    """
    if is_expired(expiration_date, now):
        return GiftCardStatus.EXPIRED
    if current_value is None or Decimal(current_value) <= 0:
        return GiftCardStatus.REDEEMED
    return GiftCardStatus.ACTIVE
