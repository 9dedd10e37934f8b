"""
Listing comparators for gift cards.

Each strategy takes an iterable of cards and returns a new sorted list;
listing code receives the strategy as a parameter.
"""
from django.utils import timezone

from .status import STATUS_SORT_ORDER


def by_expiration_date(gift_cards, now=None):
    """Most recent expiration first"""
    return sorted(gift_cards, key=lambda card: card.expiration_date, reverse=True)


def by_status_then_expiration(gift_cards, now=None):
    """active, then redeemed, then expired; ties by descending expiration"""
    now = now or timezone.now()
    # sorted() is stable, so the second pass keeps the date order within a status
    newest_first = by_expiration_date(gift_cards)
    return sorted(newest_first, key=lambda card: STATUS_SORT_ORDER[card.status_at(now)])


COMPARATORS = {
    'expiration_date': by_expiration_date,
    'status': by_status_then_expiration,
}

DEFAULT_COMPARATOR = by_status_then_expiration
