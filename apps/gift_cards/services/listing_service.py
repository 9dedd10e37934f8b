"""
Gift card listings for card holders and reporting.
"""
from django.utils import timezone

from ..models import GiftCard
from ..ordering import DEFAULT_COMPARATOR


def sortable_attributes():
    return list(GiftCard.SORTABLE_ATTRIBUTES)


def sortable_fields():
    return [field for _, field in GiftCard.SORTABLE_ATTRIBUTES]


def list_gift_cards(user, show_all=False, include_deleted=False, comparator=None, now=None):
    """
    Cards owned by ``user``. Only the active set unless ``show_all``;
    sorted by ``comparator`` (status then expiration by default).
    """
    now = now or timezone.now()
    queryset = GiftCard.objects.query(include_deleted=include_deleted).for_user(user)
    if not show_all:
        queryset = queryset.active(now)
    comparator = comparator or DEFAULT_COMPARATOR
    return comparator(list(queryset.order_by('-expiration_date')), now=now)


def report_gift_cards(sort='expiration_date', descending=True, include_deleted=False, status=None, now=None):
    """All cards sorted by one of the sortable fields"""
    if sort not in sortable_fields():
        raise ValueError(f"Cannot sort gift cards by {sort}")
    now = now or timezone.now()
    queryset = GiftCard.objects.query(include_deleted=include_deleted).select_related('user')
    if status == 'active':
        queryset = queryset.active(now)
    elif status == 'expired':
        queryset = queryset.filter(expiration_date__lt=now)
    elif status == 'redeemed':
        queryset = queryset.filter(expiration_date__gte=now, current_value__lte=0)
    return queryset.order_by(f"-{sort}" if descending else sort, '-id')
