"""
Gift card lookups by code or primary key.
"""
from ..exceptions import GiftCardNotFound
from ..models import GiftCard


def find_gift_card(code_or_id, include_deleted=False, user=None) -> GiftCard:
    """
    Resolve a card by redemption code, falling back to its id when the
    value is numeric. Soft-deleted cards are a miss unless included.
    """
    value = str(code_or_id or '').strip()
    if not value:
        raise GiftCardNotFound("A gift card code is required")

    queryset = GiftCard.objects.query(include_deleted=include_deleted)
    if user is not None:
        queryset = queryset.for_user(user)

    gift_card = queryset.filter(code__iexact=value).first()
    if gift_card is None and value.isdigit():
        gift_card = queryset.filter(pk=int(value)).first()
    if gift_card is None:
        raise GiftCardNotFound(f"Gift card {value} not found")
    return gift_card
