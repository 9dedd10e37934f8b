"""
Gift card serializers module.
"""
from .gift_card_serializers import (
    GiftCardTransactionSerializer, GiftCardListSerializer, GiftCardSerializer,
    AdminGiftCardSerializer, GiftCardVariantSerializer
)
from .gift_card_action_serializers import (
    GiftCardListQuerySerializer, GiftCardPurchaseSerializer, GiftCardTransferSerializer,
    GiftCodeApplySerializer, GiftCardIssueSerializer
)

__all__ = [
    'GiftCardTransactionSerializer',
    'GiftCardListSerializer',
    'GiftCardSerializer',
    'AdminGiftCardSerializer',
    'GiftCardVariantSerializer',
    'GiftCardListQuerySerializer',
    'GiftCardPurchaseSerializer',
    'GiftCardTransferSerializer',
    'GiftCodeApplySerializer',
    'GiftCardIssueSerializer',
]
