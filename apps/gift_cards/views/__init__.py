"""
Gift card views module.
"""
from .gift_card_views import (
    GiftCardListView, GiftCardDetailView, GiftCardVariantListView,
    GiftCardPurchaseView, GiftCardTransferView, GiftCodeApplyView
)
from .admin_gift_card_views import (
    AdminGiftCardListView, AdminGiftCardIssueView,
    AdminGiftCardDeleteView, AdminGiftCardRestoreView
)

__all__ = [
    'GiftCardListView',
    'GiftCardDetailView',
    'GiftCardVariantListView',
    'GiftCardPurchaseView',
    'GiftCardTransferView',
    'GiftCodeApplyView',
    'AdminGiftCardListView',
    'AdminGiftCardIssueView',
    'AdminGiftCardDeleteView',
    'AdminGiftCardRestoreView',
]
