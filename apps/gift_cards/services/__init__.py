"""
Gift card services module.
"""
from .redemption_service import GiftCardRedemptionService
from .lifecycle_service import GiftCardLifecycleService, transfer_gift_card
from .issuance_service import GiftCardIssuanceService, purchase_gift_card, purchasable_gift_card_variants
from .notification_service import GiftCardNotificationService
from .lookup_service import find_gift_card
from .listing_service import list_gift_cards, report_gift_cards, sortable_attributes, sortable_fields
from .checkout import GiftCodeResult, apply_gift_code, settle_gift_cards

__all__ = [
    'GiftCardRedemptionService',
    'GiftCardLifecycleService',
    'GiftCardIssuanceService',
    'purchase_gift_card',
    'purchasable_gift_card_variants',
    'transfer_gift_card',
    'GiftCardNotificationService',
    'find_gift_card',
    'list_gift_cards',
    'report_gift_cards',
    'sortable_attributes',
    'sortable_fields',
    'GiftCodeResult',
    'apply_gift_code',
    'settle_gift_cards',
]
