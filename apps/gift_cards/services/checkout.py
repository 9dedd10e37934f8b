"""
Checkout extension point.

The order pipeline hands over the gift code entered by the customer and
branches on the returned result; it never needs to know how the code is
resolved or applied.
"""
import logging
from dataclasses import dataclass
from typing import Optional

from ..exceptions import GiftCardError
from ..models import GiftCard
from .lookup_service import find_gift_card
from .redemption_service import GiftCardRedemptionService

logger = logging.getLogger(__name__)


@dataclass
class GiftCodeResult:
    success: bool
    gift_card: Optional[GiftCard] = None
    error: Optional[GiftCardError] = None

    @property
    def message(self):
        if self.success:
            return 'Gift card applied'
        return self.error.message if self.error else 'Gift card could not be applied'


def apply_gift_code(order, gift_code) -> GiftCodeResult:
    """Resolve ``gift_code`` and apply it to ``order``"""
    if isinstance(gift_code, (list, tuple)):
        gift_code = gift_code[0] if gift_code else ''
    code = str(gift_code or '').strip()
    try:
        gift_card = find_gift_card(code)
        GiftCardRedemptionService.apply(gift_card, order)
    except GiftCardError as e:
        logger.info(f"Gift code rejected for order {order.pk}: {e.code}")
        return GiftCodeResult(success=False, gift_card=e.gift_card, error=e)
    return GiftCodeResult(success=True, gift_card=gift_card)


def settle_gift_cards(order):
    """Settle every gift card reserved on ``order``; called at completion"""
    return GiftCardRedemptionService.settle_order(order)
