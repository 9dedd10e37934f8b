"""
Redemption code generation.
"""
import logging
import secrets

from django.conf import settings

from .exceptions import GiftCardCodeGenerationError

logger = logging.getLogger(__name__)


def generate_code(nbytes=None):
    nbytes = nbytes or settings.GIFT_CARD_CODE_BYTES
    return secrets.token_hex(nbytes).upper()


def generate_unique_code(model):
    """
    Draw random codes until one is unused by any card, soft-deleted ones
    included. Gives up after GIFT_CARD_CODE_MAX_ATTEMPTS draws.
    """
    attempts = settings.GIFT_CARD_CODE_MAX_ATTEMPTS
    for _ in range(attempts):
        code = generate_code()
        if not model.objects.with_deleted().filter(code=code).exists():
            return code
        logger.warning("Gift card code collision, drawing again")
    raise GiftCardCodeGenerationError(f"No unique code after {attempts} attempts")
