"""
Gift card domain errors.

Every redemption-path failure is raised as a typed exception carrying a
stable ``code`` and the HTTP status the API layer maps it to.
"""
from rest_framework import status


class GiftCardError(Exception):
    """Base class for gift card failures"""
    code = 'gift_card_error'
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Gift card operation failed'

    def __init__(self, message=None, gift_card=None):
        self.message = message or self.default_message
        self.gift_card = gift_card
        super().__init__(self.message)


class ExpiredGiftCardException(GiftCardError):
    code = 'gift_card_expired'
    default_message = 'The gift card has expired'


class InvalidUserException(GiftCardError):
    code = 'gift_card_invalid_user'
    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'The gift card belongs to another user'


class InvalidOrderStateException(GiftCardError):
    code = 'gift_card_invalid_order_state'
    status_code = status.HTTP_409_CONFLICT
    default_message = 'The order can no longer accept gift cards'


class DebitOutOfRangeError(GiftCardError, ValueError):
    code = 'gift_card_debit_out_of_range'
    default_message = 'Debit amount is out of range for this gift card'


class GiftCardNotFound(GiftCardError):
    code = 'gift_card_not_found'
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Gift card not found'


class GiftCardCodeGenerationError(GiftCardError):
    code = 'gift_card_code_generation_failed'
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_message = 'Could not generate a unique gift card code'
