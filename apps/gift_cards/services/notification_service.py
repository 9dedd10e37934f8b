"""
Gift card notification service.
"""
import logging

from django.conf import settings
from django.core.mail import send_mail

logger = logging.getLogger(__name__)


class GiftCardNotificationService:
    """Outbound messages about gift cards"""

    @staticmethod
    def send_transferred(gift_card, sender_email=None):
        """Tell the new holder a gift card was transferred to them"""
        sender = sender_email or 'Someone'
        notification_data = {
            'gift_card_id': gift_card.id,
            'recipient': gift_card.email,
            'subject': 'A gift card has been transferred to you',
            'message': (
                f"{sender} transferred a gift card to you.\n\n"
                f"Redemption code: {gift_card.code}\n"
                f"Balance: {gift_card.current_value}\n"
                f"Expires: {gift_card.expiration_date:%Y-%m-%d}\n"
                + (f"\nNote: {gift_card.note}\n" if gift_card.note else '')
            ),
        }

        send_mail(
            notification_data['subject'],
            notification_data['message'],
            settings.GIFT_CARD_NOTIFICATION_FROM_EMAIL,
            [gift_card.email],
        )
        logger.info(f"Transfer notification sent for gift card {gift_card.id} to {gift_card.email}")
        return notification_data
