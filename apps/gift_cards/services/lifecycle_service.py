"""
Gift card lifecycle: soft delete, restore and ownership transfer.
"""
import logging
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.utils import timezone

from ..models import GiftCard
from .lookup_service import find_gift_card
from .notification_service import GiftCardNotificationService

logger = logging.getLogger(__name__)
ledger_logger = logging.getLogger('gift_cards.ledger')


class GiftCardLifecycleService:
    """Service for lifecycle changes that never touch balance or ledger"""

    @staticmethod
    def soft_delete(gift_card: GiftCard) -> GiftCard:
        """Mark the card deleted; its calculator and ledger stay in place"""
        if gift_card.is_deleted:
            return gift_card
        gift_card.deleted_at = timezone.now()
        gift_card.save(update_fields=['deleted_at', 'updated_at'])
        ledger_logger.info(f"Gift card {gift_card.pk} soft-deleted")
        return gift_card

    @staticmethod
    def restore(gift_card: GiftCard) -> GiftCard:
        """Clear the deletion marker; every other field is left untouched"""
        if not gift_card.is_deleted:
            return gift_card
        gift_card.deleted_at = None
        gift_card.save(update_fields=['deleted_at', 'updated_at'])
        ledger_logger.info(f"Gift card {gift_card.pk} restored")
        return gift_card

    @staticmethod
    def soft_delete_by_id(gift_card_id) -> GiftCard:
        return GiftCardLifecycleService.soft_delete(find_gift_card(gift_card_id, include_deleted=True))

    @staticmethod
    def restore_by_id(gift_card_id) -> GiftCard:
        return GiftCardLifecycleService.restore(find_gift_card(gift_card_id, include_deleted=True))

    @staticmethod
    def transfer(gift_card: GiftCard, email: str, note: Optional[str] = None,
                 sender_email: Optional[str] = None, notify: bool = True) -> GiftCard:
        """
        Hand the card to whoever owns ``email``. When no account uses that
        address the card keeps the e-mail but loses its owner, so it binds
        on first use instead.
        """
        email = (email or '').strip()
        if not email:
            raise ValidationError({'email': ['This field is required.']})
        try:
            validate_email(email)
        except ValidationError as e:
            raise ValidationError({'email': e.messages})

        User = get_user_model()
        new_owner = User.objects.find_by_email(email)

        with transaction.atomic():
            gift_card.email = email
            gift_card.user = new_owner
            update_fields = ['email', 'user', 'updated_at']
            if note is not None:
                gift_card.note = note
                update_fields.append('note')
            gift_card.save(update_fields=update_fields)

        ledger_logger.info(
            f"Gift card {gift_card.pk} transferred to {email} "
            f"(user {new_owner.pk if new_owner else 'none'})"
        )

        if notify:
            GiftCardNotificationService.send_transferred(gift_card, sender_email)
        return gift_card


def transfer_gift_card(gift_card, email, note=None, sender_email=None):
    return GiftCardLifecycleService.transfer(gift_card, email, note=note, sender_email=sender_email)
