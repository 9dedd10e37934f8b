"""
Two-phase redemption: apply reserves value on an order as a mandatory
adjustment; debit settles it against the ledger.
"""
import logging
from decimal import Decimal, InvalidOperation

from django.contrib.contenttypes.models import ContentType
from django.db import transaction
from django.db.models import F
from django.utils import timezone

from apps.orders.models import OrderAdjustment
from ..exceptions import (
    DebitOutOfRangeError, ExpiredGiftCardException, GiftCardNotFound,
    InvalidOrderStateException, InvalidUserException,
)
from ..interfaces import HasOwner, RedeemableOrder
from ..models import GiftCard, GiftCardTransaction

logger = logging.getLogger(__name__)
ledger_logger = logging.getLogger('gift_cards.ledger')

CENT = Decimal('0.01')


class GiftCardRedemptionService:
    """Service for reserving and settling gift card value against orders"""

    @staticmethod
    def adjustment_label(gift_card: GiftCard) -> str:
        return f"Gift card {gift_card.code[-4:]}"

    @staticmethod
    def apply(gift_card: GiftCard, order: RedeemableOrder, now=None) -> bool:
        """
        Reserve the card's value on ``order``.

        Writes (or rewrites) a single mandatory adjustment of
        ``-min(current_value, order total)``. Neither the balance nor the
        ledger changes. Unowned cards are bound to the order's owner.
        """
        if gift_card.is_deleted or not GiftCard.objects.filter(pk=gift_card.pk).exists():
            logger.warning(f"Rejected deleted gift card {gift_card.pk} on order {order.pk}")
            raise GiftCardNotFound(gift_card=gift_card)

        if gift_card.is_expired(now):
            logger.warning(f"Rejected expired gift card {gift_card.pk} on order {order.pk}")
            raise ExpiredGiftCardException(gift_card=gift_card)

        if not order.is_pre_completion:
            logger.warning(f"Rejected gift card {gift_card.pk} on order {order.pk} in state {order.state}")
            raise InvalidOrderStateException(gift_card=gift_card)

        with transaction.atomic():
            GiftCardRedemptionService._claim_ownership(gift_card, order)

            discount = gift_card.calculator.compute(order, gift_card=gift_card)
            OrderAdjustment.objects.update_or_create(
                order=order,
                originator_type=ContentType.objects.get_for_model(GiftCard),
                originator_id=gift_card.pk,
                defaults={
                    'amount': -discount,
                    'label': GiftCardRedemptionService.adjustment_label(gift_card),
                    'mandatory': True,
                },
            )
            order.update_totals()

        logger.info(f"Applied gift card {gift_card.pk} to order {order.pk}: -{discount}")
        return True

    @staticmethod
    def _claim_ownership(gift_card: GiftCard, order: HasOwner) -> None:
        order_user_id = order.user_id

        if gift_card.user_id is not None:
            if order_user_id is None or order_user_id != gift_card.user_id:
                logger.warning(f"Gift card {gift_card.pk} owner does not match order {order.pk}")
                raise InvalidUserException(gift_card=gift_card)
            return

        if order_user_id is None:
            return

        # compare-and-set: bind only while the card is still unowned
        bound = GiftCard.objects.filter(pk=gift_card.pk, user__isnull=True).update(
            user_id=order_user_id, updated_at=timezone.now()
        )
        if bound:
            gift_card.user_id = order_user_id
            ledger_logger.info(f"Gift card {gift_card.pk} bound to user {order_user_id} via order {order.pk}")
            return

        gift_card.refresh_from_db(fields=['user', 'deleted_at'])
        if gift_card.is_deleted:
            raise GiftCardNotFound(gift_card=gift_card)
        if gift_card.user_id != order_user_id:
            logger.warning(f"Gift card {gift_card.pk} was claimed concurrently by user {gift_card.user_id}")
            raise InvalidUserException(gift_card=gift_card)

    @staticmethod
    def debit(gift_card: GiftCard, amount, order) -> GiftCardTransaction:
        """
        Settle ``amount`` (zero or negative) against the card.

        The balance decrement and the ledger insert commit together or not
        at all; the conditional UPDATE keeps racing debits from taking the
        balance below zero.
        """
        try:
            amount = Decimal(str(amount))
            whole_cents = amount.is_finite() and amount == amount.quantize(CENT)
        except InvalidOperation:
            raise DebitOutOfRangeError(f"Invalid debit amount {amount!r}", gift_card=gift_card) from None
        if not whole_cents:
            raise DebitOutOfRangeError(
                f"Debit amount must be a whole number of cents, got {amount}", gift_card=gift_card
            )
        amount = amount.quantize(CENT)
        if amount > 0:
            raise DebitOutOfRangeError(
                f"Debit amount must not be positive, got {amount}", gift_card=gift_card
            )
        withdrawal = -amount

        with transaction.atomic():
            try:
                locked = GiftCard.objects.select_for_update().get(pk=gift_card.pk)
            except GiftCard.DoesNotExist:
                raise GiftCardNotFound(gift_card=gift_card) from None

            if withdrawal > locked.current_value:
                logger.warning(
                    f"Debit of {amount} exceeds balance {locked.current_value} on gift card {locked.pk}"
                )
                raise DebitOutOfRangeError(
                    f"Cannot debit {withdrawal}, balance is {locked.current_value}", gift_card=gift_card
                )

            updated = GiftCard.objects.filter(pk=locked.pk, current_value__gte=withdrawal).update(
                current_value=F('current_value') - withdrawal,
                updated_at=timezone.now(),
            )
            if updated != 1:
                raise DebitOutOfRangeError(
                    f"Balance changed while debiting gift card {locked.pk}", gift_card=gift_card
                )

            locked.refresh_from_db(fields=['current_value'])
            entry = GiftCardTransaction.objects.create(
                gift_card=locked,
                order=order,
                amount=amount,
                balance_after=locked.current_value,
            )

        gift_card.refresh_from_db(fields=['current_value'])
        ledger_logger.info(
            f"Debit {amount} on gift card {gift_card.pk} for order {order.pk}, "
            f"balance {gift_card.current_value}"
        )
        return entry

    @staticmethod
    def settle_order(order) -> list:
        """
        Debit every gift card adjustment on ``order``. Cards already holding
        a ledger entry for this order are skipped.
        """
        entries = []
        adjustments = order.adjustments.filter(
            originator_type=ContentType.objects.get_for_model(GiftCard),
        ).order_by('id')
        for adjustment in adjustments:
            try:
                gift_card = GiftCard.objects.get(pk=adjustment.originator_id)
            except GiftCard.DoesNotExist:
                raise GiftCardNotFound(f"Gift card {adjustment.originator_id} is no longer available")
            if gift_card.transactions.filter(order=order).exists():
                continue
            entries.append(GiftCardRedemptionService.debit(gift_card, adjustment.amount, order))
        return entries
