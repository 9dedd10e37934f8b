"""
Lifecycle tests: soft delete, restore, transfer, purchase and listing.
"""
import pytest
from datetime import timedelta
from decimal import Decimal

from django.core import mail
from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.gift_cards.exceptions import GiftCardNotFound
from apps.gift_cards.models import GiftCard
from apps.gift_cards.ordering import by_expiration_date
from apps.gift_cards.services import (
    GiftCardLifecycleService, GiftCardRedemptionService, find_gift_card, list_gift_cards,
    purchasable_gift_card_variants, purchase_gift_card, report_gift_cards, transfer_gift_card,
)
from apps.gift_cards.status import GiftCardStatus
from tests.factories import (
    GiftCardFactory, GiftCardVariantFactory, OrderFactory, ProductVariantFactory, UserFactory,
    create_order_with_total,
)

pytestmark = pytest.mark.django_db


class TestSoftDelete:

    def test_deleted_card_hidden_from_default_queries(self, test_user):
        gift_card = GiftCardFactory(user=test_user)

        GiftCardLifecycleService.soft_delete(gift_card)

        assert not GiftCard.objects.filter(pk=gift_card.pk).exists()
        assert GiftCard.objects.query(include_deleted=True).filter(pk=gift_card.pk).exists()
        assert gift_card not in list_gift_cards(test_user, show_all=True)
        assert gift_card in list_gift_cards(test_user, show_all=True, include_deleted=True)

    def test_restore_keeps_calculator_identity(self, test_user):
        gift_card = GiftCardFactory(user=test_user)
        calculator_id = gift_card.calculator.pk

        GiftCardLifecycleService.soft_delete_by_id(gift_card.pk)
        restored = GiftCardLifecycleService.restore_by_id(gift_card.pk)

        assert restored.deleted_at is None
        assert restored.calculator.pk == calculator_id
        assert GiftCard.objects.filter(pk=gift_card.pk).exists()

    def test_soft_delete_keeps_balance_and_ledger(self):
        gift_card = GiftCardFactory(original_value=Decimal('40.00'))
        GiftCardRedemptionService.debit(gift_card, Decimal('-15.00'), create_order_with_total('15.00'))

        GiftCardLifecycleService.soft_delete(gift_card)
        GiftCardLifecycleService.restore(gift_card)

        gift_card.refresh_from_db()
        assert gift_card.current_value == Decimal('25.00')
        assert gift_card.transactions.count() == 1

    def test_lookup_by_code_or_id(self):
        gift_card = GiftCardFactory()
        GiftCardLifecycleService.soft_delete(gift_card)

        with pytest.raises(GiftCardNotFound):
            find_gift_card(gift_card.code)
        assert find_gift_card(gift_card.code, include_deleted=True) == gift_card
        assert find_gift_card(str(gift_card.pk), include_deleted=True) == gift_card

    def test_restore_unknown_card(self):
        with pytest.raises(GiftCardNotFound):
            GiftCardLifecycleService.restore_by_id(987654)


class TestTransfer:

    def test_transfer_to_registered_user(self, test_user):
        recipient = UserFactory(email='friend@example.com')
        gift_card = GiftCardFactory(user=test_user, original_value=Decimal('30.00'))

        transfer_gift_card(gift_card, 'Friend@Example.com', note='Enjoy', sender_email=test_user.email)

        gift_card.refresh_from_db()
        assert gift_card.user == recipient
        assert gift_card.email == 'Friend@Example.com'
        assert gift_card.note == 'Enjoy'
        assert gift_card.current_value == Decimal('30.00')
        assert gift_card.transactions.count() == 0

    def test_transfer_to_unknown_address_leaves_card_unowned(self, test_user):
        gift_card = GiftCardFactory(user=test_user)

        transfer_gift_card(gift_card, 'nobody@example.com')

        gift_card.refresh_from_db()
        assert gift_card.user is None
        assert gift_card.email == 'nobody@example.com'

    def test_transfer_sends_notification(self, test_user):
        gift_card = GiftCardFactory(user=test_user)

        transfer_gift_card(gift_card, 'friend@example.com', sender_email=test_user.email)

        assert len(mail.outbox) == 1
        assert mail.outbox[0].to == ['friend@example.com']
        assert gift_card.code in mail.outbox[0].body
        assert test_user.email in mail.outbox[0].body

    def test_invalid_email_is_rejected(self, test_user):
        gift_card = GiftCardFactory(user=test_user)

        with pytest.raises(ValidationError) as exc_info:
            transfer_gift_card(gift_card, 'not-an-email')

        assert 'email' in exc_info.value.message_dict
        gift_card.refresh_from_db()
        assert gift_card.user == test_user
        assert len(mail.outbox) == 0


class TestPurchase:

    def test_purchase_adds_line_item_and_card(self, test_user, gift_card_variant):
        order = OrderFactory(user=test_user)

        gift_card = purchase_gift_card(order, gift_card_variant, 'friend@example.com', 'Friend', 'Cheers')

        order.refresh_from_db()
        assert gift_card.line_item.order == order
        assert gift_card.line_item.quantity == 1
        assert gift_card.line_item.price == Decimal('50.00')
        assert gift_card.original_value == Decimal('50.00')
        assert gift_card.current_value == Decimal('50.00')
        assert gift_card.price == Decimal('50.00')
        assert order.item_total == Decimal('50.00')
        assert order.total == Decimal('50.00')

    def test_purchase_binds_registered_recipient(self, test_user, gift_card_variant):
        recipient = UserFactory(email='friend@example.com')

        gift_card = purchase_gift_card(OrderFactory(user=test_user), gift_card_variant.pk,
                                       'friend@example.com', 'Friend')

        assert gift_card.user == recipient

    def test_regular_variant_is_not_purchasable(self, test_user):
        variant = ProductVariantFactory()
        order = OrderFactory(user=test_user)

        with pytest.raises(ValidationError) as exc_info:
            purchase_gift_card(order, variant, 'friend@example.com', 'Friend')

        assert 'variant_id' in exc_info.value.message_dict
        assert not order.items.exists()
        assert not GiftCard.objects.exists()

    def test_invalid_recipient_rolls_back(self, test_user, gift_card_variant):
        order = OrderFactory(user=test_user)

        with pytest.raises(ValidationError):
            purchase_gift_card(order, gift_card_variant, 'not-an-email', 'Friend')

        assert not order.items.exists()
        assert not GiftCard.objects.exists()

    def test_purchasable_variants(self):
        cheap = GiftCardVariantFactory(price=Decimal('10.00'))
        dear = GiftCardVariantFactory(price=Decimal('100.00'))
        GiftCardVariantFactory(price=Decimal('0.00'))
        ProductVariantFactory(price=Decimal('20.00'))

        assert list(purchasable_gift_card_variants()) == [cheap, dear]


class TestListing:

    def test_only_active_cards_by_default(self, test_user):
        active = GiftCardFactory(user=test_user)
        GiftCardFactory(user=test_user, expired=True)
        GiftCardFactory(user=test_user, redeemed=True)
        GiftCardFactory()

        assert list_gift_cards(test_user) == [active]

    def test_show_all_orders_by_status_then_expiration(self, test_user):
        now = timezone.now()
        expired = GiftCardFactory(user=test_user, expiration_date=now - timedelta(days=2))
        redeemed = GiftCardFactory(user=test_user, redeemed=True, expiration_date=now + timedelta(days=90))
        active_soon = GiftCardFactory(user=test_user, expiration_date=now + timedelta(days=5))
        active_late = GiftCardFactory(user=test_user, expiration_date=now + timedelta(days=60))

        cards = list_gift_cards(test_user, show_all=True, now=now)

        assert cards == [active_late, active_soon, redeemed, expired]
        assert [card.status_at(now) for card in cards] == [
            GiftCardStatus.ACTIVE, GiftCardStatus.ACTIVE, GiftCardStatus.REDEEMED, GiftCardStatus.EXPIRED,
        ]

    def test_injected_comparator(self, test_user):
        now = timezone.now()
        redeemed = GiftCardFactory(user=test_user, redeemed=True, expiration_date=now + timedelta(days=90))
        active = GiftCardFactory(user=test_user, expiration_date=now + timedelta(days=5))

        cards = list_gift_cards(test_user, show_all=True, comparator=by_expiration_date, now=now)

        assert cards == [redeemed, active]

    def test_report_sorted_by_sortable_field(self):
        small = GiftCardFactory(original_value=Decimal('10.00'))
        large = GiftCardFactory(original_value=Decimal('90.00'))

        assert list(report_gift_cards(sort='current_value')) == [large, small]
        assert list(report_gift_cards(sort='current_value', descending=False)) == [small, large]

    def test_report_rejects_unknown_field(self):
        with pytest.raises(ValueError):
            report_gift_cards(sort='email')
