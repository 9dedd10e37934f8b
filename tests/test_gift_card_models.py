"""
Gift card model tests: creation contract, defaults, price resolution and
balance protection.
"""
import pytest
from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.core.exceptions import ValidationError
from django.utils import timezone

from apps.gift_cards.exceptions import GiftCardCodeGenerationError
from apps.gift_cards.models import GiftCard, GiftCardCalculator, GiftCardTransaction
from apps.gift_cards.services import (
    GiftCardIssuanceService, GiftCardRedemptionService, sortable_attributes, sortable_fields,
)
from apps.orders.services import OrderService
from tests.factories import (
    GiftCardFactory, OrderFactory, ProductVariantFactory,
    create_order_with_total,
)

pytestmark = pytest.mark.django_db


class TestGiftCardCreation:
    """Creation contract of a gift card"""

    def test_missing_values_without_variant_is_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            GiftCardIssuanceService.issue(email='holder@example.com', name='Holder')

        errors = exc_info.value.message_dict
        assert 'original_value' in errors
        assert 'current_value' in errors
        assert GiftCard.objects.with_deleted().count() == 0

    def test_missing_email_and_name_is_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            GiftCardIssuanceService.issue(original_value=Decimal('10.00'), current_value=Decimal('10.00'))

        assert set(exc_info.value.message_dict) >= {'email', 'name'}

    def test_values_default_from_variant_price(self):
        variant = ProductVariantFactory(price=Decimal('40.00'))

        gift_card = GiftCardIssuanceService.issue(email='holder@example.com', name='Holder', variant=variant)

        assert gift_card.original_value == Decimal('40.00')
        assert gift_card.current_value == Decimal('40.00')

    def test_explicit_values_win_over_variant(self):
        variant = ProductVariantFactory(price=Decimal('40.00'))

        gift_card = GiftCardIssuanceService.issue(
            email='holder@example.com', name='Holder', variant=variant,
            original_value=Decimal('15.00'), current_value=Decimal('15.00'),
        )

        assert gift_card.original_value == Decimal('15.00')

    def test_negative_value_is_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            GiftCardIssuanceService.issue(
                email='holder@example.com', name='Holder',
                original_value=Decimal('-1.00'), current_value=Decimal('-1.00'),
            )
        assert 'original_value' in exc_info.value.message_dict

    def test_current_value_above_original_is_invalid(self):
        with pytest.raises(ValidationError):
            GiftCardIssuanceService.issue(
                email='holder@example.com', name='Holder',
                original_value=Decimal('10.00'), current_value=Decimal('20.00'),
            )
        assert GiftCard.objects.count() == 0

    def test_default_expiration_date(self, settings):
        settings.GIFT_CARD_EXPIRATION_DAYS = 365
        before = timezone.now()

        gift_card = GiftCardIssuanceService.issue(
            email='holder@example.com', name='Holder',
            original_value=Decimal('10.00'), current_value=Decimal('10.00'),
        )

        expected = before + timedelta(days=365)
        assert abs(gift_card.expiration_date - expected) < timedelta(minutes=1)

    def test_explicit_expiration_date_is_kept(self):
        expiration = timezone.now() + timedelta(days=3)

        gift_card = GiftCardFactory(expiration_date=expiration)

        gift_card.refresh_from_db()
        assert gift_card.expiration_date == expiration

    def test_calculator_created_with_card(self):
        gift_card = GiftCardFactory()

        assert GiftCardCalculator.objects.filter(gift_card=gift_card).count() == 1


class TestRedemptionCode:
    """Code generation happens once, before first persistence"""

    def test_code_is_hex_of_configured_entropy(self, settings):
        settings.GIFT_CARD_CODE_BYTES = 16

        gift_card = GiftCardFactory()

        assert len(gift_card.code) == 32
        int(gift_card.code, 16)
        assert gift_card.code == gift_card.code.upper()

    def test_code_never_regenerated(self):
        gift_card = GiftCardFactory()
        code = gift_card.code

        gift_card.note = 'Happy birthday'
        gift_card.save()
        gift_card.refresh_from_db()

        assert gift_card.code == code

    def test_collision_draws_again(self):
        existing = GiftCardFactory()

        with mock.patch('apps.gift_cards.codes.generate_code', side_effect=[existing.code, 'FRESHCODE']):
            gift_card = GiftCardFactory()

        assert gift_card.code == 'FRESHCODE'

    def test_collision_with_deleted_card_draws_again(self):
        existing = GiftCardFactory(deleted_at=timezone.now())

        with mock.patch('apps.gift_cards.codes.generate_code', side_effect=[existing.code, 'FRESHCODE']):
            gift_card = GiftCardFactory()

        assert gift_card.code == 'FRESHCODE'

    def test_gives_up_after_max_attempts(self, settings):
        settings.GIFT_CARD_CODE_MAX_ATTEMPTS = 3
        existing = GiftCardFactory()

        with mock.patch('apps.gift_cards.codes.generate_code', return_value=existing.code):
            with pytest.raises(GiftCardCodeGenerationError):
                GiftCardFactory()


class TestPriceResolution:
    """Line item total, else variant price, else own balance"""

    def test_line_item_price_times_quantity(self):
        order = OrderFactory()
        variant = ProductVariantFactory(price=Decimal('99.00'))
        line_item = OrderService.add_line_item(order, Decimal('20.00'), quantity=3, variant=variant)

        gift_card = GiftCardFactory(line_item=line_item, variant=variant)

        assert gift_card.price == Decimal('60.00')

    def test_variant_price(self):
        variant = ProductVariantFactory(price=Decimal('35.00'))

        gift_card = GiftCardFactory(variant=variant, original_value=Decimal('80.00'))

        assert gift_card.price == Decimal('35.00')

    def test_own_balance(self):
        gift_card = GiftCardFactory(original_value=Decimal('80.00'), current_value=Decimal('12.50'))

        assert gift_card.price == Decimal('12.50')


class TestBalanceProtection:
    """Only debit settlement moves the balance"""

    def test_plain_save_cannot_change_balance(self):
        gift_card = GiftCardFactory(original_value=Decimal('50.00'))

        gift_card.current_value = Decimal('10.00')
        with pytest.raises(ValueError):
            gift_card.save()

        gift_card.refresh_from_db()
        assert gift_card.current_value == Decimal('50.00')

    def test_metadata_save_is_allowed(self):
        gift_card = GiftCardFactory()

        gift_card.note = 'For the team'
        gift_card.save(update_fields=['note'])

        assert GiftCard.objects.get(pk=gift_card.pk).note == 'For the team'

    def test_stale_save_keeps_debited_balance(self):
        gift_card = GiftCardFactory(original_value=Decimal('25.00'))
        stale = GiftCard.objects.get(pk=gift_card.pk)
        GiftCardRedemptionService.debit(gift_card, Decimal('-25.00'), create_order_with_total('30.00'))

        stale.note = 'Reissued'
        stale.save()

        stored = GiftCard.objects.get(pk=gift_card.pk)
        assert stored.current_value == Decimal('0.00')
        assert stored.note == 'Reissued'
        assert stored.is_reconciled()

    def test_balance_is_dropped_from_update_fields(self):
        gift_card = GiftCardFactory(original_value=Decimal('25.00'))
        stale = GiftCard.objects.get(pk=gift_card.pk)
        GiftCardRedemptionService.debit(gift_card, Decimal('-10.00'), create_order_with_total('30.00'))

        stale.note = 'Gift'
        stale.save(update_fields=['note', 'current_value'])

        stored = GiftCard.objects.get(pk=gift_card.pk)
        assert stored.current_value == Decimal('15.00')
        assert stored.note == 'Gift'

    def test_transactions_are_immutable(self):
        gift_card = GiftCardFactory(original_value=Decimal('50.00'))
        order = create_order_with_total('20.00')
        entry = GiftCardRedemptionService.debit(gift_card, Decimal('-20.00'), order)

        entry.amount = Decimal('-1.00')
        with pytest.raises(ValueError):
            entry.save()
        with pytest.raises(ValueError):
            entry.delete()

        assert GiftCardTransaction.objects.get(pk=entry.pk).amount == Decimal('-20.00')

    def test_ledger_reconciles_after_debits(self):
        gift_card = GiftCardFactory(original_value=Decimal('50.00'))
        order = create_order_with_total('50.00')

        GiftCardRedemptionService.debit(gift_card, Decimal('-20.00'), order)
        GiftCardRedemptionService.debit(gift_card, Decimal('-5.50'), order)

        assert gift_card.current_value == Decimal('24.50')
        assert gift_card.ledger_balance() == Decimal('24.50')
        assert gift_card.is_reconciled()


class TestSortableAttributes:

    def test_exactly_six_sortable_attributes(self):
        assert GiftCard.SORTABLE_ATTRIBUTES == [
            ('Creation Date', 'created_at'),
            ('Expiration Date', 'expiration_date'),
            ('Redemption Code', 'code'),
            ('Current Balance', 'current_value'),
            ('Original Balance', 'original_value'),
            ('Note', 'note'),
        ]

    def test_catalog_exposed_by_listing_service(self):
        assert sortable_attributes() == GiftCard.SORTABLE_ATTRIBUTES
        assert sortable_fields() == ['created_at', 'expiration_date', 'code', 'current_value',
                                     'original_value', 'note']

    def test_every_sortable_attribute_is_a_model_field(self):
        field_names = {field.name for field in GiftCard._meta.get_fields()}
        for _, field in GiftCard.SORTABLE_ATTRIBUTES:
            assert field in field_names


class TestOrderActivatable:

    def test_owned_card_on_owners_open_order(self, test_user):
        gift_card = GiftCardFactory(user=test_user)
        order = create_order_with_total('30.00', user=test_user)

        assert gift_card.order_activatable(order)

    def test_unowned_card_on_any_order(self):
        gift_card = GiftCardFactory()

        assert gift_card.order_activatable(create_order_with_total('30.00'))

    def test_not_activatable(self, test_user, other_user):
        order = create_order_with_total('30.00', user=test_user)

        assert not GiftCardFactory(user=other_user).order_activatable(order)
        assert not GiftCardFactory(expired=True).order_activatable(order)
        assert not GiftCardFactory(redeemed=True).order_activatable(order)

        order.state = order.STATE_COMPLETE
        assert not GiftCardFactory().order_activatable(order)



class TestCollaboratorInterfaces:
    """Orders, variants and line items satisfy the capability protocols"""

    def test_order_is_redeemable(self):
        from apps.gift_cards.interfaces import HasOwner, HasTotal, RedeemableOrder

        order = create_order_with_total('10.00')

        assert isinstance(order, HasTotal)
        assert isinstance(order, HasOwner)
        assert isinstance(order, RedeemableOrder)

    def test_pricing_sources(self):
        from apps.gift_cards.interfaces import LineItemPriceSource, PriceSource

        variant = ProductVariantFactory()
        line_item = OrderService.add_line_item(OrderFactory(), Decimal('5.00'), quantity=2, variant=variant)

        assert isinstance(variant, PriceSource)
        assert isinstance(line_item, LineItemPriceSource)
