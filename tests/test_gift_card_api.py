"""
HTTP surface tests for gift card and order endpoints.
"""
import pytest
from decimal import Decimal

from django.core import mail
from rest_framework import status

from apps.gift_cards.models import GiftCard
from apps.gift_cards.services import GiftCardRedemptionService
from apps.orders.models import Order
from tests.factories import (
    GiftCardFactory, OrderFactory, ProductVariantFactory, UserFactory, create_order_with_total,
)

pytestmark = pytest.mark.django_db


class TestGiftCardHolderAPI:

    def test_list_requires_authentication(self, api_client):
        response = api_client.get('/api/gift-cards/')

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data['msg'] == 'Authentication required'

    def test_list_own_active_cards(self, auth_client, test_user):
        active = GiftCardFactory(user=test_user)
        GiftCardFactory(user=test_user, expired=True)
        GiftCardFactory(user=UserFactory())

        response = auth_client.get('/api/gift-cards/')

        assert response.status_code == status.HTTP_200_OK
        assert [card['code'] for card in response.data['data']] == [active.code]
        assert response.data['data'][0]['status'] == 'active'

    def test_list_all_cards(self, auth_client, test_user):
        GiftCardFactory(user=test_user)
        GiftCardFactory(user=test_user, expired=True)

        response = auth_client.get('/api/gift-cards/', {'show_all': 'true'})

        assert [card['status'] for card in response.data['data']] == ['active', 'expired']

    def test_invalid_sort(self, auth_client):
        response = auth_client.get('/api/gift-cards/', {'sort': 'balance'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert 'sort' in response.data['errors']

    def test_detail_includes_ledger(self, auth_client, test_user):
        gift_card = GiftCardFactory(user=test_user, original_value=Decimal('30.00'))
        order = create_order_with_total('10.00', user=test_user)
        GiftCardRedemptionService.debit(gift_card, Decimal('-10.00'), order)

        response = auth_client.get(f'/api/gift-cards/{gift_card.code}/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['current_value'] == '20.00'
        assert response.data['data']['transactions'][0]['order_number'] == order.number

    def test_detail_of_foreign_card_is_not_found(self, auth_client):
        gift_card = GiftCardFactory(user=UserFactory())

        response = auth_client.get(f'/api/gift-cards/{gift_card.code}/')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['errors']['code'] == 'gift_card_not_found'

    def test_variants_are_public(self, api_client, gift_card_variant):
        response = api_client.get('/api/gift-cards/variants/')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data'][0]['price'] == '50.00'

    def test_purchase(self, auth_client, test_user, gift_card_variant):
        order = OrderFactory(user=test_user)

        response = auth_client.post('/api/gift-cards/purchase/', {
            'order_number': order.number,
            'variant_id': gift_card_variant.id,
            'email': 'friend@example.com',
            'name': 'Friend',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['original_value'] == '50.00'
        order.refresh_from_db()
        assert order.total == Decimal('50.00')

    def test_purchase_on_foreign_order(self, auth_client, gift_card_variant):
        order = OrderFactory(user=UserFactory())

        response = auth_client.post('/api/gift-cards/purchase/', {
            'order_number': order.number,
            'variant_id': gift_card_variant.id,
            'email': 'friend@example.com',
            'name': 'Friend',
        }, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert not GiftCard.objects.exists()

    def test_transfer(self, auth_client, test_user):
        gift_card = GiftCardFactory(user=test_user)

        response = auth_client.post(f'/api/gift-cards/{gift_card.code}/transfer/',
                                    {'email': 'friend@example.com'}, format='json')

        assert response.status_code == status.HTTP_200_OK
        gift_card.refresh_from_db()
        assert gift_card.user is None
        assert len(mail.outbox) == 1

    def test_apply_gift_code(self, auth_client, test_user):
        gift_card = GiftCardFactory(user=test_user, original_value=Decimal('25.00'))
        order = create_order_with_total('75.00', user=test_user)

        response = auth_client.post('/api/gift-cards/apply/', {
            'order_number': order.number,
            'gift_code': gift_card.code,
        }, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['total'] == '50.00'
        assert response.data['data']['adjustment_total'] == '-25.00'

    def test_apply_foreign_card(self, auth_client, test_user):
        gift_card = GiftCardFactory(user=UserFactory())
        order = create_order_with_total('75.00', user=test_user)

        response = auth_client.post('/api/gift-cards/apply/', {
            'order_number': order.number,
            'gift_code': gift_card.code,
        }, format='json')

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data['errors']['code'] == 'gift_card_invalid_user'

    def test_apply_expired_card(self, auth_client, test_user):
        gift_card = GiftCardFactory(user=test_user, expired=True)
        order = create_order_with_total('75.00', user=test_user)

        response = auth_client.post('/api/gift-cards/apply/', {
            'order_number': order.number,
            'gift_code': gift_card.code,
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data['errors']['code'] == 'gift_card_expired'


class TestOrderAPI:

    def test_checkout_with_gift_card(self, auth_client, test_user):
        gift_card = GiftCardFactory(user=test_user, original_value=Decimal('25.00'))
        variant = ProductVariantFactory(price=Decimal('75.00'))

        created = auth_client.post('/api/order/createOrder', {}, format='json')
        number = created.data['data']['number']
        auth_client.post('/api/order/addItem', {'number': number, 'variant_id': variant.id}, format='json')
        applied = auth_client.post('/api/gift-cards/apply/', {'order_number': number, 'gift_code': gift_card.code},
                                   format='json')
        assert applied.data['data']['total'] == '50.00'

        response = auth_client.post('/api/order/completeOrder', {'number': number}, format='json')

        assert response.status_code == status.HTTP_200_OK
        assert response.data['data']['state'] == Order.STATE_COMPLETE
        assert response.data['data']['total'] == '50.00'
        gift_card.refresh_from_db()
        assert gift_card.current_value == Decimal('0.00')
        assert gift_card.transactions.get().amount == Decimal('-25.00')

    def test_settlement_failure_uses_error_envelope(self, auth_client, test_user):
        gift_card = GiftCardFactory(user=test_user, original_value=Decimal('25.00'))
        order = create_order_with_total('75.00', user=test_user)
        GiftCardRedemptionService.apply(gift_card, order)
        gift_card.deleted_at = gift_card.created_at
        gift_card.save(update_fields=['deleted_at'])

        response = auth_client.post('/api/order/completeOrder', {'number': order.number}, format='json')

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data['errors']['code'] == 'gift_card_not_found'
        order.refresh_from_db()
        assert order.state == Order.STATE_CART


class TestAdminAPI:

    def test_requires_staff(self, auth_client):
        response = auth_client.get('/api/gift-cards/admin/cards/')

        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_issue_by_amount(self, staff_client):
        response = staff_client.post('/api/gift-cards/admin/cards/issue/', {
            'email': 'holder@example.com',
            'name': 'Holder',
            'amount': '40.00',
        }, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['data']['current_value'] == '40.00'
        assert response.data['data']['is_reconciled'] is True

    def test_issue_requires_value_source(self, staff_client):
        response = staff_client.post('/api/gift-cards/admin/cards/issue/', {
            'email': 'holder@example.com',
            'name': 'Holder',
        }, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    def test_delete_and_restore(self, staff_client):
        gift_card = GiftCardFactory()

        deleted = staff_client.delete(f'/api/gift-cards/admin/cards/{gift_card.pk}/')
        assert deleted.status_code == status.HTTP_200_OK
        assert deleted.data['data']['is_deleted'] is True
        assert not GiftCard.objects.filter(pk=gift_card.pk).exists()

        restored = staff_client.post(f'/api/gift-cards/admin/cards/{gift_card.pk}/restore/')
        assert restored.status_code == status.HTTP_200_OK
        assert GiftCard.objects.filter(pk=gift_card.pk).exists()

    def test_report_sorting(self, staff_client):
        GiftCardFactory(original_value=Decimal('10.00'))
        GiftCardFactory(original_value=Decimal('90.00'))

        response = staff_client.get('/api/gift-cards/admin/cards/', {'sort': 'original_value',
                                                                     'direction': 'asc'})

        assert response.status_code == status.HTTP_200_OK
        values = [card['original_value'] for card in response.data['data']['list']]
        assert values == ['10.00', '90.00']

    def test_report_rejects_unknown_sort(self, staff_client):
        response = staff_client.get('/api/gift-cards/admin/cards/', {'sort': 'email'})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
