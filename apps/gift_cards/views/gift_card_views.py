"""
Card holder gift card views.
"""
import logging

from django.core.exceptions import ValidationError
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.views import APIView

from apps.common.exceptions import validation_error_detail
from apps.common.utils import success_response, error_response
from apps.orders.models import Order
from ..exceptions import GiftCardError
from ..ordering import COMPARATORS
from ..serializers import (
    GiftCardListSerializer, GiftCardSerializer, GiftCardVariantSerializer,
    GiftCardListQuerySerializer, GiftCardPurchaseSerializer, GiftCardTransferSerializer,
    GiftCodeApplySerializer,
)
from ..services import (
    apply_gift_code, find_gift_card, list_gift_cards, purchasable_gift_card_variants,
    purchase_gift_card, transfer_gift_card,
)

logger = logging.getLogger(__name__)


def get_open_order(user, number):
    return Order.objects.filter(number=number, user=user).first()


class GiftCardListView(APIView):
    """List the caller's gift cards; active ones unless show_all is set"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        query = GiftCardListQuerySerializer(data=request.query_params)
        if not query.is_valid():
            return error_response("Invalid query parameters", query.errors)

        gift_cards = list_gift_cards(
            request.user,
            show_all=query.validated_data['show_all'],
            comparator=COMPARATORS[query.validated_data['sort']],
        )
        return success_response(GiftCardListSerializer(gift_cards, many=True).data)


class GiftCardDetailView(APIView):
    """One of the caller's cards with its ledger"""
    permission_classes = [IsAuthenticated]

    def get(self, request, code):
        try:
            gift_card = find_gift_card(code, user=request.user)
        except GiftCardError as e:
            return error_response(e.message, {'code': e.code}, e.status_code)
        return success_response(GiftCardSerializer(gift_card).data)


class GiftCardVariantListView(APIView):
    """Amounts a gift card can be bought for"""
    permission_classes = [AllowAny]

    def get(self, request):
        variants = purchasable_gift_card_variants()
        return success_response(GiftCardVariantSerializer(variants, many=True).data)


class GiftCardPurchaseView(APIView):
    """Add a gift card purchase to one of the caller's open orders"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = GiftCardPurchaseSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid purchase data", serializer.errors)
        data = serializer.validated_data

        order = get_open_order(request.user, data['order_number'])
        if order is None:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)

        try:
            gift_card = purchase_gift_card(order, data['variant_id'], data['email'], data['name'], data['note'])
        except ValidationError as e:
            return error_response("Invalid purchase data", validation_error_detail(e))

        logger.info(f"User {request.user.id} bought gift card {gift_card.id} on order {order.number}")
        return success_response(
            GiftCardSerializer(gift_card).data, 'Gift card added to order', status.HTTP_201_CREATED
        )


class GiftCardTransferView(APIView):
    """Transfer one of the caller's cards to another e-mail address"""
    permission_classes = [IsAuthenticated]

    def post(self, request, code):
        serializer = GiftCardTransferSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid transfer data", serializer.errors)

        try:
            gift_card = find_gift_card(code, user=request.user)
            transfer_gift_card(
                gift_card,
                serializer.validated_data['email'],
                note=serializer.validated_data.get('note'),
                sender_email=request.user.email or None,
            )
        except GiftCardError as e:
            return error_response(e.message, {'code': e.code}, e.status_code)
        except ValidationError as e:
            return error_response("Invalid transfer data", validation_error_detail(e))

        return success_response({'id': gift_card.id, 'email': gift_card.email}, 'Gift card transferred')


class GiftCodeApplyView(APIView):
    """Apply a redemption code to one of the caller's open orders"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = GiftCodeApplySerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid gift code data", serializer.errors)

        order = get_open_order(request.user, serializer.validated_data['order_number'])
        if order is None:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)

        result = apply_gift_code(order, serializer.validated_data['gift_code'])
        if not result.success:
            return error_response(result.message, {'code': result.error.code}, result.error.status_code)

        order.refresh_from_db()
        return success_response({
            'order_number': order.number,
            'adjustment_total': str(order.adjustment_total),
            'total': str(order.total),
            'gift_card': GiftCardListSerializer(result.gift_card).data,
        }, result.message)
