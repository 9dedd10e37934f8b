"""
Order creation, query and completion views.
"""
import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView

from apps.common.utils import success_response, error_response
from apps.products.models import ProductVariant
from ..models import Order
from ..serializers import (
    OrderSerializer, OrderCreateSerializer, OrderItemCreateSerializer, OrderNumberSerializer
)
from ..services import OrderService

logger = logging.getLogger(__name__)


def get_user_order(user, number):
    return Order.objects.filter(number=number, user=user).first()


class CreateOrderView(APIView):
    """Open an empty cart for the caller"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = OrderCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid order data", serializer.errors)

        order = OrderService.create_order(request.user, serializer.validated_data['email'])
        return success_response(OrderSerializer(order).data, 'Order created', status.HTTP_201_CREATED)


class GetOrderDetailView(APIView):
    """Order detail with line items and adjustments"""
    permission_classes = [IsAuthenticated]

    def get(self, request):
        number = request.query_params.get('number')
        if not number:
            return error_response("Order number is required")

        order = get_user_order(request.user, number)
        if order is None:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)
        return success_response(OrderSerializer(order).data)


class AddItemView(APIView):
    """Add a product variant to an open order"""
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = OrderItemCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid item data", serializer.errors)
        data = serializer.validated_data

        order = get_user_order(request.user, data['number'])
        if order is None:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)
        if not order.is_pre_completion:
            return error_response("Order can no longer be changed", status_code=status.HTTP_409_CONFLICT)

        variant = ProductVariant.objects.filter(pk=data['variant_id']).first()
        if variant is None:
            return error_response("Product variant not found", status_code=status.HTTP_404_NOT_FOUND)

        OrderService.add_line_item(order, variant.price, data['quantity'], variant)
        return success_response(OrderSerializer(order).data, 'Item added')


class CompleteOrderView(APIView):
    """
    Complete an order. Gift card settlement runs as part of completion;
    its failures surface through the API exception handler.
    """
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = OrderNumberSerializer(data=request.data)
        if not serializer.is_valid():
            return error_response("Invalid order data", serializer.errors)

        order = get_user_order(request.user, serializer.validated_data['number'])
        if order is None:
            return error_response("Order not found", status_code=status.HTTP_404_NOT_FOUND)
        if not order.is_pre_completion and order.state != Order.STATE_COMPLETE:
            return error_response(f"Order cannot be completed from state {order.state}",
                                  status_code=status.HTTP_409_CONFLICT)

        order = OrderService.complete_order(order, actor_email=request.user.email)
        logger.info(f"User {request.user.id} completed order {order.number}")
        return success_response(OrderSerializer(order).data, 'Order completed')
