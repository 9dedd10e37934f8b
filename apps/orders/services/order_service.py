"""
Core order service: numbering, line items, totals and completion.
"""
import logging
import uuid
from decimal import Decimal
from typing import Optional

from django.db import transaction
from django.utils import timezone

from ..models import Order, OrderItem
from ..signals import order_completing

logger = logging.getLogger(__name__)


class OrderService:
    """Service class for core order business logic"""

    @staticmethod
    def generate_order_number() -> str:
        """Generate unique public order number"""
        return f"R{uuid.uuid4().hex[:10].upper()}"

    @staticmethod
    def create_order(user=None, email: str = '') -> Order:
        """Create an empty cart order; guest orders have no user"""
        if user is not None and not email:
            email = user.email or ''
        return Order.objects.create(
            number=OrderService.generate_order_number(),
            user=user,
            email=email,
        )

    @staticmethod
    def add_line_item(order: Order, price: Decimal, quantity: int = 1, variant=None) -> OrderItem:
        """Add a line item and refresh order totals"""
        if quantity <= 0:
            raise ValueError("Quantity must be greater than 0")
        price = Decimal(str(price))
        item = OrderItem.objects.create(
            order=order,
            variant=variant,
            quantity=quantity,
            price=price,
            amount=price * quantity,
        )
        order.update_totals()
        return item

    @staticmethod
    def clear_optional_adjustments(order: Order) -> int:
        """
        Recalculation pass: drop every adjustment that is not mandatory.
        Returns the number of adjustments removed.
        """
        deleted, _ = order.adjustments.optional().delete()
        order.update_totals()
        return deleted

    @staticmethod
    def complete_order(order: Order, actor_email: Optional[str] = None) -> Order:
        """
        Complete the order. Receivers of order_completing run inside the same
        transaction, so a failing settlement leaves the order incomplete.
        """
        if order.state == Order.STATE_COMPLETE:
            return order
        if not order.is_pre_completion:
            raise ValueError(f"Order {order.number} cannot be completed from state {order.state}")

        with transaction.atomic():
            order = Order.objects.select_for_update().get(pk=order.pk)
            if order.state == Order.STATE_COMPLETE:
                return order
            if not order.is_pre_completion:
                raise ValueError(f"Order {order.number} cannot be completed from state {order.state}")
            order_completing.send(sender=Order, order=order)
            order.state = Order.STATE_COMPLETE
            order.completed_at = timezone.now()
            order.save(update_fields=['state', 'completed_at'])
            order.update_totals()

        logger.info(f"Order {order.number} completed by {actor_email or 'system'} (total {order.total})")
        return order
