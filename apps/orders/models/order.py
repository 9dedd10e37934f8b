from decimal import Decimal

from django.conf import settings
from django.db import models
from django.db.models import Sum
from django.utils import timezone


class Order(models.Model):
    """Purchasing order; gift cards read its total, owner and state"""

    STATE_CART = 'cart'
    STATE_ADDRESS = 'address'
    STATE_DELIVERY = 'delivery'
    STATE_PAYMENT = 'payment'
    STATE_CONFIRM = 'confirm'
    STATE_COMPLETE = 'complete'
    STATE_CANCELED = 'canceled'

    STATE_CHOICES = [
        (STATE_CART, 'Cart'),
        (STATE_ADDRESS, 'Address'),
        (STATE_DELIVERY, 'Delivery'),
        (STATE_PAYMENT, 'Payment'),
        (STATE_CONFIRM, 'Confirm'),
        (STATE_COMPLETE, 'Complete'),
        (STATE_CANCELED, 'Canceled'),
    ]

    # States in which checkout can still change the order
    PRE_COMPLETION_STATES = (
        STATE_CART, STATE_ADDRESS, STATE_DELIVERY, STATE_PAYMENT, STATE_CONFIRM,
    )

    number = models.CharField(max_length=50, unique=True, help_text="Public order number")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='orders',
        help_text="Owner; guest checkouts have none",
    )
    email = models.EmailField(blank=True, default='')
    state = models.CharField(max_length=20, choices=STATE_CHOICES, default=STATE_CART)

    item_total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    adjustment_total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))
    total = models.DecimalField(max_digits=10, decimal_places=2, default=Decimal('0.00'))

    created_at = models.DateTimeField(default=timezone.now)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'orders'
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['user'], name='orders_user_idx'),
            models.Index(fields=['state'], name='orders_state_idx'),
            models.Index(fields=['created_at'], name='orders_created_at_idx'),
        ]

    def __str__(self):
        return f"Order {self.number}"

    @property
    def is_pre_completion(self):
        return self.state in self.PRE_COMPLETION_STATES

    def update_totals(self):
        """Recompute item, adjustment and grand totals from the database"""
        zero = Decimal('0.00')
        self.item_total = self.items.aggregate(s=Sum('amount'))['s'] or zero
        self.adjustment_total = self.adjustments.aggregate(s=Sum('amount'))['s'] or zero
        self.total = self.item_total + self.adjustment_total
        self.save(update_fields=['item_total', 'adjustment_total', 'total'])
        return self.total
