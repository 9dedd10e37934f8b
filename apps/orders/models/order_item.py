from django.db import models


class OrderItem(models.Model):
    """Order line item; a purchased gift card points back at its line item"""

    order = models.ForeignKey('Order', on_delete=models.CASCADE, related_name='items')
    variant = models.ForeignKey(
        'products.ProductVariant',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='line_items',
    )
    quantity = models.IntegerField(default=1, help_text="Quantity ordered")
    price = models.DecimalField(max_digits=10, decimal_places=2, help_text="Unit price")
    amount = models.DecimalField(max_digits=10, decimal_places=2, help_text="Line total (quantity * price)")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_items'
        indexes = [
            models.Index(fields=['order'], name='order_items_order_idx'),
        ]

    def __str__(self):
        return f"OrderItem {self.id} x{self.quantity}"

    def save(self, *args, **kwargs):
        # Calculate amount if not set
        if not self.amount:
            self.amount = self.quantity * self.price
        super().save(*args, **kwargs)
