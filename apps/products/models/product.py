from django.db import models


class Product(models.Model):
    """Catalog product; gift card products are flagged with is_gift_card"""
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, default='')

    # Status flags
    status = models.IntegerField(default=1, help_text="1=active, -1=inactive")
    is_gift_card = models.BooleanField(default=False, help_text="Variants of this product issue gift cards")
    deleted_at = models.DateTimeField(null=True, blank=True)

    create_time = models.DateTimeField(auto_now_add=True)
    update_time = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'products'
        indexes = [
            models.Index(fields=['status'], name='products_status_idx'),
            models.Index(fields=['is_gift_card'], name='products_is_gift_card_idx'),
        ]

    def __str__(self):
        return f"{self.name} (id: {self.id})"
