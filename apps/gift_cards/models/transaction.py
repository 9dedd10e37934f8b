from django.db import models


class GiftCardTransaction(models.Model):
    """Append-only ledger entry; debits carry negative amounts"""

    gift_card = models.ForeignKey('GiftCard', on_delete=models.CASCADE, related_name='transactions')
    order = models.ForeignKey('orders.Order', on_delete=models.PROTECT, related_name='gift_card_transactions')
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    balance_after = models.DecimalField(max_digits=10, decimal_places=2)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'gift_card_transactions'
        ordering = ['created_at', 'id']
        indexes = [
            models.Index(fields=['gift_card', 'created_at'], name='gc_txn_card_created_idx'),
            models.Index(fields=['order'], name='gc_txn_order_idx'),
        ]

    def __str__(self):
        return f"{self.gift_card_id}: {self.amount} (order {self.order_id})"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise ValueError("Gift card transactions are immutable")
        super().save(*args, **kwargs)

    def delete(self, *args, **kwargs):
        raise ValueError("Gift card transactions cannot be deleted")

    @property
    def is_debit(self):
        return self.amount < 0
