from decimal import Decimal

from django.db import models

from ..interfaces import HasTotal


class GiftCardCalculator(models.Model):
    """
    Maps a gift card's balance to an order discount. Owned by the card and
    kept as-is across soft delete and restore.
    """

    TYPE_GIFT_CARD = 'gift_card'
    TYPE_CHOICES = [
        (TYPE_GIFT_CARD, 'Gift Card'),
    ]

    gift_card = models.OneToOneField('GiftCard', on_delete=models.CASCADE, related_name='calculator')
    calculator_type = models.CharField(max_length=30, choices=TYPE_CHOICES, default=TYPE_GIFT_CARD)
    preferences = models.JSONField(default=dict, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'gift_card_calculators'

    def __str__(self):
        return f"{self.get_calculator_type_display()} calculator #{self.pk}"

    def compute(self, order: HasTotal, gift_card=None) -> Decimal:
        """
        Discount the card can contribute: the smaller of its balance and the
        order total before this card's own adjustment.
        """
        gift_card = gift_card or self.gift_card
        own = (
            order.adjustments
            .from_originator(gift_card)
            .values_list('amount', flat=True)
            .first()
        )
        base = order.total - (own or Decimal('0.00'))
        if base <= 0:
            return Decimal('0.00')
        return min(gift_card.current_value, base)
