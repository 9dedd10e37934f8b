from django.dispatch import receiver

from apps.orders.signals import order_completing
from .services import settle_gift_cards


@receiver(order_completing)
def settle_gift_cards_on_completion(sender, order, **kwargs):
    """Debit every gift card reserved on the order being completed"""
    settle_gift_cards(order)
