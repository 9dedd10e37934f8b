"""
Gift card issuance: manual issue and purchase through an order.
"""
import logging
from decimal import Decimal
from typing import Optional

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError
from django.db import transaction

from apps.orders.services import OrderService
from apps.products.models import ProductVariant
from ..models import GiftCard

logger = logging.getLogger(__name__)


class GiftCardIssuanceService:
    """Service for creating gift cards"""

    @staticmethod
    def purchasable_variants():
        """Variants of live gift card products with a positive price, cheapest first"""
        return (
            ProductVariant.objects
            .select_related('product')
            .filter(
                product__is_gift_card=True,
                product__deleted_at__isnull=True,
                product__status=1,
                price__gt=0,
            )
            .order_by('price')
        )

    @staticmethod
    def issue(**attributes) -> GiftCard:
        """
        Create a card from ``attributes``. Raises ValidationError (nothing is
        persisted) when required fields are missing or values are invalid.
        """
        gift_card = GiftCard(**attributes)
        gift_card.full_clean()
        gift_card.save()
        logger.info(f"Issued gift card {gift_card.pk} worth {gift_card.original_value}")
        return gift_card

    @staticmethod
    def purchase(order, variant, email: str, name: str, note: str = '') -> GiftCard:
        """
        Buy a gift card as part of ``order``: the card and a quantity-1 line
        item priced at the variant are created together or not at all.
        """
        variant_id = variant.pk if isinstance(variant, ProductVariant) else variant
        variant = GiftCardIssuanceService.purchasable_variants().filter(pk=variant_id).first()
        if variant is None:
            raise ValidationError({'variant_id': ['Select a valid gift card amount.']})
        if not order.is_pre_completion:
            raise ValidationError({'order': ['The order can no longer be changed.']})

        User = get_user_model()
        with transaction.atomic():
            gift_card = GiftCardIssuanceService.issue(
                email=email,
                name=name,
                note=note or '',
                variant=variant,
                user=User.objects.find_by_email(email),
            )
            line_item = OrderService.add_line_item(order, variant.price, quantity=1, variant=variant)
            gift_card.line_item = line_item
            gift_card.save(update_fields=['line_item', 'updated_at'])

        logger.info(f"Gift card {gift_card.pk} purchased on order {order.pk} for {variant.price}")
        return gift_card

    @staticmethod
    def issue_manual(email: str, name: str, amount: Optional[Decimal] = None, variant_id=None,
                     note: str = '', expiration_date=None, user=None) -> GiftCard:
        """Admin issue of a bare card, valued explicitly or from a variant"""
        attributes = {
            'email': email,
            'name': name,
            'note': note or '',
            'user': user,
        }
        if expiration_date is not None:
            attributes['expiration_date'] = expiration_date
        if amount is not None:
            attributes['original_value'] = Decimal(str(amount))
            attributes['current_value'] = Decimal(str(amount))
        if variant_id is not None:
            variant = ProductVariant.objects.filter(pk=variant_id).first()
            if variant is None:
                raise ValidationError({'variant_id': ['Unknown variant.']})
            attributes['variant'] = variant
        return GiftCardIssuanceService.issue(**attributes)


def purchasable_gift_card_variants():
    return GiftCardIssuanceService.purchasable_variants()


def purchase_gift_card(order, variant, email, name, note=''):
    return GiftCardIssuanceService.purchase(order, variant, email, name, note)
