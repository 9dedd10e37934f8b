"""
Gift card action serializers for purchase, transfer, apply and issue requests.
"""
from decimal import Decimal

from rest_framework import serializers

from ..ordering import COMPARATORS


class GiftCardListQuerySerializer(serializers.Serializer):
    """Query parameters of the card holder's list"""

    show_all = serializers.BooleanField(required=False, default=False)
    sort = serializers.ChoiceField(choices=list(COMPARATORS), required=False, default='status')


class GiftCardPurchaseSerializer(serializers.Serializer):
    """Buy a gift card on one of the caller's open orders"""

    order_number = serializers.CharField(max_length=50)
    variant_id = serializers.IntegerField()
    email = serializers.EmailField()
    name = serializers.CharField(max_length=200)
    note = serializers.CharField(required=False, allow_blank=True, default='')

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Recipient name cannot be empty")
        return value.strip()


class GiftCardTransferSerializer(serializers.Serializer):
    """Hand a card over to another e-mail address"""

    email = serializers.EmailField()
    note = serializers.CharField(required=False, allow_blank=True)


class GiftCodeApplySerializer(serializers.Serializer):
    """Apply a redemption code to an open order"""

    order_number = serializers.CharField(max_length=50)
    gift_code = serializers.CharField(max_length=64)


class GiftCardIssueSerializer(serializers.Serializer):
    """Back-office issue of a card valued by amount or by variant"""

    email = serializers.EmailField()
    name = serializers.CharField(max_length=200)
    amount = serializers.DecimalField(max_digits=10, decimal_places=2, required=False,
                                      min_value=Decimal('0.00'))
    variant_id = serializers.IntegerField(required=False)
    note = serializers.CharField(required=False, allow_blank=True, default='')
    expiration_date = serializers.DateTimeField(required=False)

    def validate(self, attrs):
        if attrs.get('amount') is None and attrs.get('variant_id') is None:
            raise serializers.ValidationError("Either amount or variant_id is required")
        return attrs
