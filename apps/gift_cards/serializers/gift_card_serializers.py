"""
Gift card read serializers.
"""
from rest_framework import serializers

from apps.products.models import ProductVariant
from ..models import GiftCard, GiftCardTransaction


class GiftCardTransactionSerializer(serializers.ModelSerializer):
    """Ledger entry as shown to card holders"""
    order_number = serializers.CharField(source='order.number', read_only=True)

    class Meta:
        model = GiftCardTransaction
        fields = ['id', 'amount', 'balance_after', 'is_debit', 'order_number', 'created_at']
        read_only_fields = fields


class GiftCardListSerializer(serializers.ModelSerializer):
    """
    Serializer for the card holder's list view.
    Used for: GET /api/gift-cards/
    """
    status = serializers.CharField(read_only=True)

    class Meta:
        model = GiftCard
        fields = [
            'id', 'code', 'name', 'email', 'note', 'original_value', 'current_value',
            'status', 'expiration_date', 'created_at'
        ]
        read_only_fields = fields


class GiftCardSerializer(GiftCardListSerializer):
    """Card detail including its ledger"""
    transactions = GiftCardTransactionSerializer(many=True, read_only=True)

    class Meta(GiftCardListSerializer.Meta):
        fields = GiftCardListSerializer.Meta.fields + ['transactions']
        read_only_fields = fields


class AdminGiftCardSerializer(GiftCardSerializer):
    """Back-office view; exposes ownership and deletion state"""
    user_id = serializers.IntegerField(read_only=True)
    is_deleted = serializers.BooleanField(read_only=True)
    is_reconciled = serializers.SerializerMethodField()

    class Meta(GiftCardSerializer.Meta):
        fields = GiftCardSerializer.Meta.fields + ['user_id', 'variant', 'line_item', 'deleted_at',
                                                   'is_deleted', 'is_reconciled']
        read_only_fields = fields

    def get_is_reconciled(self, obj):
        return obj.is_reconciled()


class GiftCardVariantSerializer(serializers.ModelSerializer):
    """Purchasable gift card amount"""
    product_name = serializers.CharField(source='product.name', read_only=True)

    class Meta:
        model = ProductVariant
        fields = ['id', 'sku', 'price', 'product_name']
        read_only_fields = fields
