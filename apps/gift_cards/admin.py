from django.contrib import admin

from .models import GiftCard, GiftCardCalculator, GiftCardTransaction
from .services import GiftCardLifecycleService


class GiftCardTransactionInline(admin.TabularInline):
    model = GiftCardTransaction
    extra = 0
    can_delete = False
    fields = ['order', 'amount', 'balance_after', 'created_at']
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


class GiftCardCalculatorInline(admin.StackedInline):
    model = GiftCardCalculator
    extra = 0
    can_delete = False
    readonly_fields = ['calculator_type', 'created_at']


@admin.register(GiftCard)
class GiftCardAdmin(admin.ModelAdmin):
    list_display = ['code', 'name', 'email', 'user', 'original_value', 'current_value',
                    'expiration_date', 'deleted_at']
    list_filter = ['expiration_date', 'deleted_at']
    search_fields = ['code', 'email', 'name', 'user__username', 'user__email']
    readonly_fields = ['code', 'current_value', 'deleted_at', 'created_at', 'updated_at']
    raw_id_fields = ['user', 'variant', 'line_item']
    inlines = [GiftCardCalculatorInline, GiftCardTransactionInline]
    actions = ['soft_delete_cards', 'restore_cards']

    def get_queryset(self, request):
        return GiftCard.objects.with_deleted().select_related('user')

    def get_readonly_fields(self, request, obj=None):
        if obj is None:
            return ['code', 'deleted_at', 'created_at', 'updated_at']
        return self.readonly_fields + ['original_value']

    def soft_delete_cards(self, request, queryset):
        for gift_card in queryset:
            GiftCardLifecycleService.soft_delete(gift_card)
        self.message_user(request, f"{queryset.count()} gift card(s) deleted")
    soft_delete_cards.short_description = 'Soft-delete selected gift cards'

    def restore_cards(self, request, queryset):
        for gift_card in queryset:
            GiftCardLifecycleService.restore(gift_card)
        self.message_user(request, f"{queryset.count()} gift card(s) restored")
    restore_cards.short_description = 'Restore selected gift cards'


@admin.register(GiftCardTransaction)
class GiftCardTransactionAdmin(admin.ModelAdmin):
    list_display = ['gift_card', 'order', 'amount', 'balance_after', 'created_at']
    list_filter = ['created_at']
    search_fields = ['gift_card__code', 'order__number']
    readonly_fields = ['gift_card', 'order', 'amount', 'balance_after', 'created_at']

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False

    def has_delete_permission(self, request, obj=None):
        return False
