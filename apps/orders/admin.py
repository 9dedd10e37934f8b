from django.contrib import admin
from .models import Order, OrderItem, OrderAdjustment


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    readonly_fields = ['amount', 'created_at']


class OrderAdjustmentInline(admin.TabularInline):
    model = OrderAdjustment
    extra = 0
    fields = ['label', 'amount', 'mandatory', 'originator_type', 'originator_id', 'created_at']
    readonly_fields = ['created_at']


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ['number', 'user', 'email', 'state', 'item_total', 'adjustment_total', 'total', 'created_at']
    list_filter = ['state', 'created_at']
    search_fields = ['number', 'email', 'user__username', 'user__email']
    readonly_fields = ['item_total', 'adjustment_total', 'total', 'completed_at']
    inlines = [OrderItemInline, OrderAdjustmentInline]
