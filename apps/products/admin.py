from django.contrib import admin
from .models import Product, ProductVariant


class ProductVariantInline(admin.TabularInline):
    model = ProductVariant
    extra = 1
    fields = ['sku', 'price']


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ['name', 'status', 'is_gift_card', 'create_time']
    list_filter = ['status', 'is_gift_card']
    search_fields = ['name']
    inlines = [ProductVariantInline]


@admin.register(ProductVariant)
class ProductVariantAdmin(admin.ModelAdmin):
    list_display = ['sku', 'product', 'price', 'create_time']
    list_filter = ['product__is_gift_card']
    search_fields = ['sku', 'product__name']
