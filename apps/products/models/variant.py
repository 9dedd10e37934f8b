from django.db import models


class ProductVariant(models.Model):
    """Purchasable variant of a product, carrying its own price"""
    product = models.ForeignKey('Product', on_delete=models.CASCADE, related_name='variants')
    sku = models.CharField(max_length=64, unique=True)
    price = models.DecimalField(max_digits=10, decimal_places=2)
    create_time = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'product_variants'
        ordering = ['price']
        indexes = [
            models.Index(fields=['product', 'price'], name='product_var_product_price_idx'),
        ]

    def __str__(self):
        return f"{self.product.name} - {self.sku} ({self.price})"
