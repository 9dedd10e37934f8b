from django.contrib.contenttypes.fields import GenericForeignKey
from django.contrib.contenttypes.models import ContentType
from django.db import models


class OrderAdjustmentQuerySet(models.QuerySet):

    def mandatory(self):
        return self.filter(mandatory=True)

    def optional(self):
        return self.filter(mandatory=False)

    def from_originator(self, originator):
        content_type = ContentType.objects.get_for_model(originator, for_concrete_model=False)
        return self.filter(originator_type=content_type, originator_id=originator.pk)


class OrderAdjustment(models.Model):
    """
    Signed amount added to an order total, attributed to an originator
    (a gift card, a promotion, ...). Mandatory adjustments survive
    recalculation passes that clear optional ones.
    """

    order = models.ForeignKey('Order', on_delete=models.CASCADE, related_name='adjustments')
    amount = models.DecimalField(max_digits=10, decimal_places=2)
    label = models.CharField(max_length=200)
    mandatory = models.BooleanField(default=False)

    originator_type = models.ForeignKey(ContentType, on_delete=models.CASCADE, null=True, blank=True)
    originator_id = models.PositiveBigIntegerField(null=True, blank=True)
    originator = GenericForeignKey('originator_type', 'originator_id')

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = OrderAdjustmentQuerySet.as_manager()

    class Meta:
        db_table = 'order_adjustments'
        indexes = [
            models.Index(fields=['order'], name='order_adj_order_idx'),
            models.Index(fields=['originator_type', 'originator_id'], name='order_adj_originator_idx'),
        ]
        constraints = [
            models.UniqueConstraint(
                fields=['order', 'originator_type', 'originator_id'],
                name='unique_adjustment_per_originator',
            ),
        ]

    def __str__(self):
        return f"Adjustment {self.label} - {self.amount}"
