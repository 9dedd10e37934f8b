from datetime import timedelta
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.db.models import Sum
from django.utils import timezone

from ..codes import generate_unique_code
from ..interfaces import LineItemPriceSource, PriceSource
from ..status import evaluate_status, is_expired


def default_expiration_date(now=None):
    now = now or timezone.now()
    return now + timedelta(days=settings.GIFT_CARD_EXPIRATION_DAYS)


def unit_price(source: PriceSource):
    return source.price


def line_item_total(line_item: LineItemPriceSource):
    return line_item.price * line_item.quantity


class GiftCardQuerySet(models.QuerySet):

    def alive(self):
        return self.filter(deleted_at__isnull=True)

    def active(self, now=None):
        """Cards whose status() is active at ``now``"""
        now = now or timezone.now()
        return self.filter(expiration_date__gt=now, current_value__gt=0)

    def for_user(self, user):
        return self.filter(user=user)


class GiftCardManager(models.Manager.from_queryset(GiftCardQuerySet)):
    """
    Default manager: soft-deleted cards are excluded unless the caller asks
    for them with ``with_deleted()`` or ``query(include_deleted=True)``.
    """

    def get_queryset(self):
        return self.with_deleted().alive()

    def with_deleted(self):
        return GiftCardQuerySet(self.model, using=self._db)

    def query(self, include_deleted=False):
        return self.with_deleted() if include_deleted else self.get_queryset()


class GiftCard(models.Model):
    """
    Balance-bearing gift card.

    ``current_value`` only ever changes through debit settlement, which
    writes it with a conditional UPDATE together with a ledger entry; a
    plain ``save()`` that alters the balance of a persisted card is refused.
    """

    SORTABLE_ATTRIBUTES = [
        ('Creation Date', 'created_at'),
        ('Expiration Date', 'expiration_date'),
        ('Redemption Code', 'code'),
        ('Current Balance', 'current_value'),
        ('Original Balance', 'original_value'),
        ('Note', 'note'),
    ]

    code = models.CharField(max_length=64, unique=True, blank=True, editable=False)
    original_value = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))]
    )
    current_value = models.DecimalField(
        max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0'))]
    )

    email = models.EmailField()
    name = models.CharField(max_length=200)
    note = models.TextField(blank=True, default='')
    expiration_date = models.DateTimeField(blank=True)

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='gift_cards',
    )
    variant = models.ForeignKey(
        'products.ProductVariant',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='gift_cards',
    )
    line_item = models.OneToOneField(
        'orders.OrderItem',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='gift_card',
    )

    deleted_at = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = GiftCardManager()

    class Meta:
        db_table = 'gift_cards'
        ordering = ['-expiration_date']
        indexes = [
            models.Index(fields=['user', 'deleted_at'], name='gift_cards_user_deleted_idx'),
            models.Index(fields=['expiration_date', 'current_value'], name='gift_cards_exp_value_idx'),
        ]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(current_value__gte=0),
                name='gift_card_current_value_non_negative',
            ),
            models.CheckConstraint(
                condition=models.Q(current_value__lte=models.F('original_value')),
                name='gift_card_current_value_within_original',
            ),
        ]

    def __str__(self):
        return f"Gift card {self.code} ({self.current_value}/{self.original_value})"

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        instance._persisted_current_value = instance.__dict__.get('current_value')
        return instance

    # -- creation defaults -------------------------------------------------

    def populate_defaults(self, now=None):
        """
        Fill creation-time defaults. Only acts on unsaved cards so the code
        and values are set exactly once.
        """
        if not self._state.adding:
            return
        if self.original_value is None and self.current_value is None:
            if self.line_item_id is not None or self.variant_id is not None:
                resolved = self.price
                self.original_value = resolved
                self.current_value = resolved
        if self.expiration_date is None:
            self.expiration_date = default_expiration_date(now)
        if not self.code:
            self.code = generate_unique_code(GiftCard)

    def full_clean(self, *args, **kwargs):
        self.populate_defaults()
        super().full_clean(*args, **kwargs)

    def clean(self):
        super().clean()
        if (
            self.current_value is not None
            and self.original_value is not None
            and self.current_value > self.original_value
        ):
            raise ValidationError({'current_value': 'Current value cannot exceed the original value.'})

    def save(self, *args, **kwargs):
        adding = self._state.adding
        if adding:
            self.populate_defaults()
        else:
            if self._balance_changed():
                raise ValueError("Gift card balance can only change through a debit")
            # the stored balance is owned by debit; never write it back from memory
            kwargs['update_fields'] = self._fields_without_balance(kwargs.get('update_fields'))
        super().save(*args, **kwargs)
        if adding:
            self._persisted_current_value = self.current_value
            from .calculator import GiftCardCalculator
            GiftCardCalculator.objects.get_or_create(gift_card=self)

    def _fields_without_balance(self, update_fields=None):
        if update_fields is not None:
            return [name for name in update_fields if name != 'current_value']
        deferred = self.get_deferred_fields()
        return [
            field.name for field in self._meta.concrete_fields
            if not field.primary_key
            and field.name != 'current_value'
            and field.attname not in deferred
        ]

    def _balance_changed(self):
        persisted = getattr(self, '_persisted_current_value', None)
        return persisted is not None and self.current_value != persisted

    def refresh_from_db(self, *args, **kwargs):
        super().refresh_from_db(*args, **kwargs)
        self._persisted_current_value = self.current_value

    # -- pricing -----------------------------------------------------------

    @property
    def price(self):
        """Line item total, else variant price, else the card's own balance"""
        if self.line_item_id is not None:
            return line_item_total(self.line_item)
        if self.variant_id is not None:
            return unit_price(self.variant)
        return self.current_value

    # -- status ------------------------------------------------------------

    def is_expired(self, now=None):
        return is_expired(self.expiration_date, now or timezone.now())

    def status_at(self, now):
        return evaluate_status(self.current_value, self.expiration_date, now)

    @property
    def status(self):
        return self.status_at(timezone.now())

    @property
    def is_deleted(self):
        return self.deleted_at is not None

    def order_activatable(self, order, now=None):
        """Whether ``order`` may receive this card right now"""
        if not order.is_pre_completion:
            return False
        if self.current_value is None or self.current_value <= 0:
            return False
        if self.is_expired(now):
            return False
        if self.user_id is not None and self.user_id != order.user_id:
            return False
        return True

    # -- ledger ------------------------------------------------------------

    def ledger_balance(self):
        """original_value plus every recorded movement"""
        moved = self.transactions.aggregate(total=Sum('amount'))['total'] or Decimal('0.00')
        return self.original_value + moved

    def is_reconciled(self):
        return self.ledger_balance() == self.current_value
