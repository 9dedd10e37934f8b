import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('orders', '0001_initial'),
        ('products', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='GiftCard',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('code', models.CharField(blank=True, editable=False, max_length=64, unique=True)),
                ('original_value', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('current_value', models.DecimalField(decimal_places=2, max_digits=10, validators=[django.core.validators.MinValueValidator(Decimal('0'))])),
                ('email', models.EmailField(max_length=254)),
                ('name', models.CharField(max_length=200)),
                ('note', models.TextField(blank=True, default='')),
                ('expiration_date', models.DateTimeField(blank=True)),
                ('deleted_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('line_item', models.OneToOneField(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='gift_card', to='orders.orderitem')),
                ('user', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='gift_cards', to=settings.AUTH_USER_MODEL)),
                ('variant', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='gift_cards', to='products.productvariant')),
            ],
            options={
                'db_table': 'gift_cards',
                'ordering': ['-expiration_date'],
                'indexes': [
                    models.Index(fields=['user', 'deleted_at'], name='gift_cards_user_deleted_idx'),
                    models.Index(fields=['expiration_date', 'current_value'], name='gift_cards_exp_value_idx'),
                ],
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('current_value__gte', 0)), name='gift_card_current_value_non_negative'),
                    models.CheckConstraint(condition=models.Q(('current_value__lte', models.F('original_value'))), name='gift_card_current_value_within_original'),
                ],
            },
        ),
        migrations.CreateModel(
            name='GiftCardCalculator',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('calculator_type', models.CharField(choices=[('gift_card', 'Gift Card')], default='gift_card', max_length=30)),
                ('preferences', models.JSONField(blank=True, default=dict)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('gift_card', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name='calculator', to='gift_cards.giftcard')),
            ],
            options={
                'db_table': 'gift_card_calculators',
            },
        ),
        migrations.CreateModel(
            name='GiftCardTransaction',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10)),
                ('balance_after', models.DecimalField(decimal_places=2, max_digits=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('gift_card', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='transactions', to='gift_cards.giftcard')),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='gift_card_transactions', to='orders.order')),
            ],
            options={
                'db_table': 'gift_card_transactions',
                'ordering': ['created_at', 'id'],
                'indexes': [
                    models.Index(fields=['gift_card', 'created_at'], name='gc_txn_card_created_idx'),
                    models.Index(fields=['order'], name='gc_txn_order_idx'),
                ],
            },
        ),
    ]
