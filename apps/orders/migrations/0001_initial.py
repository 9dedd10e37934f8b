import django.db.models.deletion
import django.utils.timezone
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('contenttypes', '0002_remove_content_type_name'),
        ('products', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('number', models.CharField(help_text='Public order number', max_length=50, unique=True)),
                ('email', models.EmailField(blank=True, default='', max_length=254)),
                ('state', models.CharField(choices=[('cart', 'Cart'), ('address', 'Address'), ('delivery', 'Delivery'), ('payment', 'Payment'), ('confirm', 'Confirm'), ('complete', 'Complete'), ('canceled', 'Canceled')], default='cart', max_length=20)),
                ('item_total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('adjustment_total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('total', models.DecimalField(decimal_places=2, default=Decimal('0.00'), max_digits=10)),
                ('created_at', models.DateTimeField(default=django.utils.timezone.now)),
                ('completed_at', models.DateTimeField(blank=True, null=True)),
                ('user', models.ForeignKey(blank=True, help_text='Owner; guest checkouts have none', null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='orders', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'db_table': 'orders',
                'ordering': ['-created_at'],
                'indexes': [
                    models.Index(fields=['user'], name='orders_user_idx'),
                    models.Index(fields=['state'], name='orders_state_idx'),
                    models.Index(fields=['created_at'], name='orders_created_at_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('quantity', models.IntegerField(default=1, help_text='Quantity ordered')),
                ('price', models.DecimalField(decimal_places=2, help_text='Unit price', max_digits=10)),
                ('amount', models.DecimalField(decimal_places=2, help_text='Line total (quantity * price)', max_digits=10)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.order')),
                ('variant', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.PROTECT, related_name='line_items', to='products.productvariant')),
            ],
            options={
                'db_table': 'order_items',
                'indexes': [
                    models.Index(fields=['order'], name='order_items_order_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderAdjustment',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('amount', models.DecimalField(decimal_places=2, max_digits=10)),
                ('label', models.CharField(max_length=200)),
                ('mandatory', models.BooleanField(default=False)),
                ('originator_id', models.PositiveBigIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='adjustments', to='orders.order')),
                ('originator_type', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, to='contenttypes.contenttype')),
            ],
            options={
                'db_table': 'order_adjustments',
                'indexes': [
                    models.Index(fields=['order'], name='order_adj_order_idx'),
                    models.Index(fields=['originator_type', 'originator_id'], name='order_adj_originator_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('order', 'originator_type', 'originator_id'), name='unique_adjustment_per_originator'),
                ],
            },
        ),
    ]
