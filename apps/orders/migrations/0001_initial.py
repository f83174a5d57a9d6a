import uuid

import django.core.validators
import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('catalog', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Order',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('order_id', models.CharField(help_text='Human-shareable order reference', max_length=32, unique=True)),
                ('status', models.CharField(choices=[('PENDING', 'Pending'), ('CONFIRMED', 'Confirmed'), ('PROCESSING', 'Processing'), ('SHIPPED', 'Shipped'), ('DELIVERED', 'Delivered'), ('CANCELLED', 'Cancelled')], default='PENDING', help_text='Current order status', max_length=20)),
                ('customer_name', models.CharField(max_length=200)),
                ('customer_phone', models.CharField(max_length=30)),
                ('customer_whatsapp', models.CharField(blank=True, max_length=30)),
                ('customer_secondary_phone', models.CharField(blank=True, max_length=30)),
                ('customer_email', models.EmailField(blank=True, max_length=254)),
                ('customer_address', models.CharField(max_length=500)),
                ('customer_city', models.CharField(blank=True, max_length=100)),
                ('customer_message', models.TextField(blank=True, help_text='Gift message or delivery note')),
                ('sub_total', models.BigIntegerField(help_text='Sum of line totals in naira', validators=[django.core.validators.MinValueValidator(0)])),
                ('service_fee', models.BigIntegerField(help_text='Tiered service fee in naira', validators=[django.core.validators.MinValueValidator(0)])),
                ('total_amount', models.BigIntegerField(help_text='sub_total + service_fee in naira', validators=[django.core.validators.MinValueValidator(0)])),
                ('notes', models.TextField(blank=True, help_text='Internal staff notes')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='orders', to='catalog.event')),
            ],
            options={
                'verbose_name': 'Order',
                'verbose_name_plural': 'Orders',
                'db_table': 'orders',
                'ordering': ('-created_at',),
                'indexes': [
                    models.Index(fields=['status', '-created_at'], name='orders_status_created_idx'),
                    models.Index(fields=['event', '-created_at'], name='orders_event_created_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='OrderItem',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('position', models.PositiveIntegerField(help_text='Submission order within the cart')),
                ('line_type', models.CharField(choices=[('PRODUCT', 'Product'), ('SERVICE', 'Service'), ('ADDON', 'Add-on'), ('BUNDLE', 'Bundle')], max_length=10)),
                ('reference_id', models.CharField(max_length=200)),
                ('display_name', models.CharField(help_text='Catalog name at time of order', max_length=200)),
                ('quantity', models.PositiveIntegerField(default=1, validators=[django.core.validators.MinValueValidator(1)])),
                ('unit_price', models.BigIntegerField(help_text='Unit price in naira (snapshot)', validators=[django.core.validators.MinValueValidator(0)])),
                ('line_total', models.BigIntegerField(help_text='unit_price * quantity', validators=[django.core.validators.MinValueValidator(0)])),
                ('variant_selection', models.JSONField(blank=True, default=dict)),
                ('customization_data', models.JSONField(blank=True, default=dict)),
                ('booking_date', models.CharField(blank=True, max_length=50)),
                ('booking_time', models.CharField(blank=True, max_length=50)),
                ('service_ticket', models.CharField(blank=True, max_length=32)),
                ('bundle_contents', models.JSONField(blank=True, default=list)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='items', to='orders.order')),
            ],
            options={
                'verbose_name': 'Order Item',
                'verbose_name_plural': 'Order Items',
                'db_table': 'order_items',
                'ordering': ('order', 'position'),
                'constraints': [models.UniqueConstraint(fields=('order', 'position'), name='unique_order_item_position')],
            },
        ),
        migrations.CreateModel(
            name='OrderStatusHistory',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('old_status', models.CharField(blank=True, help_text='Previous status', max_length=20)),
                ('new_status', models.CharField(help_text='New status', max_length=20)),
                ('notes', models.TextField(blank=True)),
                ('is_automatic', models.BooleanField(default=False, help_text='Whether this was an automatic system change')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('changed_by', models.ForeignKey(blank=True, help_text='Staff member who made the change', null=True, on_delete=django.db.models.deletion.SET_NULL, to=settings.AUTH_USER_MODEL)),
                ('order', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='status_history', to='orders.order')),
            ],
            options={
                'verbose_name': 'Order Status History',
                'verbose_name_plural': 'Order Status Histories',
                'db_table': 'order_status_history',
                'ordering': ('-created_at',),
                'indexes': [models.Index(fields=['order', '-created_at'], name='order_status_hist_order_idx')],
            },
        ),
    ]
