import uuid

import django.core.validators
import django.db.models.deletion
from django.db import migrations, models

import apps.catalog.models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('slug', models.SlugField(help_text='e.g. val-2026', max_length=100, unique=True)),
                ('theme_config', models.JSONField(blank=True, default=dict, help_text='UI theme, not used for pricing')),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Event',
                'verbose_name_plural': 'Events',
                'db_table': 'catalog_events',
                'ordering': ('-created_at',),
            },
        ),
        migrations.CreateModel(
            name='Product',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('base_price', models.BigIntegerField(help_text='Base unit price in naira', validators=[django.core.validators.MinValueValidator(0)])),
                ('variants_config', models.JSONField(blank=True, default=dict, help_text='Variant options and their price modifiers', validators=[apps.catalog.models.validate_variants_config])),
                ('customization_schema', models.JSONField(blank=True, default=dict)),
                ('tier_label', models.CharField(blank=True, choices=[('entry', 'Entry'), ('popular', 'Popular'), ('grandGesture', 'Grand Gesture')], max_length=20)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='products', to='catalog.event')),
            ],
            options={
                'verbose_name': 'Product',
                'verbose_name_plural': 'Products',
                'db_table': 'catalog_products',
                'ordering': ('name',),
                'indexes': [models.Index(fields=['event', 'is_active'], name='catalog_prod_event_active_idx')],
            },
        ),
        migrations.CreateModel(
            name='Service',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True)),
                ('base_price', models.BigIntegerField(help_text='Price per booking in naira', validators=[django.core.validators.MinValueValidator(0)])),
                ('booking_type', models.CharField(choices=[('DIRECT', 'Direct booking'), ('REDIRECT', 'Redirect to partner')], default='DIRECT', max_length=10)),
                ('redirect_url', models.URLField(blank=True)),
                ('availability_config', models.JSONField(blank=True, default=dict)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='services', to='catalog.event')),
            ],
            options={
                'verbose_name': 'Service',
                'verbose_name_plural': 'Services',
                'db_table': 'catalog_services',
                'ordering': ('name',),
            },
        ),
        migrations.CreateModel(
            name='Addon',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('slug', models.SlugField(max_length=100)),
                ('addon_type', models.CharField(choices=[('QUESTIONNAIRE', 'Questionnaire'), ('LOGISTICS', 'Logistics'), ('LINK', 'Link')], max_length=20)),
                ('description', models.TextField(blank=True)),
                ('price', models.BigIntegerField(default=0, help_text='Price in naira; 0 lets the customer choose', validators=[django.core.validators.MinValueValidator(0)])),
                ('config', models.JSONField(blank=True, default=dict)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='addons', to='catalog.event')),
            ],
            options={
                'verbose_name': 'Add-on',
                'verbose_name_plural': 'Add-ons',
                'db_table': 'catalog_addons',
                'ordering': ('name',),
                'constraints': [models.UniqueConstraint(fields=('event', 'slug'), name='unique_addon_slug_per_event')],
            },
        ),
        migrations.CreateModel(
            name='Bundle',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(max_length=200)),
                ('slug', models.SlugField(max_length=100)),
                ('description', models.TextField(blank=True)),
                ('bundle_price', models.BigIntegerField(help_text='Fixed bundle price in naira', validators=[django.core.validators.MinValueValidator(0)])),
                ('original_value', models.BigIntegerField(blank=True, help_text='Sum of item prices, for display', null=True)),
                ('display_order', models.IntegerField(default=0)),
                ('is_active', models.BooleanField(default=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('event', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='bundles', to='catalog.event')),
                ('products', models.ManyToManyField(blank=True, related_name='bundles', to='catalog.product')),
            ],
            options={
                'verbose_name': 'Bundle',
                'verbose_name_plural': 'Bundles',
                'db_table': 'catalog_bundles',
                'ordering': ('display_order', 'name'),
                'constraints': [models.UniqueConstraint(fields=('event', 'slug'), name='unique_bundle_slug_per_event')],
            },
        ),
    ]
