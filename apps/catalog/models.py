"""
Catalog models for the gifting storefront
Master catalog of everything a customer can put in a cart for a seasonal campaign:
products (with variants), bookable services, add-ons and fixed-price bundles.
All prices are whole naira.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, ClassVar

from django.core.exceptions import ValidationError
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from apps.common.validators import validate_json_payload

logger = logging.getLogger(__name__)


# ===============================================================================
# VALIDATION FUNCTIONS
# ===============================================================================


def validate_variants_config(config: Any) -> None:
    """🔒 Validate product variant configuration shape"""
    if not config:
        return

    validate_json_payload(config, "variants_config")

    options = config.get('options', [])
    if not isinstance(options, list):
        raise ValidationError(_("variants_config.options must be a list"))

    for option in options:
        if not isinstance(option, dict) or not option.get('name'):
            raise ValidationError(_("Every variant option needs a name"))
        for value in option.get('values', []):
            if not isinstance(value, dict) or 'value' not in value:
                raise ValidationError(_("Every variant value needs a value key"))
            modifier = value.get('priceModifier', 0)
            if not isinstance(modifier, int) or isinstance(modifier, bool):
                raise ValidationError(_("priceModifier must be a whole number"))


# ===============================================================================
# CAMPAIGN
# ===============================================================================


class Event(models.Model):
    """
    Seasonal campaign (e.g. Valentine's 2026).
    Every catalog entry and every order belongs to exactly one event.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100, unique=True, help_text=_("e.g. val-2026"))
    theme_config = models.JSONField(default=dict, blank=True, help_text=_("UI theme, not used for pricing"))
    is_active = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'catalog_events'
        verbose_name = _('Event')
        verbose_name_plural = _('Events')
        ordering: ClassVar[tuple[str, ...]] = ('-created_at',)

    def __str__(self) -> str:
        return self.name


# ===============================================================================
# CATALOG ENTRIES
# ===============================================================================


class Product(models.Model):
    """
    Physical gift. Unit price is base_price plus the modifiers of the selected variants.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name='products')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    base_price = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("Base unit price in naira")
    )

    # {"options": [{"name": "Color", "values": [{"label": "Red", "value": "red", "priceModifier": 500}]}]}
    variants_config = models.JSONField(
        default=dict,
        blank=True,
        validators=[validate_variants_config],
        help_text=_("Variant options and their price modifiers")
    )
    # Wizard steps the UI collects; carried into orders as customization data
    customization_schema = models.JSONField(default=dict, blank=True)

    TIER_CHOICES: ClassVar[tuple[tuple[str, str], ...]] = (
        ('entry', _('Entry')),
        ('popular', _('Popular')),
        ('grandGesture', _('Grand Gesture')),
    )
    tier_label = models.CharField(max_length=20, choices=TIER_CHOICES, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'catalog_products'
        verbose_name = _('Product')
        verbose_name_plural = _('Products')
        ordering: ClassVar[tuple[str, ...]] = ('name',)
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=['event', 'is_active'], name='catalog_prod_event_active_idx'),
        )

    def __str__(self) -> str:
        return self.name

    @property
    def variant_options(self) -> list[dict[str, Any]]:
        """Declared variant options, tolerating an empty config"""
        return list((self.variants_config or {}).get('options', []))


class Service(models.Model):
    """
    Bookable experience (spa session, dinner slot...).
    Availability is managed elsewhere; booking date/time travel with the order as metadata.
    """

    BOOKING_TYPE_CHOICES: ClassVar[tuple[tuple[str, str], ...]] = (
        ('DIRECT', _('Direct booking')),
        ('REDIRECT', _('Redirect to partner')),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name='services')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    base_price = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("Price per booking in naira")
    )
    booking_type = models.CharField(max_length=10, choices=BOOKING_TYPE_CHOICES, default='DIRECT')
    redirect_url = models.URLField(blank=True)
    availability_config = models.JSONField(default=dict, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'catalog_services'
        verbose_name = _('Service')
        verbose_name_plural = _('Services')
        ordering: ClassVar[tuple[str, ...]] = ('name',)

    def __str__(self) -> str:
        return self.name


class Addon(models.Model):
    """
    Miscellaneous order extra.
    A price of exactly 0 means the customer chooses the amount (pay-what-you-choose).
    """

    TYPE_CHOICES: ClassVar[tuple[tuple[str, str], ...]] = (
        ('QUESTIONNAIRE', _('Questionnaire')),
        ('LOGISTICS', _('Logistics')),
        ('LINK', _('Link')),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name='addons')
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100)
    addon_type = models.CharField(max_length=20, choices=TYPE_CHOICES)
    description = models.TextField(blank=True)
    price = models.BigIntegerField(
        default=0,
        validators=[MinValueValidator(0)],
        help_text=_("Price in naira; 0 lets the customer choose")
    )
    # Questionnaire schema, price tiers, hub address...
    config = models.JSONField(default=dict, blank=True)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'catalog_addons'
        verbose_name = _('Add-on')
        verbose_name_plural = _('Add-ons')
        ordering: ClassVar[tuple[str, ...]] = ('name',)
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(fields=['event', 'slug'], name='unique_addon_slug_per_event'),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def is_customer_priced(self) -> bool:
        return self.price == 0


class Bundle(models.Model):
    """
    Curated pack sold at a fixed bundle price.
    The product list is informational; it never changes what the bundle costs.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    event = models.ForeignKey(Event, on_delete=models.PROTECT, related_name='bundles')
    name = models.CharField(max_length=200)
    slug = models.SlugField(max_length=100)
    description = models.TextField(blank=True)
    products = models.ManyToManyField(Product, blank=True, related_name='bundles')
    bundle_price = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("Fixed bundle price in naira")
    )
    original_value = models.BigIntegerField(null=True, blank=True, help_text=_("Sum of item prices, for display"))
    display_order = models.IntegerField(default=0)

    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'catalog_bundles'
        verbose_name = _('Bundle')
        verbose_name_plural = _('Bundles')
        ordering: ClassVar[tuple[str, ...]] = ('display_order', 'name')
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(fields=['event', 'slug'], name='unique_bundle_slug_per_event'),
        ]

    def __str__(self) -> str:
        return self.name

    @property
    def savings(self) -> int:
        """Amount saved versus buying the items one by one"""
        if self.original_value is None:
            return 0
        return max(0, self.original_value - self.bundle_price)
