"""
Django admin configuration for catalog app.
Seasonal campaign catalog management interface.
"""

from typing import ClassVar

from django.contrib import admin

from .models import Addon, Bundle, Event, Product, Service


@admin.register(Event)
class EventAdmin(admin.ModelAdmin):
    """Admin interface for seasonal campaigns."""

    list_display: ClassVar[list[str]] = ('name', 'slug', 'is_active', 'created_at')
    list_filter: ClassVar[list[str]] = ('is_active',)
    search_fields: ClassVar[list[str]] = ('name', 'slug')
    prepopulated_fields: ClassVar[dict[str, tuple[str, ...]]] = {'slug': ('name',)}


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    """Admin interface for products."""

    list_display: ClassVar[list[str]] = ('name', 'event', 'base_price', 'tier_label', 'is_active', 'created_at')
    list_filter: ClassVar[list[str]] = ('is_active', 'event', 'tier_label')
    search_fields: ClassVar[list[str]] = ('name', 'description')

    fieldsets: ClassVar[tuple] = (
        ('Basic Information', {
            'fields': ('event', 'name', 'description', 'tier_label', 'is_active')
        }),
        ('Pricing', {
            'fields': ('base_price', 'variants_config')
        }),
        ('Customization Wizard', {
            'fields': ('customization_schema',),
            'classes': ('collapse',)
        }),
    )


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    """Admin interface for bookable services."""

    list_display: ClassVar[list[str]] = ('name', 'event', 'base_price', 'booking_type', 'is_active')
    list_filter: ClassVar[list[str]] = ('is_active', 'event', 'booking_type')
    search_fields: ClassVar[list[str]] = ('name',)


@admin.register(Addon)
class AddonAdmin(admin.ModelAdmin):
    """Admin interface for add-ons. A price of 0 means pay-what-you-choose."""

    list_display: ClassVar[list[str]] = ('name', 'slug', 'event', 'addon_type', 'price', 'is_active')
    list_filter: ClassVar[list[str]] = ('is_active', 'event', 'addon_type')
    search_fields: ClassVar[list[str]] = ('name', 'slug')
    prepopulated_fields: ClassVar[dict[str, tuple[str, ...]]] = {'slug': ('name',)}


@admin.register(Bundle)
class BundleAdmin(admin.ModelAdmin):
    """Admin interface for fixed-price bundles."""

    list_display: ClassVar[list[str]] = ('name', 'slug', 'event', 'bundle_price', 'display_order', 'is_active')
    list_filter: ClassVar[list[str]] = ('is_active', 'event')
    search_fields: ClassVar[list[str]] = ('name', 'slug')
    prepopulated_fields: ClassVar[dict[str, tuple[str, ...]]] = {'slug': ('name',)}
    filter_horizontal: ClassVar[tuple[str, ...]] = ('products',)
