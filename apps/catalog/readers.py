"""
Catalog readers - read-only lookups used by the order pipeline.

Each reader turns one catalog model into a CatalogEntry: a price plus a
capability descriptor (declared variant options, fixed vs customer-chosen price).
The order resolver only ever sees CatalogEntry objects, never model instances,
so tests can swap in an in-memory catalog.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

from django.db import models

from apps.common.types import ReferenceId

from .models import Addon, Bundle, Product, Service

logger = logging.getLogger(__name__)


# ===============================================================================
# CATALOG ENTRY TYPES
# ===============================================================================


class PricingMode(str, Enum):
    FIXED = 'FIXED'
    CUSTOMER_CHOSEN = 'CUSTOMER_CHOSEN'


@dataclass(frozen=True)
class VariantValue:
    label: str
    value: str
    price_modifier: int = 0


@dataclass(frozen=True)
class VariantOption:
    name: str
    values: tuple[VariantValue, ...] = ()

    def find_value(self, chosen: str) -> VariantValue | None:
        """Match a chosen value by its value key first, then by display label"""
        for candidate in self.values:
            if candidate.value == chosen:
                return candidate
        for candidate in self.values:
            if candidate.label == chosen:
                return candidate
        return None


@dataclass(frozen=True)
class CatalogEntry:
    """Read-only snapshot of one catalog record as the pricing pipeline needs it"""
    reference_id: str
    name: str
    price: int
    pricing_mode: PricingMode = PricingMode.FIXED
    variant_options: tuple[VariantOption, ...] = ()
    slug: str = ''
    event_id: str = ''
    contents: tuple[str, ...] = field(default_factory=tuple)

    def find_option(self, name: str) -> VariantOption | None:
        for option in self.variant_options:
            if option.name == name:
                return option
        return None


def parse_reference_id(reference: ReferenceId) -> uuid.UUID | None:
    """Return the UUID a reference encodes, or None when it is a slug"""
    try:
        return uuid.UUID(str(reference))
    except (ValueError, AttributeError, TypeError):
        return None


def _parse_variant_options(raw_options: list[dict[str, Any]]) -> tuple[VariantOption, ...]:
    options = []
    for raw in raw_options:
        values = tuple(
            VariantValue(
                label=str(v.get('label', v.get('value', ''))),
                value=str(v.get('value', '')),
                price_modifier=int(v.get('priceModifier') or 0),
            )
            for v in raw.get('values', [])
        )
        options.append(VariantOption(name=str(raw.get('name', '')), values=values))
    return tuple(options)


# ===============================================================================
# READERS
# ===============================================================================


class CatalogReader:
    """
    Read-only lookups for one catalog type.
    Subclasses bind a model and convert instances into CatalogEntry objects.
    Inactive records are invisible to the order pipeline.
    """

    model: ClassVar[type[models.Model]]
    slug_field: ClassVar[str | None] = None

    def get_queryset(self) -> models.QuerySet[Any]:
        return self.model.objects.filter(is_active=True)

    def find_by_id(self, reference_id: ReferenceId) -> CatalogEntry | None:
        pk = parse_reference_id(reference_id)
        if pk is None:
            return None
        instance = self.get_queryset().filter(pk=pk).first()
        return self.to_entry(instance) if instance else None

    def find_by_slug(self, slug: str, event_id: uuid.UUID | str | None = None) -> CatalogEntry | None:
        if not self.slug_field or not slug:
            return None
        queryset = self.get_queryset().filter(**{self.slug_field: slug})
        if event_id is not None:
            queryset = queryset.filter(event_id=event_id)
        instance = queryset.first()
        return self.to_entry(instance) if instance else None

    def to_entry(self, instance: Any) -> CatalogEntry:
        raise NotImplementedError


class ProductReader(CatalogReader):
    model = Product

    def to_entry(self, instance: Product) -> CatalogEntry:
        return CatalogEntry(
            reference_id=str(instance.pk),
            name=instance.name,
            price=instance.base_price,
            variant_options=_parse_variant_options(instance.variant_options),
            event_id=str(instance.event_id),
        )


class ServiceReader(CatalogReader):
    model = Service

    def to_entry(self, instance: Service) -> CatalogEntry:
        return CatalogEntry(
            reference_id=str(instance.pk),
            name=instance.name,
            price=instance.base_price,
            event_id=str(instance.event_id),
        )


class AddonReader(CatalogReader):
    model = Addon
    slug_field = 'slug'

    def to_entry(self, instance: Addon) -> CatalogEntry:
        return CatalogEntry(
            reference_id=str(instance.pk),
            name=instance.name,
            price=instance.price,
            pricing_mode=PricingMode.CUSTOMER_CHOSEN if instance.is_customer_priced else PricingMode.FIXED,
            slug=instance.slug,
            event_id=str(instance.event_id),
        )


class BundleReader(CatalogReader):
    model = Bundle
    slug_field = 'slug'

    def get_queryset(self) -> models.QuerySet[Any]:
        return super().get_queryset().prefetch_related('products')

    def to_entry(self, instance: Bundle) -> CatalogEntry:
        return CatalogEntry(
            reference_id=str(instance.pk),
            name=instance.name,
            price=instance.bundle_price,
            slug=instance.slug,
            event_id=str(instance.event_id),
            contents=tuple(product.name for product in instance.products.all()),
        )


# ===============================================================================
# CATALOG (ONE READER PER LINE TYPE)
# ===============================================================================


@dataclass(frozen=True)
class Catalog:
    """Explicit read-only dependency handed to the line item resolver"""
    products: Any
    services: Any
    addons: Any
    bundles: Any

    @classmethod
    def default(cls) -> Catalog:
        """Database-backed catalog"""
        return cls(
            products=ProductReader(),
            services=ServiceReader(),
            addons=AddonReader(),
            bundles=BundleReader(),
        )
