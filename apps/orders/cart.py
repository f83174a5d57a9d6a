"""
Cart line types - the raw, client-held shape of a cart before resolution.

A cart line is a tagged union: one frozen dataclass per line type, each carrying
only the fields its resolution rule reads. Nothing here touches the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

from apps.common.types import ReferenceId

# ===============================================================================
# LINE TYPE TAGS
# ===============================================================================

PRODUCT = 'PRODUCT'
SERVICE = 'SERVICE'
ADDON = 'ADDON'
BUNDLE = 'BUNDLE'

LINE_TYPES: tuple[str, ...] = (PRODUCT, SERVICE, ADDON, BUNDLE)
LINE_TYPE_CHOICES: tuple[tuple[str, str], ...] = (
    (PRODUCT, 'Product'),
    (SERVICE, 'Service'),
    (ADDON, 'Add-on'),
    (BUNDLE, 'Bundle'),
)


# ===============================================================================
# CART LINE VARIANTS
# ===============================================================================

@dataclass(frozen=True)
class ProductLine:
    """Physical product; price depends on the chosen variants"""
    line_type: ClassVar[str] = PRODUCT

    reference_id: ReferenceId
    quantity: int = 1
    variant_selection: dict[str, Any] = field(default_factory=dict)
    customization_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ServiceLine:
    """Bookable service; booking slot is opaque metadata"""
    line_type: ClassVar[str] = SERVICE

    reference_id: ReferenceId
    quantity: int = 1
    booking_date: str = ''
    booking_time: str = ''
    customization_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AddonLine:
    """Add-on referenced by id or slug; may carry a customer-proposed unit price"""
    line_type: ClassVar[str] = ADDON

    reference_id: ReferenceId
    quantity: int = 1
    client_proposed_price: int | None = None
    customization_data: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class BundleLine:
    """Fixed-price bundle referenced by id or slug"""
    line_type: ClassVar[str] = BUNDLE

    reference_id: ReferenceId
    quantity: int = 1
    customization_data: dict[str, Any] = field(default_factory=dict)


CartLine = ProductLine | ServiceLine | AddonLine | BundleLine


def build_cart_line(item: dict[str, Any]) -> CartLine:
    """
    Build the right cart line variant from one validated request item.

    Expects snake_case keys as produced by CartItemInputSerializer; fields that
    do not belong to the item's line type are dropped.
    """
    line_type = item['type']
    common = {
        'reference_id': str(item['reference_id']),
        'quantity': item.get('quantity', 1),
        'customization_data': dict(item.get('customization_data') or {}),
    }

    if line_type == PRODUCT:
        return ProductLine(variant_selection=dict(item.get('variant_selection') or {}), **common)
    if line_type == SERVICE:
        return ServiceLine(
            booking_date=item.get('booking_date') or '',
            booking_time=item.get('booking_time') or '',
            **common,
        )
    if line_type == ADDON:
        return AddonLine(client_proposed_price=item.get('price_at_purchase'), **common)
    if line_type == BUNDLE:
        return BundleLine(**common)

    raise ValueError(f"Unknown cart line type: {line_type}")
