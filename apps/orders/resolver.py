"""
Line item resolver - turns raw cart lines into priced, named line items.

Every price comes from the catalog. The only client-supplied amount ever honoured
is the proposed price of a pay-what-you-choose add-on (catalog price exactly 0).
Resolution is read-only and fails on the first unresolvable line.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from django.utils.crypto import get_random_string

from apps.catalog.readers import Catalog, CatalogEntry, parse_reference_id
from apps.common.constants import SERVICE_TICKET_LENGTH, SERVICE_TICKET_PREFIX
from apps.common.validators import log_security_event

from .cart import ADDON, BUNDLE, PRODUCT, SERVICE, AddonLine, BundleLine, CartLine, ProductLine, ServiceLine
from .exceptions import NotFoundError, OrderValidationError

logger = logging.getLogger(__name__)

TICKET_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'

NOT_FOUND_KIND = {
    PRODUCT: 'Product',
    SERVICE: 'Service',
    ADDON: 'Add-on',
    BUNDLE: 'Bundle',
}


# ===============================================================================
# RESOLVED LINE ITEM
# ===============================================================================

@dataclass(frozen=True)
class ResolvedLineItem:
    """Priced snapshot of one cart line; never re-resolved once computed"""
    line_type: str
    reference_id: str
    display_name: str
    quantity: int
    unit_price: int
    variant_selection: dict[str, Any] = field(default_factory=dict)
    customization_data: dict[str, Any] = field(default_factory=dict)
    booking_date: str = ''
    booking_time: str = ''
    service_ticket: str = ''
    bundle_contents: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.unit_price < 0:
            raise ValueError(f"Unit price cannot be negative: {self.unit_price}")
        if self.quantity < 1:
            raise ValueError(f"Quantity must be at least 1: {self.quantity}")

    @property
    def line_total(self) -> int:
        return self.unit_price * self.quantity


def generate_service_ticket() -> str:
    """Ticket code the fulfillment team quotes when confirming a booking"""
    return f"{SERVICE_TICKET_PREFIX}-{get_random_string(SERVICE_TICKET_LENGTH, allowed_chars=TICKET_ALPHABET)}"


# ===============================================================================
# RESOLVER
# ===============================================================================

class LineItemResolver:
    """
    Resolve cart lines against an explicit, read-only catalog.

    event_id scopes slug lookups (add-on and bundle slugs are unique per event).
    """

    def __init__(self, catalog: Catalog | None = None, event_id: uuid.UUID | str | None = None) -> None:
        self.catalog = catalog or Catalog.default()
        self.event_id = event_id
        self._handlers: dict[type, Callable[[Any], ResolvedLineItem]] = {
            ProductLine: self._resolve_product,
            ServiceLine: self._resolve_service,
            AddonLine: self._resolve_addon,
            BundleLine: self._resolve_bundle,
        }

    def resolve(self, line: CartLine) -> ResolvedLineItem:
        """Resolve a single line or raise NotFoundError / OrderValidationError"""
        handler = self._handlers.get(type(line))
        if handler is None:
            raise OrderValidationError('items', f"Unsupported cart line: {type(line).__name__}")
        return handler(line)

    def resolve_all(self, lines: Iterable[CartLine]) -> list[ResolvedLineItem]:
        """Resolve every line in submission order; the first failure aborts the whole cart"""
        return [self.resolve(line) for line in lines]

    # ---------------------------------------------------------------------------
    # Per line type rules
    # ---------------------------------------------------------------------------

    def _resolve_product(self, line: ProductLine) -> ResolvedLineItem:
        entry = self.catalog.products.find_by_id(line.reference_id)
        if entry is None:
            raise NotFoundError(NOT_FOUND_KIND[PRODUCT], line.reference_id)

        modifier_total, selection = self._resolve_variants(entry, line.variant_selection)
        unit_price = entry.price + modifier_total
        if unit_price < 0:
            logger.warning(
                f"⚠️ [Resolver] Variant modifiers push {entry.name} below zero ({unit_price}), clamping to 0"
            )
            unit_price = 0

        return ResolvedLineItem(
            line_type=PRODUCT,
            reference_id=entry.reference_id,
            display_name=entry.name,
            quantity=line.quantity,
            unit_price=unit_price,
            variant_selection=selection,
            customization_data=line.customization_data,
        )

    def _resolve_service(self, line: ServiceLine) -> ResolvedLineItem:
        entry = self.catalog.services.find_by_id(line.reference_id)
        if entry is None:
            raise NotFoundError(NOT_FOUND_KIND[SERVICE], line.reference_id)

        return ResolvedLineItem(
            line_type=SERVICE,
            reference_id=entry.reference_id,
            display_name=entry.name,
            quantity=line.quantity,
            unit_price=entry.price,
            customization_data=line.customization_data,
            booking_date=line.booking_date,
            booking_time=line.booking_time,
            service_ticket=generate_service_ticket(),
        )

    def _resolve_addon(self, line: AddonLine) -> ResolvedLineItem:
        entry = self._find_by_id_or_slug(self.catalog.addons, line.reference_id)
        if entry is None:
            raise NotFoundError(NOT_FOUND_KIND[ADDON], line.reference_id)

        proposed = line.client_proposed_price
        if entry.price == 0:
            if proposed is not None and proposed < 0:
                raise OrderValidationError('priceAtPurchase', f"Proposed price for {entry.name} cannot be negative")
            unit_price = proposed if proposed is not None else 0
        else:
            if proposed is not None and proposed != entry.price:
                log_security_event(
                    'client_price_ignored',
                    {
                        'addon': entry.slug or entry.reference_id,
                        'catalog_price': entry.price,
                        'proposed_price': proposed,
                    },
                )
            unit_price = entry.price

        return ResolvedLineItem(
            line_type=ADDON,
            reference_id=entry.reference_id,
            display_name=entry.name,
            quantity=line.quantity,
            unit_price=unit_price,
            customization_data=line.customization_data,
        )

    def _resolve_bundle(self, line: BundleLine) -> ResolvedLineItem:
        entry = self._find_by_id_or_slug(self.catalog.bundles, line.reference_id)
        if entry is None:
            raise NotFoundError(NOT_FOUND_KIND[BUNDLE], line.reference_id)

        # Bundle price is authoritative; constituent prices are never re-summed
        return ResolvedLineItem(
            line_type=BUNDLE,
            reference_id=entry.reference_id,
            display_name=entry.name,
            quantity=line.quantity,
            unit_price=entry.price,
            customization_data=line.customization_data,
            bundle_contents=entry.contents,
        )

    # ---------------------------------------------------------------------------
    # Helpers
    # ---------------------------------------------------------------------------

    def _find_by_id_or_slug(self, reader: Any, reference: str) -> CatalogEntry | None:
        if parse_reference_id(reference) is not None:
            return reader.find_by_id(reference)
        return reader.find_by_slug(reference, self.event_id)

    def _resolve_variants(self, entry: CatalogEntry, selection: dict[str, Any]) -> tuple[int, dict[str, Any]]:
        """
        Check every selected variant against the product's declared options.

        The catalog's price modifier always wins; a modifier embedded in the
        client selection is only compared and logged.
        """
        modifier_total = 0
        normalised: dict[str, Any] = {}

        for option_name, chosen in selection.items():
            option = entry.find_option(option_name)
            if option is None:
                raise OrderValidationError(
                    'variantSelection',
                    f"{entry.name} has no variant option '{option_name}'",
                )

            chosen_value = _chosen_value(chosen)
            value = option.find_value(chosen_value) if chosen_value else None
            if value is None:
                raise OrderValidationError(
                    'variantSelection',
                    f"'{chosen_value}' is not a valid {option_name} for {entry.name}",
                )

            claimed = chosen.get('priceModifier') if isinstance(chosen, dict) else None
            if claimed is not None and claimed != value.price_modifier:
                log_security_event(
                    'variant_price_mismatch',
                    {
                        'product': entry.reference_id,
                        'option': option_name,
                        'catalog_modifier': value.price_modifier,
                        'claimed_modifier': claimed,
                    },
                )

            modifier_total += value.price_modifier
            normalised[option_name] = {
                'label': value.label,
                'value': value.value,
                'priceModifier': value.price_modifier,
            }

        return modifier_total, normalised


def _chosen_value(chosen: Any) -> str:
    """A selection is either a bare value or a {label, value, priceModifier} mapping"""
    if isinstance(chosen, dict):
        raw = chosen.get('value', chosen.get('label'))
    else:
        raw = chosen
    if raw is None or isinstance(raw, (dict, list)):
        return ''
    return str(raw)
