# ===============================================================================
# TEST FACTORIES FOR CATALOG AND ORDERS
# ===============================================================================
from typing import Any

from apps.catalog.models import Addon, Bundle, Event, Product, Service
from apps.orders.services import CustomerDetails

FRAME_VARIANTS = {
    'options': [
        {
            'name': 'Frame Color',
            'values': [
                {'label': 'Black', 'value': 'black', 'priceModifier': 0},
                {'label': 'Gold', 'value': 'gold', 'priceModifier': 5000},
            ],
        },
        {
            'name': 'Size',
            'values': [
                {'label': 'Small', 'value': 'small', 'priceModifier': 0},
                {'label': 'Large', 'value': 'large', 'priceModifier': 3000},
            ],
        },
    ],
}


def create_event(slug: str = 'val-2026', **kwargs: Any) -> Event:
    """Create an active campaign."""
    return Event.objects.create(name=kwargs.pop('name', 'Valentine 2026'), slug=slug, **kwargs)


def create_product(event: Event, name: str = 'Classic Red Teddy', base_price: int = 15000, **kwargs: Any) -> Product:
    return Product.objects.create(event=event, name=name, base_price=base_price, **kwargs)


def create_service(event: Event, name: str = 'Couples Spa Retreat', base_price: int = 80000, **kwargs: Any) -> Service:
    return Service.objects.create(event=event, name=name, base_price=base_price, **kwargs)


def create_addon(event: Event, slug: str = 'custom-logistics', price: int = 2000, **kwargs: Any) -> Addon:
    return Addon.objects.create(
        event=event,
        slug=slug,
        name=kwargs.pop('name', slug.replace('-', ' ').title()),
        addon_type=kwargs.pop('addon_type', 'LOGISTICS'),
        price=price,
        **kwargs,
    )


def create_bundle(event: Event, slug: str = 'iloveu-box', bundle_price: int = 39000, products: list[Product] | None = None, **kwargs: Any) -> Bundle:
    bundle = Bundle.objects.create(
        event=event,
        slug=slug,
        name=kwargs.pop('name', 'ILoveU Box'),
        bundle_price=bundle_price,
        **kwargs,
    )
    if products:
        bundle.products.set(products)
    return bundle


def make_customer(**overrides: Any) -> CustomerDetails:
    """Valid checkout customer details."""
    data = {
        'name': 'Ada Obi',
        'phone': '08031234567',
        'address': '12 Admiralty Way, Lekki',
        'city': 'Lagos',
        'email': 'ada@example.com',
        'whatsapp': '08031234567',
    }
    data.update(overrides)
    return CustomerDetails(**data)


def checkout_payload(event: Event, items: list[dict[str, Any]], **customer_overrides: Any) -> dict[str, Any]:
    """Request body for POST /api/orders/."""
    customer = {
        'name': 'Ada Obi',
        'email': 'ada@example.com',
        'phone': '08031234567',
        'whatsapp': '08031234567',
        'address': '12 Admiralty Way, Lekki',
        'city': 'Lagos',
    }
    customer.update(customer_overrides)
    return {'eventId': str(event.pk), 'customer': customer, 'items': items}
