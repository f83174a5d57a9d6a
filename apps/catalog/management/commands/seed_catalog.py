"""
Management command to seed a demo Valentine campaign catalog.
Safe to run repeatedly: existing records are matched and left untouched.
"""

from typing import Any

from django.core.management.base import BaseCommand, CommandParser
from django.db import transaction

from apps.catalog.models import Addon, Bundle, Event, Product, Service

FRAME_VARIANTS = {
    'options': [
        {
            'name': 'Frame Color',
            'values': [
                {'label': 'Black', 'value': 'black', 'priceModifier': 0},
                {'label': 'Gold', 'value': 'gold', 'priceModifier': 5000},
                {'label': 'Rose Gold', 'value': 'rosegold', 'priceModifier': 7000},
            ],
        },
    ],
}

FRAME_CUSTOMIZATION = {
    'steps': [
        {'title': 'Upload Your Memory', 'fields': [
            {'name': 'video_file', 'label': 'Upload Video', 'type': 'file', 'accept': 'video/*', 'required': True},
        ]},
        {'title': 'Personalization', 'fields': [
            {'name': 'custom_text', 'label': 'Engraving Text (Optional)', 'type': 'text', 'required': False},
        ]},
    ],
}

PRODUCTS: list[dict[str, Any]] = [
    {'name': 'Classic Red Teddy', 'description': 'A soft, cuddly teddy bear in romantic red.', 'base_price': 15000},
    {'name': 'Giant Love Bear', 'description': 'A 4-foot giant teddy bear for maximum impact.', 'base_price': 45000},
    {'name': 'Red Rose Bouquet (12)', 'description': 'A dozen fresh red roses beautifully arranged.', 'base_price': 25000},
    {'name': 'Belgian Chocolate Box', 'description': 'Premium Belgian chocolates in a heart-shaped box.', 'base_price': 22000},
    {
        'name': 'Digital Moving Frame',
        'description': 'A beautiful frame that plays your video memories.',
        'base_price': 45000,
        'variants_config': FRAME_VARIANTS,
        'customization_schema': FRAME_CUSTOMIZATION,
    },
]

SERVICES: list[dict[str, Any]] = [
    {
        'name': 'Couples Spa Retreat',
        'description': 'Full body massage and facial for two.',
        'base_price': 80000,
        'availability_config': {'defaultSlots': [{'time': '10:00', 'maxCapacity': 5}, {'time': '14:00', 'maxCapacity': 5}]},
    },
    {
        'name': 'Candlelight Dinner',
        'description': 'A romantic 3-course meal with champagne.',
        'base_price': 150000,
        'availability_config': {'defaultSlots': [{'time': '18:00', 'maxCapacity': 10}, {'time': '20:00', 'maxCapacity': 10}]},
    },
]

ADDONS: list[dict[str, Any]] = [
    {
        'slug': 'surprise-yourself',
        'name': 'Surprise Yourself',
        'addon_type': 'QUESTIONNAIRE',
        'description': 'Answer a few questions and let us curate a mystery package just for you!',
        'price': 0,
        'config': {'questionnaireSchema': {'questions': [
            {'id': 'budget', 'text': 'What is your budget?', 'type': 'select'},
            {'id': 'vibe', 'text': 'What vibe are you going for?', 'type': 'select'},
        ]}},
    },
    {
        'slug': 'be-my-val',
        'name': 'Be My Val Proposal',
        'addon_type': 'LINK',
        'description': 'Send a romantic digital proposal link to your crush.',
        'price': 0,
        'config': {'redirectUrl': '/proposal/create'},
    },
    {
        'slug': 'custom-logistics',
        'name': 'Custom Logistics',
        'addon_type': 'LOGISTICS',
        'description': 'Send a gift bought elsewhere to our hub and we package it with your order.',
        'price': 2000,
        'config': {'hubAddress': 'Gift Hub, 123 Valentine Avenue'},
    },
]

BUNDLES: list[dict[str, Any]] = [
    {
        'slug': 'iloveu-box',
        'name': 'ILoveU Box',
        'description': 'An affordable Valentine gift box for first-time couples.',
        'bundle_price': 39000,
        'original_value': 40000,
        'products': ['Classic Red Teddy', 'Red Rose Bouquet (12)'],
    },
]


class Command(BaseCommand):
    help = "Seed a demo campaign with products, services, add-ons and a bundle"

    def add_arguments(self, parser: CommandParser) -> None:
        parser.add_argument("--event-slug", default="val-2026", help="Slug of the campaign to seed")
        parser.add_argument("--event-name", default="Valentine 2026", help="Display name for a new campaign")

    @transaction.atomic
    def handle(self, *args: Any, **options: Any) -> None:
        event, event_created = Event.objects.get_or_create(
            slug=options["event_slug"],
            defaults={"name": options["event_name"], "theme_config": {"primaryColor": "#e11d48"}},
        )
        created = {"products": 0, "services": 0, "addons": 0, "bundles": 0}

        products_by_name = {}
        for data in PRODUCTS:
            product, was_created = Product.objects.get_or_create(
                event=event, name=data["name"], defaults={k: v for k, v in data.items() if k != "name"}
            )
            products_by_name[product.name] = product
            created["products"] += was_created

        for data in SERVICES:
            _service, was_created = Service.objects.get_or_create(
                event=event, name=data["name"], defaults={k: v for k, v in data.items() if k != "name"}
            )
            created["services"] += was_created

        for data in ADDONS:
            _addon, was_created = Addon.objects.get_or_create(
                event=event, slug=data["slug"], defaults={k: v for k, v in data.items() if k != "slug"}
            )
            created["addons"] += was_created

        for data in BUNDLES:
            fields = {k: v for k, v in data.items() if k not in ("slug", "products")}
            bundle, was_created = Bundle.objects.get_or_create(event=event, slug=data["slug"], defaults=fields)
            if was_created:
                bundle.products.set(products_by_name[name] for name in data["products"])
            created["bundles"] += was_created

        verb = "Created" if event_created else "Updated"
        self.stdout.write(self.style.SUCCESS(
            f"✅ {verb} campaign '{event.slug}' ({event.pk}): "
            + ", ".join(f"{count} new {kind}" for kind, count in created.items())
        ))
