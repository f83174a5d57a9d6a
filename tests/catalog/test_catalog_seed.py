"""
Tests for the seed_catalog management command.
"""

from io import StringIO

from django.core.management import call_command
from django.test import TestCase

from apps.catalog.models import Addon, Bundle, Event, Product, Service


class SeedCatalogCommandTestCase(TestCase):

    def _seed(self, *args):
        out = StringIO()
        call_command('seed_catalog', *args, stdout=out)
        return out.getvalue()

    def test_seeds_demo_campaign(self):
        output = self._seed()

        event = Event.objects.get(slug='val-2026')
        self.assertIn("Created campaign 'val-2026'", output)
        self.assertEqual(Product.objects.filter(event=event).count(), 5)
        self.assertEqual(Service.objects.filter(event=event).count(), 2)
        self.assertEqual(Addon.objects.filter(event=event).count(), 3)

        box = Bundle.objects.get(event=event, slug='iloveu-box')
        self.assertEqual(box.bundle_price, 39000)
        self.assertEqual(box.savings, 1000)
        self.assertEqual(
            sorted(box.products.values_list('name', flat=True)),
            ['Classic Red Teddy', 'Red Rose Bouquet (12)'],
        )
        self.assertTrue(Addon.objects.get(event=event, slug='surprise-yourself').is_customer_priced)

    def test_is_idempotent(self):
        self._seed()
        output = self._seed()

        self.assertIn('0 new products', output)
        self.assertEqual(Event.objects.count(), 1)
        self.assertEqual(Product.objects.count(), 5)
        self.assertEqual(Bundle.objects.count(), 1)

    def test_custom_event_slug(self):
        self._seed('--event-slug', 'mothers-day-2026', '--event-name', "Mother's Day")

        event = Event.objects.get(slug='mothers-day-2026')
        self.assertEqual(event.name, "Mother's Day")
        self.assertEqual(event.products.count(), 5)
