"""
Tests for the WhatsApp handoff message and deep link.
"""

from urllib.parse import unquote

from django.test import TestCase, override_settings

from apps.orders.cart import AddonLine, BundleLine, ProductLine, ServiceLine
from apps.orders.handoff import build_handoff_link, format_handoff_message, format_naira
from apps.orders.services import OrderCreateData, OrderService
from tests.factories.catalog import (
    FRAME_VARIANTS,
    create_addon,
    create_bundle,
    create_event,
    create_product,
    create_service,
    make_customer,
)


class HandoffMessageTestCase(TestCase):

    def setUp(self):
        self.event = create_event()
        teddy = create_product(self.event)
        roses = create_product(self.event, name='Red Rose Bouquet (12)', base_price=25000)
        frame = create_product(self.event, name='Digital Moving Frame', base_price=45000, variants_config=FRAME_VARIANTS)
        spa = create_service(self.event)
        create_addon(self.event, slug='surprise-yourself', price=0, addon_type='QUESTIONNAIRE', name='Surprise Yourself')
        create_bundle(self.event, products=[teddy, roses])

        lines = [
            ProductLine(
                reference_id=str(frame.pk),
                variant_selection={'Frame Color': 'gold'},
                customization_data={'custom_text': 'Forever yours'},
            ),
            ServiceLine(reference_id=str(spa.pk), booking_date='2026-02-14', booking_time='10:00'),
            BundleLine(reference_id='iloveu-box'),
            AddonLine(reference_id='surprise-yourself', client_proposed_price=20000),
        ]
        data = OrderCreateData(
            event_id=self.event.pk,
            customer=make_customer(secondary_phone='08039999999', message='Happy Val!'),
            lines=lines,
        )
        self.order = OrderService.create_order(data).unwrap()
        self.message = format_handoff_message(self.order)
        self.lines = self.message.split('\n')

    def test_format_naira(self):
        self.assertEqual(format_naira(0), '₦0')
        self.assertEqual(format_naira(1234567), '₦1,234,567')

    def test_header_and_customer_block(self):
        self.assertEqual(self.lines[0], f"*NEW ORDER - {self.order.order_id}*")
        self.assertIn('- Name: Ada Obi', self.lines)
        self.assertIn('- Phone (WhatsApp): 08031234567', self.lines)
        self.assertIn('- Alt Phone: 08039999999', self.lines)
        self.assertIn('- Address: 12 Admiralty Way, Lekki, Lagos', self.lines)
        self.assertIn('- Message: Happy Val!', self.lines)

    def test_item_lines(self):
        self.assertIn('- Digital Moving Frame (x1) - ₦50,000', self.lines)
        self.assertIn('  • Gold', self.lines)
        self.assertIn('  • custom_text: Forever yours', self.lines)
        self.assertIn('  • Booking: 2026-02-14 10:00', self.lines)
        self.assertIn('  • Includes: Classic Red Teddy, Red Rose Bouquet (12)', self.lines)
        self.assertIn('- Surprise Yourself (x1) - ₦20,000', self.lines)

        ticket = self.order.items.get(line_type='SERVICE').service_ticket
        self.assertIn(f"  • Ticket: {ticket}", self.lines)

    def test_totals_match_stored_order(self):
        self.assertEqual(self.order.sub_total, 189000)
        self.assertIn('*Subtotal: ₦189,000*', self.lines)
        self.assertIn(f"*Service Fee: {format_naira(self.order.service_fee)}*", self.lines)
        self.assertIn(f"*TOTAL AMOUNT: {format_naira(self.order.total_amount)}*", self.lines)
        self.assertEqual(self.lines[-1], '_This order was placed on Test Planner._')

    def test_optional_customer_lines_omitted(self):
        data = OrderCreateData(
            event_id=self.event.pk,
            customer=make_customer(whatsapp=''),
            lines=[BundleLine(reference_id='iloveu-box')],
        )
        order = OrderService.create_order(data).unwrap()
        lines = format_handoff_message(order).split('\n')

        self.assertIn('- Phone (WhatsApp): 08031234567', lines)
        self.assertFalse(any(line.startswith('- Alt Phone') for line in lines))
        self.assertFalse(any(line.startswith('- Message') for line in lines))

    def test_link_encodes_message(self):
        link = build_handoff_link(self.order, self.message)

        self.assertTrue(link.startswith('https://wa.me/2347070000000?text='))
        self.assertEqual(unquote(link.split('?text=', 1)[1]), self.message)
        self.assertNotIn(' ', link)

    @override_settings(HANDOFF_WHATSAPP_NUMBER='')
    def test_link_without_number(self):
        self.assertTrue(build_handoff_link(self.order).startswith('https://wa.me/?text='))
