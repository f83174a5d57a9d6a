"""
Test suite for order services
Order assembly, persistence guarantees, numbering and the staff status lifecycle.
"""

import re
import uuid
from unittest.mock import patch

from django.contrib.auth import get_user_model
from django.db import DatabaseError
from django.test import TestCase

from apps.orders.cart import AddonLine, BundleLine, ProductLine, ServiceLine
from apps.orders.exceptions import (
    FrozenOrderError,
    InvalidStatusTransitionError,
    NotFoundError,
    OrderValidationError,
    PersistenceError,
)
from apps.orders.models import Order, OrderItem, OrderStatusHistory
from apps.orders.services import (
    OrderCreateData,
    OrderNumberingService,
    OrderQueryService,
    OrderService,
    OrderUpdateData,
    StatusChangeData,
)
from tests.factories.catalog import (
    FRAME_VARIANTS,
    create_addon,
    create_bundle,
    create_event,
    create_product,
    create_service,
    make_customer,
)

User = get_user_model()


class OrderTestMixin:
    """Shared catalog for order service tests"""

    def setUp(self):
        self.event = create_event()
        self.teddy = create_product(self.event)
        self.roses = create_product(self.event, name='Red Rose Bouquet (12)', base_price=25000)
        self.frame = create_product(
            self.event, name='Digital Moving Frame', base_price=45000, variants_config=FRAME_VARIANTS
        )
        self.spa = create_service(self.event)
        self.surprise = create_addon(self.event, slug='surprise-yourself', price=0, addon_type='QUESTIONNAIRE')
        self.logistics = create_addon(self.event, slug='custom-logistics', price=2000)
        self.box = create_bundle(self.event, products=[self.teddy, self.roses])

    def _create(self, lines, **customer_overrides):
        data = OrderCreateData(event_id=self.event.pk, customer=make_customer(**customer_overrides), lines=lines)
        return OrderService.create_order(data)


class OrderNumberingServiceTestCase(TestCase):
    """Test cases for order numbering service"""

    def test_order_id_format(self):
        order_id = OrderNumberingService.generate_order_id()
        self.assertRegex(order_id, r'^VAL-[A-HJ-NP-Z2-9]{8}$')

    def test_order_ids_are_random(self):
        ids = {OrderNumberingService.generate_order_id() for _ in range(50)}
        self.assertEqual(len(ids), 50)


class OrderCreationTestCase(OrderTestMixin, TestCase):
    """Cart to persisted order"""

    def test_create_order_success(self):
        result = self._create([ProductLine(reference_id=str(self.teddy.pk), quantity=2)])

        self.assertTrue(result.is_ok())
        order = result.unwrap()
        self.assertRegex(order.order_id, r'^VAL-[A-Z0-9]{8}$')
        self.assertEqual(order.status, 'PENDING')
        self.assertEqual(order.sub_total, 30000)
        self.assertEqual(order.service_fee, 2500)
        self.assertEqual(order.total_amount, 32500)
        self.assertEqual(order.customer_name, 'Ada Obi')
        self.assertEqual(order.items.count(), 1)

        history = OrderStatusHistory.objects.get(order=order)
        self.assertEqual(history.old_status, '')
        self.assertEqual(history.new_status, 'PENDING')
        self.assertTrue(history.is_automatic)

    def test_mixed_cart_snapshot(self):
        lines = [
            BundleLine(reference_id='iloveu-box'),
            ProductLine(reference_id=str(self.frame.pk), variant_selection={'Frame Color': 'gold'}),
            ServiceLine(reference_id=str(self.spa.pk), booking_date='2026-02-14', booking_time='10:00'),
            AddonLine(reference_id='surprise-yourself', client_proposed_price=75000),
            AddonLine(reference_id='custom-logistics', client_proposed_price=1),
        ]
        order = self._create(lines).unwrap()

        items = list(order.items.all())
        self.assertEqual([i.position for i in items], [0, 1, 2, 3, 4])
        self.assertEqual([i.line_type for i in items], ['BUNDLE', 'PRODUCT', 'SERVICE', 'ADDON', 'ADDON'])
        self.assertEqual([i.unit_price for i in items], [39000, 50000, 80000, 75000, 2000])
        self.assertEqual(items[0].bundle_contents, ['Classic Red Teddy', 'Red Rose Bouquet (12)'])
        self.assertEqual(items[1].variant_selection['Frame Color']['priceModifier'], 5000)
        self.assertTrue(re.fullmatch(r'TICKET-[A-Z0-9]{9}', items[2].service_ticket))

        self.assertEqual(order.sub_total, 246000)
        self.assertEqual(order.service_fee, 2500 + 4 * 1000)
        self.assertEqual(order.total_amount, order.sub_total + order.service_fee)
        self.assertEqual(order.sub_total, sum(i.line_total for i in items))

    def test_catalog_changes_do_not_touch_existing_orders(self):
        order = self._create([ProductLine(reference_id=str(self.teddy.pk))]).unwrap()

        self.teddy.base_price = 99000
        self.teddy.name = 'Renamed Teddy'
        self.teddy.save()

        item = OrderItem.objects.get(order=order)
        self.assertEqual(item.unit_price, 15000)
        self.assertEqual(item.display_name, 'Classic Red Teddy')

    def test_empty_cart_rejected(self):
        result = self._create([])

        self.assertTrue(result.is_err())
        self.assertIsInstance(result.error, OrderValidationError)
        self.assertEqual(Order.objects.count(), 0)

    def test_unknown_line_writes_nothing(self):
        lines = [
            ProductLine(reference_id=str(self.teddy.pk)),
            ProductLine(reference_id=str(uuid.uuid4())),
        ]
        result = self._create(lines)

        self.assertTrue(result.is_err())
        self.assertIsInstance(result.error, NotFoundError)
        self.assertEqual(result.error.kind, 'Product')
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderItem.objects.count(), 0)

    def test_inactive_product_is_not_found(self):
        self.teddy.is_active = False
        self.teddy.save()

        result = self._create([ProductLine(reference_id=str(self.teddy.pk))])
        self.assertIsInstance(result.error, NotFoundError)

    def test_unknown_or_inactive_event(self):
        data = OrderCreateData(
            event_id=uuid.uuid4(),
            customer=make_customer(),
            lines=[ProductLine(reference_id=str(self.teddy.pk))],
        )
        result = OrderService.create_order(data)
        self.assertIsInstance(result.error, NotFoundError)
        self.assertEqual(result.error.kind, 'Event')

        self.event.is_active = False
        self.event.save()
        result = self._create([ProductLine(reference_id=str(self.teddy.pk))])
        self.assertIsInstance(result.error, NotFoundError)

    def test_addon_slug_from_other_event_not_found(self):
        other_event = create_event(slug='mothers-day-2026', name="Mother's Day")
        create_addon(other_event, slug='gift-wrap', price=500)

        result = self._create([AddonLine(reference_id='gift-wrap')])
        self.assertIsInstance(result.error, NotFoundError)

    def test_invalid_variant_rejected(self):
        result = self._create([
            ProductLine(reference_id=str(self.frame.pk), variant_selection={'Frame Color': 'silver'})
        ])
        self.assertIsInstance(result.error, OrderValidationError)
        self.assertEqual(Order.objects.count(), 0)

    def test_item_write_failure_rolls_back_order(self):
        with patch.object(OrderItem.objects, 'bulk_create', side_effect=DatabaseError('disk full')):
            result = self._create([ProductLine(reference_id=str(self.teddy.pk))])

        self.assertTrue(result.is_err())
        self.assertIsInstance(result.error, PersistenceError)
        self.assertTrue(result.error.retryable)
        self.assertEqual(Order.objects.count(), 0)
        self.assertEqual(OrderStatusHistory.objects.count(), 0)

    def test_order_id_collision_retried(self):
        existing = self._create([ProductLine(reference_id=str(self.teddy.pk))]).unwrap()

        with patch.object(
            OrderNumberingService, 'generate_order_id', side_effect=[existing.order_id, 'VAL-NEWONE22']
        ):
            order = self._create([ProductLine(reference_id=str(self.teddy.pk))]).unwrap()

        self.assertEqual(order.order_id, 'VAL-NEWONE22')

    def test_order_id_exhaustion_is_persistence_error(self):
        existing = self._create([ProductLine(reference_id=str(self.teddy.pk))]).unwrap()

        with patch.object(OrderNumberingService, 'generate_order_id', return_value=existing.order_id):
            result = self._create([ProductLine(reference_id=str(self.teddy.pk))])

        self.assertIsInstance(result.error, PersistenceError)
        self.assertEqual(Order.objects.count(), 1)

    def test_notification_queued_after_commit(self):
        with patch('apps.notifications.receivers.async_task') as mock_async:
            with self.captureOnCommitCallbacks(execute=True) as callbacks:
                order = self._create([ProductLine(reference_id=str(self.teddy.pk))]).unwrap()

        self.assertEqual(len(callbacks), 1)
        mock_async.assert_called_once()
        self.assertEqual(mock_async.call_args[0], ('apps.notifications.tasks.send_order_notification', str(order.pk)))

    def test_notification_failure_does_not_fail_order(self):
        with patch('apps.notifications.receivers.async_task', side_effect=RuntimeError('queue down')):
            with self.captureOnCommitCallbacks(execute=True):
                result = self._create([ProductLine(reference_id=str(self.teddy.pk))])

        self.assertTrue(result.is_ok())
        self.assertEqual(Order.objects.count(), 1)

    def test_no_notification_when_order_rejected(self):
        with patch('apps.notifications.receivers.async_task') as mock_async:
            with self.captureOnCommitCallbacks(execute=True) as callbacks:
                self._create([ProductLine(reference_id=str(uuid.uuid4()))])

        self.assertEqual(len(callbacks), 0)
        mock_async.assert_not_called()


class OrderQuoteTestCase(OrderTestMixin, TestCase):

    def test_quote_prices_without_saving(self):
        result = OrderService.quote_cart(self.event.pk, [
            ProductLine(reference_id=str(self.teddy.pk)),
            AddonLine(reference_id='surprise-yourself', client_proposed_price=27000),
        ])

        quote = result.unwrap()
        self.assertEqual(quote.pricing.sub_total, 42000)
        self.assertEqual(quote.pricing.total_amount, 44500)
        self.assertEqual(len(quote.items), 2)
        self.assertEqual(Order.objects.count(), 0)

    def test_quote_reports_missing_lines(self):
        result = OrderService.quote_cart(self.event.pk, [BundleLine(reference_id='nope')])
        self.assertIsInstance(result.error, NotFoundError)


class OrderLifecycleTestCase(OrderTestMixin, TestCase):
    """Status transitions and frozen snapshots"""

    def setUp(self):
        super().setUp()
        self.staff = User.objects.create_user(username='staff', password='x', is_staff=True)
        self.order = self._create([ProductLine(reference_id=str(self.teddy.pk))]).unwrap()

    def test_allowed_transitions(self):
        for new_status in ('CONFIRMED', 'PROCESSING', 'SHIPPED', 'DELIVERED'):
            with self.subTest(new_status=new_status):
                result = OrderService.update_order_status(
                    self.order, StatusChangeData(new_status=new_status, changed_by=self.staff)
                )
                self.assertTrue(result.is_ok())

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, 'DELIVERED')
        self.assertTrue(self.order.is_final)
        self.assertEqual(self.order.status_history.count(), 5)

    def test_history_records_staff_and_notes(self):
        OrderService.update_order_status(
            self.order, StatusChangeData(new_status='CANCELLED', notes='Customer changed mind', changed_by=self.staff)
        )
        entry = self.order.status_history.get(new_status='CANCELLED')
        self.assertEqual(entry.old_status, 'PENDING')
        self.assertEqual(entry.changed_by, self.staff)
        self.assertEqual(entry.notes, 'Customer changed mind')
        self.assertFalse(entry.is_automatic)

    def test_rejected_transition(self):
        result = OrderService.update_order_status(self.order, StatusChangeData(new_status='DELIVERED'))

        self.assertIsInstance(result.error, InvalidStatusTransitionError)
        self.order.refresh_from_db()
        self.assertEqual(self.order.status, 'PENDING')

    def test_final_status_cannot_move(self):
        OrderService.update_order_status(self.order, StatusChangeData(new_status='CANCELLED'))
        result = OrderService.update_order_status(self.order, StatusChangeData(new_status='CONFIRMED'))
        self.assertIsInstance(result.error, InvalidStatusTransitionError)

    def test_unknown_status(self):
        result = OrderService.update_order_status(self.order, StatusChangeData(new_status='LOST'))
        self.assertIsInstance(result.error, OrderValidationError)

    def test_notes_update(self):
        result = OrderService.update_order(self.order, OrderUpdateData(notes='Call before delivery'))

        self.assertTrue(result.is_ok())
        self.order.refresh_from_db()
        self.assertEqual(self.order.notes, 'Call before delivery')

    def test_money_fields_are_frozen(self):
        self.order.total_amount = 1
        with self.assertRaises(FrozenOrderError):
            self.order.save()
        with self.assertRaises(FrozenOrderError):
            self.order.save(update_fields=['total_amount'])

        self.order.refresh_from_db()
        self.assertEqual(self.order.total_amount, 17500)

    def test_plain_save_of_mutable_fields_allowed(self):
        self.order.notes = 'Fragile'
        self.order.save()

        self.order.refresh_from_db()
        self.assertEqual(self.order.notes, 'Fragile')

    def test_order_items_are_immutable(self):
        item = self.order.items.first()
        item.unit_price = 1
        with self.assertRaises(FrozenOrderError):
            item.save()


class OrderQueryServiceTestCase(OrderTestMixin, TestCase):

    def setUp(self):
        super().setUp()
        self.orders = [self._create([ProductLine(reference_id=str(self.teddy.pk))]).unwrap() for _ in range(3)]
        OrderService.update_order_status(self.orders[0], StatusChangeData(new_status='CONFIRMED'))

    def test_list_orders_paginates(self):
        page = OrderQueryService.list_orders({'page': 1, 'limit': 2}).unwrap()

        self.assertEqual(page.total, 3)
        self.assertEqual(page.pages, 2)
        self.assertEqual(len(page.orders), 2)

    def test_list_orders_filters_by_status(self):
        page = OrderQueryService.list_orders({'status': 'CONFIRMED'}).unwrap()
        self.assertEqual([o.pk for o in page.orders], [self.orders[0].pk])

    def test_limit_is_clamped(self):
        self.assertEqual(OrderQueryService.list_orders({'limit': 1000}).unwrap().limit, 100)
        self.assertEqual(OrderQueryService.list_orders({}).unwrap().limit, 20)

    def test_lookups(self):
        order = self.orders[1]
        self.assertEqual(OrderQueryService.get_order_with_items(order.pk).unwrap(), order)
        self.assertEqual(OrderQueryService.get_order_by_order_id(order.order_id).unwrap(), order)
        self.assertIsInstance(OrderQueryService.get_order_with_items(uuid.uuid4()).error, NotFoundError)
        self.assertIsInstance(OrderQueryService.get_order_by_order_id('VAL-MISSING1').error, NotFoundError)
