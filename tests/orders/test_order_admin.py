"""
Tests for the order admin: staff edits go through the order service.
"""

from types import SimpleNamespace

from django.contrib import admin
from django.contrib.auth import get_user_model
from django.contrib.messages import get_messages
from django.contrib.messages.storage.fallback import FallbackStorage
from django.test import RequestFactory, TestCase

from apps.orders.cart import ProductLine
from apps.orders.models import Order
from apps.orders.services import OrderCreateData, OrderService
from tests.factories.catalog import create_event, create_product, make_customer

User = get_user_model()


class OrderAdminTestCase(TestCase):

    def setUp(self):
        event = create_event()
        teddy = create_product(event)
        data = OrderCreateData(event_id=event.pk, customer=make_customer(), lines=[ProductLine(reference_id=str(teddy.pk))])
        self.order = OrderService.create_order(data).unwrap()
        self.staff = User.objects.create_superuser(username='admin', password='x', email='admin@example.com')
        self.model_admin = admin.site._registry[Order]

    def _request(self):
        request = RequestFactory().post('/admin/orders/order/')
        request.user = self.staff
        request.session = {}
        request._messages = FallbackStorage(request)
        return request

    def test_orders_cannot_be_added_in_admin(self):
        self.assertFalse(self.model_admin.has_add_permission(self._request()))

    def test_status_change_recorded_with_history(self):
        self.order.status = 'CONFIRMED'
        self.order.notes = 'Paid'
        form = SimpleNamespace(changed_data=['status', 'notes'], initial={'status': 'PENDING'})

        self.model_admin.save_model(self._request(), self.order, form, change=True)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, 'CONFIRMED')
        self.assertEqual(self.order.notes, 'Paid')
        self.assertEqual(self.order.status_history.get(new_status='CONFIRMED').changed_by, self.staff)

    def test_invalid_transition_reported(self):
        self.order.status = 'DELIVERED'
        form = SimpleNamespace(changed_data=['status'], initial={'status': 'PENDING'})
        request = self._request()

        self.model_admin.save_model(request, self.order, form, change=True)

        self.order.refresh_from_db()
        self.assertEqual(self.order.status, 'PENDING')
        self.assertEqual(len(list(get_messages(request))), 1)

    def test_change_form_rejects_invalid_transition(self):
        form_class = self.model_admin.get_form(self._request(), self.order)
        form = form_class(data={'status': 'DELIVERED', 'notes': ''}, instance=self.order)

        self.assertFalse(form.is_valid())
        self.assertIn('Invalid status transition from PENDING to DELIVERED', form.errors['status'][0])

    def test_change_form_accepts_allowed_transition(self):
        form_class = self.model_admin.get_form(self._request(), self.order)
        form = form_class(data={'status': 'CONFIRMED', 'notes': 'Paid'}, instance=self.order)

        self.assertTrue(form.is_valid(), form.errors)
