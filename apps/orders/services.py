"""
Order Services for the gifting storefront
Assembles validated carts into persisted orders and manages the staff-side lifecycle.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypedDict

from django.conf import settings
from django.core.paginator import Paginator
from django.db import DatabaseError, IntegrityError, transaction
from django.utils.crypto import get_random_string

from apps.catalog.models import Event
from apps.catalog.readers import Catalog, parse_reference_id
from apps.common.constants import (
    ADMIN_ORDER_PAGE_SIZE_DEFAULT,
    ADMIN_ORDER_PAGE_SIZE_MAX,
    ORDER_ID_ALPHABET,
    ORDER_ID_MAX_ATTEMPTS,
    ORDER_ID_PREFIX_DEFAULT,
    ORDER_ID_SUFFIX_LENGTH,
)
from apps.common.types import EmailAddress, Err, Ok, OrderNumber, PhoneNumber, Result
from apps.common.validators import log_security_event

from .cart import CartLine
from .exceptions import (
    InvalidStatusTransitionError,
    NotFoundError,
    OrderError,
    OrderValidationError,
    PersistenceError,
)
from .models import Order, OrderItem, OrderStatusHistory
from .pricing import PricingSummary, price
from .resolver import LineItemResolver, ResolvedLineItem
from .signals import order_placed

if TYPE_CHECKING:
    from django.contrib.auth.models import AbstractBaseUser

logger = logging.getLogger(__name__)

# ===============================================================================
# ORDER SERVICE PARAMETER OBJECTS
# ===============================================================================

class OrderFilters(TypedDict, total=False):
    """Type definition for staff order listing parameters"""
    status: str
    page: int
    limit: int


@dataclass(frozen=True)
class CustomerDetails:
    """Customer snapshot copied onto the order"""
    name: str
    phone: PhoneNumber
    address: str
    city: str = ''
    email: EmailAddress = ''
    whatsapp: PhoneNumber = ''
    secondary_phone: PhoneNumber = ''
    message: str = ''


@dataclass
class OrderCreateData:
    """Parameter object for order creation"""
    event_id: uuid.UUID | str
    customer: CustomerDetails
    lines: list[CartLine] = field(default_factory=list)


@dataclass
class StatusChangeData:
    """Parameter object for order status changes"""
    new_status: str
    notes: str = ''
    changed_by: AbstractBaseUser | None = None


@dataclass
class OrderUpdateData:
    """Parameter object for staff note updates"""
    notes: str | None = None


@dataclass(frozen=True)
class OrderPage:
    orders: list[Order]
    total: int
    page: int
    limit: int
    pages: int


@dataclass(frozen=True)
class CartQuote:
    """Priced but unsaved cart, used for checkout previews"""
    items: list[ResolvedLineItem]
    pricing: PricingSummary


# ===============================================================================
# ORDER NUMBERING SERVICE
# ===============================================================================

class OrderNumberingService:
    """Random, human-shareable order references: PREFIX-XXXXXXXX"""

    @staticmethod
    def generate_order_id() -> OrderNumber:
        prefix = getattr(settings, 'ORDER_ID_PREFIX', ORDER_ID_PREFIX_DEFAULT)
        suffix = get_random_string(ORDER_ID_SUFFIX_LENGTH, allowed_chars=ORDER_ID_ALPHABET)
        return f"{prefix}-{suffix}"

    @staticmethod
    def allocate_order_id() -> OrderNumber:
        """Generate an order id not already taken, retrying on the rare collision"""
        for attempt in range(1, ORDER_ID_MAX_ATTEMPTS + 1):
            candidate = OrderNumberingService.generate_order_id()
            if not Order.objects.filter(order_id=candidate).exists():
                return candidate
            logger.warning(f"⚠️ [Orders] Order id collision on {candidate} (attempt {attempt})")

        raise PersistenceError("Could not allocate a unique order id")


# ===============================================================================
# MAIN ORDER SERVICE
# ===============================================================================

class OrderService:
    """Main service for order management operations"""

    @staticmethod
    def get_active_event(event_id: uuid.UUID | str) -> Event:
        pk = parse_reference_id(event_id)
        event = Event.objects.filter(pk=pk, is_active=True).first() if pk else None
        if event is None:
            raise NotFoundError('Event', str(event_id))
        return event

    @staticmethod
    def quote_cart(event_id: uuid.UUID | str, lines: list[CartLine], catalog: Catalog | None = None) -> Result[CartQuote, OrderError]:
        """Resolve and price a cart without persisting anything"""
        try:
            event = OrderService.get_active_event(event_id)
            items = LineItemResolver(catalog, event_id=event.pk).resolve_all(lines)
            return Ok(CartQuote(items=items, pricing=price(items)))
        except OrderError as e:
            logger.info(f"⚠️ [Orders] Cart quote rejected: {e}")
            return Err(e)

    @staticmethod
    def create_order(data: OrderCreateData, catalog: Catalog | None = None) -> Result[Order, OrderError]:
        """
        Resolve, price and persist an order in one all-or-nothing step.

        Nothing is written unless every line resolves. The notification is queued
        only after the transaction commits, and its failure never fails the order.
        """
        if not data.lines:
            return Err(OrderValidationError('items', 'Cart must contain at least one item'))

        try:
            event = OrderService.get_active_event(data.event_id)
            items = LineItemResolver(catalog, event_id=event.pk).resolve_all(data.lines)
            pricing = price(items)
        except OrderError as e:
            logger.warning(f"⚠️ [Orders] Order rejected for event {data.event_id}: {e}")
            return Err(e)

        try:
            order = OrderService._persist_order(event, data.customer, items, pricing)
        except PersistenceError as e:
            logger.error(f"🔥 [Orders] {e}")
            return Err(e)
        except (IntegrityError, DatabaseError) as e:
            logger.exception(f"🔥 [Orders] Failed to persist order: {e}")
            return Err(PersistenceError("Could not save the order, please try again"))

        log_security_event(
            'order_created',
            {
                'order_id': order.order_id,
                'id': str(order.id),
                'event_id': str(event.pk),
                'items': len(items),
                'total_amount': order.total_amount,
            }
        )
        logger.info(f"✅ [Orders] Created order {order.order_id} total ₦{order.total_amount:,}")
        return Ok(order)

    @staticmethod
    @transaction.atomic
    def _persist_order(
        event: Event,
        customer: CustomerDetails,
        items: list[ResolvedLineItem],
        pricing: PricingSummary
    ) -> Order:
        order = Order.objects.create(
            order_id=OrderNumberingService.allocate_order_id(),
            event=event,
            customer_name=customer.name,
            customer_phone=customer.phone,
            customer_whatsapp=customer.whatsapp,
            customer_secondary_phone=customer.secondary_phone,
            customer_email=customer.email,
            customer_address=customer.address,
            customer_city=customer.city,
            customer_message=customer.message,
            sub_total=pricing.sub_total,
            service_fee=pricing.service_fee,
            total_amount=pricing.total_amount,
        )

        OrderItem.objects.bulk_create([
            OrderItem(
                order=order,
                position=position,
                line_type=item.line_type,
                reference_id=item.reference_id,
                display_name=item.display_name,
                quantity=item.quantity,
                unit_price=item.unit_price,
                line_total=item.line_total,
                variant_selection=item.variant_selection,
                customization_data=item.customization_data,
                booking_date=item.booking_date,
                booking_time=item.booking_time,
                service_ticket=item.service_ticket,
                bundle_contents=list(item.bundle_contents),
            )
            for position, item in enumerate(items)
        ])

        OrderService._create_status_history(order, None, 'PENDING', 'Order placed', None, is_automatic=True)

        transaction.on_commit(lambda: OrderService._announce_order(order))
        return order

    @staticmethod
    def _announce_order(order: Order) -> None:
        """Fire order_placed; receiver failures are logged, never raised"""
        for receiver, response in order_placed.send_robust(sender=Order, order=order):
            if isinstance(response, Exception):
                logger.error(
                    f"🔥 [Orders] Notification receiver {getattr(receiver, '__name__', receiver)} "
                    f"failed for {order.order_id}: {response}"
                )

    @staticmethod
    def update_order_status(order: Order, status_data: StatusChangeData) -> Result[Order, OrderError]:
        """Move an order along its lifecycle with an audit trail"""
        old_status = order.status
        new_status = status_data.new_status

        if new_status not in dict(Order.STATUS_CHOICES):
            return Err(OrderValidationError('status', f"Unknown status: {new_status}"))
        if not order.can_transition_to(new_status):
            return Err(InvalidStatusTransitionError(f"Invalid status transition from {old_status} to {new_status}"))

        try:
            with transaction.atomic():
                order.status = new_status
                order.save(update_fields=['status'])

                OrderService._create_status_history(
                    order, old_status, new_status, status_data.notes, status_data.changed_by
                )
        except DatabaseError as e:
            logger.exception(f"🔥 [Orders] Failed to update status of {order.order_id}: {e}")
            return Err(PersistenceError("Could not update the order, please try again"))

        log_security_event(
            'order_status_changed',
            {
                'order_id': order.order_id,
                'old_status': old_status,
                'new_status': new_status,
                'user_id': str(status_data.changed_by.pk) if status_data.changed_by else None,
            }
        )
        return Ok(order)

    @staticmethod
    def update_order(order: Order, update_data: OrderUpdateData) -> Result[Order, OrderError]:
        """Update staff-editable fields other than status"""
        if update_data.notes is None:
            return Ok(order)
        try:
            order.notes = update_data.notes
            order.save(update_fields=['notes'])
        except DatabaseError as e:
            logger.exception(f"🔥 [Orders] Failed to update notes of {order.order_id}: {e}")
            return Err(PersistenceError("Could not update the order, please try again"))
        return Ok(order)

    @staticmethod
    def _create_status_history(
        order: Order,
        old_status: str | None,
        new_status: str,
        notes: str,
        changed_by: Any,
        is_automatic: bool = False
    ) -> None:
        OrderStatusHistory.objects.create(
            order=order,
            old_status=old_status or '',
            new_status=new_status,
            notes=notes,
            changed_by=changed_by,
            is_automatic=is_automatic,
        )


# ===============================================================================
# ORDER QUERY SERVICE
# ===============================================================================

class OrderQueryService:
    """Service for order querying and filtering operations"""

    @staticmethod
    def list_orders(filters: OrderFilters | None = None) -> Result[OrderPage, OrderError]:
        """Paginated order list, newest first, optionally filtered by status"""
        filters = filters or {}
        queryset = Order.objects.select_related('event').prefetch_related('items').order_by('-created_at')

        if status := filters.get('status'):
            if status not in dict(Order.STATUS_CHOICES):
                return Err(OrderValidationError('status', f"Unknown status: {status}"))
            queryset = queryset.filter(status=status)

        limit = min(max(int(filters.get('limit') or ADMIN_ORDER_PAGE_SIZE_DEFAULT), 1), ADMIN_ORDER_PAGE_SIZE_MAX)
        paginator = Paginator(queryset, limit)
        page = paginator.get_page(filters.get('page') or 1)

        return Ok(OrderPage(
            orders=list(page.object_list),
            total=paginator.count,
            page=page.number,
            limit=limit,
            pages=paginator.num_pages,
        ))

    @staticmethod
    def get_order_with_items(order_pk: uuid.UUID | str) -> Result[Order, OrderError]:
        pk = parse_reference_id(order_pk)
        order = (
            Order.objects.select_related('event')
            .prefetch_related('items', 'status_history__changed_by')
            .filter(pk=pk)
            .first()
        ) if pk else None
        if order is None:
            return Err(NotFoundError('Order', str(order_pk)))
        return Ok(order)

    @staticmethod
    def get_order_by_order_id(order_id: OrderNumber) -> Result[Order, OrderError]:
        order = Order.objects.select_related('event').prefetch_related('items').filter(order_id=order_id).first()
        if order is None:
            return Err(NotFoundError('Order', order_id))
        return Ok(order)
