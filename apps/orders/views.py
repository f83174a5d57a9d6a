"""
Order API Views
DRF views for checkout (order creation, cart quotes, handoff) and staff order management.
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import status
from rest_framework.decorators import api_view, permission_classes, throttle_classes
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.request import Request
from rest_framework.response import Response
from rest_framework.throttling import SimpleRateThrottle

from apps.common.middleware import get_client_ip
from apps.common.validators import SecureErrorHandler, log_security_event

from .cart import build_cart_line
from .exceptions import OrderError
from .handoff import build_handoff_link, format_handoff_message
from .serializers import (
    CartQuoteInputSerializer,
    OrderCreateInputSerializer,
    OrderDetailSerializer,
    OrderListQuerySerializer,
    OrderListSerializer,
    OrderStaffUpdateSerializer,
    ResolvedLineItemSerializer,
)
from .services import (
    CustomerDetails,
    OrderCreateData,
    OrderQueryService,
    OrderService,
    OrderUpdateData,
    StatusChangeData,
)

logger = logging.getLogger(__name__)


# 🔒 SECURITY: Custom throttle classes for order endpoints
class CheckoutRateThrottle(SimpleRateThrottle):
    """Keyed on client IP; checkout is anonymous so there is no user to key on"""

    def get_cache_key(self, request: Request, view: Any) -> str | None:
        return self.cache_format % {
            'scope': self.scope,
            'ident': self.get_ident(request),
        }


class OrderCreateThrottle(CheckoutRateThrottle):
    """Throttling for order creation endpoints"""
    scope = 'order_create'


class OrderQuoteThrottle(CheckoutRateThrottle):
    """Throttling for cart quote endpoints"""
    scope = 'order_quote'


class OrderHandoffThrottle(CheckoutRateThrottle):
    """Throttling for handoff lookups"""
    scope = 'order_handoff'


def _error_response(error: OrderError) -> Response:
    """Standard failure envelope: callers can tell "fix your input" from "try again" """
    return Response({
        'success': False,
        'error': error.to_payload(),
        'code': error.code,
        'retryable': error.retryable,
    }, status=error.http_status)


def _invalid_input_response(errors: Any) -> Response:
    return Response({
        'success': False,
        'error': errors,
        'code': 'VALIDATION_ERROR',
        'retryable': False,
    }, status=status.HTTP_400_BAD_REQUEST)


# ===============================================================================
# CHECKOUT
# ===============================================================================

@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OrderCreateThrottle])
def create_order(request: Request) -> Response:
    """
    Create an order from a cart with server-side pricing.
    Client-sent prices are ignored except for pay-what-you-choose add-ons.
    """
    input_serializer = OrderCreateInputSerializer(data=request.data)
    if not input_serializer.is_valid():
        logger.info(f"⚠️ [API] Order payload rejected: {list(input_serializer.errors)}")
        return _invalid_input_response(input_serializer.errors)

    validated_data = input_serializer.validated_data
    customer = validated_data['customer']

    data = OrderCreateData(
        event_id=validated_data['event_id'],
        customer=CustomerDetails(
            name=customer['name'],
            phone=customer['phone'],
            address=customer['address'],
            city=customer.get('city', ''),
            email=customer.get('email', ''),
            # The checkout form collects a single number labelled WhatsApp
            whatsapp=customer.get('whatsapp') or customer['phone'],
            secondary_phone=customer.get('secondary_phone', ''),
            message=customer.get('message', ''),
        ),
        lines=[build_cart_line(item) for item in validated_data['items']],
    )

    try:
        result = OrderService.create_order(data)
    except Exception as e:
        logger.exception(f"🔥 [API] Order creation exception: {e}")
        return Response({
            'success': False,
            'error': SecureErrorHandler.safe_error_response(e, 'order'),
            'code': 'INTERNAL_ERROR',
            'retryable': True,
        }, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if result.is_err():
        error = result.error
        if error.retryable:
            logger.error(f"🔥 [API] Order creation failed: {error}")
        return _error_response(error)

    order = result.unwrap()
    logger.info(f"📦 [API] Order created: {order.order_id} from {get_client_ip(request)}")
    # The submitter already holds these details; later lookups are staff-only
    message = format_handoff_message(order)
    return Response({
        'success': True,
        'order': {
            'orderId': order.order_id,
            '_id': str(order.id),
        },
        'totalAmount': order.total_amount,
        'handoff': {
            'message': message,
            'link': build_handoff_link(order, message),
        },
    }, status=status.HTTP_201_CREATED)


@api_view(['POST'])
@permission_classes([AllowAny])
@throttle_classes([OrderQuoteThrottle])
def quote_cart(request: Request) -> Response:
    """Price a cart exactly as order creation would, without saving anything"""
    input_serializer = CartQuoteInputSerializer(data=request.data)
    if not input_serializer.is_valid():
        return _invalid_input_response(input_serializer.errors)

    validated_data = input_serializer.validated_data
    lines = [build_cart_line(item) for item in validated_data['items']]

    result = OrderService.quote_cart(validated_data['event_id'], lines)
    if result.is_err():
        return _error_response(result.error)

    quote = result.unwrap()
    return Response({
        'success': True,
        'items': ResolvedLineItemSerializer(quote.items, many=True).data,
        **quote.pricing.as_dict(),
    })


@api_view(['GET'])
@permission_classes([IsAdminUser])
@throttle_classes([OrderHandoffThrottle])
def order_handoff(request: Request, order_id: str) -> Response:
    """WhatsApp handoff message and deep link for a stored order, for staff re-sending it"""
    result = OrderQueryService.get_order_by_order_id(order_id)
    if result.is_err():
        return _error_response(result.error)

    order = result.unwrap()
    message = format_handoff_message(order)
    return Response({
        'success': True,
        'orderId': order.order_id,
        'totalAmount': order.total_amount,
        'message': message,
        'link': build_handoff_link(order, message),
    })


# ===============================================================================
# STAFF ORDER MANAGEMENT
# ===============================================================================

@api_view(['GET'])
@permission_classes([IsAdminUser])
def admin_order_list(request: Request) -> Response:
    """Paginated order list, newest first, optional ?status= filter"""
    query = OrderListQuerySerializer(data=request.query_params)
    if not query.is_valid():
        return _invalid_input_response(query.errors)

    result = OrderQueryService.list_orders(query.validated_data)
    if result.is_err():
        return _error_response(result.error)

    page = result.unwrap()
    return Response({
        'success': True,
        'orders': OrderListSerializer(page.orders, many=True).data,
        'pagination': {
            'total': page.total,
            'page': page.page,
            'limit': page.limit,
            'pages': page.pages,
        },
    })


@api_view(['GET', 'PATCH'])
@permission_classes([IsAdminUser])
def admin_order_detail(request: Request, pk: str) -> Response:
    """Order detail, or a staff status/notes update"""
    result = OrderQueryService.get_order_with_items(pk)
    if result.is_err():
        return _error_response(result.error)
    order = result.unwrap()

    if request.method == 'GET':
        return Response({'success': True, 'order': OrderDetailSerializer(order).data})

    update_serializer = OrderStaffUpdateSerializer(data=request.data)
    if not update_serializer.is_valid():
        return _invalid_input_response(update_serializer.errors)
    changes = update_serializer.validated_data

    new_status = changes.get('status')
    if new_status and new_status != order.status:
        status_result = OrderService.update_order_status(
            order,
            StatusChangeData(new_status=new_status, notes=changes.get('reason', ''), changed_by=request.user),
        )
        if status_result.is_err():
            log_security_event(
                'order_status_change_rejected',
                {'order_id': order.order_id, 'from': order.status, 'to': new_status},
                get_client_ip(request),
            )
            return _error_response(status_result.error)

    if 'notes' in changes:
        notes_result = OrderService.update_order(order, OrderUpdateData(notes=changes['notes']))
        if notes_result.is_err():
            return _error_response(notes_result.error)

    refreshed = OrderQueryService.get_order_with_items(order.pk).unwrap()
    return Response({'success': True, 'order': OrderDetailSerializer(refreshed).data})
