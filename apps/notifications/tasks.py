"""
Notification background tasks (Django-Q2).
"""

from __future__ import annotations

import logging

from apps.orders.exceptions import NotificationError
from apps.orders.models import Order

from .services import OrderNotificationService

logger = logging.getLogger(__name__)


def send_order_notification(order_pk: str) -> bool:
    """
    Tell the fulfillment team about a new order.

    Best effort: a missing order or a mail failure is logged and reported as False.
    """
    order = Order.objects.prefetch_related('items').filter(pk=order_pk).first()
    if order is None:
        logger.warning(f"⚠️ [Notifications] Order {order_pk} vanished before notification")
        return False

    try:
        OrderNotificationService.send_order_placed(order)
    except NotificationError as e:
        logger.error(f"🔥 [Notifications] Order notification failed for {order.order_id}: {e}")
        return False
    return True
