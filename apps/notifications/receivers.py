"""
Order signal receivers
Queue the staff notification for every placed order. Queueing problems are logged
and dropped so checkout never depends on the notification pipeline.
"""

from __future__ import annotations

import logging
from typing import Any

from django.dispatch import receiver
from django_q.tasks import async_task

from apps.orders.models import Order
from apps.orders.signals import order_placed

logger = logging.getLogger(__name__)


@receiver(order_placed, sender=Order, dispatch_uid='notifications_queue_order_placed')
def queue_order_notification(sender: type[Order], order: Order, **kwargs: Any) -> None:
    try:
        task_id = async_task(
            'apps.notifications.tasks.send_order_notification',
            str(order.pk),
            task_name=f"order-notification-{order.order_id}",
        )
        logger.info(f"📨 [Notifications] Queued notification for {order.order_id} (task {task_id})")
    except Exception as e:
        logger.error(f"🔥 [Notifications] Could not queue notification for {order.order_id}: {e}")
