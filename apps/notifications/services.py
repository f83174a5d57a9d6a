"""
Notification Services for the gifting storefront
Staff-facing order notifications. Delivery is best effort: every failure is
raised as NotificationError for the caller to log, never to the customer.
"""

from __future__ import annotations

import logging

from django.conf import settings
from django.core.mail import send_mail

from apps.common.types import NotificationPayload
from apps.common.validators import log_security_event
from apps.orders.exceptions import NotificationError
from apps.orders.handoff import format_handoff_message
from apps.orders.models import Order

logger = logging.getLogger(__name__)


# ===============================================================================
# ORDER NOTIFICATIONS
# ===============================================================================


class OrderNotificationService:
    """Announce new orders to the fulfillment team"""

    @staticmethod
    def build_payload(order: Order) -> NotificationPayload:
        return {
            'order_id': order.order_id,
            'id': str(order.pk),
            'customer_name': order.customer_name,
            'customer_phone': order.customer_whatsapp or order.customer_phone,
            'item_count': order.items.count(),
            'total_amount': order.total_amount,
        }

    @staticmethod
    def get_recipients() -> list[str]:
        return [email for email in getattr(settings, 'ORDER_NOTIFICATION_RECIPIENTS', []) if email]

    @staticmethod
    def send_order_placed(order: Order) -> int:
        """Log the order and email it to the configured recipients; returns emails sent"""
        payload = OrderNotificationService.build_payload(order)
        logger.info(
            f"📧 [Notifications] New order {payload['order_id']} from {payload['customer_name']} "
            f"({payload['item_count']} items, ₦{payload['total_amount']:,})"
        )

        recipients = OrderNotificationService.get_recipients()
        if not recipients:
            logger.info("📧 [Notifications] No ORDER_NOTIFICATION_RECIPIENTS configured, skipping email")
            return 0

        try:
            sent = send_mail(
                subject=f"New order {order.order_id} - ₦{order.total_amount:,}",
                message=format_handoff_message(order),
                from_email=settings.DEFAULT_FROM_EMAIL,
                recipient_list=recipients,
                fail_silently=False,
            )
        except Exception as e:
            raise NotificationError(f"Email delivery failed for {order.order_id}: {e}") from e

        log_security_event('order_notification_sent', {
            'order_id': order.order_id,
            'recipients': len(recipients),
        })
        return sent
