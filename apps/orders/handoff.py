"""
Checkout handoff - renders a stored order as a WhatsApp-ready summary.

Money values are printed exactly as stored on the order; nothing is re-priced here.
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

from django.conf import settings

from .models import Order, OrderItem

logger = logging.getLogger(__name__)

WHATSAPP_LINK_BASE = 'https://wa.me'


def format_naira(amount: int) -> str:
    return f"₦{amount:,}"


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ', '.join(str(v) for v in value)
    return str(value)


def _item_lines(item: OrderItem) -> list[str]:
    lines = [f"- {item.display_name} (x{item.quantity}) - {format_naira(item.line_total)}"]

    for selected in (item.variant_selection or {}).values():
        label = selected.get('label') if isinstance(selected, dict) else selected
        if label:
            lines.append(f"  • {label}")

    if item.booking_date or item.booking_time:
        slot = ' '.join(part for part in (item.booking_date, item.booking_time) if part)
        lines.append(f"  • Booking: {slot}")
    if item.service_ticket:
        lines.append(f"  • Ticket: {item.service_ticket}")
    if item.bundle_contents:
        lines.append(f"  • Includes: {', '.join(item.bundle_contents)}")

    for key, value in (item.customization_data or {}).items():
        if value in (None, '', [], {}):
            continue
        lines.append(f"  • {key}: {_format_value(value)}")

    return lines


def format_handoff_message(order: Order) -> str:
    """Plain-text order summary for the fulfillment team"""
    whatsapp = order.customer_whatsapp or order.customer_phone
    address = ', '.join(part for part in (order.customer_address, order.customer_city) if part)

    lines = [
        f"*NEW ORDER - {order.order_id}*",
        '',
        '*Customer Details:*',
        f"- Name: {order.customer_name}",
        f"- Phone (WhatsApp): {whatsapp}",
    ]
    if order.customer_secondary_phone:
        lines.append(f"- Alt Phone: {order.customer_secondary_phone}")
    lines.append(f"- Address: {address}")
    if order.customer_message:
        lines.append(f"- Message: {order.customer_message}")

    lines += ['', '*Order Items:*']
    for item in order.items.all():
        lines += _item_lines(item)

    lines += [
        '',
        f"*Subtotal: {format_naira(order.sub_total)}*",
        f"*Service Fee: {format_naira(order.service_fee)}*",
        f"*TOTAL AMOUNT: {format_naira(order.total_amount)}*",
        '',
        f"_This order was placed on {settings.HANDOFF_BRAND_NAME}._",
    ]
    return '\n'.join(lines)


def build_handoff_link(order: Order, message: str | None = None) -> str:
    """wa.me deep link that opens a chat with the order summary pre-filled"""
    if message is None:
        message = format_handoff_message(order)
    number = ''.join(ch for ch in settings.HANDOFF_WHATSAPP_NUMBER if ch.isdigit())
    if not number:
        logger.warning("⚠️ [Handoff] HANDOFF_WHATSAPP_NUMBER is not configured")
    return f"{WHATSAPP_LINK_BASE}/{number}?text={quote(message, safe='')}"
