"""
Order models for the gifting storefront
An order is a frozen snapshot: customer details, priced line items and money totals
are written once at checkout. Staff only move the status along and keep notes.
"""

from __future__ import annotations

import uuid
from typing import Any, ClassVar

from django.conf import settings
from django.core.validators import MinValueValidator
from django.db import models
from django.utils.translation import gettext_lazy as _

from .cart import LINE_TYPE_CHOICES
from .exceptions import FrozenOrderError

# ===============================================================================
# ORDER
# ===============================================================================

class Order(models.Model):
    """
    Customer order for one seasonal event.
    total_amount == sub_total + service_fee, fixed at creation and never recomputed.
    """

    # Internal identifier, exposed to clients as "_id"
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    # Shareable reference quoted in the WhatsApp handoff: "VAL-7K2M9QXA"
    order_id = models.CharField(
        max_length=32,
        unique=True,
        help_text=_("Human-shareable order reference")
    )

    event = models.ForeignKey(
        'catalog.Event',
        on_delete=models.PROTECT,
        related_name='orders'
    )

    # Order status workflow
    STATUS_CHOICES: ClassVar[tuple[tuple[str, str], ...]] = (
        ('PENDING', _('Pending')),          # Placed, awaiting staff follow-up
        ('CONFIRMED', _('Confirmed')),      # Customer confirmed over WhatsApp
        ('PROCESSING', _('Processing')),    # Being prepared
        ('SHIPPED', _('Shipped')),          # Out for delivery
        ('DELIVERED', _('Delivered')),      # Done
        ('CANCELLED', _('Cancelled')),
    )
    status = models.CharField(
        max_length=20,
        choices=STATUS_CHOICES,
        default='PENDING',
        help_text=_("Current order status")
    )

    ALLOWED_TRANSITIONS: ClassVar[dict[str, tuple[str, ...]]] = {
        'PENDING': ('CONFIRMED', 'CANCELLED'),
        'CONFIRMED': ('PROCESSING', 'CANCELLED'),
        'PROCESSING': ('SHIPPED', 'CANCELLED'),
        'SHIPPED': ('DELIVERED',),
        'DELIVERED': (),
        'CANCELLED': (),
    }

    # Only these may change after the order row exists
    MUTABLE_FIELDS: ClassVar[frozenset[str]] = frozenset({'status', 'notes', 'updated_at'})

    # Customer snapshot
    customer_name = models.CharField(max_length=200)
    customer_phone = models.CharField(max_length=30)
    customer_whatsapp = models.CharField(max_length=30, blank=True)
    customer_secondary_phone = models.CharField(max_length=30, blank=True)
    customer_email = models.EmailField(blank=True)
    customer_address = models.CharField(max_length=500)
    customer_city = models.CharField(max_length=100, blank=True)
    customer_message = models.TextField(blank=True, help_text=_("Gift message or delivery note"))

    # Money, whole naira
    sub_total = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("Sum of line totals in naira")
    )
    service_fee = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("Tiered service fee in naira")
    )
    total_amount = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("sub_total + service_fee in naira")
    )

    notes = models.TextField(blank=True, help_text=_("Internal staff notes"))

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'orders'
        verbose_name = _('Order')
        verbose_name_plural = _('Orders')
        ordering: ClassVar[tuple[str, ...]] = ('-created_at',)
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=['status', '-created_at'], name='orders_status_created_idx'),
            models.Index(fields=['event', '-created_at'], name='orders_event_created_idx'),
        )

    def __str__(self) -> str:
        return f"Order {self.order_id} - {self.customer_name}"

    def save(self, *args: Any, **kwargs: Any) -> None:
        """Insert freely; updates may only touch status and notes"""
        if not self._state.adding:
            update_fields = kwargs.get('update_fields')
            if update_fields is None:
                self._check_frozen_fields_unchanged()
                update_fields = self.MUTABLE_FIELDS
            frozen = set(update_fields) - self.MUTABLE_FIELDS
            if frozen:
                raise FrozenOrderError(f"Order {self.order_id} fields are frozen: {', '.join(sorted(frozen))}")
            kwargs['update_fields'] = list({*update_fields, 'updated_at'})
        super().save(*args, **kwargs)

    def _check_frozen_fields_unchanged(self) -> None:
        frozen = [
            f.attname for f in self._meta.concrete_fields
            if not f.primary_key and f.name not in self.MUTABLE_FIELDS
        ]
        stored = type(self).objects.filter(pk=self.pk).values(*frozen).first()
        if stored is None:
            return
        changed = [name for name in frozen if stored[name] != getattr(self, name)]
        if changed:
            raise FrozenOrderError(f"Order {self.order_id} fields are frozen: {', '.join(sorted(changed))}")

    @property
    def is_final(self) -> bool:
        return not self.ALLOWED_TRANSITIONS.get(self.status)

    def can_transition_to(self, new_status: str) -> bool:
        return new_status in self.ALLOWED_TRANSITIONS.get(self.status, ())


# ===============================================================================
# ORDER ITEMS
# ===============================================================================

class OrderItem(models.Model):
    """
    Snapshot of one resolved cart line.
    Catalog edits after checkout never reach this row.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='items'
    )
    position = models.PositiveIntegerField(help_text=_("Submission order within the cart"))

    line_type = models.CharField(max_length=10, choices=LINE_TYPE_CHOICES)
    # Catalog id (UUID string); kept as text so catalog deletes never cascade here
    reference_id = models.CharField(max_length=200)
    display_name = models.CharField(max_length=200, help_text=_("Catalog name at time of order"))

    quantity = models.PositiveIntegerField(
        default=1,
        validators=[MinValueValidator(1)]
    )
    unit_price = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("Unit price in naira (snapshot)")
    )
    line_total = models.BigIntegerField(
        validators=[MinValueValidator(0)],
        help_text=_("unit_price * quantity")
    )

    variant_selection = models.JSONField(default=dict, blank=True)
    customization_data = models.JSONField(default=dict, blank=True)
    booking_date = models.CharField(max_length=50, blank=True)
    booking_time = models.CharField(max_length=50, blank=True)
    service_ticket = models.CharField(max_length=32, blank=True)
    bundle_contents = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_items'
        verbose_name = _('Order Item')
        verbose_name_plural = _('Order Items')
        ordering: ClassVar[tuple[str, ...]] = ('order', 'position')
        constraints: ClassVar[list[models.BaseConstraint]] = [
            models.UniqueConstraint(fields=['order', 'position'], name='unique_order_item_position'),
        ]

    def __str__(self) -> str:
        return f"{self.display_name} x{self.quantity} ({self.order.order_id})"

    def save(self, *args: Any, **kwargs: Any) -> None:
        if not self._state.adding:
            raise FrozenOrderError(f"Order item {self.pk} cannot be modified")
        super().save(*args, **kwargs)


# ===============================================================================
# STATUS HISTORY
# ===============================================================================

class OrderStatusHistory(models.Model):
    """
    Audit trail of status changes, including the initial PENDING entry.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(
        Order,
        on_delete=models.CASCADE,
        related_name='status_history'
    )

    old_status = models.CharField(max_length=20, blank=True, help_text=_("Previous status"))
    new_status = models.CharField(max_length=20, help_text=_("New status"))

    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        help_text=_("Staff member who made the change")
    )
    notes = models.TextField(blank=True)
    is_automatic = models.BooleanField(
        default=False,
        help_text=_("Whether this was an automatic system change")
    )

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'order_status_history'
        verbose_name = _('Order Status History')
        verbose_name_plural = _('Order Status Histories')
        ordering: ClassVar[tuple[str, ...]] = ('-created_at',)
        indexes: ClassVar[tuple[models.Index, ...]] = (
            models.Index(fields=['order', '-created_at'], name='order_status_hist_order_idx'),
        )

    def __str__(self) -> str:
        return f"{self.order.order_id}: {self.old_status or '-'} → {self.new_status}"
