"""
Django admin configuration for orders app.
Orders are snapshots: staff can move the status along and keep notes, nothing else.
"""

from typing import Any, ClassVar

from django import forms
from django.contrib import admin, messages
from django.core.exceptions import ValidationError
from django.http import HttpRequest

from .models import Order, OrderItem, OrderStatusHistory
from .services import OrderService, OrderUpdateData, StatusChangeData


class OrderItemInline(admin.TabularInline):
    """Read-only inline for order items."""
    model = OrderItem
    extra = 0
    can_delete = False
    fields: ClassVar[list[str]] = (
        'position', 'line_type', 'display_name', 'quantity', 'unit_price',
        'line_total', 'service_ticket', 'booking_date', 'booking_time',
    )
    readonly_fields = fields

    def has_add_permission(self, request: HttpRequest, obj: Any = None) -> bool:
        return False


class OrderStatusHistoryInline(admin.TabularInline):
    model = OrderStatusHistory
    extra = 0
    can_delete = False
    fields: ClassVar[list[str]] = ('old_status', 'new_status', 'changed_by', 'notes', 'created_at')
    readonly_fields = fields

    def has_add_permission(self, request: HttpRequest, obj: Any = None) -> bool:
        return False


class OrderAdminForm(forms.ModelForm):
    """Rejects lifecycle moves before the admin reports a successful save"""

    class Meta:
        model = Order
        fields = ('status', 'notes')

    def clean_status(self):
        new_status = self.cleaned_data['status']
        if self.instance.pk and new_status != self.instance.status and not self.instance.can_transition_to(new_status):
            raise ValidationError(f"Invalid status transition from {self.instance.status} to {new_status}")
        return new_status


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    """Admin interface for orders."""

    form = OrderAdminForm
    list_display: ClassVar[list[str]] = (
        'order_id', 'customer_name', 'event', 'status', 'total_amount', 'created_at'
    )
    list_filter: ClassVar[list[str]] = ('status', 'event', 'created_at')
    search_fields: ClassVar[list[str]] = ('order_id', 'customer_name', 'customer_phone', 'customer_email')
    readonly_fields: ClassVar[list[str]] = (
        'order_id', 'event', 'customer_name', 'customer_phone', 'customer_whatsapp',
        'customer_secondary_phone', 'customer_email', 'customer_address', 'customer_city',
        'customer_message', 'sub_total', 'service_fee', 'total_amount', 'created_at', 'updated_at',
    )
    inlines: ClassVar[list[type]] = [OrderItemInline, OrderStatusHistoryInline]

    fieldsets: ClassVar[tuple] = (
        ('Order Information', {
            'fields': ('order_id', 'event', 'status')
        }),
        ('Customer', {
            'fields': (
                'customer_name', 'customer_phone', 'customer_whatsapp', 'customer_secondary_phone',
                'customer_email', 'customer_address', 'customer_city', 'customer_message',
            )
        }),
        ('Financial Details', {
            'fields': ('sub_total', 'service_fee', 'total_amount')
        }),
        ('Staff Notes', {
            'fields': ('notes',)
        }),
        ('Timestamps', {
            'fields': ('created_at', 'updated_at'),
            'classes': ('collapse',)
        })
    )

    def has_add_permission(self, request: HttpRequest) -> bool:
        # Orders only come from checkout
        return False

    def save_model(self, request: HttpRequest, obj: Order, form: Any, change: bool) -> None:
        """Route status and notes edits through the order service"""
        if 'status' in form.changed_data:
            new_status = obj.status
            obj.status = form.initial.get('status', obj.status)
            result = OrderService.update_order_status(
                obj, StatusChangeData(new_status=new_status, notes='Changed in admin', changed_by=request.user)
            )
            if result.is_err():
                messages.error(request, str(result.error))
        if 'notes' in form.changed_data:
            result = OrderService.update_order(obj, OrderUpdateData(notes=obj.notes))
            if result.is_err():
                messages.error(request, str(result.error))


@admin.register(OrderStatusHistory)
class OrderStatusHistoryAdmin(admin.ModelAdmin):
    """Admin interface for order status history."""

    list_display: ClassVar[list[str]] = (
        'order', 'old_status', 'new_status', 'changed_by', 'created_at'
    )
    list_filter: ClassVar[list[str]] = ('old_status', 'new_status', 'created_at')
    search_fields: ClassVar[list[str]] = ('order__order_id', 'notes')
    readonly_fields: ClassVar[list[str]] = (
        'order', 'old_status', 'new_status', 'changed_by', 'notes', 'is_automatic', 'created_at'
    )

    def has_add_permission(self, request: HttpRequest) -> bool:
        return False
