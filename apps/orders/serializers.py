"""
Order API Serializers
Inbound checkout payloads use the storefront's camelCase keys; validated data comes
out in snake_case via ``source=`` so services never see client naming.
"""

from __future__ import annotations

from typing import Any

from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from apps.common.constants import (
    CUSTOMER_ADDRESS_MIN_LENGTH,
    CUSTOMER_NAME_MIN_LENGTH,
    CUSTOMER_PHONE_MIN_LENGTH,
    MAX_ADDRESS_LENGTH,
    MAX_MESSAGE_LENGTH,
    MAX_NAME_LENGTH,
    MAX_PHONE_LENGTH,
    MAX_REFERENCE_LENGTH,
)
from apps.common.validators import validate_json_payload

from .cart import LINE_TYPES
from .models import Order, OrderItem, OrderStatusHistory


def _json_object(value: Any, field_name: str) -> dict[str, Any]:
    if value in (None, ''):
        return {}
    if not isinstance(value, dict):
        raise serializers.ValidationError("Must be an object.")
    try:
        validate_json_payload(value, field_name)
    except DjangoValidationError as e:
        raise serializers.ValidationError(e.messages) from e
    return value


# ===============================================================================
# CHECKOUT INPUT
# ===============================================================================

class CustomerInputSerializer(serializers.Serializer):
    """Customer snapshot collected at checkout"""

    name = serializers.CharField(min_length=CUSTOMER_NAME_MIN_LENGTH, max_length=MAX_NAME_LENGTH)
    email = serializers.EmailField(required=False, allow_blank=True, default='')
    phone = serializers.CharField(min_length=CUSTOMER_PHONE_MIN_LENGTH, max_length=MAX_PHONE_LENGTH)
    whatsapp = serializers.CharField(
        min_length=CUSTOMER_PHONE_MIN_LENGTH, max_length=MAX_PHONE_LENGTH,
        required=False, allow_blank=True, default=''
    )
    address = serializers.CharField(min_length=CUSTOMER_ADDRESS_MIN_LENGTH, max_length=MAX_ADDRESS_LENGTH)
    city = serializers.CharField(max_length=100, allow_blank=True)
    secondaryPhone = serializers.CharField(
        source='secondary_phone',
        min_length=CUSTOMER_PHONE_MIN_LENGTH, max_length=MAX_PHONE_LENGTH,
        required=False, allow_blank=True, default=''
    )
    customMessage = serializers.CharField(
        source='message', max_length=MAX_MESSAGE_LENGTH,
        required=False, allow_blank=True, default=''
    )


class CartItemInputSerializer(serializers.Serializer):
    """Input serializer for cart items in quotes and order creation"""

    type = serializers.ChoiceField(choices=LINE_TYPES)
    referenceId = serializers.CharField(source='reference_id', max_length=MAX_REFERENCE_LENGTH)
    quantity = serializers.IntegerField(min_value=1)
    variantSelection = serializers.JSONField(source='variant_selection', required=False, default=dict)
    customizationData = serializers.JSONField(source='customization_data', required=False, default=dict)
    bookingDate = serializers.CharField(source='booking_date', max_length=50, required=False, allow_blank=True, default='')
    bookingTime = serializers.CharField(source='booking_time', max_length=50, required=False, allow_blank=True, default='')
    # Only honoured for pay-what-you-choose add-ons
    priceAtPurchase = serializers.IntegerField(source='price_at_purchase', required=False, allow_null=True, default=None)

    def validate_variantSelection(self, value: Any) -> dict[str, Any]:
        return _json_object(value, 'variantSelection')

    def validate_customizationData(self, value: Any) -> dict[str, Any]:
        return _json_object(value, 'customizationData')


class CartQuoteInputSerializer(serializers.Serializer):
    """Input serializer for cart total previews"""

    eventId = serializers.UUIDField(source='event_id')
    items = CartItemInputSerializer(many=True)


class OrderCreateInputSerializer(serializers.Serializer):
    """Input serializer for order creation"""

    eventId = serializers.UUIDField(source='event_id')
    customer = CustomerInputSerializer()
    items = CartItemInputSerializer(many=True, allow_empty=False)


# ===============================================================================
# QUOTE OUTPUT
# ===============================================================================

class ResolvedLineItemSerializer(serializers.Serializer):
    """Read-only view of a priced, unsaved cart line"""

    type = serializers.CharField(source='line_type')
    referenceId = serializers.CharField(source='reference_id')
    name = serializers.CharField(source='display_name')
    quantity = serializers.IntegerField()
    unitPrice = serializers.IntegerField(source='unit_price')
    lineTotal = serializers.IntegerField(source='line_total')
    variantSelection = serializers.DictField(source='variant_selection')
    bundleContents = serializers.ListField(source='bundle_contents', child=serializers.CharField())


# ===============================================================================
# STAFF ORDER OUTPUT / INPUT
# ===============================================================================

class OrderItemSerializer(serializers.ModelSerializer):
    """Order item snapshot for staff views"""

    class Meta:
        model = OrderItem
        fields = [
            'id', 'position', 'line_type', 'reference_id', 'display_name',
            'quantity', 'unit_price', 'line_total', 'variant_selection',
            'customization_data', 'booking_date', 'booking_time',
            'service_ticket', 'bundle_contents',
        ]


class OrderStatusHistorySerializer(serializers.ModelSerializer):
    changed_by = serializers.StringRelatedField()

    class Meta:
        model = OrderStatusHistory
        fields = ['old_status', 'new_status', 'changed_by', 'notes', 'is_automatic', 'created_at']


class OrderListSerializer(serializers.ModelSerializer):
    """Slim order info for the staff order list"""

    status_display = serializers.CharField(source='get_status_display', read_only=True)
    event_slug = serializers.CharField(source='event.slug', read_only=True)
    item_count = serializers.SerializerMethodField()

    class Meta:
        model = Order
        fields = [
            'id', 'order_id', 'event_slug', 'status', 'status_display',
            'customer_name', 'customer_phone', 'customer_city',
            'sub_total', 'service_fee', 'total_amount', 'item_count',
            'created_at', 'updated_at',
        ]

    def get_item_count(self, obj: Order) -> int:
        return len(obj.items.all())


class OrderDetailSerializer(serializers.ModelSerializer):
    """Full order details with items and status history"""

    status_display = serializers.CharField(source='get_status_display', read_only=True)
    event_slug = serializers.CharField(source='event.slug', read_only=True)
    items = OrderItemSerializer(many=True, read_only=True)
    status_history = OrderStatusHistorySerializer(many=True, read_only=True)

    class Meta:
        model = Order
        fields = [
            'id', 'order_id', 'event_slug', 'status', 'status_display',
            'customer_name', 'customer_phone', 'customer_whatsapp',
            'customer_secondary_phone', 'customer_email', 'customer_address',
            'customer_city', 'customer_message',
            'sub_total', 'service_fee', 'total_amount', 'notes',
            'items', 'status_history', 'created_at', 'updated_at',
        ]


class OrderListQuerySerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=[code for code, _label in Order.STATUS_CHOICES], required=False)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)


class OrderStaffUpdateSerializer(serializers.Serializer):
    """Staff PATCH payload: a status move, a notes edit, or both"""

    status = serializers.ChoiceField(choices=[code for code, _label in Order.STATUS_CHOICES], required=False)
    notes = serializers.CharField(max_length=MAX_MESSAGE_LENGTH, required=False, allow_blank=True)
    reason = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')

    def validate(self, attrs: dict[str, Any]) -> dict[str, Any]:
        if 'status' not in attrs and 'notes' not in attrs:
            raise serializers.ValidationError("Provide status or notes.")
        return attrs
