"""
Input validation helpers for the gifting storefront.
Payload size guards, safe error messages and security event logging.
"""

import hashlib
import logging
import time
from typing import Any

from django.core.exceptions import ValidationError
from django.utils.translation import gettext_lazy as _

logger = logging.getLogger(__name__)

# ===============================================================================
# SECURITY CONSTANTS
# ===============================================================================

# Free-form wizard data (customization fields, variant selections)
MAX_JSON_CONTENT_SIZE = 10000
MAX_JSON_DEPTH = 5
MAX_JSON_KEYS = 50

DANGEROUS_JSON_KEYS = ('__builtins__', '__import__', 'eval', 'exec')


# ===============================================================================
# JSON PAYLOAD VALIDATION
# ===============================================================================

def validate_json_payload(data: Any, field_name: str = "JSON field") -> None:
    """🔒 Validate a client-supplied JSON blob before it is snapshotted into an order"""
    if data is None:
        return

    if not isinstance(data, dict):
        raise ValidationError(_("%(field)s must be an object") % {'field': field_name})

    if len(data) > MAX_JSON_KEYS:
        raise ValidationError(_("%(field)s has too many keys") % {'field': field_name})

    if len(str(data)) > MAX_JSON_CONTENT_SIZE:
        raise ValidationError(_("%(field)s too large") % {'field': field_name})

    _check_json_depth(data, field_name)
    _check_json_keys(data, field_name)


def _check_json_depth(obj: Any, field_name: str, depth: int = 0) -> None:
    """Helper to reject deeply nested payloads"""
    if depth > MAX_JSON_DEPTH:
        raise ValidationError(_("%(field)s too deep") % {'field': field_name})

    if isinstance(obj, dict):
        for value in obj.values():
            _check_json_depth(value, field_name, depth + 1)
    elif isinstance(obj, list):
        for item in obj:
            _check_json_depth(item, field_name, depth + 1)


def _check_json_keys(obj: Any, field_name: str) -> None:
    """Recursively reject keys that look like code execution attempts"""
    if isinstance(obj, dict):
        for key, value in obj.items():
            if key in DANGEROUS_JSON_KEYS:
                logger.warning(f"🚨 [Security] Dangerous key '{key}' in {field_name}")
                raise ValidationError(_("Invalid input detected"))
            _check_json_keys(value, field_name)
    elif isinstance(obj, list):
        for item in obj:
            _check_json_keys(item, field_name)


# ===============================================================================
# SECURE ERROR HANDLING
# ===============================================================================

class SecureErrorHandler:
    """Security-conscious error handling preventing information disclosure"""

    @staticmethod
    def safe_error_response(error: Exception, context: str = "general") -> str:
        """
        Return safe error messages that don't leak sensitive information
        """
        # Log detailed error for administrators
        error_id = hashlib.sha256(f"{error!s}{time.time()}".encode()).hexdigest()[:8]
        logger.error(f"🔥 [Security] {context} error {error_id}: {error!s}")

        generic_messages = {
            "order": _("Your order could not be saved. Please try again."),
            "status_update": _("The order status could not be updated. Please try again."),
            "general": _("An error occurred. Please try again later."),
        }

        return f"{generic_messages.get(context, generic_messages['general'])} (ID: {error_id})"


# ===============================================================================
# AUDIT LOGGING INTEGRATION
# ===============================================================================

def log_security_event(event_type: str, details: dict[str, Any], request_ip: str | None = None) -> None:
    """
    Log security events for monitoring and forensics
    """
    try:
        logger.warning(f"🚨 [Security] {event_type}: {details} from IP: {request_ip}")
    except Exception as e:
        logger.error(f"Failed to log security event: {e}")
