"""
Common middleware for the gifting storefront
Request correlation for logs and API responses.
"""

import logging
import uuid
from collections.abc import Callable

from django.http import HttpRequest, HttpResponse

from .logging import set_request_id

logger = logging.getLogger(__name__)

# ===============================================================================
# REQUEST ID MIDDLEWARE
# ===============================================================================

class RequestIDMiddleware:
    """Add unique request ID for tracing order submissions across logs"""

    def __init__(self, get_response: Callable[[HttpRequest], HttpResponse]):
        self.get_response = get_response

    def __call__(self, request: HttpRequest) -> HttpResponse:
        request_id = _upstream_request_id(request) or str(uuid.uuid4())
        request.META['REQUEST_ID'] = request_id
        set_request_id(request_id)

        response = self.get_response(request)
        response['X-Request-ID'] = request_id

        return response


def _upstream_request_id(request: HttpRequest) -> str | None:
    """A proxy's X-Request-ID, kept only when it is a well-formed UUID"""
    header = request.headers.get('X-Request-ID', '')
    try:
        return str(uuid.UUID(header))
    except ValueError:
        return None


def get_client_ip(request: HttpRequest) -> str | None:
    """Best-effort client IP for security logging"""
    forwarded = request.META.get('HTTP_X_FORWARDED_FOR')
    if forwarded:
        return forwarded.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR')
