"""
Order pipeline error taxonomy.

Callers get a structured error that says whether to fix the input
(OrderValidationError, NotFoundError) or simply try again (PersistenceError).
NotificationError never reaches a caller.
"""

from __future__ import annotations

from typing import Any, ClassVar

from apps.common.types import BusinessError, ValidationErrors


class OrderError(BusinessError):
    """Base class for every failure the order pipeline reports to a caller"""

    code: ClassVar[str] = 'ORDER_ERROR'
    retryable: ClassVar[bool] = False
    http_status: ClassVar[int] = 400

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def to_payload(self) -> Any:
        return self.message


class OrderValidationError(OrderError):
    """Malformed request shape; carries field-level detail"""

    code = 'VALIDATION_ERROR'
    http_status = 400

    def __init__(self, field: str, message: str, details: ValidationErrors | None = None):
        self.field = field
        self.details = details or {field: [message]}
        super().__init__(f"{field}: {message}")

    def to_payload(self) -> Any:
        return self.details


class NotFoundError(OrderError):
    """A referenced event, product, service, add-on or bundle does not exist"""

    code = 'NOT_FOUND'
    http_status = 404

    def __init__(self, kind: str, reference: str):
        self.kind = kind
        self.reference = reference
        super().__init__(f"{kind} not found: {reference}")


class PersistenceError(OrderError):
    """Storage write failed; nothing was written, so the caller may retry"""

    code = 'PERSISTENCE_ERROR'
    retryable = True
    http_status = 503


class NotificationError(BusinessError):
    """Best-effort notification failed; logged and swallowed"""


class FrozenOrderError(OrderError):
    """Attempted write to a field that is fixed once the order exists"""

    code = 'ORDER_FROZEN'
    http_status = 409


class InvalidStatusTransitionError(OrderError):
    """Requested status change is not allowed from the current status"""

    code = 'INVALID_STATUS_TRANSITION'
    http_status = 409
