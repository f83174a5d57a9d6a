"""
Logging helpers
Attaches the current request ID to every log record so an order submission
can be followed from the API call through to its notification.
"""

from __future__ import annotations

import json
import logging
from contextvars import ContextVar
from datetime import UTC, datetime

_request_id: ContextVar[str] = ContextVar('request_id', default='-')


def set_request_id(request_id: str) -> None:
    _request_id.set(request_id)


def get_request_id() -> str:
    return _request_id.get()


class RequestIDFilter(logging.Filter):
    """Expose the active request ID as %(request_id)s"""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


class StorefrontJSONFormatter(logging.Formatter):
    """One JSON object per line for production log shipping"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            'timestamp': datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'request_id': getattr(record, 'request_id', '-'),
        }
        if record.exc_info and record.exc_info[1] is not None:
            log_entry['exception'] = self.formatException(record.exc_info)
        return json.dumps(log_entry, default=str, ensure_ascii=False)
