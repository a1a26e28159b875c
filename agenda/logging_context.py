"""Request ID logging context for tracing a booking across modules.

Every desk call tags its log lines with a request ID, so one customer's
path from slot lookup through commit can be followed in the logs.

Usage:
    from agenda.logging_context import get_request_logger, set_request_id

    set_request_id("REQ-4f2a91")
    logger = get_request_logger(__name__)
    logger.info("Committing booking")  # record.request_id == "REQ-4f2a91"
"""

import logging
import uuid
from contextvars import ContextVar

_request_id: ContextVar[str] = ContextVar("request_id", default="NO_REQUEST_ID")


def set_request_id(request_id: str) -> None:
    """Set the correlation ID for the current async context."""
    _request_id.set(request_id)


def get_request_id() -> str:
    """Retrieve the current correlation ID."""
    return _request_id.get()


def new_request_id() -> str:
    """Generate a fresh request ID and make it current."""
    request_id = f"REQ-{uuid.uuid4().hex[:6]}"
    _request_id.set(request_id)
    return request_id


class RequestIdFilter(logging.Filter):
    """Injects request_id into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = _request_id.get()  # type: ignore[attr-defined]
        return True


def get_request_logger(name: str) -> logging.Logger:
    """Return a logger with the RequestIdFilter attached.

    The filter adds ``request_id`` to each record so formatters can
    include ``%(request_id)s`` in their format string.
    """
    logger = logging.getLogger(name)
    if not any(isinstance(f, RequestIdFilter) for f in logger.filters):
        logger.addFilter(RequestIdFilter())
    return logger
