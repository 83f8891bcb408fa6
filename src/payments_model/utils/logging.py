"""Logging helpers for model operations.

A transport layer can tie model log records to the API call that produced
the payload:

    with correlation_scope(response.headers.get("X-Request-ID")):
        payment = parse_document(response.json())

Every record written through ``log_model_operation`` carries the current
correlation id as ``record.correlation_id``.
"""

import logging
import uuid
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

NO_CORRELATION_ID = "no-correlation-id"


def get_correlation_id() -> str | None:
    """Get the current correlation ID, or None outside a scope."""
    return _correlation_id.get()


@contextmanager
def correlation_scope(correlation_id: str | None = None) -> Iterator[str]:
    """Bind a correlation ID for the duration of the block.

    Args:
        correlation_id: Existing ID, e.g. from a response header. A new
            UUID is generated when None or empty.

    Yields:
        The bound correlation ID.
    """
    cid = correlation_id or str(uuid.uuid4())
    token = _correlation_id.set(cid)
    try:
        yield cid
    finally:
        _correlation_id.reset(token)


class StructuredFormatter(logging.Formatter):
    """Prefix each line with the record's correlation ID."""

    def format(self, record: logging.LogRecord) -> str:
        cid = getattr(record, "correlation_id", None) or get_correlation_id()
        return f"[{cid or NO_CORRELATION_ID}] {super().format(record)}"


def log_model_operation(
    logger: logging.Logger,
    operation: str,
    *,
    payment_type: str | None = None,
    payment_id: str | None = None,
    error_code: str | None = None,
    error: str | None = None,
    **extra: Any,
) -> None:
    """Log a parse, build or patch outcome with structured context.

    Successful operations are logged at DEBUG and rejected input at WARNING.
    Context fields that are None are left out.
    """
    context = {
        key: value
        for key, value in (
            ("payment_type", payment_type),
            ("payment_id", payment_id),
            ("error_code", error_code),
            ("error", error),
            *extra.items(),
        )
        if value is not None
    }
    details = "".join(f" | {key}={value}" for key, value in context.items())
    context["operation"] = operation
    context["correlation_id"] = get_correlation_id() or NO_CORRELATION_ID

    logger.log(
        logging.WARNING if error else logging.DEBUG,
        "Payment model: %s%s",
        operation,
        details,
        extra=context,
    )
