"""OpenTelemetry and structlog integration for source-fetch.

Fetches log through a structlog logger bound to their transport and source
URL, and each round trip gets a span named after the transport that carried
it. Without an OpenTelemetry SDK installed by the application, spans are
no-ops.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from collections.abc import Generator

# Module-level tracer and logger
_tracer: trace.Tracer | None = None
_logger: structlog.BoundLogger | None = None


def get_tracer() -> trace.Tracer:
    """Get or create the library tracer."""
    global _tracer
    if _tracer is None:
        _tracer = trace.get_tracer("source-fetch", "0.1.0")
    return _tracer


def get_logger() -> structlog.BoundLogger:
    """Get or create the library logger."""
    global _logger
    if _logger is None:
        _logger = structlog.get_logger("source-fetch")
    return _logger


def fetch_logger(transport: str, source_url: str | None) -> structlog.BoundLogger:
    """Logger carrying the transport and source URL of one fetch."""
    return get_logger().bind(transport=transport, source_url=source_url)


@contextmanager
def trace_operation(
    name: str,
    *,
    attributes: dict[str, Any] | None = None,
) -> Generator[trace.Span, None, None]:
    """Context manager for tracing an operation.

    Failures are recorded on the span, together with the error code of
    source-fetch errors, and re-raised.

    Args:
        name: Name of the operation.
        attributes: Optional span attributes.

    Yields:
        The active span.
    """
    tracer = get_tracer()
    with tracer.start_as_current_span(name) as span:
        if attributes:
            for key, value in attributes.items():
                span.set_attribute(key, value)
        try:
            yield span
        except Exception as e:
            span.set_status(Status(StatusCode.ERROR, str(e)))
            span.record_exception(e)
            code = getattr(e, "code", None)
            if isinstance(code, str):
                span.set_attribute("source_fetch.error_code", code)
            raise


@contextmanager
def trace_transport(kind: str, url: str) -> Generator[trace.Span, None, None]:
    """Trace one round trip through the ``kind`` transport.

    The span is named ``source_fetch.transport.<kind>``.
    """
    with trace_operation(
        f"source_fetch.transport.{kind}",
        attributes={"http.url": url, "source_fetch.transport": kind},
    ) as span:
        yield span
