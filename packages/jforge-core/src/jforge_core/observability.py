"""Logging and tracing for the build pipeline.

Every module logs through `get_logger(__name__)`, a structlog logger on top
of the stdlib logger of the same name. A library caller that never sets up
logging therefore sees nothing below WARNING, and nothing at all on stdout,
where the compiler and the application write. `configure_logging` is what
the CLI calls to turn records on.

The compile and run steps are wrapped in OpenTelemetry spans. Only the API
is used, so spans are dropped unless the host application installs an SDK.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import SpanKind, Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span

TRACER_NAME = "jforge"


def get_logger(name: str = TRACER_NAME) -> Any:
    """Return a structlog logger writing to the stdlib logger `name`.

    Example:
        >>> log = get_logger(__name__)
        >>> log.info("process_exited", exit_code=0)
    """
    return structlog.wrap_logger(logging.getLogger(name))


def configure_logging(
    *,
    log_level: str = "WARNING",
    json_format: bool = False,
    add_timestamp: bool = True,
) -> None:
    """Send pipeline log records to stderr at `log_level` and above.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ...).
        json_format: Render records as JSON lines instead of key=value text.
        add_timestamp: Prefix each record with an ISO timestamp.
    """
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if add_timestamp:
        processors.insert(1, structlog.processors.TimeStamper(fmt="iso"))
    processors.append(
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    # Loggers are rebuilt on every call so a second configuration applies
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )


@contextmanager
def span(
    name: str,
    *,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
) -> Iterator[Span]:
    """Trace one pipeline step and log its start and outcome at DEBUG.

    The span status is ERROR when the body raises; the exception is
    recorded on the span and re-raised unchanged.

    Example:
        >>> with span("compile", attributes={"build.sources": 3}) as s:
        ...     s.set_attribute("process.exit_code", 0)
    """
    log = get_logger(TRACER_NAME).bind(step=name, **(attributes or {}))
    tracer = trace.get_tracer(TRACER_NAME)

    with tracer.start_as_current_span(
        name,
        kind=kind,
        attributes=attributes,
        record_exception=False,
        set_status_on_exception=False,
    ) as s:
        log.debug("step_started")
        try:
            yield s
        except Exception as exc:
            s.set_status(Status(StatusCode.ERROR, str(exc)))
            s.record_exception(exc)
            log.debug("step_failed", error=str(exc))
            raise
        s.set_status(Status(StatusCode.OK))
        log.debug("step_finished")
