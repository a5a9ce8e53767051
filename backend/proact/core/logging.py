"""Structured logging configuration with stdlib bridge.

Configures structlog with:
- JSON output for production, ConsoleRenderer for dev (``PROACT_JSON_LOGS``)
- Stdlib bridge so third-party logs are rendered through the same chain
- Cycle/session context scoped to one command via structlog contextvars
"""

import logging
from contextlib import contextmanager
from typing import Iterator

import structlog

from proact.core.config import Settings, get_settings


@contextmanager
def cycle_context(cycle_id=None, session_id=None) -> Iterator[None]:
    """Attach cycle/session identifiers to every log entry inside the block.

    The previous values are restored on exit, so identifiers never leak into
    log lines of a later command handled in the same context.
    """
    context = {}
    if cycle_id is not None:
        context["cycle_id"] = str(cycle_id)
    if session_id is not None:
        context["session_id"] = str(session_id)
    with structlog.contextvars.bound_contextvars(**context):
        yield


def _shared_processors() -> list:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
    ]


def configure_structlog(settings: Settings | None = None) -> None:
    """Route structlog and stdlib logging through one processor chain.

    Call once at process start, before the first log call: structlog caches
    the processor chain on first use.

    Args:
        settings: Source of ``log_level`` and ``json_logs``; defaults to get_settings()
    """
    settings = settings or get_settings()
    shared = _shared_processors()

    renderer = structlog.processors.JSONRenderer() if settings.json_logs else structlog.dev.ConsoleRenderer()
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level.upper())
    logging.getLogger("proact").setLevel(logging.DEBUG if settings.debug else logging.NOTSET)

    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
