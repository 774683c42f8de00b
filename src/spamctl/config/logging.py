"""structlog configuration for spamctl.

All log output goes to stderr so ``--json`` results on stdout stay
machine-parsable.  Human mode uses structlog's console renderer; ``--log-json``
emits one JSON object per line.  Commands bind the account they operate on
via :func:`bind_log_context`, so every line logged during that command
carries ``account_id``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

# Third-party loggers that stay at WARNING even with --verbose.
QUIET_LOGGERS = ("urllib3", "requests")


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Configure structlog and the stdlib root handler.

    Safe to call repeatedly; the root handler is replaced, not stacked.

    Args:
        verbose: DEBUG for the ``spamctl`` logger tree, otherwise WARNING.
        log_json: JSON renderer instead of the console renderer.
    """
    shared = _shared_processors()
    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.WARNING)

    logging.getLogger("spamctl").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def bind_log_context(**values: Any) -> None:
    """Attach *values* (e.g. ``account_id``) to every subsequent log line."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**values)
