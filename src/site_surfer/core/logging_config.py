"""Structured logging configuration using structlog.

Call ``configure_logging()`` once at start-up in :mod:`site_surfer.cli`.
All modules can then use either the stdlib logging API or structlog directly:

Stdlib usage::

    import logging
    logger = logging.getLogger(__name__)
    logger.info("message")

Structlog usage (richer context binding)::

    import structlog
    logger = structlog.get_logger(__name__)
    logger.info("navigating", url="http://example.com", batch=3)

A ``run_id`` context variable is set by the CLI for every surfing run and
automatically merged into every log record emitted during that run.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar

import structlog
from structlog.types import EventDict, WrappedLogger

# ---------------------------------------------------------------------------
# Context variable: set per run, read by the log processor
# ---------------------------------------------------------------------------

run_id_var: ContextVar[str | None] = ContextVar("run_id", default=None)
"""Identifier of the current surfing run.

Usage::

    from site_surfer.core.logging_config import run_id_var
    run_id_var.set(uuid.uuid4().hex[:8])
"""

#: Third-party loggers that are only interesting when debugging.
_NOISY_LOGGERS: tuple[str, ...] = ("asyncio", "playwright")


# ---------------------------------------------------------------------------
# Custom processors
# ---------------------------------------------------------------------------


def _inject_run_id(
    logger: WrappedLogger,  # noqa: ARG001
    method_name: str,  # noqa: ARG001
    event_dict: EventDict,
) -> EventDict:
    """Inject the current run ID into the log event dict if set.

    Runs after ``merge_contextvars`` so that an explicitly bound ``run_id``
    wins over the ``ContextVar``.
    """
    rid = run_id_var.get()
    if rid is not None and "run_id" not in event_dict:
        event_dict["run_id"] = rid
    return event_dict


# ---------------------------------------------------------------------------
# Public configuration entry-point
# ---------------------------------------------------------------------------


def configure_logging(log_level: str = "INFO", log_format: str = "console") -> None:
    """Configure structlog and route stdlib logging through it.

    With ``log_format="console"`` records are rendered by structlog's
    ``ConsoleRenderer`` (the progress lines a person watches while the tabs
    open).  With ``log_format="json"`` every record is a newline-delimited
    JSON object.

    Standard fields added to every record:

    - ``timestamp``: ISO 8601 string.
    - ``level``: Log level name (``"info"``, ``"warning"``, etc.).
    - ``logger``: Module name that emitted the record.
    - ``run_id``: Current run ID (omitted outside a run).
    - ``event``: The log message string.

    Calling it more than once is safe: the root handler is replaced, never
    duplicated.

    Args:
        log_level: ``"DEBUG"``, ``"INFO"``, ``"WARNING"``, ``"ERROR"`` or
            ``"CRITICAL"``.  Case-insensitive.
        log_format: ``"console"`` or ``"json"``.
    """
    level_upper = log_level.upper()
    numeric_level = getattr(logging, level_upper, logging.INFO)
    is_debug = level_upper == "DEBUG"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _inject_run_id,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        final_processors: list[structlog.types.Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        # ConsoleRenderer formats exc_info itself.
        final_processors = [
            structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
        ]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *final_processors,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    for noisy_logger in _NOISY_LOGGERS:
        logging.getLogger(noisy_logger).setLevel(
            logging.DEBUG if is_debug else logging.WARNING
        )

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
