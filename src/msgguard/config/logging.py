"""structlog configuration for msgguard.

Two output modes:
- Human (default): console-formatted output to stderr
- JSON (``log_json``): Structured JSON lines to stderr

Both switches default to the ``verbose`` and ``log_json`` settings
(``MSGGUARD_VERBOSE``, ``MSGGUARD_LOG_JSON`` or ``msgguard.toml``).
Host services that configure logging themselves can skip this entirely;
msgguard only emits through the ``msgguard`` logger hierarchy.
"""

from __future__ import annotations

import logging
import sys

import structlog

from msgguard.config.settings import GuardSettings, get_settings


def configure_logging(
    settings: GuardSettings | None = None,
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        settings: Source of the defaults below; process-wide settings when omitted.
        verbose: Enable DEBUG-level output for ``msgguard``. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
    """
    settings = settings or get_settings()
    if verbose is None:
        verbose = settings.verbose
    if log_json is None:
        log_json = settings.log_json
    guard_level = logging.DEBUG if verbose else logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("msgguard").setLevel(guard_level)
