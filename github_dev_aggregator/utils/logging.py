"""structlog configuration for the CLI and the HTTP server."""

import logging
import sys

import structlog

from github_dev_aggregator.configuration.models import LogFormat


def configure_logging(debug: bool = False, fmt: LogFormat = LogFormat.CONSOLE) -> None:
    """Configure structlog on top of stdlib logging.

    Args:
        debug: Log at DEBUG instead of INFO.
        fmt: ``console`` for human-readable output or ``json`` for machine-parseable lines.
    """
    level = logging.DEBUG if debug else logging.INFO

    renderer: structlog.types.Processor
    if fmt == LogFormat.JSON:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    # Clear existing handlers to avoid duplicates on re-configuration
    root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )
    root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
