# Core - structlog setup
#
# structlog is layered over stdlib logging so that module loggers
# (logging.getLogger(__name__)) and audit display events share handlers.

import logging
import sys

import structlog

_configured = False


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """
    Configure structlog + stdlib logging once per process.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ...)
        json_output: Render JSON lines instead of the human console format
    """
    global _configured

    numeric_level = getattr(logging, level.upper(), logging.INFO)

    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    if not _configured:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter("%(message)s"))  # structlog handles formatting
        root_logger.addHandler(handler)
        _configured = True
    root_logger.setLevel(numeric_level)
