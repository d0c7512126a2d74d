# ABOUTME: Structured logging setup shared by the CLI and the library modules.
# ABOUTME: Configures structlog once with a console renderer on stderr.

import logging
import sys

import structlog

_configured = False


def configure_logging(level: str = "WARNING") -> None:
    """Configure structlog for the application.

    Safe to call more than once; only the first call takes effect.

    Args:
        level: Minimum level name to emit (e.g. "DEBUG", "INFO").
    """
    global _configured
    if _configured:
        return

    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.WARNING

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
    _configured = True


def reset_logging() -> None:
    """Restore structlog defaults so the next configure_logging call applies."""
    global _configured
    structlog.reset_defaults()
    _configured = False
