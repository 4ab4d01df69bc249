"""structlog setup for Ledgerly.

Every entry carries the service name, level, logger name, an ISO timestamp
and, inside a request, the correlation ID bound by the request middleware.
Development gets a coloured console renderer; everything else gets one
JSON object per line.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from ledgerly.core.config import Settings, get_settings

# stdlib loggers that follow the configured level
THIRD_PARTY_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error")


def add_service(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", "ledgerly")
    return event_dict


def add_logger_name(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Record which module logged the entry."""
    event_dict["logger"] = getattr(logger, "name", None) or "ledgerly"
    return event_dict


def event_to_message(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Emit the log text under 'message' rather than structlog's 'event'."""
    if "event" in event_dict:
        event_dict["message"] = event_dict.pop("event")
    return event_dict


def _renderer(settings: Settings) -> Processor:
    if settings.is_development or settings.log_format == "console":
        return structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.processors.JSONRenderer()


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        settings: Settings to read level and format from; loaded from the
            environment when omitted.
    """
    settings = settings or get_settings()
    level = getattr(logging, settings.log_level)
    renderer = _renderer(settings)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        add_service,
        structlog.stdlib.add_log_level,
        add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]
    if isinstance(renderer, structlog.processors.JSONRenderer):
        processors.append(event_to_message)
    processors.append(renderer)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stdout),
        cache_logger_on_first_use=not settings.is_development,
    )

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)
    for name in THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(level)
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.db_echo else logging.WARNING
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger, named after the calling module by convention."""
    return structlog.get_logger(name or "ledgerly")


class LoggingContext:
    """Bind key/value pairs to every entry logged inside a `with` block.

    Example:
        with LoggingContext(role="Manager", updated_by=user_id):
            logger.info("Permissions updated via API")
    """

    def __init__(self, **values: Any) -> None:
        self.values = values

    def __enter__(self) -> "LoggingContext":
        structlog.contextvars.bind_contextvars(**self.values)
        return self

    def __exit__(self, *exc_info: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.values)


def bind_correlation_id(correlation_id: str) -> None:
    structlog.contextvars.bind_contextvars(correlation_id=correlation_id)


def clear_context() -> None:
    """Drop everything bound for the current request."""
    structlog.contextvars.clear_contextvars()
