"""Structured logging for restcommons services, built on structlog."""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from restcommons.config import Settings


def service_context(service_name: str, service_version: str | None = None) -> Processor:
    """Build a processor stamping every event with the service identity."""

    def add_service_context(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        if service_version is not None:
            event_dict.setdefault("service_version", service_version)
        return event_dict

    return add_service_context


def setup_logging(settings: Settings, service_version: str | None = None) -> None:
    """
    Configure structlog and the standard library root logger from settings.

    Args:
        settings: Service settings; ``log_level`` and ``json_logs`` pick level and renderer
        service_version: Version stamped on every event next to ``settings.service_name``
    """
    level = getattr(logging, settings.log_level, logging.INFO)

    # Third-party libraries (uvicorn, httpx) still log through the stdlib
    logging.basicConfig(format="%(message)s", level=level, stream=sys.stdout, force=True)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        service_context(settings.service_name, service_version),
        structlog.processors.add_log_level,
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if settings.json_logs:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **initial_context: Any) -> structlog.stdlib.BoundLogger:
    """
    Get a lazily configured logger.

    Binding happens on first use, so module-level loggers pick up the
    configuration applied later by ``setup_logging``.
    """
    if name is not None:
        initial_context["logger"] = name
    return structlog.get_logger(**initial_context)


class LoggerMixin:
    """Gives a class a logger tagged with its name as ``component``."""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        return get_logger(component=type(self).__name__)
