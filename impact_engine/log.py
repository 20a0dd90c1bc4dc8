"""
Structured logging setup.

Call configure_logging() once at process start (the API and CLI do);
modules get loggers through get_logger(__name__).
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional

import structlog
from structlog.types import EventDict, Processor

from .settings import get_settings


def add_severity(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict["severity"] = method_name.upper()
    return event_dict


def add_component(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    # "impact_engine.mitigation" -> "mitigation"
    name = event_dict.get("logger") or getattr(logger, "name", "") or ""
    if name.startswith("impact_engine."):
        event_dict.setdefault("component", name.split(".", 1)[1])
    return event_dict


@contextmanager
def scenario_context(
    scenario_id: str, operation: str, strategy: Optional[str] = None
) -> Iterator[None]:
    """Bind scenario fields to every log line emitted inside the block."""
    fields = {"scenario_id": scenario_id, "operation": operation}
    if strategy:
        fields["strategy"] = strategy
    with structlog.contextvars.bound_contextvars(**fields):
        yield


def configure_logging() -> None:
    settings = get_settings()

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
    )

    if settings.log_format == "json":
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_severity,
            add_component,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
