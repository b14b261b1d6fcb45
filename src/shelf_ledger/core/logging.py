"""
Structured logging for the shelf ledger.

Usage:
    from shelf_ledger.core.logging import configure_logging, get_logger

    # Once, when the store is bootstrapped
    configure_logging("shelf-ledger", log_level="INFO")

    # In any module
    logger = get_logger(__name__)
    logger.info("movement_applied", code="PRD001", cases=10)
"""

import logging
import sys
from typing import Any, cast

import structlog
from structlog.types import EventDict, Processor

_configured = False


def _service_stamper(service_name: str, env: str | None) -> Processor:
    def stamp(_logger: Any, _method_name: str, event_dict: EventDict) -> EventDict:
        event_dict["service"] = service_name
        if env:
            event_dict["env"] = env
        return event_dict

    return stamp


def configure_logging(
    service_name: str,
    log_level: str = "INFO",
    *,
    env: str | None = None,
    json_output: bool = True,
) -> None:
    """
    Configure structlog on top of the stdlib root logger.

    Idempotent: only the first call takes effect, later calls are ignored
    so that tests and embedding applications can call it freely.

    Args:
        service_name: Added to every entry as ``service``.
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL.
        env: Optional deployment environment added as ``env``.
        json_output: JSON lines when true, human readable console output otherwise.
    """
    global _configured
    if _configured:
        return

    level = getattr(logging, log_level.upper(), logging.INFO)

    renderer: Processor = (
        structlog.processors.JSONRenderer(ensure_ascii=False)
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )

    processors: list[Processor] = [
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        _service_stamper(service_name, env),
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.dict_tracebacks,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)

    _configured = True


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Return a structlog logger, typically ``get_logger(__name__)``."""
    return cast(structlog.BoundLogger, structlog.get_logger(name))
