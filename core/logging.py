"""Structured logging for the returns hub.

All modules log through ``get_logger(__name__)`` and pass event fields as
keyword arguments::

    logger = get_logger(__name__)
    logger.info("Routing rule matched", rule_id=rule.id, priority=rule.priority)

Request-scoped fields (the current shop, the return request being routed)
are bound with ``structlog.contextvars`` and merged into every event.
"""

import logging
import sys
from typing import Any, Dict

import structlog

from core.config import LoggingConfig


def configure_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog and the stdlib root logger once at startup."""
    config = config or LoggingConfig()

    renderer = (
        structlog.processors.JSONRenderer()
        if config.json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            _service_context(config.service_name),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, config.level.upper(), logging.INFO),
    )


def _service_context(service_name: str):
    def add_service_context(
        logger: Any, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service_context


def bind_shop(shop: str) -> None:
    """Attach the current shop to every log event in this context."""
    structlog.contextvars.bind_contextvars(shop=shop)


def clear_context() -> None:
    """Drop all request-scoped log fields."""
    structlog.contextvars.clear_contextvars()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
