from __future__ import annotations

import logging

import structlog

from config.settings import settings


def configure_logging(level: str | None = None, json: bool | None = None) -> None:
    """Configure structlog for entry points. Library modules only call get_logger."""
    level_name = level or settings.LOG_LEVEL
    use_json = settings.LOG_JSON if json is None else json

    renderer = (
        structlog.processors.JSONRenderer()
        if use_json
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )
