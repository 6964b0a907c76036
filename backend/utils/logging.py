"""
Structured logging configuration using structlog.
"""

import logging
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.typing import EventDict

from core.config import Settings, settings as default_settings

# Loggers of libraries that are chatty at INFO
_NOISY_LOGGERS = (
    "aiohttp.access",
    "aiosqlite",
    "asyncio",
    "sqlalchemy.engine",
    "sqlalchemy.pool",
    "uvicorn.access",
)


def add_component_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    """Tag events with the top-level package of the emitting logger (services, api, db, ...)."""
    name = event_dict.get("logger")
    if name and "component" not in event_dict:
        event_dict["component"] = name.split(".", 1)[0]
    return event_dict


def setup_logging(settings: Optional[Settings] = None):
    """Configure structured logging with structlog."""
    settings = settings or default_settings
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    # Configure standard library logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=level,
    )

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("fastapi").setLevel(logging.INFO)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        add_component_context,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if settings.debug:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    if settings.log_file_path:
        log_path = Path(settings.log_file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(level)
        file_handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(processor=structlog.processors.JSONRenderer())
        )
        logging.getLogger().addHandler(file_handler)


def get_logger(name: str = None, **initial_values) -> structlog.stdlib.BoundLogger:
    """Get a structured logger with optional initial context."""
    if name is None:
        import inspect

        frame = inspect.currentframe().f_back
        name = Path(frame.f_code.co_filename).stem

    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger
