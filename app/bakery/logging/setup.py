"""Structlog configuration and logger setup.

Configures structlog with context merging, exception formatting and
environment-aware rendering.

Usage:
    from bakery.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("event_name", key="value")

Dependencies:
    - bakery.configuration.settings
"""

import inspect
import logging
from typing import Any, List, Optional

import structlog
from structlog.stdlib import BoundLogger

from bakery.configuration import settings


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structured logging for the translation engine.

    Importing the library never calls this; host applications call it once
    at startup, or configure structlog themselves.

    Args:
        log_level: Level name (DEBUG, INFO, WARNING, ...). Defaults to
            settings.LOG_LEVEL.
        is_production: JSON output when True, console output otherwise.
            Defaults to settings.is_production.

    Returns:
        Configured logger instance
    """
    prod_mode = is_production if is_production is not None else settings.is_production

    structlog.configure(
        processors=_build_processors(prod_mode),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    level_name = (log_level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )

    return structlog.stdlib.get_logger()


def _build_processors(prod_mode: bool) -> List[Any]:
    processors: List[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if prod_mode:
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # ConsoleRenderer formats exc_info itself
        processors.append(structlog.dev.ConsoleRenderer())
    return processors


def get_logger(name: Optional[str] = None) -> BoundLogger:
    """Get a logger instance bound to a name.

    Args:
        name: Optional logger name (typically __name__ in calling module)

    Returns:
        Lazy logger with context; resolved against the structlog
        configuration in effect when it first logs
    """
    if name:
        return structlog.stdlib.get_logger(logger_name=name)

    current_frame = inspect.currentframe()
    if current_frame is None or current_frame.f_back is None:
        return structlog.stdlib.get_logger()

    module = inspect.getmodule(current_frame.f_back)
    if module:
        return structlog.stdlib.get_logger(logger_name=module.__name__)

    return structlog.stdlib.get_logger(logger_name="unknown")


def get_module_logger() -> BoundLogger:
    """Get a logger for the calling module with full path context.

    Binds ``component`` (last dotted segment) and ``module_path``. Nothing
    is configured here, so importing the library leaves the host's logging
    setup untouched.

    Example:
        # In bakery/i18n/service.py
        logger = get_module_logger()
        # context: {"component": "service", "module_path": "bakery.i18n.service"}
    """
    current_frame = inspect.currentframe()
    if current_frame is None or current_frame.f_back is None:
        return structlog.stdlib.get_logger(component="unknown")

    module = inspect.getmodule(current_frame.f_back)
    if module:
        module_name = module.__name__
        return structlog.stdlib.get_logger(
            component=module_name.split(".")[-1],
            module_path=module_name,
        )

    return structlog.stdlib.get_logger(component="unknown")
