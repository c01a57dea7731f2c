"""Logging setup for the command line and services."""

import logging
import logging.handlers
from pathlib import Path
from typing import List

from ..config.models import LoggingConfig

# Libraries that log every request or event loop detail at INFO/DEBUG
QUIET_LOGGERS = ("aiohttp", "asyncio")


def _build_handlers(config: LoggingConfig) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.file:
        log_path = Path(config.file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=config.max_size_mb * 1024 * 1024,
                backupCount=config.backup_count,
                encoding="utf-8",
            )
        )
    return handlers


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger from the ``logging`` config section.

    Replaces existing root handlers with a console handler and, when
    ``config.file`` is set, a rotating file handler.

    Args:
        config: Logging configuration.
    """
    level = getattr(logging, config.level)
    formatter = logging.Formatter(config.format)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    for handler in _build_handlers(config):
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    logging.getLogger(__name__).debug(f"Logging configured with level {config.level}")


class LoggerMixin:
    """Mixin class that provides logging functionality."""

    @property
    def logger(self) -> logging.Logger:
        """Logger named after the concrete class."""
        return logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
