"""Logging for vulnboard sessions.

Every component logs under the ``vulnboard`` logger tree; setup_logging()
attaches a rotating file handler (and, for interactive use, a console handler)
to that tree according to a LoggingConfig.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "vulnboard"

DEFAULT_LOG_DIR = "logs"
DEFAULT_LOG_FILE = "vulnboard.log"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_MAX_BYTES = 2 * 1024 * 1024  # 2MB
DEFAULT_BACKUP_COUNT = 3

# Board titles are free text; keep log lines on one screen row
TITLE_LOG_LENGTH = 80

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


@dataclass
class LoggingConfig:
    """The ``logging`` section of vulnboard.yaml."""

    level: str = DEFAULT_LOG_LEVEL
    dir: str = DEFAULT_LOG_DIR
    file: str = DEFAULT_LOG_FILE
    console: bool = True
    max_bytes: int = DEFAULT_MAX_BYTES
    backup_count: int = DEFAULT_BACKUP_COUNT

    @property
    def path(self) -> Path:
        """Full path of the active log file."""
        return Path(self.dir) / self.file


def setup_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """Route the vulnboard logger tree to a rotating log file.

    Handlers from a previous call are closed and replaced, so a session can
    reconfigure logging after loading its config file.

    Args:
        config: Logging settings. Defaults to LoggingConfig().

    Returns:
        The ``vulnboard`` root logger.
    """
    config = config if config is not None else LoggingConfig()
    level = getattr(logging, config.level.upper(), logging.INFO)

    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(level)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    log_path = config.path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handlers: list[logging.Handler] = [
        RotatingFileHandler(
            log_path,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
    ]
    if config.console:
        handlers.append(logging.StreamHandler())

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.info("Logging to %s at %s", log_path, logging.getLevelName(level))
    return root


def get_logger(component: str) -> logging.Logger:
    """Logger for a vulnboard component, e.g. ``get_logger("dispatcher")``."""
    if component == ROOT_LOGGER or component.startswith(f"{ROOT_LOGGER}."):
        return logging.getLogger(component)
    return logging.getLogger(f"{ROOT_LOGGER}.{component}")


def truncate_output(text: str, max_length: int = TITLE_LOG_LENGTH) -> str:
    """Shorten free text (titles, descriptions) for a log line."""
    if len(text) <= max_length:
        return text
    return text[:max_length] + f"... [truncated, {len(text) - max_length} more chars]"
