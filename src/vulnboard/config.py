"""Configuration loading for vulnboard sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from vulnboard.board_store import SortKey
from vulnboard.dispatcher import DEFAULT_MIN_TITLE_LENGTH
from vulnboard.logging import (
    DEFAULT_BACKUP_COUNT,
    DEFAULT_LOG_DIR,
    DEFAULT_LOG_FILE,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_BYTES,
    LoggingConfig,
)

CONFIG_FILENAME = "vulnboard.yaml"


class ConfigError(Exception):
    """Raised when configuration is invalid or missing."""


@dataclass
class BoardSettingsConfig:
    """Initial board state."""

    default_sort: SortKey = SortKey.DATE
    seed_default: bool = True


@dataclass
class ValidationConfig:
    """Form validation rules applied by the dispatcher."""

    min_title_length: int = DEFAULT_MIN_TITLE_LENGTH


@dataclass
class BoardConfig:
    """vulnboard configuration.

    Every section is optional; an empty file yields the defaults.
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    board: BoardSettingsConfig = field(default_factory=BoardSettingsConfig)
    validation: ValidationConfig = field(default_factory=ValidationConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BoardConfig:
        """Create config from dictionary.

        Args:
            data: Configuration dictionary from YAML.

        Returns:
            Parsed configuration object.

        Raises:
            ConfigError: If a value has the wrong shape or is out of range.
        """
        logging_data = _section(data, "logging")
        logging_config = LoggingConfig(
            level=str(logging_data.get("level", DEFAULT_LOG_LEVEL)).upper(),
            dir=str(logging_data.get("dir", DEFAULT_LOG_DIR)),
            file=str(logging_data.get("file", DEFAULT_LOG_FILE)),
            console=bool(logging_data.get("console", True)),
            max_bytes=_positive_int(logging_data, "logging.max_bytes", DEFAULT_MAX_BYTES),
            backup_count=_positive_int(
                logging_data, "logging.backup_count", DEFAULT_BACKUP_COUNT
            ),
        )

        board_data = _section(data, "board")
        sort_value = board_data.get("default_sort", SortKey.DATE.value)
        try:
            default_sort = SortKey(sort_value)
        except ValueError as e:
            valid = ", ".join(key.value for key in SortKey)
            raise ConfigError(f"Invalid board.default_sort '{sort_value}' (use {valid})") from e
        board = BoardSettingsConfig(
            default_sort=default_sort,
            seed_default=bool(board_data.get("seed_default", True)),
        )

        validation_data = _section(data, "validation")
        min_title_length = _positive_int(
            validation_data, "validation.min_title_length", DEFAULT_MIN_TITLE_LENGTH
        )

        return cls(
            logging=logging_config,
            board=board,
            validation=ValidationConfig(min_title_length=min_title_length),
        )

    def with_env_overrides(self) -> BoardConfig:
        """Apply VULNBOARD_LOG_LEVEL / VULNBOARD_LOG_DIR on top of this config."""
        level = os.environ.get("VULNBOARD_LOG_LEVEL")
        log_dir = os.environ.get("VULNBOARD_LOG_DIR")
        if level:
            self.logging.level = level.upper()
        if log_dir:
            self.logging.dir = log_dir
        return self

    @classmethod
    def from_env(cls) -> BoardConfig:
        """Default configuration with environment overrides applied."""
        return cls().with_env_overrides()


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigError(f"Section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def _positive_int(section: dict[str, Any], key: str, default: int) -> int:
    value = section.get(key.rpartition(".")[2], default)
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError(f"{key} must be a positive integer, got {value!r}")
    return value


def load_config(config_path: Path | str) -> BoardConfig:
    """Load vulnboard configuration from a YAML file.

    Args:
        config_path: Path to vulnboard.yaml file.

    Returns:
        Parsed configuration object with environment overrides applied.

    Raises:
        ConfigError: If file doesn't exist or is invalid.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Configuration must be a YAML mapping, got {type(data).__name__}")

    return BoardConfig.from_dict(data).with_env_overrides()


def find_config(start_path: Path | str | None = None) -> Path | None:
    """Find vulnboard.yaml by walking up the directory tree.

    Args:
        start_path: Starting directory. Defaults to current directory.

    Returns:
        Path to the config file, or None if there is none.
    """
    current = Path.cwd() if start_path is None else Path(start_path)
    current = current.resolve()

    for directory in (current, *current.parents):
        config_path = directory / CONFIG_FILENAME
        if config_path.exists():
            return config_path
    return None
