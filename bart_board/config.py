"""Configuration loader for the BART terminal board."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any

from dotenv import find_dotenv, load_dotenv
import yaml

from bart_board.data.bart_client import BART_API_BASE

DEFAULT_CONFIG_PATH = "config/config.yaml"
API_KEY_ENV = "BART_API_KEY"
LOG_FILE_NAME = "bart_board.log"


class ConfigError(ValueError):
    """Raised when the credential is missing or the config file is malformed."""


class MissingCredentialError(ConfigError):
    """Raised when BART_API_KEY is not set."""


@dataclass(frozen=True)
class BartConfig:
    """BART API configuration."""

    api_key: str
    base_url: str = BART_API_BASE
    timeout_seconds: float = 10.0
    poll_interval_seconds: float = 5.0
    station: str | None = None


@dataclass(frozen=True)
class DisplayConfig:
    """Terminal layout configuration."""

    column_width: int = 70
    cursor_marker: str = ">"


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"
    log_dir: str = "logs/"


@dataclass(frozen=True)
class AppConfig:
    """Top-level application configuration."""

    bart: BartConfig
    display: DisplayConfig
    log: LoggingConfig


def _require_key(mapping: dict[str, Any], key: str, context: str) -> Any:
    if key not in mapping:
        raise ConfigError(f"Missing required key '{key}' in {context} config")
    return mapping[key]


def _read_yaml(path: str) -> dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as handle:
            data = yaml.safe_load(handle)
    except FileNotFoundError as exc:
        raise ConfigError(f"Config file not found: {path}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Config file is not valid YAML: {path}") from exc

    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a mapping at the top level")
    return data


def _number(value: Any, key: str, kind: type = float) -> Any:
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"'{key}' must be a number, got {value!r}") from exc


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    section = _require_key(data, name, name)
    if not isinstance(section, dict):
        raise ConfigError(f"'{name}' config must be a mapping")
    return section


def load_config(path: str | None = None, station: str | None = None) -> AppConfig:
    """Load application configuration from the environment and an optional YAML file.

    With no explicit ``path`` the default ``config/config.yaml`` is used when it exists,
    otherwise built-in defaults apply. The API key always comes from ``BART_API_KEY``.
    """
    load_dotenv(find_dotenv(usecwd=True))
    api_key = os.environ.get(API_KEY_ENV, "").strip()
    if not api_key:
        raise MissingCredentialError(f"{API_KEY_ENV} environment variable is not set")

    if path is None and Path(DEFAULT_CONFIG_PATH).exists():
        path = DEFAULT_CONFIG_PATH

    if path is None:
        return AppConfig(
            bart=BartConfig(api_key=api_key, station=station),
            display=DisplayConfig(),
            log=LoggingConfig(),
        )

    data = _read_yaml(path)
    bart_section = _section(data, "bart")
    display_section = _section(data, "display")
    logging_section = _section(data, "logging")

    bart = BartConfig(
        api_key=api_key,
        base_url=_require_key(bart_section, "base_url", "bart"),
        timeout_seconds=_number(
            bart_section.get("timeout_seconds", BartConfig.timeout_seconds), "timeout_seconds"
        ),
        poll_interval_seconds=_number(
            _require_key(bart_section, "poll_interval_seconds", "bart"), "poll_interval_seconds"
        ),
        station=station,
    )
    if bart.poll_interval_seconds <= 0:
        raise ConfigError("'poll_interval_seconds' must be positive")

    display = DisplayConfig(
        column_width=_number(
            _require_key(display_section, "column_width", "display"), "column_width", int
        ),
        cursor_marker=str(display_section.get("cursor_marker", DisplayConfig.cursor_marker)),
    )
    if display.column_width <= 0:
        raise ConfigError("'column_width' must be positive")
    if not display.cursor_marker:
        raise ConfigError("'cursor_marker' must not be empty")

    log = LoggingConfig(
        level=_require_key(logging_section, "level", "logging"),
        log_dir=_require_key(logging_section, "log_dir", "logging"),
    )

    return AppConfig(bart=bart, display=display, log=log)


def configure_logging(config: LoggingConfig) -> Path:
    """Send log records to a file under ``log_dir``; the terminal belongs to the UI."""
    log_dir = Path(config.log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_path = log_dir / LOG_FILE_NAME
    level = logging.getLevelName(str(config.level).upper())
    if not isinstance(level, int):
        raise ConfigError(f"Unknown logging level: {config.level}")
    logging.basicConfig(
        filename=str(log_path),
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return log_path
