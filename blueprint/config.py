"""Configuration for blueprint.

Settings come from ``blueprint.toml`` or the ``[tool.blueprint]`` table of
``pyproject.toml``; environment variables override file values.

Example ``pyproject.toml``::

    [tool.blueprint]
    validator = "fallback"

    [tool.blueprint.logging]
    level = "DEBUG"
    format = "rich"

Environment overrides::

    export BLUEPRINT_VALIDATOR=pydantic
    export BLUEPRINT_LOG_LEVEL=DEBUG
    export BLUEPRINT_LOG_FORMAT=json
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Literal, get_args

from blueprint.exceptions import ConfigurationError

ValidatorChoice = Literal["auto", "pydantic", "fallback"]

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_LOG_FORMATS = ("console", "json", "structured", "rich")

CONFIG_FILENAMES = ("blueprint.toml", "pyproject.toml")


@dataclass(frozen=True, slots=True)
class LoggingConfig:
    """Logging settings passed to :func:`blueprint.logging.configure_logging`."""

    level: str = "WARNING"
    format: str = "structured"
    output_file: str | None = None

    def __post_init__(self) -> None:
        if self.level.upper() not in _LOG_LEVELS:
            raise ConfigurationError("logging.level", f"must be one of: {', '.join(_LOG_LEVELS)}")
        if self.format not in _LOG_FORMATS:
            raise ConfigurationError(
                "logging.format", f"must be one of: {', '.join(_LOG_FORMATS)}"
            )


@dataclass(frozen=True, slots=True)
class BlueprintConfig:
    """Top-level blueprint settings.

    Attributes
    ----------
    validator : ValidatorChoice, default="auto"
        Which schema validator to use. ``auto`` picks pydantic when it can be
        imported and the presence-only fallback otherwise.
    logging : LoggingConfig
        Logging settings
    """

    validator: ValidatorChoice = "auto"
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self) -> None:
        choices = get_args(ValidatorChoice)
        if self.validator not in choices:
            raise ConfigurationError("validator", f"must be one of: {', '.join(choices)}")


def load_config(path: str | Path | None = None) -> BlueprintConfig:
    """Load configuration from file and environment.

    Parameters
    ----------
    path : str | Path | None
        Explicit config file. When omitted, ``BLUEPRINT_CONFIG_PATH`` is
        consulted, then ``blueprint.toml`` and ``pyproject.toml`` in the
        current directory. A missing file means defaults.

    Returns
    -------
    BlueprintConfig
        Parsed configuration with environment overrides applied

    Raises
    ------
    ConfigurationError
        If the file cannot be parsed or holds invalid values
    FileNotFoundError
        If an explicit ``path`` does not exist
    """
    config_path = _find_config_file(path)
    data = _read_section(config_path) if config_path else {}
    config = _parse_config(data)
    return _apply_env_overrides(config)


def _find_config_file(path: str | Path | None) -> Path | None:
    if path:
        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        return config_path

    if env_path := os.getenv("BLUEPRINT_CONFIG_PATH"):
        config_path = Path(env_path)
        if config_path.exists():
            return config_path

    for name in CONFIG_FILENAMES:
        candidate = Path(name)
        if candidate.exists():
            return candidate
    return None


def _read_section(config_path: Path) -> dict[str, Any]:
    try:
        with config_path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(str(config_path), f"invalid TOML: {e}") from e

    if "tool" in data and "blueprint" in data["tool"]:
        return data["tool"]["blueprint"]
    if config_path.name == "pyproject.toml":
        return {}
    # blueprint.toml may use flat top-level keys
    return data


def _parse_config(data: dict[str, Any]) -> BlueprintConfig:
    logging_data = data.get("logging", {})
    if not isinstance(logging_data, dict):
        raise ConfigurationError("logging", "must be a table")

    unknown = set(logging_data) - {"level", "format", "output_file"}
    if unknown:
        raise ConfigurationError("logging", f"unknown keys: {', '.join(sorted(unknown))}")

    return BlueprintConfig(
        validator=data.get("validator", "auto"),
        logging=LoggingConfig(**logging_data),
    )


def _apply_env_overrides(config: BlueprintConfig) -> BlueprintConfig:
    if validator := os.getenv("BLUEPRINT_VALIDATOR"):
        config = replace(config, validator=validator.lower())  # type: ignore[arg-type]

    logging_config = config.logging
    if level := os.getenv("BLUEPRINT_LOG_LEVEL"):
        logging_config = replace(logging_config, level=level.upper())
    if format_type := os.getenv("BLUEPRINT_LOG_FORMAT"):
        logging_config = replace(logging_config, format=format_type.lower())
    if output_file := os.getenv("BLUEPRINT_LOG_FILE"):
        logging_config = replace(logging_config, output_file=output_file)

    return replace(config, logging=logging_config)
