"""Logging configuration for blueprint using Loguru.

Examples
--------
Basic usage:

>>> from blueprint.logging import get_logger
>>> logger = get_logger(__name__)
>>> logger.debug("Schema compiled", fields=3)

Configure logging globally::

    from blueprint.logging import configure_logging
    configure_logging(level="DEBUG", format="rich")
"""

from __future__ import annotations

import logging
import os
import sys
from contextlib import suppress
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

from loguru import logger
from rich.logging import RichHandler

if TYPE_CHECKING:
    import types
    from pathlib import Path

    from loguru import Logger

LogLevel = Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["console", "json", "structured", "rich"]

_CURRENT_CONFIG: dict | None = None
_HANDLER_IDS: list[int] = []
_LOGURU_DEFAULT_HANDLER_ID = 0
_DEFAULT_HANDLER_REMOVED = False


def configure_logging(
    level: LogLevel = "WARNING",
    format: LogFormat = "structured",
    output_file: str | Path | None = None,
    use_color: bool = True,
    include_timestamp: bool = True,
    force_reconfigure: bool = False,
    enable_stdlib_bridge: bool = False,
) -> None:
    """Configure global logging for blueprint.

    Idempotent: calling it again with the same settings leaves the existing
    handlers in place.

    Parameters
    ----------
    level : LogLevel, default="WARNING"
        Minimum log level to output
    format : LogFormat, default="structured"
        Output format:
        - "console": plain single-line output
        - "json": serialized records for log aggregation
        - "structured": colored loguru format with module/function/line
        - "rich": Rich console handler
    output_file : str | Path | None, default=None
        Optional file that receives JSON records in addition to stderr
    use_color : bool, default=True
        Use ANSI colors in the structured format (auto-disabled for non-TTY)
    include_timestamp : bool, default=True
        Include a timestamp in console and structured output
    force_reconfigure : bool, default=False
        Reinstall handlers even when the settings did not change
    enable_stdlib_bridge : bool, default=False
        Route stdlib ``logging`` records through loguru
    """
    global _CURRENT_CONFIG, _DEFAULT_HANDLER_REMOVED

    current_config = {
        "level": level,
        "format": format,
        "output_file": str(output_file) if output_file else None,
        "use_color": use_color,
        "include_timestamp": include_timestamp,
        "enable_stdlib_bridge": enable_stdlib_bridge,
    }

    if not force_reconfigure and current_config == _CURRENT_CONFIG:
        return

    # loguru ships a DEBUG stderr handler that would bypass the configured level
    if not _DEFAULT_HANDLER_REMOVED:
        with suppress(ValueError):
            logger.remove(_LOGURU_DEFAULT_HANDLER_ID)
        _DEFAULT_HANDLER_REMOVED = True

    # Only remove handlers we added so pytest's capture handlers survive
    for handler_id in _HANDLER_IDS:
        with suppress(ValueError):
            logger.remove(handler_id)
    _HANDLER_IDS.clear()

    if format == "rich":
        rich_handler = RichHandler(
            rich_tracebacks=True,
            markup=True,
            show_time=include_timestamp,
            show_level=True,
            show_path=True,
        )
        handler_id = logger.add(sink=rich_handler, level=level, format="{message}")
    elif format == "json":
        handler_id = logger.add(sink=sys.stderr, level=level, serialize=True)
    elif format == "structured":
        timestamp_fmt = "<green>{time:YYYY-MM-DD HH:mm:ss}</green> " if include_timestamp else ""
        colorize = use_color and sys.stderr.isatty()
        color_level = "<level>{level: <8}</level>" if colorize else "{level: <8}"
        structured_format = (
            f"{timestamp_fmt}[{color_level}]"
            "<cyan>{name}:{function}:{line}</cyan> | <level>{message}</level>"
        )
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=structured_format,
            colorize=colorize,
        )
    else:  # console
        timestamp_fmt = "{time:YYYY-MM-DD HH:mm:ss} " if include_timestamp else ""
        handler_id = logger.add(
            sink=sys.stderr,
            level=level,
            format=f"{timestamp_fmt}{{level: <8}} | {{name}} | {{message}}",
            colorize=False,
        )
    _HANDLER_IDS.append(handler_id)

    if output_file:
        handler_id = logger.add(sink=str(output_file), level=level, serialize=True)
        _HANDLER_IDS.append(handler_id)

    if enable_stdlib_bridge:
        enable_stdlib_logging_bridge()

    _CURRENT_CONFIG = current_config


@lru_cache(maxsize=128)
def get_logger(name: str) -> Logger:
    """Get a logger bound with the given module name.

    Configures logging from the environment on first use if
    :func:`configure_logging` has not been called yet.

    Parameters
    ----------
    name : str
        Logger name, typically ``__name__`` of the calling module

    Returns
    -------
    loguru.Logger
        Logger instance bound with ``module=name``
    """
    _ensure_configured()
    return logger.bind(module=name)


def enable_stdlib_logging_bridge() -> None:
    """Redirect stdlib ``logging`` records to loguru."""

    class InterceptHandler(logging.Handler):
        def emit(self, record: logging.LogRecord) -> None:
            level: str | int
            try:
                level = logger.level(record.levelname).name
            except ValueError:
                level = record.levelno

            # Walk out of the logging module to find the real caller
            frame: types.FrameType | None = sys._getframe(6)
            depth = 6
            while frame and frame.f_code.co_filename == logging.__file__:
                frame = frame.f_back
                depth += 1

            logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)


def _ensure_configured() -> None:
    """Apply the environment-driven default configuration once."""
    if _CURRENT_CONFIG is None:
        level = os.getenv("BLUEPRINT_LOG_LEVEL", "WARNING").upper()
        format_type = os.getenv("BLUEPRINT_LOG_FORMAT", "structured").lower()
        configure_logging(level=level, format=format_type)  # type: ignore[arg-type]
