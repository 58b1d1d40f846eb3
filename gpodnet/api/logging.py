"""
Rich-enhanced logging configuration for the gpodder.net client.

All library loggers live under the ``gpodnet`` logger; the library itself
never installs handlers. Applications (and the CLI) call
``configure_logging()`` once.

.. warning::
    With ``use_rich=True`` and ``rich_tracebacks=True`` (the defaults),
    ``configure_logging()`` installs a process-wide Rich traceback hook.
    Pass ``rich_tracebacks=False`` when embedding the client in another
    application.

Usage:
    from gpodnet.api.logging import configure_logging, get_logger

    configure_logging(level="debug", file_path="logs/gpodnet.log")
    logger = get_logger("sync")
    logger.info("[green]✓[/green] Subscriptions in sync")
"""

import logging
import sys
from pathlib import Path
from typing import Literal

from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

from gpodnet.utils.ui import console as rich_console

# Root of every library logger (gpodnet.api.transport, gpodnet.api.client, ...)
MODULE_LOGGER_NAME = "gpodnet"

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

LogLevel = Literal["debug", "info", "warning", "error", "critical"]

_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


def _get_log_level(level: LogLevel | int) -> int:
    """Convert level string to logging constant."""
    if isinstance(level, int):
        return level
    return _LEVELS.get(level.lower(), logging.INFO)


def configure_logging(
    level: LogLevel | int = "info",
    console: bool = True,
    file_path: str | Path | None = None,
    file_log_level: LogLevel | int | None = None,
    format_string: str | None = None,
    use_rich: bool = True,
    rich_tracebacks: bool = True,
    show_path: bool = False,
    show_time: bool = True,
    markup: bool = True,
) -> logging.Logger:
    """
    Configure logging for the ``gpodnet`` logger tree.

    Calling it again replaces the handlers installed by the previous call.

    Args:
        level: Log level for console output
        console: Whether to enable console logging
        file_path: Optional file path for file logging
        file_log_level: Log level for file output (defaults to level)
        format_string: Custom format string for plain console and file output
        use_rich: Use RichHandler for console output
        rich_tracebacks: Install Rich tracebacks process-wide
        show_path: Show file path in console logs
        show_time: Show timestamp in console logs
        markup: Enable rich markup in log messages

    Returns:
        The configured ``gpodnet`` logger
    """
    log_level = _get_log_level(level)
    file_level = _get_log_level(file_log_level) if file_log_level is not None else log_level

    if use_rich and rich_tracebacks:
        install_rich_traceback(
            console=rich_console,
            show_locals=False,
            width=rich_console.width,
            extra_lines=3,
            theme="monokai",
            word_wrap=True,
        )

    logger = logging.getLogger(MODULE_LOGGER_NAME)
    logger.setLevel(min(log_level, file_level) if file_path else log_level)
    logger.handlers.clear()

    if console:
        console_handler: logging.Handler
        if use_rich:
            console_handler = RichHandler(
                level=log_level,
                console=rich_console,
                show_time=show_time,
                show_path=show_path,
                rich_tracebacks=rich_tracebacks,
                markup=markup,
                log_time_format="[%X]",
                keywords=["gpodder", "GET", "PUT", "POST", "device", "podcast", "episode", "subscriptions"],
            )
        else:
            console_handler = logging.StreamHandler(sys.stdout)
            console_handler.setLevel(log_level)
            console_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        logger.addHandler(console_handler)

    # File output always uses plain formatting
    if file_path:
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(file_path, encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))
        logger.addHandler(file_handler)

    return logger


def get_logger(name: str | None = None) -> logging.Logger:
    """
    Get a logger below ``gpodnet``.

    Example:
        get_logger("sync")  # -> gpodnet.sync
    """
    if name:
        return logging.getLogger(f"{MODULE_LOGGER_NAME}.{name}")
    return logging.getLogger(MODULE_LOGGER_NAME)


def set_level(level: LogLevel | int) -> None:
    """Change the level of the ``gpodnet`` logger and its handlers."""
    log_level = _get_log_level(level)
    logger = logging.getLogger(MODULE_LOGGER_NAME)
    logger.setLevel(log_level)
    for handler in logger.handlers:
        handler.setLevel(log_level)


def enable_debug_logging() -> None:
    """Enable debug logging with rich output for troubleshooting."""
    configure_logging(level="debug", use_rich=True, rich_tracebacks=True)


class LogContext:
    """
    Context manager for temporarily changing the log level.

    Example:
        with LogContext("debug"):
            client.get_subscription_changes(since=cursor)
    """

    def __init__(self, level: LogLevel | int):
        self._target_level = _get_log_level(level)
        self._original_level: int | None = None

    def __enter__(self) -> "LogContext":
        logger = logging.getLogger(MODULE_LOGGER_NAME)
        self._original_level = logger.level
        logger.setLevel(self._target_level)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._original_level is not None:
            logging.getLogger(MODULE_LOGGER_NAME).setLevel(self._original_level)


__all__ = [
    "MODULE_LOGGER_NAME",
    "configure_logging",
    "enable_debug_logging",
    "get_logger",
    "LogContext",
    "set_level",
]
