"""Logging utilities for id3kit.

This module registers a custom FIT log level for pipeline stage events and
provides ``enable_logging()`` for opting in to id3kit log output with loguru.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    that ``enable_logging()`` is the only place id3kit output reaches stderr.
    If handler 0 was already removed by the application, the removal is a
    no-op (the ``ValueError`` is suppressed).
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

# Pipeline stages (load, split, build, predict, evaluate) log at FIT.
FIT_LEVEL: Final[str] = "FIT"
FIT_LEVEL_NUMBER: Final[int] = 25  # Between INFO (20) and WARNING (30)


def _register_fit_level() -> None:
    """Register the FIT custom log level with loguru.

    Registers the level when it does not exist yet. If it already exists with
    a different numeric value, emits a UserWarning because loguru does not
    permit changing the numeric value of an existing level.
    """
    try:
        existing_level = logger.level(FIT_LEVEL)
    except ValueError:
        logger.level(FIT_LEVEL, no=FIT_LEVEL_NUMBER, icon="🌳")
    else:
        if existing_level.no != FIT_LEVEL_NUMBER:
            msg = f"FIT level already registered with numeric value {existing_level.no}, expected {FIT_LEVEL_NUMBER}"
            warnings.warn(msg, stacklevel=2)


_register_fit_level()

type LogLevel = Literal[
    "TRACE",
    "DEBUG",
    "INFO",
    "FIT",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

type LogFormat = Literal["short", "full"]

_SHORT_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{function}</cyan> - "
    "<level>{message}</level> {extra}"
)
_FULL_FORMAT: Final[str] = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level> {extra}"
)


class LoggingHandle:
    """Handle for managing the lifecycle of one id3kit log handler.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     tree = build_tree(dataset)

        >>> handle = enable_logging()  # doctest: +SKIP
        >>> handle.disable()  # doctest: +SKIP
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        """Initialize the logging handle.

        Args:
            handler_id (int): The loguru handler ID from logger.add().
        """
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove the handler associated with this handle.

        When this is the last active handle, ``logger.disable("id3kit")`` is
        called so id3kit records stop flowing to any sink.
        """
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        """Enter context manager.

        Returns:
            LoggingHandle: This handle instance.
        """
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        """Exit context manager and disable logging."""
        self.disable()


def enable_logging(
    *,
    level: LogLevel = FIT_LEVEL,
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Enable id3kit logging to stderr.

    Each call returns an independent handle that owns its own handler; use the
    handle's disable() method or the context manager protocol to clean up.

    Args:
        level (LogLevel): Minimum log level to display. Defaults to "FIT",
            which shows one line per pipeline stage. Use "DEBUG" to see every
            split decision the tree builder makes.
        log_format (LogFormat): "short" shows the function name only; "full"
            adds module and line number.

    Returns:
        LoggingHandle: Independent handle for managing the logging handler.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_id3kit_record,
        format=_SHORT_FORMAT if log_format == "short" else _FULL_FORMAT,
    )
    return LoggingHandle(handler_id)


def _is_id3kit_record(record: Record) -> bool:
    """Pass only records emitted from inside the id3kit package.

    Args:
        record (Record): The loguru Record object to filter.

    Returns:
        bool: True if the record comes from an id3kit module.
    """
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
