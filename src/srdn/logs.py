# src/srdn/logs.py
"""CLI logger for srdn, built on the standard logging module.

Progress (info and below) goes to stdout so export maps and build
progress share one stream; warnings and errors go to stderr.
"""

import argparse
import logging
import os
import sys
from collections.abc import Generator
from contextlib import contextmanager, suppress
from typing import Any, TextIO, cast

from .constants import DEFAULT_ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL
from .meta import PROGRAM_ENV, PROGRAM_PACKAGE


# --- Constants ---------------------------------------------------------------

RESET = "\033[0m"
CYAN = "\033[36m"
GRAY = "\033[90m"

TEST_LEVEL = logging.DEBUG - 10  # most verbose
TRACE_LEVEL = logging.DEBUG - 5
SILENT_LEVEL = logging.CRITICAL + 1  # nothing gets through

EXTRA_LEVELS = {"TEST": TEST_LEVEL, "TRACE": TRACE_LEVEL, "SILENT": SILENT_LEVEL}

# accepted by --log-level, most verbose first
LEVEL_ORDER = [
    "test",
    "trace",
    "debug",
    "info",
    "warning",
    "error",
    "critical",
    "silent",
]

# levelname → (color, prefix); levels not listed print bare
TAG_STYLES = {
    "TEST": (GRAY, "[TEST]"),
    "TRACE": (GRAY, "[TRACE]"),
    "DEBUG": (CYAN, "[DEBUG]"),
    "WARNING": ("", "⚠️ "),
    "ERROR": ("", "❌ "),
    "CRITICAL": ("", "💥 "),
}

LOG_LEVEL_ENV_VARS: list[str] = [
    f"{PROGRAM_ENV}_{DEFAULT_ENV_LOG_LEVEL}",
    DEFAULT_ENV_LOG_LEVEL,
]


def colorize(text: str, color: str, *, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled and color else text


def safe_log(msg: str) -> None:
    """Last-resort output when the logger itself is failing."""
    stream = cast("TextIO", sys.__stderr__)
    try:
        print(msg, file=stream)  # noqa: T201
    except Exception:  # noqa: BLE001
        with suppress(Exception):
            stream.write(f"[INTERNAL] {msg}\n")


def _register_levels() -> None:
    for name, number in EXTRA_LEVELS.items():
        if logging.getLevelName(number) != name:
            logging.addLevelName(number, name)
        setattr(logging, name, number)


def level_number(level: str | int) -> int | None:
    """Numeric value of a level name (case-insensitive), or None if unknown."""
    if isinstance(level, int):
        return level
    number = logging.getLevelName(level.upper())
    return number if isinstance(number, int) else None


# --- Formatting and routing --------------------------------------------------


class TagFormatter(logging.Formatter):
    """Prefix each message with its level tag (colored when enabled)."""

    def format(self, record: logging.LogRecord) -> str:
        msg = super().format(record)
        color, tag = TAG_STYLES.get(record.levelname, ("", ""))
        if not tag:
            return msg
        enabled = getattr(record, "enable_color", False)
        return f"{colorize(tag, color, enabled=enabled)} {msg}"


class DualStreamHandler(logging.StreamHandler):  # type: ignore[type-arg]
    """Info and below to stdout; warnings and above to stderr.

    The target stream is looked up on every record, so redirected or
    captured streams are honoured.
    """

    enable_color: bool = False

    def emit(self, record: logging.LogRecord) -> None:
        self.stream = sys.stderr if record.levelno >= logging.WARNING else sys.stdout
        record.enable_color = self.enable_color
        super().emit(record)


# --- App logger --------------------------------------------------------------


class AppLogger(logging.Logger):
    """Logger for the srdn command line."""

    enable_color: bool = False

    def __init__(
        self,
        name: str,
        level: int = logging.NOTSET,
        *,
        enable_color: bool | None = None,
    ) -> None:
        super().__init__(name, level)
        if self.level == logging.NOTSET:
            self.setLevel(self.determine_log_level())
        if enable_color is None:
            enable_color = self.determine_color_enabled()
        self.enable_color = enable_color
        self.propagate = False
        self._handler: DualStreamHandler | None = None

    def _log(  # type: ignore[override]
        self, level: int, msg: str, args: tuple[Any, ...], **kwargs: Any
    ) -> None:
        if self._handler is None or self._handler not in self.handlers:
            self._handler = DualStreamHandler()
            self._handler.setFormatter(TagFormatter("%(message)s"))
            self.addHandler(self._handler)
        # color may be toggled after the handler exists
        self._handler.enable_color = self.enable_color
        super()._log(level, msg, args, **kwargs)

    def setLevel(self, level: int | str) -> None:  # noqa: N802
        """Accept level names in any case."""
        if isinstance(level, str):
            level = level.upper()
        super().setLevel(level)

    @property
    def level_name(self) -> str:
        return logging.getLevelName(self.getEffectiveLevel())

    @staticmethod
    def determine_color_enabled() -> bool:
        """NO_COLOR wins, then FORCE_COLOR, then whether stdout is a terminal."""
        if "NO_COLOR" in os.environ:
            return False
        if os.getenv("FORCE_COLOR", "").lower() in {"1", "true", "yes"}:
            return True
        return sys.stdout.isatty()

    @staticmethod
    def determine_log_level(*, args: argparse.Namespace | None = None) -> str:
        """Resolve log level from CLI → env → default."""
        from_args = getattr(args, "log_level", None)
        if from_args:
            return cast("str", from_args).upper()
        for env_var in LOG_LEVEL_ENV_VARS:
            from_env = os.getenv(env_var)
            if from_env:
                return from_env.upper()
        return DEFAULT_LOG_LEVEL.upper()

    def trace(self, msg: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, **kwargs)

    def _report(self, level: int, msg: str, args: tuple[Any, ...]) -> None:
        # the traceback is noise unless someone is debugging
        if self.isEnabledFor(logging.DEBUG):
            self.log(level, msg, *args, exc_info=True, stacklevel=3)
        else:
            self.log(level, msg, *args)

    def error_if_not_debug(self, msg: str, *args: Any) -> None:
        """Log an error, with the traceback only when debug is enabled."""
        self._report(logging.ERROR, msg, args)

    def critical_if_not_debug(self, msg: str, *args: Any) -> None:
        self._report(logging.CRITICAL, msg, args)

    @contextmanager
    def use_level(self, level: str | int) -> Generator[None, None, None]:
        """Temporarily log at a different level."""
        number = level_number(level)
        if number is None:
            self.error("Unknown log level: %r", level)
            yield
            return

        previous = self.level
        self.setLevel(number)
        try:
            yield
        finally:
            self.setLevel(previous)


# --- Logger initialization ---------------------------------------------------

# extra levels must exist before the first AppLogger resolves its level
_register_levels()

_APP_LOGGER = AppLogger(PROGRAM_PACKAGE)


def get_app_logger() -> AppLogger:
    """Return the configured app logger."""
    return _APP_LOGGER
