from __future__ import annotations

import logging
import os
import sys
import traceback
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

_LOGGER = logging.getLogger("codesymphony.logging")
_PACKAGE_LOGGER = "codesymphony"

LOG_DIR_ENV = "CODESYMPHONY_LOG_DIR"
DEBUG_ENV = "CODESYMPHONY_DEBUG"
LOG_FILE_NAME = "codesymphony.log"

_CONSOLE_FORMAT = "%(emoji)s %(name)s: %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"
_FILE_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_EMOJI: Mapping[int, str] = MappingProxyType(
    {
        logging.DEBUG: "🐛",
        logging.INFO: "🎵",
        logging.WARNING: "⚠️",
        logging.ERROR: "❌",
        logging.CRITICAL: "💥",
    }
)

_configured = False


class _EmojiFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        record.emoji = _EMOJI.get(record.levelno, "")
        return super().format(record)


def debug_enabled() -> bool:
    return bool(os.environ.get(DEBUG_ENV))


def get_log_dir() -> Path:
    override = os.environ.get(LOG_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".cache" / "codesymphony" / "logs"


def get_log_path() -> Path:
    return get_log_dir() / LOG_FILE_NAME


def _console_handler() -> logging.Handler:
    handler = logging.StreamHandler(stream=sys.__stderr__)
    handler.setLevel(logging.DEBUG if debug_enabled() else logging.WARNING)
    handler.setFormatter(_EmojiFormatter(_CONSOLE_FORMAT))
    return handler


def _file_handler() -> logging.Handler:
    path = get_log_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT, datefmt=_FILE_DATE_FORMAT))
    return handler


def configure_logging(*, force: bool = False) -> None:
    """Attach console and file handlers to the ``codesymphony`` logger once.

    The console handler is skipped when the root logger already has
    handlers (an app or test harness owns the console), unless ``force``.
    Records still propagate so those handlers see them.
    """

    global _configured
    if _configured and not force:
        return

    package_logger = logging.getLogger(_PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    if force:
        for handler in list(package_logger.handlers):
            package_logger.removeHandler(handler)
            handler.close()

    if force or not logging.getLogger().handlers:
        package_logger.addHandler(_console_handler())
    try:
        package_logger.addHandler(_file_handler())
    except OSError as exc:
        _LOGGER.warning("File logging disabled (%s): %s", get_log_dir(), exc)

    package_logger.propagate = True
    _configured = True


def log_exception(context: str, exc: BaseException) -> Path | None:
    """Append ``exc`` with its traceback to the log file; returns the path written."""

    path = get_log_path()
    stamp = datetime.now().isoformat(timespec="seconds")
    lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(f"[{stamp}] {context} failed: {type(exc).__name__}: {exc}\n")
            handle.writelines(lines)
            handle.write("\n")
    except OSError as log_exc:
        _LOGGER.warning("Could not write %s: %s", path, log_exc, exc_info=True)
        return None
    return path
