import logging
from pathlib import Path

import pytest

from codesymphony import logging_utils
from codesymphony.logging_utils import configure_logging, get_log_dir, get_log_path, log_exception


def test_log_dir_uses_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CODESYMPHONY_LOG_DIR", str(tmp_path))
    assert get_log_dir() == tmp_path
    assert get_log_path() == tmp_path / "codesymphony.log"


def test_debug_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("CODESYMPHONY_DEBUG", raising=False)
    assert not logging_utils.debug_enabled()
    monkeypatch.setenv("CODESYMPHONY_DEBUG", "1")
    assert logging_utils.debug_enabled()


def test_log_exception_appends_traceback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CODESYMPHONY_LOG_DIR", str(tmp_path / "nested"))
    try:
        raise ValueError("boom")
    except ValueError as exc:
        path = log_exception("demo", exc)

    assert path == tmp_path / "nested" / "codesymphony.log"
    text = path.read_text(encoding="utf-8")
    assert "demo failed: ValueError: boom" in text
    assert "Traceback" in text


def test_configure_logging_adds_file_handler(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CODESYMPHONY_LOG_DIR", str(tmp_path))
    logger = logging.getLogger("codesymphony")
    saved = list(logger.handlers)
    try:
        configure_logging(force=True)
        file_handlers = [h for h in logger.handlers if isinstance(h, logging.FileHandler)]
        assert [Path(h.baseFilename) for h in file_handlers] == [tmp_path / "codesymphony.log"]
        assert logger.propagate
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
        for handler in saved:
            logger.addHandler(handler)
