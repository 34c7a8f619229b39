from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from spatial_navigation.logging_utils import (
    LOG_DIR_ENV_VAR,
    LOGGER_NAME,
    build_rotating_file_handler,
    configure_logging,
    resolve_log_level,
    resolve_logs_dir,
)


def test_resolve_logs_dir_prefers_env_override(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(LOG_DIR_ENV_VAR, str(tmp_path / "custom"))

    target = resolve_logs_dir()

    assert target == tmp_path / "custom" / "spatial-navigation"
    assert target.is_dir()


def test_resolve_logs_dir_uses_xdg_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(LOG_DIR_ENV_VAR, raising=False)
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))

    assert resolve_logs_dir("probe") == tmp_path / "state" / "tvportal" / "logs" / "probe"


def test_build_rotating_file_handler(tmp_path: Path) -> None:
    handler = build_rotating_file_handler(tmp_path / "logs", "nav.log", retention=3, max_bytes=1024)
    try:
        assert isinstance(handler, RotatingFileHandler)
        assert handler.backupCount == 2
        assert handler.maxBytes == 1024
        assert Path(handler.baseFilename) == tmp_path / "logs" / "nav.log"
    finally:
        handler.close()


def test_resolve_log_level() -> None:
    assert resolve_log_level(True) == logging.DEBUG
    assert resolve_log_level(False) == logging.INFO


def test_configure_logging_is_idempotent(tmp_path: Path) -> None:
    logger = configure_logging(debug=True, log_dir=tmp_path, to_file=True)
    configure_logging(debug=False, log_dir=tmp_path, to_file=True)

    tagged = [handler for handler in logger.handlers if getattr(handler, "_spatial_nav_handler", False)]
    assert logger.name == LOGGER_NAME
    assert len(tagged) == 2
    assert logger.level == logging.INFO
    assert logger.propagate is False
    assert (tmp_path / "spatial-navigation.log").exists()
