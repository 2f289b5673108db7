import logging
from pathlib import Path

from todocli.cli import _log_level
from todocli.config import default_log_level, default_store_path


def test_default_store_path(monkeypatch):
    monkeypatch.delenv("TODO_FILE", raising=False)
    assert default_store_path() == Path("todo.json")


def test_store_path_from_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TODO_FILE", str(tmp_path / "x.json"))
    assert default_store_path() == (tmp_path / "x.json").resolve()


def test_log_level(monkeypatch):
    monkeypatch.delenv("TODO_LOG_LEVEL", raising=False)
    assert default_log_level() == logging.WARNING
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")
    assert default_log_level() == logging.DEBUG
    monkeypatch.setenv("TODO_LOG_LEVEL", "chatty")
    assert default_log_level() == logging.WARNING


def test_verbose_flag_raises_level(monkeypatch):
    monkeypatch.delenv("TODO_LOG_LEVEL", raising=False)
    assert _log_level(0) == logging.WARNING
    assert _log_level(1) == logging.INFO
    assert _log_level(2) == logging.DEBUG
