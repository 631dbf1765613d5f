from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

import pytest

import packet_lens.capture.logging_setup as log_mod


@pytest.fixture
def fresh_logging(tmp_path: Path, monkeypatch):
    """Point logging at a temp dir and undo handler changes afterwards."""
    log_dir = tmp_path / "state"
    monkeypatch.setattr(log_mod, "LOG_DIR", log_dir)
    monkeypatch.setattr(log_mod, "LOG_FILE", log_dir / "app.log")
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    monkeypatch.setattr(log_mod, "_configured", False)
    monkeypatch.setattr(log_mod, "_stderr_handler", None)
    root = logging.getLogger()
    before = list(root.handlers)
    yield log_dir
    for handler in root.handlers:
        if handler not in before:
            handler.close()
    root.handlers = before


def test_configure_logging_adds_stderr_and_file_handlers(fresh_logging: Path) -> None:
    log_mod.configure_logging()

    added = [h for h in logging.getLogger().handlers if h is log_mod._stderr_handler]
    assert added
    assert any(
        isinstance(h, logging.handlers.RotatingFileHandler) for h in logging.getLogger().handlers
    )
    assert (fresh_logging / "app.log").exists()


def test_configure_logging_is_idempotent(fresh_logging: Path) -> None:
    log_mod.configure_logging()
    count = len(logging.getLogger().handlers)
    log_mod.configure_logging()
    assert len(logging.getLogger().handlers) == count


def test_without_file_handler(fresh_logging: Path) -> None:
    log_mod.configure_logging(log_to_file=False)
    assert not (fresh_logging / "app.log").exists()


def test_env_level_wins_over_argument(fresh_logging: Path, monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "error")
    log_mod.configure_logging("DEBUG", log_to_file=False)
    assert log_mod._stderr_handler is not None
    assert log_mod._stderr_handler.level == logging.ERROR


def test_resolve_level_skips_unknown_names(monkeypatch) -> None:
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    assert log_mod.resolve_level("warning") == "WARNING"
    monkeypatch.delenv("LOG_LEVEL")
    assert log_mod.resolve_level("chatty") == "INFO"
    assert log_mod.resolve_level() == "INFO"


def test_cli_log_flags_reach_configure_logging(fresh_logging: Path, monkeypatch) -> None:
    from packet_lens import main as main_mod

    calls = []
    monkeypatch.setattr(
        main_mod, "configure_logging", lambda level, **kw: calls.append((level, kw))
    )
    monkeypatch.setattr("packet_lens.headless_cli.run_command", lambda args: 0)

    assert main_mod.main(["--log-level", "warning", "--no-log-file", "interfaces"]) == 0
    assert calls == [("WARNING", {"log_to_file": False})]

    calls.clear()
    assert main_mod.main(["--debug", "interfaces"]) == 0
    assert calls == [("DEBUG", {"log_to_file": True})]


def test_export_logs_oldest_first(tmp_path: Path, monkeypatch) -> None:
    log_dir = tmp_path / "logs"
    log_dir.mkdir()
    log_file = log_dir / "app.log"
    monkeypatch.setattr(log_mod, "LOG_FILE", log_file)

    (log_dir / "app.log.3").write_text("oldest\n")
    (log_dir / "app.log.1").write_text("older\n")
    log_file.write_text("current\n")

    dest = log_mod.export_logs_to_path(tmp_path / "export.txt")
    assert dest.read_text().splitlines() == ["oldest", "older", "current"]
