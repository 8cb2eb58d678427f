"""
Tests for the log_message helper.
"""

from opkit import logging as opkit_logging


def test_writes_to_stderr_and_file(isolated_log_file, capsys):
    opkit_logging.log_message("hello", level="WARNING")
    line = isolated_log_file.read_text(encoding="utf-8").strip()
    assert line.endswith("[WARNING] hello")
    assert "[WARNING] hello" in capsys.readouterr().err


def test_file_sink_can_be_disabled(isolated_log_file, monkeypatch, capsys):
    monkeypatch.setattr(opkit_logging, "log_file_path", None)
    opkit_logging.log_message("only stderr")
    assert not isolated_log_file.exists()
    assert "[INFO] only stderr" in capsys.readouterr().err


def test_set_log_file(tmp_path, monkeypatch):
    monkeypatch.setattr(opkit_logging, "log_file_path", None)
    target = tmp_path / "other.log"
    opkit_logging.set_log_file(str(target))
    opkit_logging.log_message("redirected")
    assert "redirected" in target.read_text(encoding="utf-8")
