from __future__ import annotations

import json
from pathlib import Path

import mdic.runtime_logging as runtime_logging


def _point_log_at(tmp_path, monkeypatch) -> Path:
    log_file = Path(tmp_path) / "runtime_events.jsonl"
    monkeypatch.setattr(runtime_logging, "LOG_DIR", Path(tmp_path))
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", log_file)
    return log_file


def test_runtime_logging_append_and_read(tmp_path, monkeypatch):
    _point_log_at(tmp_path, monkeypatch)

    runtime_logging.append_runtime_event(
        level="warning",
        event="input_advisories",
        message="Inputs outside the usual range.",
        context={"warnings": ("a", "b")},
    )
    events = runtime_logging.read_runtime_events(limit=10)
    assert len(events) == 1
    assert events[0]["event"] == "input_advisories"
    assert events[0]["level"] == "WARNING"
    assert events[0]["context"]["warnings"] == ["a", "b"]


def test_runtime_logging_records_exception_details(tmp_path, monkeypatch):
    _point_log_at(tmp_path, monkeypatch)

    try:
        raise ValueError("bad decision")
    except ValueError as exc:
        runtime_logging.append_runtime_event("ERROR", "uncaught_exception", str(exc), exc=exc)

    event = runtime_logging.read_runtime_events()[0]
    assert event["exception_type"] == "ValueError"
    assert "bad decision" in event["traceback"]


def test_runtime_logging_handles_malformed_lines(tmp_path, monkeypatch):
    log_file = _point_log_at(tmp_path, monkeypatch)
    ok = {"event": "ok", "level": "INFO", "timestamp_utc": "2026-01-01T00:00:00+00:00", "message": "ok", "context": {}}
    log_file.write_text(json.dumps(ok) + "\nnot-json\n", encoding="utf-8")

    events = runtime_logging.read_runtime_events(limit=10)
    assert len(events) == 2
    assert events[0]["event"] == "ok"
    assert events[1]["event"] == "log_parse_error"


def test_clear_runtime_events(tmp_path, monkeypatch):
    log_file = _point_log_at(tmp_path, monkeypatch)
    assert runtime_logging.clear_runtime_events() is False

    runtime_logging.append_runtime_event("INFO", "x", "y")
    assert log_file.exists()
    assert runtime_logging.clear_runtime_events() is True
    assert runtime_logging.read_runtime_events() == []


def test_configure_log_root_expands_and_defaults(tmp_path, monkeypatch):
    monkeypatch.setattr(runtime_logging, "LOG_DIR", runtime_logging.LOG_DIR)
    monkeypatch.setattr(runtime_logging, "RUNTIME_EVENTS_LOG_FILE", runtime_logging.RUNTIME_EVENTS_LOG_FILE)

    assert runtime_logging.configure_log_root(str(tmp_path)) == Path(tmp_path)
    assert runtime_logging.RUNTIME_EVENTS_LOG_FILE == Path(tmp_path) / "runtime_events.jsonl"
    assert runtime_logging.configure_log_root("  ") == Path(".local_store")

    monkeypatch.setenv(runtime_logging.STORAGE_ENV_VAR, str(tmp_path))
    assert runtime_logging.log_root_from_env() == Path(tmp_path)
