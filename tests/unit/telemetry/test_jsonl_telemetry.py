import json
from datetime import datetime, timezone

import pytest

from envtoml.adapters.telemetry.jsonl import JsonlTelemetry


def _fixed_clock():
    return datetime(2025, 1, 2, tzinfo=timezone.utc)


def _read_records(path):
    content = path.read_text(encoding="utf-8").strip()
    assert content, "expected telemetry sink to contain at least one record"
    return [json.loads(line) for line in content.splitlines()]


def test_jsonl_telemetry_writes_record(tmp_path):
    sink = tmp_path / "events.log.jsonl"
    telemetry = JsonlTelemetry(run_id="run_2", sink_path=sink, clock=_fixed_clock)

    telemetry.log("conversion_completed", items_total=3)

    (record,) = _read_records(sink)
    assert record["event"] == "conversion_completed"
    assert record["run_id"] == "run_2"
    assert record["ts_utc"] == "2025-01-02T00:00:00+00:00"
    assert record["items_total"] == 3
    assert "redacted_fields" not in record


def test_jsonl_telemetry_appends(tmp_path):
    sink = tmp_path / "nested" / "events.log.jsonl"
    telemetry = JsonlTelemetry(run_id="run", sink_path=sink, clock=_fixed_clock)

    telemetry.log("conversion_started", prefix="APP_")
    telemetry.log("conversion_completed", prefix="APP_")

    assert [r["event"] for r in _read_records(sink)] == [
        "conversion_started",
        "conversion_completed",
    ]


def test_secret_fields_are_redacted(tmp_path):
    sink = tmp_path / "events.log.jsonl"
    telemetry = JsonlTelemetry(run_id="run", sink_path=sink, clock=_fixed_clock)

    telemetry.log("debug_dump", value="super-secret", key="password")

    (record,) = _read_records(sink)
    assert record["value"] == "***REDACTED***"
    assert record["key"] == "password"
    assert record["redacted_fields"] == ["value"]


def test_custom_secret_keys(tmp_path):
    sink = tmp_path / "events.log.jsonl"
    telemetry = JsonlTelemetry(
        run_id="run", sink_path=sink, secret_keys={"reason"}, clock=_fixed_clock
    )

    telemetry.log("conversion_failed", reason="boom", value="kept")

    (record,) = _read_records(sink)
    assert record["reason"] == "***REDACTED***"
    assert record["value"] == "kept"


def test_log_rejects_blank_event(tmp_path):
    telemetry = JsonlTelemetry(run_id="run", sink_path=tmp_path / "events.jsonl")

    with pytest.raises(ValueError):
        telemetry.log("")
