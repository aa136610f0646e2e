from __future__ import annotations

import io
import json
from datetime import UTC, datetime
from pathlib import Path

import pytest

from amqp_registry.observability.logging import (
    FanoutLogSink,
    JsonlLogSink,
    LogMessage,
    MemoryLogSink,
    StreamLogSink,
    emit,
)


def test_log_message_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        LogMessage(level="trace", message="registry.built")


def test_log_message_requires_event_name() -> None:
    with pytest.raises(ValueError):
        LogMessage(level="info", message="")


def test_to_json_puts_event_header_before_sorted_fields() -> None:
    stamp = datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC)
    message = LogMessage(level="info", message="registry.built", timestamp=stamp, fields={"z": 1, "a": 2})
    line = message.to_json()
    assert list(json.loads(line)) == ["ts", "level", "event", "a", "z"]
    assert json.loads(line)["ts"] == "2024-01-02T03:04:05Z"
    assert " " not in line


def test_stream_sink_filters_below_min_level() -> None:
    stream = io.StringIO()
    sink = StreamLogSink(stream, min_level="warning")
    sink.emit(LogMessage(level="info", message="candidate.skipped"))
    sink.emit(LogMessage(level="error", message="registry.failed"))
    events = [json.loads(line)["event"] for line in stream.getvalue().splitlines()]
    assert events == ["registry.failed"]


def test_stream_sink_defaults_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    # stdout stays reserved for command output.
    StreamLogSink().emit(LogMessage(level="info", message="registry.built"))
    captured = capsys.readouterr()
    assert captured.out == ""
    assert json.loads(captured.err)["event"] == "registry.built"


def test_stream_sink_rejects_unknown_min_level() -> None:
    with pytest.raises(ValueError):
        StreamLogSink(min_level="verbose")


def test_jsonl_sink_appends_lines(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "assembly.jsonl"
    with JsonlLogSink(path) as sink:
        sink.emit(LogMessage(level="debug", message="a"))
        sink.emit(LogMessage(level="info", message="b"))
    lines = path.read_text(encoding="utf-8").splitlines()
    assert [json.loads(line)["event"] for line in lines] == ["a", "b"]


def test_jsonl_sink_respects_min_level(tmp_path: Path) -> None:
    path = tmp_path / "assembly.jsonl"
    with JsonlLogSink(path, min_level="info") as sink:
        sink.emit(LogMessage(level="debug", message="candidate.skipped"))
        sink.emit(LogMessage(level="info", message="registry.built"))
    assert [json.loads(line)["event"] for line in path.read_text(encoding="utf-8").splitlines()] == ["registry.built"]


def test_fanout_sink_forwards_to_every_sink() -> None:
    first, second = MemoryLogSink(), MemoryLogSink()
    emit(FanoutLogSink([first, second]), "info", "registry.built", consumers=1)
    assert [item.message for item in first.messages] == ["registry.built"]
    assert second.messages == first.messages


def test_emit_without_sink_is_a_no_op() -> None:
    emit(None, "info", "ignored")


def test_emit_passes_fields_to_sink() -> None:
    sink = MemoryLogSink()
    emit(sink, "debug", "candidate.skipped", service_id="x")
    assert sink.messages[0].fields == {"service_id": "x"}
    assert sink.by_message("candidate.skipped") == sink.messages
