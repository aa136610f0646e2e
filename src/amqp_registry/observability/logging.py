from __future__ import annotations

import json
import sys
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import Protocol, TextIO

LEVELS = ("debug", "info", "warning", "error")


@dataclass(frozen=True, slots=True)
class LogMessage:
    # One assembly event; `message` is a dotted event name such as "registry.built".
    level: str
    message: str
    fields: dict[str, object] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    def __post_init__(self) -> None:
        if self.level not in LEVELS:
            raise ValueError(f"LogMessage.level must be one of {list(LEVELS)}, got {self.level!r}")
        if not self.message:
            raise ValueError("LogMessage.message must be a non-empty event name")

    def at_least(self, level: str) -> bool:
        return LEVELS.index(self.level) >= LEVELS.index(level)

    def to_json(self) -> str:
        payload = {
            "ts": self.timestamp.isoformat().replace("+00:00", "Z"),
            "level": self.level,
            "event": self.message,
            **{key: self.fields[key] for key in sorted(self.fields)},
        }
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, default=str)


class LogSink(Protocol):
    def emit(self, message: LogMessage) -> None: ...


class StreamLogSink:
    # JSON lines on a text stream, stderr by default so stdout stays reserved for command output.
    def __init__(self, stream: TextIO | None = None, *, min_level: str = "info") -> None:
        if min_level not in LEVELS:
            raise ValueError(f"min_level must be one of {list(LEVELS)}")
        self._stream = stream
        self._min_level = min_level

    def emit(self, message: LogMessage) -> None:
        if not message.at_least(self._min_level):
            return
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(message.to_json() + "\n")


class JsonlLogSink:
    # Appends every event to a file; usable as a context manager.
    def __init__(self, path: Path, *, min_level: str = "debug") -> None:
        if min_level not in LEVELS:
            raise ValueError(f"min_level must be one of {list(LEVELS)}")
        path.parent.mkdir(parents=True, exist_ok=True)
        self._min_level = min_level
        self._file = path.open("a", encoding="utf-8")

    def emit(self, message: LogMessage) -> None:
        if not message.at_least(self._min_level):
            return
        self._file.write(message.to_json() + "\n")
        self._file.flush()

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> JsonlLogSink:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class MemoryLogSink:
    # Keeps emitted messages in order; used by tests and embedding applications.
    def __init__(self) -> None:
        self.messages: list[LogMessage] = []

    def emit(self, message: LogMessage) -> None:
        self.messages.append(message)

    def by_message(self, text: str) -> list[LogMessage]:
        return [item for item in self.messages if item.message == text]


class FanoutLogSink:
    # Forwards each event to every wrapped sink.
    def __init__(self, sinks: Iterable[LogSink]) -> None:
        self._sinks = list(sinks)

    def emit(self, message: LogMessage) -> None:
        for sink in self._sinks:
            sink.emit(message)


def emit(sink: LogSink | None, level: str, message: str, **fields: object) -> None:
    # No sink configured means logging is off.
    if sink is None:
        return
    sink.emit(LogMessage(level=level, message=message, fields=dict(fields)))
