from .logging import LEVELS, FanoutLogSink, JsonlLogSink, LogMessage, LogSink, MemoryLogSink, StreamLogSink

__all__ = ["FanoutLogSink", "JsonlLogSink", "LEVELS", "LogMessage", "LogSink", "MemoryLogSink", "StreamLogSink"]
