"""Activity broadcasting."""

from insight_search.streaming.activity import (
    ActivitySink,
    NullActivitySink,
    RecordingActivitySink,
    SocketIOActivitySink,
)

__all__ = ["ActivitySink", "NullActivitySink", "RecordingActivitySink", "SocketIOActivitySink"]
