"""Activity sinks: best-effort telemetry about backend steps."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

import socketio
import structlog

logger = structlog.get_logger(__name__)

Activity = Dict[str, Any]


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ActivitySink(Protocol):
    """Receives activity events. ``emit`` must not block or raise."""

    def emit(self, activity: Activity) -> None: ...


class NullActivitySink:
    """Discards every activity."""

    def emit(self, activity: Activity) -> None:
        return None


class RecordingActivitySink:
    """Keeps activities for one request and forwards them to another sink."""

    def __init__(self, forward_to: Optional[ActivitySink] = None):
        self.activities: List[Activity] = []
        self.forward_to = forward_to or NullActivitySink()

    def emit(self, activity: Activity) -> None:
        self.activities.append(activity)
        self.forward_to.emit(activity)


class SocketIOActivitySink:
    """Broadcast activities to every connected Socket.IO client.

    Emits are scheduled with ``asyncio.create_task`` and never awaited by the
    caller. Emit errors are logged and dropped.
    """

    event_name = "backend_activity"

    def __init__(self, sio: socketio.AsyncServer):
        self.sio = sio
        self._pending: set[asyncio.Task] = set()

    def _schedule(self, coro) -> asyncio.Task | None:
        try:
            task = asyncio.create_task(coro)
        except RuntimeError:
            coro.close()
            logger.warning("No running event loop for Socket.IO emit")
            return None
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _emit(self, payload: Dict[str, Any]) -> None:
        try:
            await self.sio.emit(self.event_name, payload)
            logger.debug("Broadcast activity", activity_type=payload["activity"].get("type"))
        except Exception as e:
            logger.error("Failed to broadcast activity", error=str(e))

    def emit(self, activity: Activity) -> None:
        payload = {"type": self.event_name, "activity": activity, "timestamp": utc_timestamp()}
        self._schedule(self._emit(payload))
