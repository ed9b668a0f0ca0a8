"""Socket.IO server for the live activity feed."""

from typing import Any, Dict

import socketio
import structlog

from insight_search.streaming.activity import utc_timestamp

logger = structlog.get_logger(__name__)

sio = socketio.AsyncServer(
    async_mode="asgi",
    cors_allowed_origins="*",
    logger=False,
    engineio_logger=False,
    ping_timeout=60,
    ping_interval=25,
)


@sio.event
async def connect(sid: str, environ: Dict[str, Any]) -> None:
    """Handle client connection."""
    logger.info("Socket.IO client connected", sid=sid)
    await sio.emit(
        "connection",
        {"type": "connection", "message": "Connected to backend activity feed", "timestamp": utc_timestamp()},
        room=sid,
    )


@sio.event
async def disconnect(sid: str) -> None:
    """Handle client disconnect."""
    logger.info("Socket.IO client disconnected", sid=sid)


@sio.on("ping")
async def handle_ping(sid: str) -> None:
    """Handle heartbeat ping."""
    await sio.emit("pong", {}, room=sid)
