"""Chat assistant endpoint."""

from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from insight_search.api.models.chat import ChatResponse
from insight_search.api.templating import read_payload

router = APIRouter(tags=["chat"])
logger = structlog.get_logger(__name__)


@router.post("/chat", response_model=ChatResponse)
async def chat(request: Request) -> Any:
    """Answer a chat message and return the recorded web activity."""
    payload = await read_payload(request)
    query = payload.get("query")
    if not isinstance(query, str) or not query.strip():
        return JSONResponse({"error": "Query is required"}, status_code=400)

    reply = await request.app.state.services.assistant.chat(query.strip())
    logger.info("Chat answered", activities=len(reply.web_activity), error=reply.error)
    return ChatResponse(response=reply.response, web_activity=reply.web_activity, error=reply.error)
