"""HTML pages."""

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from insight_search.api.templating import templates

router = APIRouter(tags=["pages"])


@router.get("/", response_class=HTMLResponse)
async def index(request: Request) -> HTMLResponse:
    """Search page."""
    return templates.TemplateResponse(request, "index.html", {"query": None, "result": None})


@router.get("/terminal-demo", response_class=HTMLResponse)
async def terminal_demo(request: Request) -> HTMLResponse:
    """Terminal emulator subscribed to the backend activity feed."""
    return templates.TemplateResponse(request, "terminal-demo.html", {})
