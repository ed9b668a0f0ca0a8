"""Jinja2 templates and request payload helpers."""

from pathlib import Path
from typing import Any

from fastapi import Request
from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


async def read_payload(request: Request) -> dict[str, Any]:
    """Read a JSON object or form body. Anything else reads as empty."""
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = await request.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}
    if "form" in content_type:
        form = await request.form()
        return dict(form)
    return {}


def wants_json(request: Request, payload: dict[str, Any]) -> bool:
    """JSON when asked for by Accept header, query string or body."""
    if "application/json" in request.headers.get("accept", ""):
        return True
    return request.query_params.get("format") == "json" or payload.get("format") == "json"
