"""Query submission endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from insight_search.api.models.analyze import AnalyzeResponse, SerpResults, TextBlock
from insight_search.api.templating import read_payload, templates, wants_json
from insight_search.errors import ValidationError
from insight_search.pipeline.models import RenderableResult

router = APIRouter(tags=["search"])
logger = structlog.get_logger(__name__)


def _error_result(raw_query: Any, message: str) -> RenderableResult:
    query = raw_query if isinstance(raw_query, str) else ""
    return RenderableResult(query=query, degraded=True, error=message)


async def _run_pipeline(request: Request, raw_query: Any) -> tuple[RenderableResult, int]:
    try:
        result = await request.app.state.services.pipeline.run(raw_query)
    except ValidationError as e:
        logger.info("Query rejected", kind=e.kind, error=str(e))
        return _error_result(raw_query, str(e)), 400
    except Exception as e:
        logger.error("Search failed", error=str(e), exc_info=True)
        return _error_result(raw_query, f"Error: {e}. Please try again later."), 500
    return result, 200


def _render(request: Request, result: RenderableResult, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"query": result.query, "result": result.to_json()},
        status_code=status_code,
    )


@router.post("/search")
async def search(request: Request) -> Response:
    """
    Answer a query as an HTML page.

    Returns JSON instead when the client sends ``Accept: application/json``
    or ``format=json``.
    """
    payload = await read_payload(request)
    result, status_code = await _run_pipeline(request, payload.get("query"))
    if wants_json(request, payload):
        return JSONResponse(result.to_json(), status_code=status_code)
    return _render(request, result, status_code)


@router.post("/api/search")
async def api_search(request: Request) -> JSONResponse:
    """Answer a query as JSON."""
    payload = await read_payload(request)
    result, status_code = await _run_pipeline(request, payload.get("query"))
    return JSONResponse(result.to_json(), status_code=status_code)


@router.post("/analyze", response_model=AnalyzeResponse)
async def analyze(request: Request) -> Any:
    """Write a sectioned guide for the query, with the search results used."""
    payload = await read_payload(request)
    raw_query = payload.get("query")

    try:
        guide = await request.app.state.services.pipeline.guide(raw_query)
    except ValidationError as e:
        return JSONResponse({"error": str(e), "isConversational": False}, status_code=400)
    except Exception as e:
        logger.error("Error in /analyze", error=str(e), exc_info=True)
        return JSONResponse({"error": str(e), "isConversational": False}, status_code=500)

    return AnalyzeResponse(
        query=guide.query,
        structured_answer=[TextBlock(text=guide.text)],
        serp_results=SerpResults(
            organic_results=[
                {"title": r.title, "link": r.url, "snippet": r.snippet} for r in guide.web_results
            ],
            image_results=[image.model_dump(by_alias=True) for image in guide.image_results],
        ),
        is_conversational=guide.is_conversational,
        has_web_results=guide.has_web_results,
    )
