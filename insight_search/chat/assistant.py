"""Chat assistant that gathers web context with tracked tools."""

from __future__ import annotations

import asyncio
import re
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Optional

import structlog
from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage

from insight_search.chat.formatting import format_ai_response
from insight_search.llm.factory import first_text
from insight_search.pipeline.classifier import BinaryDecision, FallbackDecision, HeuristicDecision, LLMDecision
from insight_search.pipeline.prompts import CHAT_SEARCH_PROMPT, build_chat_system_prompt, build_chat_user_prompt
from insight_search.search.gateway import SearchGateway
from insight_search.search.models import ImageResult, ScrapedContent, WebResult
from insight_search.search.scraper import WebScraper
from insight_search.search.wikipedia import WikipediaClient, WikipediaSummary
from insight_search.streaming.activity import ActivitySink, RecordingActivitySink, utc_timestamp

logger = structlog.get_logger(__name__)

CHAT_WEB_RESULTS = 5
CHAT_IMAGE_RESULTS = 6

FRESHNESS_PATTERNS = tuple(
    re.compile(rf"\b{word}", re.I)
    for word in ("latest", "news", "current", "today", "breaking", "trending", "recent", "update", "live")
)
_YEAR = re.compile(r"\b(20\d{2})\b")

APOLOGY = (
    "I'm sorry, I couldn't generate a response due to a technical issue. "
    "Please try again or rephrase your question."
)
SEARCH_PANEL_NOTE = "I've included the search results in the panel to the right for your reference."
IMAGE_PANEL_NOTE = "I've found some images related to your query. You can view them in the web panel to the right."


@dataclass
class ChatReply:
    """Assistant answer plus the activities recorded while producing it."""

    response: str
    web_activity: list[dict[str, Any]] = field(default_factory=list)
    error: bool = False


def freshness_heuristic() -> HeuristicDecision:
    return HeuristicDecision(positive=FRESHNESS_PATTERNS, default=False)


def chat_search_decision(llm: BaseChatModel) -> FallbackDecision:
    """Model decides "search" vs "static"; freshness keywords decide if the model fails."""
    return FallbackDecision(
        LLMDecision(llm, CHAT_SEARCH_PROMPT, positive="search", name="chat_search"),
        freshness_heuristic(),
        name="chat_search",
    )


class ChatAssistant:
    """Answer chat messages, searching the web only when the question needs it."""

    def __init__(
        self,
        llm: BaseChatModel,
        gateway: SearchGateway,
        scraper: WebScraper,
        wikipedia: WikipediaClient,
        search_decision: BinaryDecision | None = None,
        broadcast_sink: Optional[ActivitySink] = None,
        today: Callable[[], date] = date.today,
    ):
        self.llm = llm
        self.gateway = gateway
        self.scraper = scraper
        self.wikipedia = wikipedia
        self.search_decision = search_decision or chat_search_decision(llm)
        self.broadcast_sink = broadcast_sink
        self.today = today

    async def chat(self, query: str) -> ChatReply:
        """
        Answer one chat message.

        Never raises: any failure yields a fixed apology with ``error=True``.
        """
        sink = RecordingActivitySink(forward_to=self.broadcast_sink)
        logger.info("Processing chat query", query=query[:100])

        try:
            if not await self.search_decision.decide(query):
                answer = await self._ask([HumanMessage(content=query)])
                return ChatReply(response=format_ai_response(answer.strip()), web_activity=sink.activities)

            current_year = self.today().year
            year_match = _YEAR.search(query)
            if year_match and int(year_match.group(1)) > current_year:
                year = int(year_match.group(1))
                return ChatReply(
                    response=(
                        f"I can only search for information up to the current year ({current_year}). "
                        f"If you'd like, I can search for current forecasts and predictions about {year}, "
                        "or I can modify the search to look for the most recent information available."
                    ),
                    web_activity=sink.activities,
                )

            web_results, image_results, wiki = await asyncio.gather(
                self._web_search(query, sink),
                self._image_search(query, sink),
                self._wikipedia(query, sink),
            )
            page = await self._fetch_page(web_results[0].url, sink) if web_results else None

            context = [
                _format_web(web_results),
                _format_wikipedia(wiki),
                _format_page(page),
                _format_images(image_results),
            ]
            today = self.today()
            answer = await self._ask(
                [
                    SystemMessage(content=build_chat_system_prompt(today.strftime("%B %d, %Y"), today.year)),
                    HumanMessage(content=build_chat_user_prompt(query, context)),
                ]
            )

            response = answer.strip()
            if any(a.get("type") == "Search Result" for a in sink.activities):
                response += f"\n\n{SEARCH_PANEL_NOTE}"
            if any(a.get("type") == "Image Result" for a in sink.activities):
                response += f"\n\n{IMAGE_PANEL_NOTE}"

            return ChatReply(response=format_ai_response(response), web_activity=sink.activities)

        except Exception as e:
            logger.error("Chat failed", error=str(e), exc_info=True)
            return ChatReply(response=APOLOGY, web_activity=sink.activities, error=True)

    async def _ask(self, messages: list) -> str:
        response = await self.llm.ainvoke(messages)
        return first_text(response)

    async def _web_search(self, query: str, sink: ActivitySink) -> list[WebResult]:
        _emit(sink, {"type": "web_search", "status": "started", "query": query})
        try:
            results = list(await self.gateway.search(query, "web"))[:CHAT_WEB_RESULTS]
        except Exception as e:
            logger.warning("Chat web search failed", error=str(e))
            _emit(sink, {"type": "web_search", "status": "error", "query": query, "error": str(e)})
            return []

        for item in results:
            _emit(
                sink,
                {
                    "type": "Search Result",
                    "content": f"{item.title}\n{item.snippet}",
                    "metadata": {"url": item.url},
                }
            )
        _emit(sink, {"type": "web_search", "status": "success", "query": query, "count": len(results)})
        return results

    async def _image_search(self, query: str, sink: ActivitySink) -> list[ImageResult]:
        _emit(sink, {"type": "image_search", "status": "started", "query": query})
        try:
            results = list(await self.gateway.search(query, "images"))[:CHAT_IMAGE_RESULTS]
        except Exception as e:
            logger.warning("Chat image search failed", error=str(e))
            _emit(sink, {"type": "image_search", "status": "error", "query": query, "error": str(e)})
            return []

        for index, image in enumerate(results, start=1):
            _emit(
                sink,
                {
                    "type": "Image Result",
                    "content": f"Image {index}: {image.title or 'Untitled'}",
                    "metadata": {
                        "url": image.url,
                        "thumbnail": image.thumbnail_url,
                        "title": image.title or "Untitled Image",
                    },
                }
            )
        status = "success" if results else "no-results"
        _emit(sink, {"type": "image_search", "status": status, "query": query, "count": len(results)})
        return results

    async def _wikipedia(self, query: str, sink: ActivitySink) -> WikipediaSummary | None:
        _emit(sink, {"type": "wikipedia", "status": "started", "query": query})
        try:
            summary = await self.wikipedia.lookup(query)
        except Exception as e:
            logger.warning("Wikipedia lookup failed", error=str(e))
            _emit(sink, {"type": "wikipedia", "status": "error", "query": query, "error": str(e)})
            return None

        _emit(
            sink,
            {
                "type": "wikipedia",
                "status": "success" if summary else "no-results",
                "query": query,
                "content": summary.extract[:200] if summary else "",
                "thumbnail": summary.thumbnail if summary else None,
            }
        )
        return summary

    async def _fetch_page(self, url: str, sink: ActivitySink) -> ScrapedContent | None:
        _emit(sink, {"type": "fetch", "status": "started", "url": url})
        try:
            page = await self.scraper.scrape(url)
        except Exception as e:
            logger.warning("Page fetch failed", url=url, error=str(e))
            _emit(sink, {"type": "fetch", "status": "error", "url": url, "error": str(e)})
            return None

        _emit(
            sink,
            {
                "type": "fetch",
                "status": "success",
                "url": url,
                "title": page.title,
                "thumbnail": page.thumbnail,
                "content": page.content[:300],
            }
        )
        return page


def _emit(sink: ActivitySink, activity: dict[str, Any]) -> None:
    sink.emit({**activity, "timestamp": utc_timestamp()})


def _format_web(results: list[WebResult]) -> str:
    if not results:
        return ""
    lines = [f"{r.title}\n{r.url}\n{r.snippet}" for r in results]
    return "Web search results:\n" + "\n\n".join(lines)


def _format_wikipedia(summary: WikipediaSummary | None) -> str:
    if summary is None or not summary.extract:
        return ""
    return f"Wikipedia ({summary.title}):\n{summary.extract}"


def _format_page(page: ScrapedContent | None) -> str:
    if page is None:
        return ""
    return f"Page Title: {page.title}\n\n{page.content}"


def _format_images(results: list[ImageResult]) -> str:
    if not results:
        return ""
    return f"Found {len(results)} related images, shown to the user in the web panel."
