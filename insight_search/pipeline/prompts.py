"""Prompt templates for classification, synthesis, guides and chat."""

from __future__ import annotations

import json
from typing import Sequence

from insight_search.pipeline.models import ComplexityLevel
from insight_search.search.models import ImageResult, WebResult

CONVERSATIONAL_PROMPT = """Analyze this query: "{query}"

Determine if this is a conversational message (like greetings, small talk, or casual chat) or if it's an information-seeking query that would benefit from web search results.

Reply with only one word - either "conversational" or "search".
Do not include any other text or explanation in your response."""

DEEP_ANALYSIS_PROMPT = """Analyze this query: "{query}"

Determine if this query would benefit from deep analysis with structured tasks, recommendations, and context. Consider these factors:
- Complex problem-solving or planning queries
- Queries requiring multiple steps or actions
- Research or learning queries with practical applications
- Queries about trends, comparisons, or strategic decisions
- Queries that could benefit from actionable insights

Reply with only one word - either "analyze" or "simple".
Do not include any other text or explanation in your response."""

CHAT_SEARCH_PROMPT = """Analyze this query: "{query}"

Determine if this query requires a web search.

- Static: basic concepts, definitions, established facts, general principles.
- Search: news, recent developments, real-time data, current statistics, or images and photos.

Examples:
- "What is machine learning?" -> static
- "What are the latest developments in machine learning?" -> search
- "How does a neural network work?" -> static
- "Show me images of cats" -> search

Reply with only one word - either "search" or "static".
Do not include any other text or explanation in your response."""

SIMPLE_SCHEMA = """{
    "summary": "1-2 sentence direct answer",
    "keyPoints": ["key fact 1", "key fact 2"],
    "analysis": {
        "relevance": "how well results match query",
        "credibility": "basic source assessment"
    }
}"""

MEDIUM_SCHEMA = """{
    "summary": "2-3 sentence overview with context",
    "keyPoints": ["point 1", "point 2", "point 3"],
    "analysis": {
        "contentQuality": "assessment of information quality",
        "credibility": "evaluation of source reliability",
        "relevance": "relevance and completeness",
        "insights": "notable findings or patterns"
    },
    "context": {
        "background": "relevant background information",
        "relatedTopics": ["related topic 1", "related topic 2"]
    }
}"""

DEEP_SCHEMA = """{
    "summary": "Short executive summary with key insight",
    "keyPoints": ["Insight 1", "Insight 2", "Insight 3", "Insight 4"],
    "analysis": {
        "depth": "depth of information",
        "accuracy": "accuracy and consistency of facts",
        "bias": "any noticeable bias in sources",
        "coverage": "how comprehensive the result set is",
        "comparisons": "differences among results"
    },
    "context": {
        "background": "brief background for better understanding",
        "relatedConcepts": ["concept 1", "concept 2"],
        "openQuestions": ["unanswered question 1", "further exploration 2"],
        "misconceptions": ["common misconception 1"]
    },
    "recommendations": ["Specific recommendation 1", "Specific recommendation 2"]
}"""

TASKS_INSTRUCTION = """Also include a "tasks" list of practical next steps, each shaped like:
{
    "title": "Task Title",
    "description": "Detailed description of what needs to be done",
    "priority": "high|medium|low",
    "estimatedTime": "time estimate",
    "resources": ["resource1", "resource2"],
    "status": "pending"
}"""

SCHEMAS: dict[ComplexityLevel, tuple[str, str]] = {
    "simple": ("a concise analysis", SIMPLE_SCHEMA),
    "medium": ("a structured analysis", MEDIUM_SCHEMA),
    "deep": ("an in-depth analytical response", DEEP_SCHEMA),
}

SNIPPET_COUNTS: dict[ComplexityLevel, int] = {"simple": 3, "medium": 3, "deep": 5}


def _results_block(web_results: Sequence[WebResult]) -> str:
    return json.dumps(
        [{"title": r.title, "link": r.url, "snippet": r.snippet} for r in web_results],
        indent=2,
        ensure_ascii=False,
    )


def build_synthesis_prompt(
    query: str,
    level: ComplexityLevel,
    web_results: Sequence[WebResult],
    include_tasks: bool = False,
) -> str:
    """Build the complexity-specific JSON analysis prompt.

    ``web_results`` should already be truncated to the snippet count for the
    level.
    """
    style, schema = SCHEMAS[level]
    parts = [
        f'Analyze these search results for "{query}" and provide {style} in this JSON format:',
        schema,
    ]
    if include_tasks:
        parts.append(TASKS_INSTRUCTION)
    parts.append(f"Search Results to Analyze:\n{_results_block(web_results)}")
    parts.append("Ensure the response is valid JSON that exactly matches the specified structure.")
    return "\n\n".join(parts)


def build_guide_prompt(
    query: str,
    web_results: Sequence[WebResult],
    image_results: Sequence[ImageResult] = (),
) -> str:
    """Build the sectioned learning-guide prompt."""
    sources = "\n".join(f"- {r.title} ({r.url}): {r.snippet}" for r in web_results) or "- (no web results)"
    prompt = f"""You are a helpful expert providing information about "{query}". Create a well-structured guide without repeating the query.

Structure your response using these sections:

## Key Resources
- List the most relevant and high-quality resources
- Group them by category (Free, Paid, Interactive, etc.)
- Include specific recommendations with brief descriptions

## Learning Paths
- Suggest different approaches for learning
- Outline progression paths from beginner to advanced
- Recommend specific steps and milestones

## Pro Tips
- Share important tips and best practices
- Point out common pitfalls to avoid
- Include expert insights

## Next Steps
- Provide actionable next steps
- Consider different skill levels
- Suggest ways to practice and apply knowledge

Keep each section concise and practical. Focus on providing value without repeating context.

Web sources:
{sources}"""
    if image_results:
        prompt += f"\n\n{len(image_results)} related images are shown to the user alongside your guide."
    return prompt


def build_chat_system_prompt(current_date: str, current_year: int) -> str:
    return f"""You are a helpful and intelligent AI assistant. The current date is {current_date}.

You may be given web search results, a Wikipedia summary, page content and image results gathered for the user's question. Use them when they are relevant.

Important date guidelines:
- The current year is {current_year}
- Years before {current_year} are historical and can be researched
- Years after {current_year} are future and speculative

When presenting search results:
1. Focus on results matching the requested year when specified
2. Note publication dates and recency of information
3. Identify authoritative sources (universities, research institutions, etc.)

When image results are available, mention that images are available in the web panel."""


def build_chat_user_prompt(query: str, context_sections: Sequence[str]) -> str:
    context = "\n\n".join(section for section in context_sections if section) or "(no external context)"
    return f'User question: "{query}"\n\nGathered context:\n{context}\n\nAnswer the question directly.'
