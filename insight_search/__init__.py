"""Insight Search: query triage, web search and LLM synthesis."""

__version__ = "1.0.0"
