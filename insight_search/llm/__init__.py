"""Chat model construction."""

from insight_search.llm.factory import create_chat_model, first_text
from insight_search.llm.mock import MockChatModel

__all__ = ["create_chat_model", "first_text", "MockChatModel"]
