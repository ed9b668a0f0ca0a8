"""Query validation."""

from typing import Any

from insight_search.errors import ValidationError

MAX_QUERY_LENGTH = 300


def validate_query(raw: Any) -> str:
    """
    Validate a raw query and return it trimmed.

    The length limit applies to the raw, untrimmed input.

    Raises:
        ValidationError: kind ``type_error``, ``too_long`` or ``empty``
    """
    if not isinstance(raw, str):
        raise ValidationError("type_error", "Query must be a string")
    if len(raw) > MAX_QUERY_LENGTH:
        raise ValidationError("too_long", f"Query too long (max {MAX_QUERY_LENGTH} chars)")
    query = raw.strip()
    if not query:
        raise ValidationError("empty", "Query cannot be empty")
    return query
