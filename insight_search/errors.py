"""Exception hierarchy for the query pipeline."""

from __future__ import annotations

from typing import Literal


class InsightSearchError(Exception):
    """Base class for all pipeline errors."""


ValidationKind = Literal["type_error", "too_long", "empty"]


class ValidationError(InsightSearchError):
    """Rejected user input. Never retried, shown to the user as-is."""

    def __init__(self, kind: ValidationKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class InvalidParameterError(InsightSearchError):
    """A gateway call was made without the required parameters."""


class TransientNetworkError(InsightSearchError):
    """Network-level failure worth retrying (timeout, reset, DNS)."""


class FatalProviderError(InsightSearchError):
    """Provider failure that will not go away on retry (auth, bad request)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class SearchFailure(InsightSearchError):
    """A search call gave up; carries the original error message."""

    def __init__(self, kind: str, message: str, attempts: int = 1) -> None:
        super().__init__(message)
        self.kind = kind
        self.attempts = attempts


class ClassificationFailure(InsightSearchError):
    """The model-backed classifier could not produce a decision."""


ParseKind = Literal["no_json_found", "malformed_json", "missing_required_fields"]


class SynthesisParseError(InsightSearchError):
    """LLM reply could not be turned into an analysis payload."""

    def __init__(self, kind: ParseKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind


class RenderFailure(InsightSearchError):
    """Assembling or rendering the final result failed."""
