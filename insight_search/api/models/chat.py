"""Chat assistant response models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ChatResponse(BaseModel):
    """Assistant answer with the activities recorded while producing it."""

    model_config = ConfigDict(populate_by_name=True)

    response: str
    web_activity: list[dict[str, Any]] = Field(default_factory=list, alias="webActivity")
    error: bool = False
