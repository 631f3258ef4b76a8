from typing import List, Literal

from pydantic import BaseModel, Field

SuggestionKind = Literal["title", "description", "tags"]


class SuggestionRequest(BaseModel):
    kind: SuggestionKind
    text: str = Field(..., min_length=1)
    count: int = Field(3, ge=1, le=10)


class SuggestionResponse(BaseModel):
    kind: SuggestionKind
    suggestions: List[str]
