import datetime
from typing import List, Optional

from pydantic import AnyHttpUrl, BaseModel, Field, TypeAdapter, field_validator
from pydantic_core import PydanticCustomError, ValidationError

_url_adapter = TypeAdapter(AnyHttpUrl)


def is_valid_url(value: str) -> bool:
    """Accept http(s) URLs, with or without the scheme, whose host has a TLD."""
    candidate = value if "://" in value else f"https://{value}"
    try:
        url = _url_adapter.validate_python(candidate)
    except ValidationError:
        return False
    return "." in (url.host or "")


class Post(BaseModel):
    id: str
    title: str
    content: str
    imageUrl: Optional[str] = None
    youtubeUrl: Optional[str] = None
    author: str = "Admin"
    createdAt: datetime.datetime
    updatedAt: datetime.datetime


class PostsPage(BaseModel):
    posts: List[Post] = Field(default_factory=list)
    totalPages: int
    currentPage: int
    total: int


class PostInput(BaseModel):
    """Validated body for creating or updating a post."""

    title: str = Field("", validate_default=True)
    content: str = Field("", validate_default=True)
    imageUrl: Optional[str] = None
    youtubeUrl: Optional[str] = None

    @field_validator("title", "content", mode="before")
    @classmethod
    def require_text(cls, value, info):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError(
                "required",
                "{label} is required",
                {"label": info.field_name.capitalize()},
            )
        return value.strip()

    @field_validator("imageUrl", "youtubeUrl", mode="before")
    @classmethod
    def check_url(cls, value, info):
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            # forms send "" for an untouched optional field
            return None
        label = "Image URL" if info.field_name == "imageUrl" else "YouTube URL"
        if not isinstance(value, str):
            raise PydanticCustomError("url", "{label} must be valid", {"label": label})
        value = value.strip()
        if not is_valid_url(value):
            raise PydanticCustomError("url", "{label} must be valid", {"label": label})
        return value


class MessageResponse(BaseModel):
    message: str
