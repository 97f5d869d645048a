"""Pydantic DTOs (Data Transfer Objects) for the Bookmark feature."""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class BookmarkCreate(BaseModel):
    """Schema for saving a new bookmark."""

    url: str = Field(..., min_length=1, max_length=2048, examples=["https://example.com/post"])
    title: str | None = Field(None, max_length=500, examples=["An interesting post"])


class BookmarkResponse(BaseModel):
    """Schema returned to the client."""

    id: int
    url: str
    title: str | None
    is_read: bool
    created_at: datetime
    updated_at: datetime

    model_config = {
        "from_attributes": True,
        "alias_generator": to_camel,
        "populate_by_name": True,
    }
