from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from panel.core.schemas import CamelModel


class ArticleCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    category: str = Field(default="general", min_length=1, max_length=100)
    tags: List[str] = Field(default_factory=list)
    is_published: bool = True


class ArticleUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1, max_length=100)
    tags: Optional[List[str]] = None
    is_published: Optional[bool] = None


class ArticleResponse(CamelModel):
    id: int
    title: str
    content: str
    category: str
    tags: List[str] = Field(default_factory=list)
    author_id: Optional[int] = None
    is_published: bool = True
    views: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, value):
        # Disimpan sebagai "a,b,c"
        if isinstance(value, str):
            return [tag.strip() for tag in value.split(",") if tag.strip()]
        return value or []
