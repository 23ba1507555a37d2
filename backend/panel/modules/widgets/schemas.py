from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import Field, field_validator

from panel.core.schemas import CamelModel, load_json_text

WidgetSize = Literal["small", "medium", "large"]


class WidgetCreate(CamelModel):
    type: str = Field(min_length=1, max_length=50)
    title: str = Field(min_length=1, max_length=255)
    position: int = Field(default=0, ge=0)
    size: WidgetSize = "medium"
    config: Dict[str, Any] = Field(default_factory=dict)
    is_visible: bool = True


class WidgetUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    position: Optional[int] = Field(default=None, ge=0)
    size: Optional[WidgetSize] = None
    config: Optional[Dict[str, Any]] = None
    is_visible: Optional[bool] = None


class WidgetResponse(CamelModel):
    id: int
    user_id: int
    type: str
    title: str
    position: int
    size: str
    config: Dict[str, Any] = Field(default_factory=dict)
    is_visible: bool = True
    created_at: Optional[datetime] = None

    @field_validator("config", mode="before")
    @classmethod
    def decode_config(cls, value):
        return load_json_text(value, {})
