from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from panel.core.schemas import CamelModel

Theme = Literal["light", "dark"]


class WebmailSettingsUpdate(CamelModel):
    signature: Optional[str] = Field(default=None, max_length=2000)
    auto_reply: Optional[bool] = None
    auto_reply_message: Optional[str] = Field(default=None, max_length=5000)
    messages_per_page: Optional[int] = Field(default=None, ge=10, le=200)
    theme: Optional[Theme] = None


class WebmailSettingsResponse(CamelModel):
    id: int
    user_id: int
    signature: Optional[str] = None
    auto_reply: bool = False
    auto_reply_message: Optional[str] = None
    messages_per_page: int = 25
    theme: str = "light"
    created_at: Optional[datetime] = None
