from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from panel.core.schemas import CamelModel

NotificationType = Literal["info", "warning", "error", "success"]
Priority = Literal["low", "normal", "high"]


class NotificationCreate(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    message: str = Field(min_length=1)
    type: NotificationType = "info"
    priority: Priority = "normal"
    # Kosong = broadcast ke semua user
    user_id: Optional[int] = None


class NotificationResponse(CamelModel):
    id: int
    user_id: Optional[int] = None
    title: str
    message: str
    type: str
    priority: str
    is_read: bool = False
    created_at: Optional[datetime] = None
