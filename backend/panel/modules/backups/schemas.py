from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from panel.core.schemas import CamelModel

BackupType = Literal["full", "files", "databases"]


class BackupCreate(CamelModel):
    name: Optional[str] = Field(default=None, max_length=255)
    type: BackupType = "full"
    user_id: Optional[int] = None


class BackupResponse(CamelModel):
    id: int
    user_id: int
    name: str
    type: str
    status: str
    size: int = 0
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
