from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from panel.core.schemas import CamelModel

DatabaseType = Literal["postgresql", "mysql"]


class DatabaseCreate(CamelModel):
    name: str = Field(min_length=1, max_length=64, pattern=r"^[A-Za-z0-9_]+$")
    type: DatabaseType = "postgresql"
    size: int = Field(default=0, ge=0)  # MB
    status: str = "active"
    user_id: Optional[int] = None


class DatabaseUpdate(CamelModel):
    size: Optional[int] = Field(default=None, ge=0)
    status: Optional[str] = None


class DatabaseResponse(CamelModel):
    id: int
    user_id: int
    name: str
    type: str
    size: int = 0
    status: str
    created_at: Optional[datetime] = None
