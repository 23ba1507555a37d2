from datetime import datetime
from typing import Optional

from pydantic import Field

from panel.core.schemas import CamelModel


class ServerStatsCreate(CamelModel):
    cpu_usage: int = Field(ge=0, le=100)
    memory_usage: int = Field(ge=0, le=100)
    disk_usage: int = Field(ge=0, le=100)
    active_users: int = Field(ge=0)
    uptime: int = Field(ge=0)


class ServerStatsResponse(ServerStatsCreate):
    id: int
    timestamp: Optional[datetime] = None
