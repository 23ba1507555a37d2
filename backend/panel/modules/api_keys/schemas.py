from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from panel.core.schemas import CamelModel

Permission = Literal["read", "write"]


class ApiKeyCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    permissions: Permission = "read"
    expires_in_days: Optional[int] = Field(default=None, ge=1, le=3650)


class ApiKeyUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    is_active: Optional[bool] = None


class ApiKeyResponse(CamelModel):
    id: int
    user_id: int
    name: str
    key_prefix: str
    permissions: str
    is_active: bool = True
    last_used_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None
    created_at: Optional[datetime] = None


class ApiKeyCreated(ApiKeyResponse):
    # Plaintext key, hanya ditampilkan sekali
    key: str
