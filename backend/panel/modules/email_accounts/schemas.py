from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from panel.core.schemas import CamelModel


class EmailAccountCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)
    quota: int = Field(default=1024, ge=1)  # MB
    status: str = "active"
    user_id: Optional[int] = None


class EmailAccountUpdate(CamelModel):
    password: Optional[str] = Field(default=None, min_length=6, max_length=72)
    quota: Optional[int] = Field(default=None, ge=1)
    status: Optional[str] = None


class EmailAccountResponse(CamelModel):
    id: int
    user_id: int
    email: str
    quota: int
    status: str
    created_at: Optional[datetime] = None
