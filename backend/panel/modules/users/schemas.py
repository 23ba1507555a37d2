from datetime import datetime
from typing import Literal, Optional

from pydantic import EmailStr, Field, field_validator

from panel.core.schemas import CamelModel

Role = Literal["user", "admin"]
UserStatus = Literal["active", "suspended", "deleted"]


def normalize_email(value: str) -> str:
    """Email unik tanpa peduli huruf besar/kecil."""
    return value.strip().lower()


# Schema dasar
class UserBase(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    email: EmailStr
    role: Role = "user"
    package_id: Optional[int] = None
    status: UserStatus = "active"
    disk_usage: int = Field(default=0, ge=0)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


# Schema buat Create User (admin input password di sini)
class UserCreate(UserBase):
    password: str = Field(min_length=6, max_length=72)


class UserUpdate(CamelModel):
    username: Optional[str] = Field(default=None, min_length=3, max_length=64)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6, max_length=72)
    role: Optional[Role] = None
    package_id: Optional[int] = None
    status: Optional[UserStatus] = None
    disk_usage: Optional[int] = Field(default=None, ge=0)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value):
        return normalize_email(value) if value is not None else value


# Schema buat Response (password & 2FA secret dihilangkan biar aman)
class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    role: str
    package_id: Optional[int] = None
    status: str
    disk_usage: int = 0
    two_factor_enabled: bool = False
    created_at: Optional[datetime] = None


class UserSummary(CamelModel):
    id: int
    username: str
    email: str
    role: str = "user"


class UsersCount(CamelModel):
    count: int


class QuotaUsage(CamelModel):
    used: int
    limit: int
    unlimited: bool
    percentage: int
    label: str


class UsageReport(CamelModel):
    user_id: int
    package_id: Optional[int] = None
    package_name: Optional[str] = None
    disk: QuotaUsage
    domains: QuotaUsage
    email_accounts: QuotaUsage
    databases: QuotaUsage
