from typing import Optional

from pydantic import EmailStr, Field, field_validator

from panel.core.schemas import CamelModel
from panel.modules.users.schemas import UserSummary, normalize_email


class RegisterRequest(CamelModel):
    username: str = Field(min_length=3, max_length=64)
    email: EmailStr
    password: str = Field(min_length=6, max_length=72)

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


class RegisterResponse(CamelModel):
    message: str
    user: UserSummary


class LoginRequest(CamelModel):
    email: str
    password: str
    two_factor_token: Optional[str] = None

    @field_validator("email")
    @classmethod
    def lower_email(cls, value: str) -> str:
        return normalize_email(value)


class LoginResponse(CamelModel):
    message: Optional[str] = None
    requires_two_factor: bool = False
    user: UserSummary


class MeResponse(CamelModel):
    id: int
    username: str
    email: str
    role: str
    package_id: Optional[int] = None
    status: str
    two_factor_enabled: bool = False


class TwoFactorSetupResponse(CamelModel):
    secret: str
    qr_code: str
    manual_entry_key: str
    otpauth_url: str


class TwoFactorVerifyRequest(CamelModel):
    token: str
    secret: str


class TwoFactorDisableRequest(CamelModel):
    password: str
