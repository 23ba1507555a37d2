import re
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from panel.core.schemas import CamelModel

DomainType = Literal["primary", "addon", "subdomain", "alias"]

# label.label.tld, tiap label max 63 karakter
DOMAIN_RE = re.compile(r"^(?=.{1,253}$)([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$")


def normalize_domain(value: str) -> str:
    value = value.strip().lower().rstrip(".")
    if not DOMAIN_RE.match(value):
        raise ValueError("Invalid domain name")
    return value


class DomainCreate(CamelModel):
    domain: str
    type: DomainType
    status: str = "active"
    # Default: user yang login
    user_id: Optional[int] = None

    @field_validator("domain")
    @classmethod
    def check_domain(cls, value: str) -> str:
        return normalize_domain(value)


class DomainUpdate(CamelModel):
    domain: Optional[str] = None
    type: Optional[DomainType] = None
    status: Optional[str] = None

    @field_validator("domain")
    @classmethod
    def check_domain(cls, value):
        return normalize_domain(value) if value is not None else value


class DomainResponse(CamelModel):
    id: int
    user_id: int
    domain: str
    type: str
    status: str
    created_at: Optional[datetime] = None
