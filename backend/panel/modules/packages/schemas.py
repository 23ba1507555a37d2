from datetime import datetime
from typing import Optional

from pydantic import Field

from panel.core.schemas import CamelModel


class HostingPackageBase(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    disk_space: int = Field(ge=1)  # GB
    # -1 = unlimited
    bandwidth: int = Field(ge=-1)
    email_accounts: int = Field(ge=-1)
    databases: int = Field(ge=-1)
    domains: int = Field(ge=1)
    status: str = "active"


class HostingPackageCreate(HostingPackageBase):
    pass


class HostingPackageUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    disk_space: Optional[int] = Field(default=None, ge=1)
    bandwidth: Optional[int] = Field(default=None, ge=-1)
    email_accounts: Optional[int] = Field(default=None, ge=-1)
    databases: Optional[int] = Field(default=None, ge=-1)
    domains: Optional[int] = Field(default=None, ge=1)
    status: Optional[str] = None


class HostingPackageResponse(HostingPackageBase):
    id: int
    created_at: Optional[datetime] = None
