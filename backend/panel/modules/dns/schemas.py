from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, model_validator

from panel.core.schemas import CamelModel

RecordType = Literal["A", "AAAA", "CNAME", "MX", "TXT", "NS"]


class DnsRecordCreate(CamelModel):
    domain_id: int
    name: str = Field(min_length=1, max_length=255)
    type: RecordType
    value: str = Field(min_length=1)
    priority: Optional[int] = Field(default=None, ge=0, le=65535)
    ttl: int = Field(default=3600, ge=1)
    status: str = "active"
    # Default: pemilik domain
    user_id: Optional[int] = None

    @model_validator(mode="after")
    def priority_only_for_mx(self):
        if self.priority is not None and self.type != "MX":
            raise ValueError("priority is only valid for MX records")
        return self


class DnsRecordUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    type: Optional[RecordType] = None
    value: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[int] = Field(default=None, ge=0, le=65535)
    ttl: Optional[int] = Field(default=None, ge=1)
    status: Optional[str] = None


class DnsRecordResponse(CamelModel):
    id: int
    domain_id: int
    user_id: int
    name: str
    type: str
    value: str
    priority: Optional[int] = None
    ttl: int
    status: str
    created_at: Optional[datetime] = None
