from datetime import datetime
from typing import Literal, Optional

from pydantic import model_validator

from panel.core.schemas import CamelModel

CertificateType = Literal["lets_encrypt", "custom"]
CertificateStatus = Literal["pending", "active", "expired", "failed"]


class SslCertificateCreate(CamelModel):
    domain_id: int
    type: CertificateType = "lets_encrypt"
    auto_renew: bool = True
    certificate: Optional[str] = None
    private_key: Optional[str] = None
    user_id: Optional[int] = None

    @model_validator(mode="after")
    def custom_needs_pem(self):
        if self.type == "custom" and not (self.certificate and self.private_key):
            raise ValueError("custom certificates require certificate and privateKey")
        return self


class SslCertificateUpdate(CamelModel):
    auto_renew: Optional[bool] = None
    status: Optional[CertificateStatus] = None


class SslCertificateResponse(CamelModel):
    id: int
    domain_id: int
    user_id: int
    type: str
    status: str
    issuer: Optional[str] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
    auto_renew: bool = True
    certificate: Optional[str] = None
    has_private_key: bool = False
    days_until_expiry: Optional[int] = None
    display_status: str = "Pending"
    created_at: Optional[datetime] = None
