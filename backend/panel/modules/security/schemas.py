from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field, field_validator

from panel.core.schemas import CamelModel, load_json_text

ScanType = Literal["malware", "vulnerability", "full"]


class SecurityScanCreate(CamelModel):
    scan_type: ScanType = "full"


class SecurityScanResponse(CamelModel):
    id: int
    scan_type: str
    status: str
    threats_found: int = 0
    files_scanned: int = 0
    details: List[Dict[str, Any]] = Field(default_factory=list)
    initiated_by: Optional[int] = None
    created_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None

    @field_validator("details", mode="before")
    @classmethod
    def decode_details(cls, value):
        return load_json_text(value, [])
