from datetime import datetime
from typing import Literal, Optional

from pydantic import Field, field_validator

from panel.core.schemas import CamelModel

EntryType = Literal["file", "directory"]


def normalize_path(value: str) -> str:
    # Selalu absolut, tanpa trailing slash (kecuali root)
    value = value.strip() or "/"
    if not value.startswith("/"):
        raise ValueError("path must start with /")
    if ".." in value.split("/"):
        raise ValueError("path must not contain '..'")
    if len(value) > 1:
        value = value.rstrip("/")
    return value


def check_name(value: str) -> str:
    if "/" in value or value in (".", ".."):
        raise ValueError("invalid file name")
    return value


class FileEntryCreate(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    path: str = "/"
    type: EntryType
    size: int = Field(default=0, ge=0)
    mime_type: Optional[str] = None
    user_id: Optional[int] = None

    @field_validator("path")
    @classmethod
    def check_path(cls, value: str) -> str:
        return normalize_path(value)

    @field_validator("name")
    @classmethod
    def check_entry_name(cls, value: str) -> str:
        return check_name(value)


class FileEntryUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    path: Optional[str] = None
    size: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = None

    @field_validator("path")
    @classmethod
    def check_path(cls, value):
        return normalize_path(value) if value is not None else value

    @field_validator("name")
    @classmethod
    def check_entry_name(cls, value):
        return check_name(value) if value is not None else value


class FileEntryResponse(CamelModel):
    id: int
    user_id: int
    name: str
    path: str
    type: str
    size: int = 0
    mime_type: Optional[str] = None
    modified_at: Optional[datetime] = None


class FileVersionCreate(CamelModel):
    content: str = ""
    comment: Optional[str] = Field(default=None, max_length=500)


class FileVersionResponse(CamelModel):
    id: int
    file_id: int
    user_id: int
    version: int
    size: int = 0
    checksum: Optional[str] = None
    comment: Optional[str] = None
    created_at: Optional[datetime] = None
