from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from panel.core.schemas import CamelModel, load_json_text


# --- File Schemas ---
class CodeFile(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    language: str = "plaintext"
    content: str = ""


# --- Project Schemas ---
class CodeProjectBase(CamelModel):
    name: str = Field(min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=500)
    language: str = "javascript"
    is_public: bool = False


class CodeProjectCreate(CodeProjectBase):
    files: List[CodeFile] = Field(default_factory=list)


class CodeProjectUpdate(CamelModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = Field(default=None, max_length=500)
    language: Optional[str] = None
    is_public: Optional[bool] = None
    files: Optional[List[CodeFile]] = None


class CodeProjectResponse(CodeProjectBase):
    id: int
    user_id: int
    # Nested file di dalam project
    files: List[CodeFile] = []
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("files", mode="before")
    @classmethod
    def decode_files(cls, value):
        return load_json_text(value, [])
