from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime

from panel.core.database import Base


class CodeProject(Base):
    __tablename__ = "code_projects"
    timestamp_field = "created_at"
    updated_field = "updated_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    name = Column(String(255), index=True, nullable=False)
    description = Column(String(500), nullable=True)
    language = Column(String(50), nullable=False, default="javascript")
    files = Column(Text, nullable=True)  # JSON list of {name, language, content}
    is_public = Column(Boolean, default=False)
    created_at = Column(DateTime)
    updated_at = Column(DateTime, nullable=True)
