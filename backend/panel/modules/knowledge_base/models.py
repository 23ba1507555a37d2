from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime

from panel.core.database import Base


class KnowledgeBase(Base):
    __tablename__ = "knowledge_base"
    timestamp_field = "created_at"
    updated_field = "updated_at"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    category = Column(String(100), index=True, nullable=False, default="general")
    tags = Column(String(500), nullable=True)  # comma separated
    author_id = Column(Integer, nullable=True)
    is_published = Column(Boolean, default=True)
    views = Column(Integer, default=0)
    created_at = Column(DateTime)
    updated_at = Column(DateTime, nullable=True)
