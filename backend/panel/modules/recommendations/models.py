from sqlalchemy import Column, Integer, String, Text, DateTime

from panel.core.database import Base


class Recommendation(Base):
    __tablename__ = "recommendations"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=True)  # NULL = server-wide
    category = Column(String(20), nullable=False)  # performance, security, capacity
    rule = Column(String(100), nullable=False)  # which rule produced it
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    priority = Column(String(20), nullable=False, default="normal")  # low, normal, high
    status = Column(String(20), nullable=False, default="open")  # open, applied, dismissed
    created_at = Column(DateTime)
