from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime

from panel.core.database import Base


class Notification(Base):
    __tablename__ = "notifications"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=True)  # NULL = broadcast
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    type = Column(String(20), nullable=False, default="info")  # info, warning, error, success
    priority = Column(String(20), nullable=False, default="normal")  # low, normal, high
    is_read = Column(Boolean, default=False)
    created_at = Column(DateTime)
