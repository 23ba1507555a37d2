from sqlalchemy import Column, Integer, String, Boolean, DateTime

from panel.core.database import Base


class ApiKey(Base):
    __tablename__ = "api_keys"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    key_prefix = Column(String(16), nullable=False)
    key_hash = Column(String(64), unique=True, index=True, nullable=False)
    permissions = Column(String(20), nullable=False, default="read")  # read, write
    is_active = Column(Boolean, default=True)
    last_used_at = Column(DateTime, nullable=True)
    expires_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime)
