from sqlalchemy import Column, Integer, String, DateTime

from panel.core.database import Base


class AuthSession(Base):
    __tablename__ = "auth_sessions"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    token_id = Column(String(64), unique=True, index=True, nullable=False)
    created_at = Column(DateTime)
    expires_at = Column(DateTime, nullable=False)
