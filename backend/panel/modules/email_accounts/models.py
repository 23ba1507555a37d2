from sqlalchemy import Column, Integer, String, DateTime

from panel.core.database import Base


class EmailAccount(Base):
    __tablename__ = "email_accounts"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)
    quota = Column(Integer, nullable=False)  # MB
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime)
