from sqlalchemy import Column, Integer, String, DateTime

from panel.core.database import Base


class Domain(Base):
    __tablename__ = "domains"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    domain = Column(String(255), unique=True, index=True, nullable=False)
    type = Column(String(20), nullable=False)  # primary, addon, subdomain, alias
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime)
