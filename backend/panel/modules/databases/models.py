from sqlalchemy import Column, Integer, String, DateTime

from panel.core.database import Base


class Database(Base):
    __tablename__ = "databases"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)

    name = Column(String(255), nullable=False)
    type = Column(String(50), nullable=False, default="postgresql")
    size = Column(Integer, default=0)  # MB
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime)
