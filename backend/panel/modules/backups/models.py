from sqlalchemy import Column, Integer, String, DateTime

from panel.core.database import Base


class Backup(Base):
    __tablename__ = "backups"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    type = Column(String(20), nullable=False, default="full")  # full, files, databases
    status = Column(String(20), nullable=False, default="pending")  # pending, completed, failed
    size = Column(Integer, default=0)  # bytes
    created_at = Column(DateTime)
    completed_at = Column(DateTime, nullable=True)
