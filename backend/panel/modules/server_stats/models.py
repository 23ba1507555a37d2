from sqlalchemy import Column, Integer, DateTime

from panel.core.database import Base


class ServerStats(Base):
    __tablename__ = "server_stats"
    timestamp_field = "timestamp"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(DateTime, index=True)
    cpu_usage = Column(Integer, nullable=False)  # percentage
    memory_usage = Column(Integer, nullable=False)  # percentage
    disk_usage = Column(Integer, nullable=False)  # percentage
    active_users = Column(Integer, nullable=False)
    uptime = Column(Integer, nullable=False)  # seconds
