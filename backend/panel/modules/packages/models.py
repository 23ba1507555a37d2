from sqlalchemy import Column, Integer, String, DateTime

from panel.core.database import Base

# Sentinel for "no limit" on quota columns
UNLIMITED = -1


class HostingPackage(Base):
    __tablename__ = "hosting_packages"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    disk_space = Column(Integer, nullable=False)  # GB
    bandwidth = Column(Integer, nullable=False)  # GB, -1 = unlimited
    email_accounts = Column(Integer, nullable=False)  # -1 = unlimited
    databases = Column(Integer, nullable=False)  # -1 = unlimited
    domains = Column(Integer, nullable=False)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime)
