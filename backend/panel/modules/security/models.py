from sqlalchemy import Column, Integer, String, Text, DateTime

from panel.core.database import Base


class SecurityScan(Base):
    __tablename__ = "security_scans"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    scan_type = Column(String(20), nullable=False, default="full")  # malware, vulnerability, full
    status = Column(String(20), nullable=False, default="running")  # running, completed, failed
    threats_found = Column(Integer, default=0)
    files_scanned = Column(Integer, default=0)
    details = Column(Text, nullable=True)  # JSON list of findings
    initiated_by = Column(Integer, nullable=True)  # NULL = scheduler
    created_at = Column(DateTime, index=True)
    completed_at = Column(DateTime, nullable=True)
