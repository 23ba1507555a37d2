from sqlalchemy import Column, Integer, String, DateTime

from panel.core.database import Base


class FileEntry(Base):
    __tablename__ = "file_entries"
    timestamp_field = "modified_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    path = Column(String(1024), index=True, nullable=False)  # parent directory
    type = Column(String(20), nullable=False)  # file, directory
    size = Column(Integer, default=0)  # bytes
    mime_type = Column(String(255), nullable=True)
    modified_at = Column(DateTime)


class FileVersion(Base):
    __tablename__ = "file_versions"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    file_id = Column(Integer, index=True, nullable=False)
    user_id = Column(Integer, index=True, nullable=False)
    version = Column(Integer, nullable=False)
    size = Column(Integer, default=0)
    checksum = Column(String(64), nullable=True)  # sha256
    comment = Column(String(500), nullable=True)
    created_at = Column(DateTime)
