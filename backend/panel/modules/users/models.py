from sqlalchemy import Column, Integer, String, Boolean, DateTime

from panel.core.database import Base


class User(Base):
    __tablename__ = "users"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash

    # Role: admin, user
    role = Column(String(20), nullable=False, default="user")

    # Not a foreign key: deleting a package never touches users
    package_id = Column(Integer, nullable=True)

    # Status: active, suspended, deleted
    status = Column(String(20), nullable=False, default="active")
    disk_usage = Column(Integer, default=0)  # MB

    two_factor_secret = Column(String(64), nullable=True)
    two_factor_enabled = Column(Boolean, default=False)

    created_at = Column(DateTime)
