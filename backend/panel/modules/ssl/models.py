from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime

from panel.core.database import Base


class SslCertificate(Base):
    __tablename__ = "ssl_certificates"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    domain_id = Column(Integer, index=True, nullable=False)
    user_id = Column(Integer, index=True, nullable=False)

    type = Column(String(20), nullable=False)  # lets_encrypt, custom
    status = Column(String(20), nullable=False, default="pending")  # pending, active, expired, failed
    issuer = Column(String(255), nullable=True)
    valid_from = Column(DateTime, nullable=True)
    valid_to = Column(DateTime, nullable=True)
    auto_renew = Column(Boolean, default=True)

    # PEM text, stored as-is
    certificate = Column(Text, nullable=True)
    private_key = Column(Text, nullable=True)

    created_at = Column(DateTime)
