from sqlalchemy import Column, Integer, String, Text, DateTime

from panel.core.database import Base


class DnsRecord(Base):
    __tablename__ = "dns_records"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    domain_id = Column(Integer, index=True, nullable=False)
    user_id = Column(Integer, index=True, nullable=False)

    name = Column(String(255), nullable=False)  # @ for root, or subdomain
    type = Column(String(10), nullable=False)  # A, AAAA, CNAME, MX, TXT, NS
    value = Column(Text, nullable=False)
    priority = Column(Integer, nullable=True)  # MX only
    ttl = Column(Integer, nullable=False, default=3600)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(DateTime)
