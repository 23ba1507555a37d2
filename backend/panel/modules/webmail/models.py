from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime

from panel.core.database import Base


class WebmailSettings(Base):
    __tablename__ = "webmail_settings"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, unique=True, index=True, nullable=False)
    signature = Column(Text, nullable=True)
    auto_reply = Column(Boolean, default=False)
    auto_reply_message = Column(Text, nullable=True)
    messages_per_page = Column(Integer, default=25)
    theme = Column(String(20), default="light")
    created_at = Column(DateTime)
