from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime

from panel.core.database import Base


class DashboardWidget(Base):
    __tablename__ = "dashboard_widgets"
    timestamp_field = "created_at"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    type = Column(String(50), nullable=False)  # server_stats, domains, notifications, ...
    title = Column(String(255), nullable=False)
    position = Column(Integer, nullable=False, default=0)
    size = Column(String(20), nullable=False, default="medium")  # small, medium, large
    config = Column(Text, nullable=True)  # JSON
    is_visible = Column(Boolean, default=True)
    created_at = Column(DateTime)
