from datetime import datetime
from typing import Literal, Optional

from panel.core.schemas import CamelModel

RecommendationStatus = Literal["open", "applied", "dismissed"]


class RecommendationUpdate(CamelModel):
    status: RecommendationStatus


class RecommendationResponse(CamelModel):
    id: int
    user_id: Optional[int] = None
    category: str
    rule: str
    title: str
    description: str
    priority: str
    status: str
    created_at: Optional[datetime] = None
