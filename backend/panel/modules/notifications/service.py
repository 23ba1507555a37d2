import logging
from typing import Optional

from panel.modules.notifications.schemas import NotificationResponse

logger = logging.getLogger(__name__)


async def notify(
    storage,
    hub,
    title: str,
    message: str,
    type: str = "info",
    user_id: Optional[int] = None,
    priority: str = "normal",
):
    """Store a notification and push it to the user's room (or everyone)."""
    row = storage.notifications.create(
        {"title": title, "message": message, "type": type, "priority": priority, "user_id": user_id}
    )
    payload = NotificationResponse.model_validate(row).model_dump(mode="json", by_alias=True)
    delivered = await hub.publish(payload, user_id)
    logger.info("Notification #%s '%s' -> %s (%d live)", row.id, title, user_id or "all", delivered)
    return row
