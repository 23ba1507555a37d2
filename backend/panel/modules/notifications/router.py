import logging
from typing import List

from fastapi import APIRouter, Depends, Query, WebSocket, WebSocketDisconnect

from panel.core.exceptions import ForbiddenError, NotFoundError
from panel.core.schemas import MessageResponse
from panel.modules.auth.deps import get_current_admin, get_current_user, get_hub, get_storage, is_admin
from panel.modules.auth.service import resolve_session_user
from panel.modules.notifications import schemas
from panel.modules.notifications.service import notify
from panel.modules.users.models import User
from panel.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/notifications", tags=["Notifications"])

WS_POLICY_VIOLATION = 1008


def _get_visible(storage: Storage, notification_id: int, user: User):
    row = storage.notifications.get(notification_id)
    # Broadcast (user_id NULL) kelihatan oleh semua user
    if row is None or (row.user_id is not None and row.user_id != user.id and not is_admin(user)):
        raise NotFoundError("Notification not found")
    return row


# 1. LIST (milik sendiri + broadcast, terbaru dulu)
@router.get("", response_model=List[schemas.NotificationResponse])
def list_notifications(limit: int = Query(50, ge=1, le=500), storage: Storage = Depends(get_storage),
                       current_user: User = Depends(get_current_user)):
    return storage.get_user_notifications(current_user.id, limit)


@router.put("/read-all", response_model=MessageResponse)
def mark_all_read(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    unread = storage.notifications.list({"user_id": (current_user.id, None), "is_read": False})
    for row in unread:
        storage.mark_notification_as_read(row.id)
    return {"message": f"{len(unread)} notification(s) marked as read"}


@router.put("/{notification_id}/read", response_model=schemas.NotificationResponse)
def mark_read(notification_id: int, storage: Storage = Depends(get_storage),
              current_user: User = Depends(get_current_user)):
    _get_visible(storage, notification_id, current_user)
    return storage.mark_notification_as_read(notification_id)


# 2. CREATE (Admin Only, langsung di-push lewat WebSocket)
@router.post("", response_model=schemas.NotificationResponse, status_code=201)
async def create_notification(payload: schemas.NotificationCreate, storage: Storage = Depends(get_storage),
                              hub=Depends(get_hub), current_admin: User = Depends(get_current_admin)):
    if payload.user_id is not None and storage.users.get(payload.user_id) is None:
        raise NotFoundError("User not found")
    return await notify(storage, hub, payload.title, payload.message, payload.type, payload.user_id, payload.priority)


@router.delete("/{notification_id}", response_model=MessageResponse)
def delete_notification(notification_id: int, storage: Storage = Depends(get_storage),
                        current_user: User = Depends(get_current_user)):
    row = _get_visible(storage, notification_id, current_user)
    if row.user_id is None and not is_admin(current_user):
        raise ForbiddenError("Broadcast notifications can only be removed by an admin")
    storage.notifications.delete(notification_id)
    return {"message": "Notification deleted"}


# --- Real-time channel ---
ws_router = APIRouter(tags=["Notifications"])


@ws_router.websocket("/ws/notifications")
async def notifications_socket(websocket: WebSocket):
    storage = websocket.app.state.storage
    settings = websocket.app.state.settings
    hub = websocket.app.state.hub

    # Cookie session, atau ?token= untuk client non-browser
    token = websocket.cookies.get(settings.session_cookie_name) or websocket.query_params.get("token")
    user = resolve_session_user(storage, settings, token)
    if user is None:
        await websocket.close(code=WS_POLICY_VIOLATION)
        return

    await hub.connect(user.id, websocket)
    try:
        while True:
            # Pesan dari client cuma keep-alive
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug("WebSocket for user %s closed by client", user.id)
    finally:
        # Error apa pun: socket mati jangan tertinggal di room
        hub.disconnect(user.id, websocket)
