from typing import List

from fastapi import APIRouter, Depends

from panel.core.exceptions import NotFoundError
from panel.core.schemas import MessageResponse, dump_json_text, patch_dict
from panel.modules.auth.deps import get_current_user, get_storage
from panel.modules.users.models import User
from panel.modules.widgets import schemas
from panel.storage.base import Storage

router = APIRouter(prefix="/api/dashboard-widgets", tags=["Dashboard"])


def _get_own_widget(storage: Storage, widget_id: int, user: User):
    # Widget selalu pribadi, admin pun tidak edit widget orang lain
    widget = storage.widgets.get(widget_id)
    if widget is None or widget.user_id != user.id:
        raise NotFoundError("Widget not found")
    return widget


@router.get("", response_model=List[schemas.WidgetResponse])
def list_widgets(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return storage.get_user_dashboard_widgets(current_user.id)


@router.post("", response_model=schemas.WidgetResponse, status_code=201)
def create_widget(payload: schemas.WidgetCreate, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    data = payload.model_dump()
    data.update(user_id=current_user.id, config=dump_json_text(payload.config))
    return storage.widgets.create(data)


@router.put("/{widget_id}", response_model=schemas.WidgetResponse)
def update_widget(widget_id: int, payload: schemas.WidgetUpdate, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    _get_own_widget(storage, widget_id, current_user)

    data = patch_dict(payload)
    if "config" in data:
        data["config"] = dump_json_text(data["config"])
    return storage.widgets.update(widget_id, data)


@router.delete("/{widget_id}", response_model=MessageResponse)
def delete_widget(widget_id: int, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    _get_own_widget(storage, widget_id, current_user)
    storage.widgets.delete(widget_id)
    return {"message": "Widget deleted"}
