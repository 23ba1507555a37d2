from fastapi import APIRouter, Depends

from panel.core.schemas import patch_dict
from panel.modules.auth.deps import get_current_user, get_storage
from panel.modules.users.models import User
from panel.modules.webmail import schemas
from panel.storage.base import Storage

router = APIRouter(prefix="/api/webmail", tags=["Webmail"])


def _settings_for(storage: Storage, user: User):
    # Dibuat dengan default saat pertama kali dibuka
    settings = storage.get_webmail_settings(user.id)
    if settings is None:
        settings = storage.webmail_settings.create({"user_id": user.id})
    return settings


@router.get("/settings", response_model=schemas.WebmailSettingsResponse)
def get_settings(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return _settings_for(storage, current_user)


@router.put("/settings", response_model=schemas.WebmailSettingsResponse)
def update_settings(payload: schemas.WebmailSettingsUpdate, storage: Storage = Depends(get_storage),
                    current_user: User = Depends(get_current_user)):
    settings = _settings_for(storage, current_user)
    data = patch_dict(payload, nullable=("signature", "auto_reply_message"))
    return storage.webmail_settings.update(settings.id, data)
