from datetime import timedelta
from typing import List

from fastapi import APIRouter, Depends

from panel.core.schemas import MessageResponse, patch_dict
from panel.core.security import generate_api_key, hash_api_key
from panel.modules.api_keys import schemas
from panel.modules.auth.deps import get_current_user, get_owned, get_storage
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/api-keys", tags=["API Keys"])

# Panjang prefix yang disimpan & ditampilkan, misal "bp_Ab12Cd34"
DISPLAY_PREFIX_LENGTH = 11


@router.get("", response_model=List[schemas.ApiKeyResponse])
def list_keys(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return storage.get_user_api_keys(current_user.id)


# 1. GENERATE KEY (plaintext cuma muncul sekali di response ini)
@router.post("", response_model=schemas.ApiKeyCreated, status_code=201)
def create_key(payload: schemas.ApiKeyCreate, storage: Storage = Depends(get_storage),
               current_user: User = Depends(get_current_user)):
    key = generate_api_key()
    now = storage.clock()
    expires_at = now + timedelta(days=payload.expires_in_days) if payload.expires_in_days else None

    row = storage.api_keys.create(
        {
            "user_id": current_user.id,
            "name": payload.name,
            "key_prefix": key[:DISPLAY_PREFIX_LENGTH],
            "key_hash": hash_api_key(key),
            "permissions": payload.permissions,
            "is_active": True,
            "expires_at": expires_at,
            "created_at": now,
        }
    )
    response = schemas.ApiKeyResponse.model_validate(row).model_dump()
    response["key"] = key
    return response


# 2. RENAME / REVOKE
@router.put("/{key_id}", response_model=schemas.ApiKeyResponse)
def update_key(key_id: int, payload: schemas.ApiKeyUpdate, storage: Storage = Depends(get_storage),
               current_user: User = Depends(get_current_user)):
    get_owned(storage.api_keys, key_id, current_user, "API key")
    return storage.api_keys.update(key_id, patch_dict(payload))


@router.delete("/{key_id}", response_model=MessageResponse)
def delete_key(key_id: int, storage: Storage = Depends(get_storage),
               current_user: User = Depends(get_current_user)):
    get_owned(storage.api_keys, key_id, current_user, "API key")
    storage.api_keys.delete(key_id)
    return {"message": "API key deleted"}
