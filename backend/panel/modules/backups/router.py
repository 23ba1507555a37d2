from typing import List

from fastapi import APIRouter, Depends

from panel.core.schemas import MessageResponse
from panel.modules.auth.deps import get_current_user, get_owned, get_storage, owner_filter, resolve_owner
from panel.modules.backups import schemas
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/backups", tags=["Backups"])


# 1. LIST BACKUPS (terbaru dulu)
@router.get("", response_model=List[schemas.BackupResponse])
def list_backups(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return storage.backups.list(owner_filter(current_user), newest_first=True)


@router.get("/{backup_id}", response_model=schemas.BackupResponse)
def get_backup(backup_id: int, storage: Storage = Depends(get_storage),
               current_user: User = Depends(get_current_user)):
    return get_owned(storage.backups, backup_id, current_user, "Backup")


# 2. CREATE BACKUP (mock: langsung selesai, size = total file user)
@router.post("", response_model=schemas.BackupResponse, status_code=201)
def create_backup(payload: schemas.BackupCreate, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    owner_id = resolve_owner(current_user, payload.user_id)
    now = storage.clock()

    size = 0
    if payload.type in ("full", "files"):
        size = sum(entry.size or 0 for entry in storage.files.list({"user_id": owner_id}))

    name = payload.name or f"backup_{payload.type}_{now.strftime('%Y%m%d_%H%M%S')}"
    return storage.backups.create(
        {
            "user_id": owner_id,
            "name": name,
            "type": payload.type,
            "status": "completed",
            "size": size,
            "created_at": now,
            "completed_at": now,
        }
    )


# 3. DELETE BACKUP
@router.delete("/{backup_id}", response_model=MessageResponse)
def delete_backup(backup_id: int, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    get_owned(storage.backups, backup_id, current_user, "Backup")
    storage.backups.delete(backup_id)
    return {"message": "Backup deleted"}
