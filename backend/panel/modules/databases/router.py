from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from panel.core.exceptions import ConflictError
from panel.core.schemas import MessageResponse, patch_dict
from panel.modules.auth.deps import get_current_user, get_owned, get_storage, resolve_owner, scoped_filter
from panel.modules.databases import schemas
from panel.modules.packages.limits import check_quota
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/databases", tags=["Databases"])


@router.get("", response_model=List[schemas.DatabaseResponse])
def read_dbs(user_id: Optional[int] = Query(None, alias="userId"), storage: Storage = Depends(get_storage),
             current_user: User = Depends(get_current_user)):
    return storage.databases.list(scoped_filter(current_user, user_id))


@router.get("/{db_id}", response_model=schemas.DatabaseResponse)
def read_db(db_id: int, storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return get_owned(storage.databases, db_id, current_user, "Database")


@router.post("", response_model=schemas.DatabaseResponse, status_code=201)
def create_db(payload: schemas.DatabaseCreate, storage: Storage = Depends(get_storage),
              current_user: User = Depends(get_current_user)):
    owner_id = resolve_owner(current_user, payload.user_id)
    owner = storage.users.get(owner_id)

    # 1. ATURAN PREFIX: username_namadb
    prefix = owner.username if owner else str(owner_id)
    real_db_name = payload.name if payload.name.startswith(f"{prefix}_") else f"{prefix}_{payload.name}"

    # Cek duplikat
    if storage.databases.first(name=real_db_name, type=payload.type):
        raise ConflictError("Database name already exists")

    # 2. Cek limit package
    check_quota(storage, owner_id, "databases", storage.databases.count(user_id=owner_id))

    data = payload.model_dump()
    data.update(name=real_db_name, user_id=owner_id)
    return storage.databases.create(data)


@router.put("/{db_id}", response_model=schemas.DatabaseResponse)
def update_db(db_id: int, payload: schemas.DatabaseUpdate, storage: Storage = Depends(get_storage),
              current_user: User = Depends(get_current_user)):
    get_owned(storage.databases, db_id, current_user, "Database")
    return storage.databases.update(db_id, patch_dict(payload))


@router.delete("/{db_id}", response_model=MessageResponse)
def delete_db(db_id: int, storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    get_owned(storage.databases, db_id, current_user, "Database")
    storage.databases.delete(db_id)
    return {"message": "Database deleted"}
