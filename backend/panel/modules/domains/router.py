from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from panel.core.exceptions import ConflictError
from panel.core.schemas import MessageResponse, patch_dict
from panel.modules.auth.deps import get_current_user, get_owned, get_storage, resolve_owner, scoped_filter
from panel.modules.domains import schemas
from panel.modules.packages.limits import check_quota
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/domains", tags=["Domains"])


# 1. LIST DOMAINS (admin: semua, ?userId= buat filter)
@router.get("", response_model=List[schemas.DomainResponse])
def list_domains(user_id: Optional[int] = Query(None, alias="userId"), storage: Storage = Depends(get_storage),
                 current_user: User = Depends(get_current_user)):
    return storage.domains.list(scoped_filter(current_user, user_id))


@router.get("/{domain_id}", response_model=schemas.DomainResponse)
def get_domain(domain_id: int, storage: Storage = Depends(get_storage),
               current_user: User = Depends(get_current_user)):
    return get_owned(storage.domains, domain_id, current_user, "Domain")


# 2. ADD DOMAIN
@router.post("", response_model=schemas.DomainResponse, status_code=201)
def create_domain(payload: schemas.DomainCreate, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    if storage.domains.first(domain=payload.domain):
        raise ConflictError("Domain already exists")

    data = payload.model_dump()
    data["user_id"] = resolve_owner(current_user, payload.user_id)
    check_quota(storage, data["user_id"], "domains", storage.domains.count(user_id=data["user_id"]))
    return storage.domains.create(data)


@router.put("/{domain_id}", response_model=schemas.DomainResponse)
def update_domain(domain_id: int, payload: schemas.DomainUpdate, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    get_owned(storage.domains, domain_id, current_user, "Domain")
    return storage.domains.update(domain_id, patch_dict(payload))


# 3. DELETE DOMAIN (DNS record & SSL tidak ikut terhapus)
@router.delete("/{domain_id}", response_model=MessageResponse)
def delete_domain(domain_id: int, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    get_owned(storage.domains, domain_id, current_user, "Domain")
    storage.domains.delete(domain_id)
    return {"message": "Domain deleted"}
