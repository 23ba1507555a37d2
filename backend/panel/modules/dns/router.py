from typing import List

from fastapi import APIRouter, Depends

from panel.core.exceptions import InvalidInputError
from panel.core.schemas import MessageResponse, patch_dict
from panel.modules.auth.deps import (
    get_current_user,
    get_owned,
    get_storage,
    is_admin,
    owner_filter,
    resolve_owner,
)
from panel.modules.dns import schemas
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/dns-records", tags=["DNS"])


@router.get("", response_model=List[schemas.DnsRecordResponse])
def list_all_records(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return storage.dns_records.list(owner_filter(current_user))


# 1. LIST RECORDS PER DOMAIN
@router.get("/{domain_id}", response_model=List[schemas.DnsRecordResponse])
def list_records(domain_id: int, storage: Storage = Depends(get_storage),
                 current_user: User = Depends(get_current_user)):
    if not is_admin(current_user):
        get_owned(storage.domains, domain_id, current_user, "Domain")
        return storage.dns_records.list({"domain_id": domain_id, "user_id": current_user.id})
    return storage.get_dns_records_by_domain_id(domain_id)


# 2. ADD RECORD
@router.post("", response_model=schemas.DnsRecordResponse, status_code=201)
def create_record(payload: schemas.DnsRecordCreate, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    domain = get_owned(storage.domains, payload.domain_id, current_user, "Domain")

    data = payload.model_dump()
    # Pemilik record ikut pemilik domain, kecuali admin set userId
    if payload.user_id is None:
        data["user_id"] = domain.user_id
    else:
        data["user_id"] = resolve_owner(current_user, payload.user_id)
    return storage.dns_records.create(data)


# 3. UPDATE RECORD
@router.put("/{record_id}", response_model=schemas.DnsRecordResponse)
def update_record(record_id: int, payload: schemas.DnsRecordUpdate, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    record = get_owned(storage.dns_records, record_id, current_user, "DNS record")

    data = patch_dict(payload, nullable=("priority",))
    record_type = data.get("type", record.type)
    priority = data.get("priority", record.priority)
    if record_type != "MX" and priority is not None:
        if "priority" in data:
            raise InvalidInputError("priority is only valid for MX records")
        # Ganti tipe dari MX: priority dibuang
        data["priority"] = None
    return storage.dns_records.update(record_id, data)


# 4. DELETE RECORD
@router.delete("/{record_id}", response_model=MessageResponse)
def delete_record(record_id: int, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    get_owned(storage.dns_records, record_id, current_user, "DNS record")
    storage.dns_records.delete(record_id)
    return {"message": "DNS record deleted"}
