from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from panel.core.exceptions import ConflictError
from panel.core.schemas import MessageResponse, patch_dict
from panel.core.security import get_password_hash
from panel.modules.auth.deps import get_current_user, get_owned, get_storage, resolve_owner, scoped_filter
from panel.modules.email_accounts import schemas
from panel.modules.packages.limits import check_quota
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/email-accounts", tags=["Email Accounts"])


@router.get("", response_model=List[schemas.EmailAccountResponse])
def list_accounts(user_id: Optional[int] = Query(None, alias="userId"), storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    return storage.email_accounts.list(scoped_filter(current_user, user_id))


@router.get("/{account_id}", response_model=schemas.EmailAccountResponse)
def get_account(account_id: int, storage: Storage = Depends(get_storage),
                current_user: User = Depends(get_current_user)):
    return get_owned(storage.email_accounts, account_id, current_user, "Email account")


# 1. CREATE MAILBOX (password di-hash, tidak pernah dikembalikan)
@router.post("", response_model=schemas.EmailAccountResponse, status_code=201)
def create_account(payload: schemas.EmailAccountCreate, storage: Storage = Depends(get_storage),
                   current_user: User = Depends(get_current_user)):
    email = payload.email.lower()
    if storage.email_accounts.first(email=email):
        raise ConflictError("Email account already exists")

    owner_id = resolve_owner(current_user, payload.user_id)
    check_quota(storage, owner_id, "email_accounts", storage.email_accounts.count(user_id=owner_id))

    data = payload.model_dump()
    data.update(email=email, user_id=owner_id, password=get_password_hash(payload.password))
    return storage.email_accounts.create(data)


@router.put("/{account_id}", response_model=schemas.EmailAccountResponse)
def update_account(account_id: int, payload: schemas.EmailAccountUpdate, storage: Storage = Depends(get_storage),
                   current_user: User = Depends(get_current_user)):
    get_owned(storage.email_accounts, account_id, current_user, "Email account")

    data = patch_dict(payload)
    if "password" in data:
        data["password"] = get_password_hash(data["password"])
    return storage.email_accounts.update(account_id, data)


@router.delete("/{account_id}", response_model=MessageResponse)
def delete_account(account_id: int, storage: Storage = Depends(get_storage),
                   current_user: User = Depends(get_current_user)):
    get_owned(storage.email_accounts, account_id, current_user, "Email account")
    storage.email_accounts.delete(account_id)
    return {"message": "Email account deleted"}
