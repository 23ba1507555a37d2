from typing import List

from fastapi import APIRouter, Depends

from panel.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from panel.core.schemas import MessageResponse, patch_dict
from panel.core.security import get_password_hash
from panel.modules.auth.deps import get_current_admin, get_current_user, get_storage, is_admin
from panel.modules.packages.limits import build_usage_report
from panel.modules.users import schemas
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/users", tags=["User Management"])


def _get_visible_user(storage: Storage, user_id: int, current_user: User) -> User:
    # Admin atau diri sendiri
    if not is_admin(current_user) and current_user.id != user_id:
        raise NotFoundError("User not found")
    user = storage.users.get(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def _check_package(storage: Storage, package_id):
    if package_id is not None and storage.packages.get(package_id) is None:
        raise InvalidInputError("Hosting package does not exist", details={"packageId": package_id})


# 1. LIST ALL USERS (Admin Only)
@router.get("", response_model=List[schemas.UserResponse])
def read_users(skip: int = 0, limit: int = 100, storage: Storage = Depends(get_storage),
               current_admin: User = Depends(get_current_admin)):
    return storage.users.list()[skip:skip + limit]


@router.get("/count", response_model=schemas.UsersCount)
def count_users(storage: Storage = Depends(get_storage), current_admin: User = Depends(get_current_admin)):
    return {"count": storage.get_users_count()}


@router.get("/{user_id}", response_model=schemas.UserResponse)
def read_user(user_id: int, storage: Storage = Depends(get_storage),
              current_user: User = Depends(get_current_user)):
    return _get_visible_user(storage, user_id, current_user)


@router.get("/{user_id}/usage", response_model=schemas.UsageReport)
def read_user_usage(user_id: int, storage: Storage = Depends(get_storage),
                    current_user: User = Depends(get_current_user)):
    user = _get_visible_user(storage, user_id, current_user)
    return build_usage_report(storage, user)


# 2. CREATE USER (Admin Only)
@router.post("", response_model=schemas.UserResponse, status_code=201)
def create_user(payload: schemas.UserCreate, storage: Storage = Depends(get_storage),
                current_admin: User = Depends(get_current_admin)):
    # Cek username / email kembar
    if storage.get_user_by_username(payload.username):
        raise ConflictError("Username already registered")
    if storage.get_user_by_email(payload.email):
        raise ConflictError("Email already registered")
    _check_package(storage, payload.package_id)

    data = payload.model_dump()
    data["password"] = get_password_hash(payload.password)
    return storage.users.create(data)


# 3. UPDATE USER (Admin Only)
@router.put("/{user_id}", response_model=schemas.UserResponse)
def update_user(user_id: int, payload: schemas.UserUpdate, storage: Storage = Depends(get_storage),
                current_admin: User = Depends(get_current_admin)):
    if not storage.users.get(user_id):
        raise NotFoundError("User not found")

    data = patch_dict(payload, nullable=("package_id",))
    if "package_id" in data:
        _check_package(storage, data["package_id"])
    if "password" in data:
        data["password"] = get_password_hash(data["password"])
    return storage.users.update(user_id, data)


# 4. DELETE USER (Admin Only)
@router.delete("/{user_id}", response_model=MessageResponse)
def delete_user(user_id: int, storage: Storage = Depends(get_storage),
                current_admin: User = Depends(get_current_admin)):
    user = storage.users.get(user_id)
    if not user:
        raise NotFoundError("User not found")

    if user.id == current_admin.id:
        raise InvalidInputError("Cannot delete yourself!")

    # Tidak cascade: domain, file, dll milik user tetap ada
    storage.users.delete(user_id)
    return {"message": "User deleted"}
