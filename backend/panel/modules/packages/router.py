from typing import List

from fastapi import APIRouter, Depends

from panel.core.exceptions import ConflictError, NotFoundError
from panel.core.schemas import MessageResponse, patch_dict
from panel.modules.auth.deps import get_current_admin, get_current_user, get_storage
from panel.modules.packages import schemas
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/hosting-packages", tags=["Hosting Packages"])


def _get_package(storage: Storage, package_id: int):
    package = storage.packages.get(package_id)
    if not package:
        raise NotFoundError("Hosting package not found")
    return package


# 1. LIST PACKAGES (semua user login boleh lihat)
@router.get("", response_model=List[schemas.HostingPackageResponse])
def list_packages(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return storage.packages.list()


@router.get("/{package_id}", response_model=schemas.HostingPackageResponse)
def get_package(package_id: int, storage: Storage = Depends(get_storage),
                current_user: User = Depends(get_current_user)):
    return _get_package(storage, package_id)


# 2. CREATE PACKAGE (Admin Only)
@router.post("", response_model=schemas.HostingPackageResponse, status_code=201)
def create_package(payload: schemas.HostingPackageCreate, storage: Storage = Depends(get_storage),
                   current_admin: User = Depends(get_current_admin)):
    return storage.packages.create(payload.model_dump())


# 3. UPDATE PACKAGE (Admin Only)
@router.put("/{package_id}", response_model=schemas.HostingPackageResponse)
def update_package(package_id: int, payload: schemas.HostingPackageUpdate, storage: Storage = Depends(get_storage),
                   current_admin: User = Depends(get_current_admin)):
    _get_package(storage, package_id)
    return storage.packages.update(package_id, patch_dict(payload))


# 4. DELETE PACKAGE (Admin Only, ditolak kalau masih dipakai user)
@router.delete("/{package_id}", response_model=MessageResponse)
def delete_package(package_id: int, storage: Storage = Depends(get_storage),
                   current_admin: User = Depends(get_current_admin)):
    _get_package(storage, package_id)

    in_use = storage.count_users_on_package(package_id)
    if in_use:
        raise ConflictError(
            f"This package is being used by {in_use} user(s). Please reassign users before deleting.",
            details={"userCount": in_use},
        )

    storage.packages.delete(package_id)
    return {"message": "Hosting package deleted"}
