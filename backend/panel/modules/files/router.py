import hashlib
import mimetypes
from typing import List

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from panel.core.exceptions import ConflictError, InvalidInputError, NotFoundError
from panel.core.schemas import MessageResponse, patch_dict
from panel.modules.auth.deps import get_current_user, get_owned, get_storage, is_admin, resolve_owner
from panel.modules.files import schemas
from panel.modules.files.schemas import check_name, normalize_path
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/files", tags=["File Manager"])


def _ensure_free(storage: Storage, user_id: int, path: str, name: str, skip_id=None):
    for entry in storage.get_file_entries_by_user_id_and_path(user_id, path):
        if entry.name == name and entry.id != skip_id:
            raise ConflictError(f"'{name}' already exists in {path}")


# 1. LIST FILES (isi langsung dari satu folder, tidak rekursif)
@router.get("/user/{user_id}", response_model=List[schemas.FileEntryResponse])
def list_files(user_id: int, path: str = Query("/"), storage: Storage = Depends(get_storage),
               current_user: User = Depends(get_current_user)):
    if not is_admin(current_user) and user_id != current_user.id:
        raise NotFoundError("User not found")
    try:
        path = normalize_path(path)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc

    entries = storage.get_file_entries_by_user_id_and_path(user_id, path)
    # Folder dulu, baru file
    return sorted(entries, key=lambda e: (e.type != "directory", e.name))


@router.get("/{file_id}", response_model=schemas.FileEntryResponse)
def get_file(file_id: int, storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return get_owned(storage.files, file_id, current_user, "File")


# 2. CREATE FILE / FOLDER
@router.post("", response_model=schemas.FileEntryResponse, status_code=201)
def create_entry(payload: schemas.FileEntryCreate, storage: Storage = Depends(get_storage),
                 current_user: User = Depends(get_current_user)):
    owner_id = resolve_owner(current_user, payload.user_id)
    _ensure_free(storage, owner_id, payload.path, payload.name)

    data = payload.model_dump()
    data["user_id"] = owner_id
    if payload.type == "directory":
        data.update(size=0, mime_type=None)
    elif not payload.mime_type:
        data["mime_type"] = mimetypes.guess_type(payload.name)[0]
    return storage.files.create(data)


# 3. UPLOAD (hanya metadata, isi file tidak disimpan)
@router.post("/upload", response_model=List[schemas.FileEntryResponse], status_code=201)
async def upload_files(
    files: List[UploadFile] = File(...),
    path: str = Form("/"),
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    try:
        path = normalize_path(path)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc

    created = []
    for upload in files:
        name = upload.filename or "upload"
        try:
            check_name(name)
        except ValueError as exc:
            raise InvalidInputError(str(exc), details={"file": name}) from exc

        content = await upload.read()
        _ensure_free(storage, current_user.id, path, name)
        created.append(
            storage.files.create(
                {
                    "user_id": current_user.id,
                    "name": name,
                    "path": path,
                    "type": "file",
                    "size": len(content),
                    "mime_type": upload.content_type or mimetypes.guess_type(name)[0],
                }
            )
        )
    return created


# 4. RENAME / MOVE
@router.put("/{file_id}", response_model=schemas.FileEntryResponse)
def update_entry(file_id: int, payload: schemas.FileEntryUpdate, storage: Storage = Depends(get_storage),
                 current_user: User = Depends(get_current_user)):
    entry = get_owned(storage.files, file_id, current_user, "File")

    data = patch_dict(payload, nullable=("mime_type",))
    if "name" in data or "path" in data:
        _ensure_free(storage, entry.user_id, data.get("path", entry.path), data.get("name", entry.name), skip_id=entry.id)
    data["modified_at"] = storage.clock()
    return storage.files.update(file_id, data)


# 5. DELETE (satu entry, isi folder tidak ikut terhapus)
@router.delete("/{file_id}", response_model=MessageResponse)
def delete_entry(file_id: int, storage: Storage = Depends(get_storage),
                 current_user: User = Depends(get_current_user)):
    get_owned(storage.files, file_id, current_user, "File")
    storage.files.delete(file_id)
    return {"message": "File deleted"}


# --- Versions ---
@router.get("/{file_id}/versions", response_model=List[schemas.FileVersionResponse])
def list_versions(file_id: int, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    get_owned(storage.files, file_id, current_user, "File")
    return storage.get_file_versions(file_id)


@router.post("/{file_id}/versions", response_model=schemas.FileVersionResponse, status_code=201)
def create_version(file_id: int, payload: schemas.FileVersionCreate, storage: Storage = Depends(get_storage),
                   current_user: User = Depends(get_current_user)):
    entry = get_owned(storage.files, file_id, current_user, "File")
    if entry.type != "file":
        raise InvalidInputError("Only files can be versioned")

    content = payload.content.encode("utf-8")
    version = storage.file_versions.create(
        {
            "file_id": entry.id,
            "user_id": entry.user_id,
            "version": storage.file_versions.count(file_id=entry.id) + 1,
            "size": len(content),
            "checksum": hashlib.sha256(content).hexdigest(),
            "comment": payload.comment,
        }
    )
    storage.files.update(entry.id, {"size": len(content), "modified_at": storage.clock()})
    return version
