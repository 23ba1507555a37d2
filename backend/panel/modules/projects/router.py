import json
from typing import List

from fastapi import APIRouter, Depends

from panel.core.exceptions import NotFoundError
from panel.core.schemas import MessageResponse, dump_json_text, load_json_text, patch_dict
from panel.modules.auth.deps import get_current_user, get_owned, get_storage, is_admin, owner_filter
from panel.modules.projects import schemas
from panel.modules.users.models import User
from panel.storage.base import Storage

# Setup Router
router = APIRouter(prefix="/api/code-projects", tags=["Code Sandbox"])


def _readable(storage: Storage, project_id: int, user: User):
    project = storage.code_projects.get(project_id)
    # Project public boleh dibaca siapa saja yang login
    if project is None or not (project.is_public or is_admin(user) or project.user_id == user.id):
        raise NotFoundError("Project not found")
    return project


# 1. Get All Projects (milik sendiri)
@router.get("", response_model=List[schemas.CodeProjectResponse])
def read_projects(skip: int = 0, limit: int = 100, storage: Storage = Depends(get_storage),
                  current_user: User = Depends(get_current_user)):
    return storage.code_projects.list(owner_filter(current_user))[skip:skip + limit]


@router.get("/public", response_model=List[schemas.CodeProjectResponse])
def read_public_projects(storage: Storage = Depends(get_storage), current_user: User = Depends(get_current_user)):
    return storage.code_projects.list({"is_public": True})


# 2. Get Single Project
@router.get("/{project_id}", response_model=schemas.CodeProjectResponse)
def read_project(project_id: int, storage: Storage = Depends(get_storage),
                 current_user: User = Depends(get_current_user)):
    return _readable(storage, project_id, current_user)


# 3. Create Project
@router.post("", response_model=schemas.CodeProjectResponse, status_code=201)
def create_project(payload: schemas.CodeProjectCreate, storage: Storage = Depends(get_storage),
                   current_user: User = Depends(get_current_user)):
    data = payload.model_dump()
    data.update(user_id=current_user.id, files=dump_json_text(data["files"]))
    return storage.code_projects.create(data)


@router.put("/{project_id}", response_model=schemas.CodeProjectResponse)
def update_project(project_id: int, payload: schemas.CodeProjectUpdate, storage: Storage = Depends(get_storage),
                   current_user: User = Depends(get_current_user)):
    get_owned(storage.code_projects, project_id, current_user, "Project")

    data = patch_dict(payload, nullable=("description",))
    if "files" in data:
        data["files"] = dump_json_text(data["files"])
    return storage.code_projects.update(project_id, data)


# 4. Save File for specific Project (replace kalau nama sama)
@router.post("/{project_id}/files", response_model=schemas.CodeProjectResponse)
def save_file(project_id: int, file: schemas.CodeFile, storage: Storage = Depends(get_storage),
              current_user: User = Depends(get_current_user)):
    project = get_owned(storage.code_projects, project_id, current_user, "Project")

    files = [f for f in load_json_text(project.files, []) if f["name"] != file.name]
    files.append(file.model_dump())
    return storage.code_projects.update(project_id, {"files": json.dumps(files)})


@router.delete("/{project_id}", response_model=MessageResponse)
def delete_project(project_id: int, storage: Storage = Depends(get_storage),
                   current_user: User = Depends(get_current_user)):
    get_owned(storage.code_projects, project_id, current_user, "Project")
    storage.code_projects.delete(project_id)
    return {"message": "Project deleted"}
