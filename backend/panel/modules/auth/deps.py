from typing import Optional

from fastapi import Depends, Request

from panel.core.config import Settings
from panel.core.exceptions import ForbiddenError, NotFoundError, UnauthorizedError
from panel.modules.auth import service
from panel.modules.users.models import User
from panel.storage.base import Repository, Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_hub(request: Request):
    return request.app.state.hub


def session_token(request: Request, settings: Settings) -> Optional[str]:
    # Cookie dulu, fallback ke header "Authorization: Bearer ..."
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    if header.lower().startswith("bearer "):
        return header[7:].strip()
    return None


def get_current_user(
    request: Request,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
) -> User:
    api_key = request.headers.get("X-API-Key")
    if api_key:
        return service.authenticate_api_key(storage, api_key, request.method)

    user = service.resolve_session_user(storage, settings, session_token(request, settings))
    if user is None:
        raise UnauthorizedError()
    return user


def get_current_admin(current_user: User = Depends(get_current_user)) -> User:
    if current_user.role != "admin":
        raise ForbiddenError()
    return current_user


def is_admin(user: User) -> bool:
    return user.role == "admin"


def owner_filter(user: User) -> dict:
    """Admin lihat semua, user biasa cuma miliknya sendiri."""
    return {} if is_admin(user) else {"user_id": user.id}


def scoped_filter(user: User, user_id: Optional[int] = None) -> dict:
    """owner_filter, plus ?userId= yang hanya berlaku untuk admin."""
    filters = owner_filter(user)
    if user_id is not None and not filters:
        filters = {"user_id": user_id}
    return filters


def get_owned(repo: Repository, id: int, user: User, label: str):
    row = repo.get(id)
    # Punya orang lain = 404, biar gak bocor ada/tidaknya
    if row is None or (not is_admin(user) and row.user_id != user.id):
        raise NotFoundError(f"{label} not found")
    return row


def resolve_owner(user: User, requested_user_id: Optional[int]) -> int:
    if requested_user_id is None or requested_user_id == user.id:
        return user.id
    if not is_admin(user):
        raise ForbiddenError("Only admins can act on behalf of another user")
    return requested_user_id
