from fastapi import APIRouter, Depends, Request, Response, status

from panel.core.config import Settings
from panel.core.limiter import AUTH_RATE_LIMIT, limiter
from panel.core.schemas import MessageResponse
from panel.modules.auth import schemas, service
from panel.modules.auth.deps import get_app_settings, get_current_user, get_storage, session_token
from panel.modules.users.models import User
from panel.storage.base import Storage

router = APIRouter(prefix="/api/auth", tags=["Authentication"])


def _set_session_cookie(response: Response, settings: Settings, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        max_age=settings.access_token_expire_minutes * 60,
    )


# 1. REGISTER
@router.post("/register", response_model=schemas.RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(AUTH_RATE_LIMIT)
def register(request: Request, payload: schemas.RegisterRequest, storage: Storage = Depends(get_storage)):
    user = service.register(storage, payload.username, payload.email, payload.password)
    return {"message": "User registered successfully", "user": user}


# 2. LOGIN (password, lalu 2FA kalau aktif)
@router.post("/login", response_model=schemas.LoginResponse, response_model_exclude_none=True)
@limiter.limit(AUTH_RATE_LIMIT)
def login(
    request: Request,
    response: Response,
    payload: schemas.LoginRequest,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    result = service.authenticate(storage, payload.email, payload.password, payload.two_factor_token)

    # Challenge: belum ada session sama sekali
    if result.requires_two_factor:
        return {"requires_two_factor": True, "user": result.user}

    token = service.create_session(storage, settings, result.user)
    _set_session_cookie(response, settings, token)
    return {"message": "Login successful", "user": result.user}


# 3. LOGOUT (idempotent)
@router.post("/logout", response_model=MessageResponse)
def logout(
    request: Request,
    response: Response,
    storage: Storage = Depends(get_storage),
    settings: Settings = Depends(get_app_settings),
):
    service.destroy_session(storage, settings, session_token(request, settings))
    response.delete_cookie(settings.session_cookie_name)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=schemas.MeResponse)
def me(current_user: User = Depends(get_current_user)):
    return current_user


# --- Two factor ---
@router.post("/2fa/setup", response_model=schemas.TwoFactorSetupResponse)
def setup_two_factor(
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_app_settings),
):
    return service.setup_two_factor(settings, current_user)


@router.post("/2fa/verify", response_model=MessageResponse)
def verify_two_factor(
    payload: schemas.TwoFactorVerifyRequest,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    service.verify_two_factor(storage, current_user, payload.token, payload.secret)
    return {"message": "Two-factor authentication enabled"}


@router.post("/2fa/disable", response_model=MessageResponse)
def disable_two_factor(
    payload: schemas.TwoFactorDisableRequest,
    current_user: User = Depends(get_current_user),
    storage: Storage = Depends(get_storage),
):
    service.disable_two_factor(storage, current_user, payload.password)
    return {"message": "Two-factor authentication disabled"}
