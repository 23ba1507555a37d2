"""
Login, session and two-factor logic, independent of HTTP.

A session is an ``AuthSession`` row plus a signed JWT carrying its token id
(``sid``). Both must be valid for a request to be authenticated, so removing
the row logs the user out immediately.
"""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from panel.core import totp
from panel.core.config import Settings
from panel.core.exceptions import ConflictError, ForbiddenError, InvalidInputError, UnauthorizedError
from panel.core.security import (
    API_KEY_PREFIX,
    create_access_token,
    decode_access_token,
    get_password_hash,
    hash_api_key,
    new_token_id,
    verify_password,
)
from panel.modules.users.models import User
from panel.modules.users.schemas import normalize_email
from panel.storage.base import Storage

logger = logging.getLogger(__name__)

READ_ONLY_METHODS = ("GET", "HEAD", "OPTIONS")


@dataclass
class LoginResult:
    user: User
    requires_two_factor: bool = False


def register(storage: Storage, username: str, email: str, password: str) -> User:
    email = normalize_email(email)

    # 1. Cek email & username kembar
    if storage.get_user_by_email(email):
        raise ConflictError("Email already registered")
    if storage.get_user_by_username(username):
        raise ConflictError("Username already taken")

    # 2. Default package = paket pertama yang ada
    package = storage.get_default_package()

    user = storage.users.create(
        {
            "username": username,
            "email": email,
            "password": get_password_hash(password),
            "role": "user",
            "package_id": package.id if package else None,
        }
    )
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate(storage: Storage, email: str, password: str, two_factor_token: Optional[str] = None) -> LoginResult:
    user = storage.get_user_by_email(normalize_email(email))

    # Pesan sama untuk email salah & password salah
    if not user or not verify_password(password, user.password):
        raise UnauthorizedError("Invalid email or password")
    if user.status != "active":
        raise UnauthorizedError("Account is not active")

    if user.two_factor_enabled:
        if not two_factor_token:
            return LoginResult(user=user, requires_two_factor=True)
        if not totp.verify_token(user.two_factor_secret, two_factor_token, at=storage.clock()):
            raise UnauthorizedError("Invalid 2FA token")

    return LoginResult(user=user)


def create_session(storage: Storage, settings: Settings, user: User) -> str:
    token_id = new_token_id()
    now = storage.clock()
    storage.sessions.create(
        {
            "user_id": user.id,
            "token_id": token_id,
            "expires_at": now + timedelta(minutes=settings.access_token_expire_minutes),
        }
    )
    return create_access_token(
        {"sub": str(user.id), "sid": token_id},
        settings.secret_key,
        settings.algorithm,
        settings.access_token_expire_minutes,
        now=now,
    )


def _session_for(storage: Storage, settings: Settings, token: Optional[str]):
    if not token:
        return None
    # Kadaluarsa dicek dari row session (jam yang sama dengan storage)
    payload = decode_access_token(token, settings.secret_key, settings.algorithm, verify_exp=False)
    if not payload or not payload.get("sid"):
        return None

    session = storage.get_session_by_token_id(payload["sid"])
    if session is None or str(session.user_id) != str(payload.get("sub")):
        return None
    return session


def resolve_session_user(storage: Storage, settings: Settings, token: Optional[str]) -> Optional[User]:
    session = _session_for(storage, settings, token)
    if session is None:
        return None

    if session.expires_at <= storage.clock():
        storage.sessions.delete(session.id)
        return None

    user = storage.users.get(session.user_id)
    if user is None or user.status != "active":
        return None
    return user


def destroy_session(storage: Storage, settings: Settings, token: Optional[str]) -> None:
    # Idempotent: token kosong / sudah logout tetap OK
    session = _session_for(storage, settings, token)
    if session is not None:
        storage.sessions.delete(session.id)


def authenticate_api_key(storage: Storage, key: str, method: str) -> User:
    if not key.startswith(API_KEY_PREFIX):
        raise UnauthorizedError("Invalid API key")

    api_key = storage.get_api_key_by_hash(hash_api_key(key))
    now = storage.clock()
    if api_key is None or not api_key.is_active:
        raise UnauthorizedError("Invalid API key")
    if api_key.expires_at is not None and api_key.expires_at <= now:
        raise UnauthorizedError("API key expired")

    user = storage.users.get(api_key.user_id)
    if user is None or user.status != "active":
        raise UnauthorizedError("Invalid API key")

    # Key valid tapi cuma boleh baca
    if api_key.permissions == "read" and method.upper() not in READ_ONLY_METHODS:
        raise ForbiddenError("API key is read-only")

    storage.api_keys.update(api_key.id, {"last_used_at": now})
    return user


# --- Two factor ---
def setup_two_factor(settings: Settings, user: User) -> dict:
    secret = totp.generate_secret()
    uri = totp.provisioning_uri(secret, user.email, settings.totp_issuer)
    return {
        "secret": secret,
        "qr_code": totp.qr_code_data_url(uri),
        "manual_entry_key": totp.format_manual_key(secret),
        "otpauth_url": uri,
    }


def verify_two_factor(storage: Storage, user: User, token: str, secret: str) -> User:
    if not totp.verify_token(secret, token, at=storage.clock()):
        raise InvalidInputError("Invalid 2FA token")
    return storage.update_user_2fa(user.id, secret, True)


def disable_two_factor(storage: Storage, user: User, password: str) -> User:
    if not verify_password(password, user.password):
        raise InvalidInputError("Invalid password")
    return storage.disable_2fa(user.id)
