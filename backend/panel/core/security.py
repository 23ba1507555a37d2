import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Optional

import bcrypt
from jose import JWTError, jwt

from panel.core.clock import utcnow


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    # Convert string ke bytes karena bcrypt butuh bytes
    password_byte_enc = plain_password.encode("utf-8")
    hashed_password_byte_enc = hashed_password.encode("utf-8")

    try:
        return bcrypt.checkpw(password_byte_enc, hashed_password_byte_enc)
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def get_password_hash(password: str) -> str:
    pwd_bytes = password.encode("utf-8")
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(pwd_bytes, salt)
    return hashed.decode("utf-8")


def create_access_token(data: dict, secret_key: str, algorithm: str, expires_minutes: int,
                        now: Optional[datetime] = None) -> str:
    to_encode = data.copy()
    expire = (now or utcnow()) + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, secret_key, algorithm=algorithm)


def decode_access_token(token: str, secret_key: str, algorithm: str, verify_exp: bool = True) -> Optional[dict]:
    try:
        return jwt.decode(token, secret_key, algorithms=[algorithm], options={"verify_exp": verify_exp})
    except JWTError:
        return None


def new_token_id() -> str:
    return secrets.token_urlsafe(24)


# --- API keys ---
API_KEY_PREFIX = "bp_"


def generate_api_key() -> str:
    return API_KEY_PREFIX + secrets.token_urlsafe(32)


def hash_api_key(key: str) -> str:
    # Deterministic so the key can be looked up by its hash
    return hashlib.sha256(key.encode("utf-8")).hexdigest()
