import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: List[str]) -> List[str]:
    value = os.getenv(name)
    if not value:
        return list(default)
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime configuration, read from the environment (and .env)."""

    # Database: kosong = in-memory store
    database_url: Optional[str] = None

    # Security
    secret_key: str = "UNSAFE_DEFAULT_KEY_CHANGE_THIS"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    session_cookie_name: str = "panel_session"
    session_cookie_secure: bool = False
    totp_issuer: str = "Baseless Panel"

    # First superuser
    first_superuser: str = "admin"
    first_superuser_email: str = "admin@example.com"
    first_superuser_password: str = "password"

    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])

    # Rate limits (slowapi syntax)
    rate_limit_enabled: bool = True
    api_rate_limit: str = "100/15minutes"
    auth_rate_limit: str = "5/15minutes"

    # Background jobs
    scheduler_enabled: bool = True
    stats_interval_seconds: int = 300
    scan_interval_seconds: int = 6 * 60 * 60
    recommendation_interval_seconds: int = 60 * 60
    stats_source: str = "simulated"  # simulated, host

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            database_url=os.getenv("DATABASE_URL") or None,
            secret_key=os.getenv("SECRET_KEY", cls.secret_key),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", cls.access_token_expire_minutes)),
            session_cookie_name=os.getenv("SESSION_COOKIE_NAME", cls.session_cookie_name),
            session_cookie_secure=_env_bool("SESSION_COOKIE_SECURE", cls.session_cookie_secure),
            totp_issuer=os.getenv("TOTP_ISSUER", cls.totp_issuer),
            first_superuser=os.getenv("FIRST_SUPERUSER", cls.first_superuser),
            first_superuser_email=os.getenv("FIRST_SUPERUSER_EMAIL", cls.first_superuser_email),
            first_superuser_password=os.getenv("FIRST_SUPERUSER_PASSWORD", cls.first_superuser_password),
            cors_origins=_env_list("CORS_ORIGINS", ["http://localhost:3000", "http://127.0.0.1:3000"]),
            rate_limit_enabled=_env_bool("RATE_LIMIT_ENABLED", cls.rate_limit_enabled),
            scheduler_enabled=_env_bool("SCHEDULER_ENABLED", cls.scheduler_enabled),
            stats_interval_seconds=int(os.getenv("STATS_INTERVAL_SECONDS", cls.stats_interval_seconds)),
            scan_interval_seconds=int(os.getenv("SCAN_INTERVAL_SECONDS", cls.scan_interval_seconds)),
            recommendation_interval_seconds=int(
                os.getenv("RECOMMENDATION_INTERVAL_SECONDS", cls.recommendation_interval_seconds)
            ),
            stats_source=os.getenv("STATS_SOURCE", cls.stats_source),
            log_level=os.getenv("LOG_LEVEL", cls.log_level),
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
