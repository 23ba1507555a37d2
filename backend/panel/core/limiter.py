from fastapi import Request
from fastapi.responses import PlainTextResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from panel.core.config import get_settings

_settings = get_settings()

# Inisialisasi Limiter di sini
# General API limit per client IP; auth routes get a stricter one
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[_settings.api_rate_limit],
    enabled=_settings.rate_limit_enabled,
)

AUTH_RATE_LIMIT = _settings.auth_rate_limit


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> PlainTextResponse:
    return PlainTextResponse("Too many requests, please try again later.", status_code=429)
