"""TOTP helpers: secret generation, provisioning QR code and token checks."""

import base64
import io
from datetime import datetime, timezone
from typing import Optional

import pyotp
import qrcode
from qrcode.image.svg import SvgPathImage

# Accepted drift, in 30 second steps, on both sides of "now"
VALID_WINDOW = 2


def generate_secret() -> str:
    return pyotp.random_base32()


def provisioning_uri(secret: str, account_name: str, issuer: str) -> str:
    return pyotp.TOTP(secret).provisioning_uri(name=account_name, issuer_name=issuer)


def qr_code_data_url(uri: str) -> str:
    """Render the provisioning URI as an SVG QR code embedded in a data URL."""
    img = qrcode.make(uri, image_factory=SvgPathImage)
    buffer = io.BytesIO()
    img.save(buffer)
    encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
    return f"data:image/svg+xml;base64,{encoded}"


def format_manual_key(secret: str) -> str:
    # Groups of four are easier to type into an authenticator app
    return " ".join(secret[i:i + 4] for i in range(0, len(secret), 4))


def verify_token(secret: Optional[str], token: Optional[str], at: Optional[datetime] = None) -> bool:
    if not secret or not token:
        return False

    token = token.strip().replace(" ", "")
    if not token.isdigit():
        return False

    if at is not None and at.tzinfo is None:
        # Naive datetimes in this codebase are UTC
        at = at.replace(tzinfo=timezone.utc)

    try:
        return pyotp.TOTP(secret).verify(token, for_time=at, valid_window=VALID_WINDOW)
    except ValueError:
        # Malformed base32 secret
        return False
