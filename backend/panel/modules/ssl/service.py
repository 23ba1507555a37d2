"""Mock certificate issuance and the status shown on the SSL panel."""

import math
from datetime import datetime, timedelta

LETS_ENCRYPT_DAYS = 90
CUSTOM_DAYS = 365
EXPIRING_SOON_DAYS = 30

ISSUERS = {"lets_encrypt": "Let's Encrypt", "custom": "Custom"}


def validity_days(cert_type: str) -> int:
    return LETS_ENCRYPT_DAYS if cert_type == "lets_encrypt" else CUSTOM_DAYS


def issue(data: dict, now: datetime) -> dict:
    """Fill in the fields a real ACME / upload flow would produce."""
    cert_type = data["type"]
    data.update(
        status="active",
        issuer=ISSUERS[cert_type],
        valid_from=now,
        valid_to=now + timedelta(days=validity_days(cert_type)),
    )
    if cert_type == "lets_encrypt":
        data["certificate"] = None
        data["private_key"] = None
    return data


def renewal(cert, now: datetime) -> dict:
    # Perpanjang dari tanggal expired (atau sekarang kalau sudah lewat)
    start = cert.valid_to if cert.valid_to and cert.valid_to > now else now
    return {
        "status": "active",
        "valid_from": now,
        "valid_to": start + timedelta(days=validity_days(cert.type)),
    }


def days_until_expiry(cert, now: datetime):
    if cert.valid_to is None:
        return None
    return math.floor((cert.valid_to - now).total_seconds() / 86400)


def display_status(cert, now: datetime) -> str:
    if cert.status == "pending":
        return "Pending"
    if cert.status == "failed":
        return "Failed"

    days = days_until_expiry(cert, now)
    if cert.status == "expired" or (days is not None and days < 0):
        return "Expired"
    if days is not None and days <= EXPIRING_SOON_DAYS:
        return "Expiring Soon"
    return "Active"


def to_view(cert, now: datetime) -> dict:
    """Response dict; the private key never leaves the server."""
    return {
        "id": cert.id,
        "domain_id": cert.domain_id,
        "user_id": cert.user_id,
        "type": cert.type,
        "status": cert.status,
        "issuer": cert.issuer,
        "valid_from": cert.valid_from,
        "valid_to": cert.valid_to,
        "auto_renew": cert.auto_renew,
        "certificate": cert.certificate,
        "has_private_key": bool(cert.private_key),
        "days_until_expiry": days_until_expiry(cert, now),
        "display_status": display_status(cert, now),
        "created_at": cert.created_at,
    }
