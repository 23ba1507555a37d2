"""Quota helpers for hosting packages, where -1 means unlimited."""

from typing import Optional

from panel.core.exceptions import InvalidInputError
from panel.modules.packages.models import UNLIMITED


def is_unlimited(value: Optional[int]) -> bool:
    return value == UNLIMITED


def format_limit(value: int, unit: str = "") -> str:
    if is_unlimited(value):
        return "Unlimited"
    return f"{value}{unit}"


def usage_percentage(used: int, limit: int) -> int:
    if is_unlimited(limit) or not limit or limit < 0:
        return 0
    return max(0, round(used / limit * 100))


def quota(used: int, limit: Optional[int], unit: str = "") -> dict:
    # Tanpa package: anggap unlimited
    limit = UNLIMITED if limit is None else limit
    return {
        "used": used,
        "limit": limit,
        "unlimited": is_unlimited(limit),
        "percentage": usage_percentage(used, limit),
        "label": f"{used}{unit} / {format_limit(limit, unit)}",
    }


def build_usage_report(storage, user) -> dict:
    package = storage.packages.get(user.package_id) if user.package_id is not None else None

    def limit_of(field):
        return getattr(package, field) if package else None

    # disk_space di package dalam GB, disk_usage user dalam MB
    disk_limit = limit_of("disk_space")
    if disk_limit is not None and not is_unlimited(disk_limit):
        disk_limit = disk_limit * 1024

    return {
        "user_id": user.id,
        "package_id": package.id if package else None,
        "package_name": package.name if package else None,
        "disk": quota(user.disk_usage or 0, disk_limit, " MB"),
        "domains": quota(storage.domains.count(user_id=user.id), limit_of("domains")),
        "email_accounts": quota(storage.email_accounts.count(user_id=user.id), limit_of("email_accounts")),
        "databases": quota(storage.databases.count(user_id=user.id), limit_of("databases")),
    }


def check_quota(storage, owner_id: int, field: str, current: int) -> None:
    """Reject a create that would push the owner past the package limit."""
    owner = storage.users.get(owner_id)
    package = storage.packages.get(owner.package_id) if owner and owner.package_id is not None else None
    if package is None:
        return

    limit = getattr(package, field)
    if not is_unlimited(limit) and current >= limit:
        label = field.replace("_", " ")
        raise InvalidInputError(
            f"Package limit reached: {format_limit(limit)} {label} allowed",
            details={"limit": limit, "used": current},
        )
