import logging

from panel.core.config import Settings
from panel.core.security import get_password_hash
from panel.modules.users.schemas import normalize_email

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE = {
    "name": "Starter",
    "disk_space": 10,
    "bandwidth": 100,
    "email_accounts": 10,
    "databases": 5,
    "domains": 3,
    "status": "active",
}


def init_db(storage, settings: Settings):
    """
    Fungsi ini akan dipanggil setiap kali server start.
    Tugasnya mengecek apakah Admin dan package default sudah ada.
    """

    # 1. Package default untuk user yang register sendiri
    if storage.packages.count() == 0:
        package = storage.packages.create(dict(DEFAULT_PACKAGE))
        logger.info("[INIT] Created default hosting package '%s'", package.name)

    # 2. Cek apakah user admin sudah ada
    username = settings.first_superuser
    email = normalize_email(settings.first_superuser_email)
    if storage.get_user_by_username(username) or storage.get_user_by_email(email):
        logger.info("[INIT] Superuser '%s' already exists. Skipping creation.", username)
        return

    logger.info("[INIT] Admin user not found. Creating default superuser: %s", username)
    storage.users.create(
        {
            "username": username,
            "email": email,
            "password": get_password_hash(settings.first_superuser_password),
            "role": "admin",  # <--- PENTING: Role langsung Admin
            "status": "active",
        }
    )
    logger.info("[INIT] Superuser created successfully!")
