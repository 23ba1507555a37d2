import logging
from typing import Optional

from panel.core.clock import Clock
from panel.core.config import Settings
from panel.storage.base import Storage
from panel.storage.memory import MemoryStorage
from panel.storage.sql import SQLStorage

logger = logging.getLogger(__name__)


def build_storage(settings: Settings, clock: Optional[Clock] = None) -> Storage:
    """Pick the backend from the settings: SQL when DATABASE_URL is set, memory otherwise."""
    if settings.database_url:
        logger.info("Using SQL storage backend")
        return SQLStorage(settings.database_url, clock=clock)

    logger.warning("DATABASE_URL is not set, using the in-memory store (data is lost on restart)")
    return MemoryStorage(clock=clock)
