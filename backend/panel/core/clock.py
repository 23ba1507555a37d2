from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    # Naive UTC, sama seperti yang dikembalikan SQLite
    return datetime.now(timezone.utc).replace(tzinfo=None)
