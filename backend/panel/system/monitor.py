"""
Server telemetry: one ServerStats sample per call.

``simulated`` produces plausible random percentages (nothing is measured on a
shared demo host); ``host`` reads the machine the panel runs on via psutil.
"""

import logging
import platform
import random
import shutil
import time
from datetime import datetime

import psutil

logger = logging.getLogger(__name__)

PROCESS_STARTED = time.monotonic()
HIGH_USAGE_THRESHOLD = 90


def get_system_stats():
    """
    Mengambil data real-time CPU, RAM, Disk, dan Info OS.
    """
    # 1. CPU Usage (Interval 0.1s biar gak blocking lama)
    cpu_percent = psutil.cpu_percent(interval=0.1)

    # 2. RAM Usage
    memory = psutil.virtual_memory()

    # 3. Disk Usage
    total, used, free = shutil.disk_usage("/")

    # 4. Boot Time & OS
    boot_time = datetime.fromtimestamp(psutil.boot_time()).strftime("%Y-%m-%d %H:%M:%S")

    return {
        "cpu": {"usage_percent": cpu_percent, "cores": psutil.cpu_count()},
        "memory": {
            "total_gb": round(memory.total / (1024 ** 3), 2),
            "used_gb": round(memory.used / (1024 ** 3), 2),
            "percent": memory.percent,
        },
        "disk": {
            "total_gb": total // (2 ** 30),
            "used_gb": used // (2 ** 30),
            "free_gb": free // (2 ** 30),
            "percent": round(used / total * 100, 1),
        },
        "system": {"os": f"{platform.system()} {platform.release()}", "boot_time": boot_time},
    }


def _clamp(value) -> int:
    return max(0, min(100, int(round(value))))


def simulated_sample(storage, rng=None) -> dict:
    rng = rng or random
    return {
        "cpu_usage": rng.randint(5, 95),
        "memory_usage": rng.randint(20, 95),
        "disk_usage": rng.randint(10, 90),
        "active_users": storage.sessions.count(),
        "uptime": int(time.monotonic() - PROCESS_STARTED),
    }


def host_sample(storage, rng=None) -> dict:
    return {
        "cpu_usage": _clamp(psutil.cpu_percent(interval=0.1)),
        "memory_usage": _clamp(psutil.virtual_memory().percent),
        "disk_usage": _clamp(psutil.disk_usage("/").percent),
        "active_users": storage.sessions.count(),
        "uptime": int(time.time() - psutil.boot_time()),
    }


SAMPLERS = {"simulated": simulated_sample, "host": host_sample}


def record_server_stats(storage, source: str = "simulated", rng=None):
    sampler = SAMPLERS.get(source)
    if sampler is None:
        raise ValueError(f"Unknown stats source: {source}")
    row = storage.server_stats.create(sampler(storage, rng))
    logger.debug("Server stats #%s recorded (cpu=%s%%)", row.id, row.cpu_usage)
    return row


def high_usage(stats) -> dict:
    """Percentages above the alert threshold, keyed by metric."""
    metrics = {"CPU": stats.cpu_usage, "Memory": stats.memory_usage, "Disk": stats.disk_usage}
    return {name: value for name, value in metrics.items() if value > HIGH_USAGE_THRESHOLD}
