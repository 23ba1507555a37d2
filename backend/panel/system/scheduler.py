"""
Periodic background jobs on APScheduler's AsyncIOScheduler.

Every job has its own handle and can be removed on its own. Jobs write through
the same storage object the request handlers use; there is no skip-if-running
guard and no persisted last-run state.
"""

import logging
from typing import Dict

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from panel.modules.notifications.service import notify
from panel.modules.recommendations.service import refresh_recommendations
from panel.system import scanner
from panel.system.monitor import high_usage, record_server_stats

logger = logging.getLogger(__name__)


async def collect_server_stats(storage, hub, source: str = "simulated"):
    stats = record_server_stats(storage, source)

    hot = high_usage(stats)
    if hot:
        details = ", ".join(f"{name} {value}%" for name, value in hot.items())
        await notify(storage, hub, "High resource usage", f"Server is under heavy load: {details}.",
                     type="warning", priority="high")
    return stats


async def scheduled_security_scan(storage, hub):
    scan = scanner.run_security_scan(storage, "full")
    await notify(storage, hub, **scanner.summary(scan))
    return scan


async def scheduled_recommendations(storage, hub):
    return refresh_recommendations(storage)


class PanelScheduler:
    def __init__(self, storage, hub, settings):
        self.storage = storage
        self.hub = hub
        self.settings = settings
        self.scheduler = AsyncIOScheduler()
        self.jobs: Dict[str, object] = {}

    def _add(self, name: str, func, seconds: int, *args):
        # 1. Hapus job lama dengan id yang sama (biar gak duplikat)
        self.jobs[name] = self.scheduler.add_job(
            func,
            "interval",
            seconds=seconds,
            args=[self.storage, self.hub, *args],
            id=name,
            replace_existing=True,
        )
        logger.info("Scheduled job %s every %ss", name, seconds)

    def start(self) -> None:
        settings = self.settings
        self._add("server_stats", collect_server_stats, settings.stats_interval_seconds, settings.stats_source)
        self._add("security_scan", scheduled_security_scan, settings.scan_interval_seconds)
        self._add("recommendations", scheduled_recommendations, settings.recommendation_interval_seconds)

        if not self.scheduler.running:
            self.scheduler.start()
            logger.info("Background scheduler started")

    def remove(self, name: str) -> bool:
        job = self.jobs.pop(name, None)
        if job is None:
            return False
        job.remove()
        return True

    def shutdown(self) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=False)
            logger.info("Background scheduler stopped")
        self.jobs.clear()
