"""
Rule-based recommendations derived from telemetry, scans and quota usage.

Each rule yields at most one open recommendation per (rule, user). Refreshing
adds rows for rules that now fire and drops open rows whose rule no longer
does; applied and dismissed rows are left alone.
"""

import logging
from typing import Dict, List, Optional

from panel.modules.packages.limits import build_usage_report

logger = logging.getLogger(__name__)

CPU_THRESHOLD = 80
MEMORY_THRESHOLD = 85
DISK_THRESHOLD = 85
QUOTA_THRESHOLD = 80


def _server_rules(storage) -> List[Dict]:
    found = []

    stats = storage.get_latest_server_stats()
    if stats is not None:
        if stats.cpu_usage > CPU_THRESHOLD:
            found.append({
                "rule": "high_cpu",
                "category": "performance",
                "priority": "high",
                "title": "High CPU usage",
                "description": f"CPU usage is at {stats.cpu_usage}%. Consider enabling caching or upgrading the server.",
            })
        if stats.memory_usage > MEMORY_THRESHOLD:
            found.append({
                "rule": "high_memory",
                "category": "performance",
                "priority": "normal",
                "title": "High memory usage",
                "description": f"Memory usage is at {stats.memory_usage}%. Review long-running processes.",
            })
        if stats.disk_usage > DISK_THRESHOLD:
            found.append({
                "rule": "low_disk",
                "category": "capacity",
                "priority": "high",
                "title": "Disk almost full",
                "description": f"Disk usage is at {stats.disk_usage}%. Clean up old backups or add storage.",
            })

    scan = storage.get_latest_security_scan()
    if scan is not None and scan.threats_found:
        found.append({
            "rule": "scan_threats",
            "category": "security",
            "priority": "high",
            "title": "Resolve security scan findings",
            "description": f"The latest scan reported {scan.threats_found} threat(s).",
        })

    admins_without_2fa = storage.users.count(role="admin", two_factor_enabled=False)
    if admins_without_2fa:
        found.append({
            "rule": "admin_2fa",
            "category": "security",
            "priority": "normal",
            "title": "Enable two-factor authentication for admins",
            "description": f"{admins_without_2fa} admin account(s) sign in with a password only.",
        })
    return found


def _quota_rules(storage, user) -> List[Dict]:
    found = []
    report = build_usage_report(storage, user)
    for key in ("disk", "domains", "email_accounts", "databases"):
        usage = report[key]
        if not usage["unlimited"] and usage["percentage"] >= QUOTA_THRESHOLD:
            label = key.replace("_", " ")
            found.append({
                "rule": f"quota_{key}",
                "category": "capacity",
                "priority": "high" if usage["percentage"] >= 100 else "normal",
                "title": f"{label.capitalize()} quota almost used",
                "description": f"{usage['label']} used ({usage['percentage']}%). Consider upgrading the package.",
            })
    return found


def _sync(storage, user_id: Optional[int], fired: List[Dict], rule_prefix: Optional[str] = None) -> int:
    existing = storage.recommendations.list({"user_id": user_id})
    if rule_prefix is not None:
        existing = [r for r in existing if r.rule.startswith(rule_prefix)]
    else:
        existing = [r for r in existing if not r.rule.startswith("quota_")]

    fired_rules = {item["rule"] for item in fired}
    known = {r.rule for r in existing}

    # Rule yang sudah tidak aktif: hapus yang masih open
    for row in existing:
        if row.status == "open" and row.rule not in fired_rules:
            storage.recommendations.delete(row.id)

    created = 0
    for item in fired:
        if item["rule"] not in known:
            storage.recommendations.create(dict(item, user_id=user_id, status="open"))
            created += 1
    return created


def refresh_recommendations(storage, user_id: Optional[int] = None) -> int:
    """Re-evaluate rules; server-wide ones plus every user's quotas, or one user's quotas."""
    if user_id is not None:
        user = storage.users.get(user_id)
        return _sync(storage, user_id, _quota_rules(storage, user), "quota_") if user else 0

    created = _sync(storage, None, _server_rules(storage))
    for user in storage.users.list({"status": "active"}):
        created += _sync(storage, user.id, _quota_rules(storage, user), "quota_")

    logger.info("Recommendations refreshed, %d new", created)
    return created
