"""Mock security scanner: random findings from a fixed catalog, no file access."""

import json
import logging
import random

logger = logging.getLogger(__name__)

FINDINGS = [
    {"severity": "high", "category": "malware", "title": "Suspicious PHP shell signature", "path": "/public_html/wp-content/uploads/x.php"},
    {"severity": "medium", "category": "vulnerability", "title": "Outdated CMS plugin", "path": "/public_html/wp-content/plugins"},
    {"severity": "medium", "category": "vulnerability", "title": "World-writable directory", "path": "/public_html/cache"},
    {"severity": "low", "category": "vulnerability", "title": "Directory listing enabled", "path": "/public_html/assets"},
    {"severity": "high", "category": "malware", "title": "Obfuscated JavaScript injection", "path": "/public_html/index.html"},
]


def _categories(scan_type: str):
    if scan_type == "full":
        return ("malware", "vulnerability")
    return (scan_type,)


def run_security_scan(storage, scan_type: str = "full", initiated_by=None, rng=None):
    rng = rng or random

    scan = storage.security_scans.create({"scan_type": scan_type, "status": "running", "initiated_by": initiated_by})

    # Mostly clean, kadang ada temuan
    pool = [f for f in FINDINGS if f["category"] in _categories(scan_type)]
    count = rng.choice([0, 0, 0, 1, 1, 2, 3])
    findings = rng.sample(pool, min(count, len(pool)))

    scan = storage.security_scans.update(
        scan.id,
        {
            "status": "completed",
            "threats_found": len(findings),
            "files_scanned": rng.randint(500, 5000),
            "details": json.dumps(findings),
            "completed_at": storage.clock(),
        },
    )
    logger.info("Security scan #%s (%s) found %d threat(s)", scan.id, scan_type, scan.threats_found)
    return scan


def summary(scan) -> dict:
    """Notification fields summarizing a finished scan."""
    if scan.threats_found:
        return {
            "title": "Security scan found threats",
            "message": f"{scan.threats_found} threat(s) detected in {scan.files_scanned} files.",
            "type": "warning",
            "priority": "high",
        }
    return {
        "title": "Security scan completed",
        "message": f"No threats detected in {scan.files_scanned} files.",
        "type": "success",
        "priority": "normal",
    }
