import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; later calls only adjust the level."""
    root = logging.getLogger()
    if not any(getattr(h, "_panel_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._panel_handler = True
        root.addHandler(handler)

    root.setLevel(level.upper())

    # APScheduler terlalu berisik di level INFO
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
