"""
Logging setup.

Configured once when the application starts. Modules get their
own logger with logging.getLogger(__name__).
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the root logger."""
    root = logging.getLogger()
    if any(getattr(h, "_personnel_records", False) for h in root.handlers):
        root.setLevel(level.upper())
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._personnel_records = True
    root.addHandler(handler)
    root.setLevel(level.upper())
