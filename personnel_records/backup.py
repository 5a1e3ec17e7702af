"""
Manual database backup.

Dumps the database with pg_dump into BACKUP_DIR as
backup-YYYY-MM-DD.sql, then deletes backups older than
BACKUP_RETENTION_DAYS. Not a service: run it by hand or from cron.

    records-backup
"""

import logging
import subprocess
import sys
import time
from datetime import date
from pathlib import Path

from personnel_records.config import Settings, get_settings
from personnel_records.logging_config import configure_logging

logger = logging.getLogger(__name__)

BACKUP_PREFIX = "backup-"


def backup_path(backup_dir: Path, day: date | None = None) -> Path:
    return backup_dir / f"{BACKUP_PREFIX}{(day or date.today()).isoformat()}.sql"


def prune_backups(
    backup_dir: Path, max_age_days: int, now: float | None = None
) -> list[Path]:
    """Delete backup-* files last modified more than max_age_days ago."""
    cutoff = (now if now is not None else time.time()) - max_age_days * 86400
    removed = []
    for path in sorted(backup_dir.glob(f"{BACKUP_PREFIX}*")):
        if path.is_file() and path.stat().st_mtime < cutoff:
            path.unlink()
            logger.info("Deleted old backup: %s", path.name)
            removed.append(path)
    return removed


def backup_database(settings: Settings) -> Path:
    """Run pg_dump into today's backup file and prune old ones."""
    backup_dir = Path(settings.BACKUP_DIR)
    backup_dir.mkdir(parents=True, exist_ok=True)
    target = backup_path(backup_dir)

    with open(target, "wb") as out:
        subprocess.run(
            ["pg_dump", settings.DATABASE_URL],
            stdout=out,
            check=True,
        )
    logger.info("Backup completed: %s", target)

    prune_backups(backup_dir, settings.BACKUP_RETENTION_DAYS)
    return target


def main() -> int:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    try:
        backup_database(settings)
    except (OSError, subprocess.CalledProcessError):
        logger.exception("Backup failed")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
