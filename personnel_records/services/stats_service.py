"""
Stats service: counters for the staff dashboard and the admin panel.
"""

from datetime import datetime, timedelta

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from personnel_records.models.record import Record
from personnel_records.models.user import User


def _today_bounds(now: datetime | None = None) -> tuple[datetime, datetime]:
    start = datetime.combine((now or datetime.utcnow()).date(), datetime.min.time())
    return start, start + timedelta(days=1)


class StatsService:

    def __init__(self, db: Session):
        self.db = db

    def _count(self, model, *conditions) -> int:
        return self.db.execute(
            select(func.count(model.id)).where(*conditions)
        ).scalar_one()

    def _records_today(self) -> int:
        start, end = _today_bounds()
        return self._count(
            Record, Record.created_at >= start, Record.created_at < end
        )

    def dashboard(self) -> dict:
        """
        Record counters for the staff dashboard.

        "Pending" records are those with an arrest history; every
        other record counts as completed.
        """
        total = self._count(Record)
        pending = self._count(Record, Record.ever_arrested.is_(True))
        return {
            "total_records": total,
            "today_records": self._records_today(),
            "pending_records": pending,
            "completed_records": total - pending,
        }

    def admin(self) -> dict:
        return {
            "total_users": self._count(User),
            "total_records": self._count(Record),
            "today_records": self._records_today(),
        }
