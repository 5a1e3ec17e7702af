"""
Audit service: append entries to the audit trail and read it back.

Writing an entry must never break the operation being audited.
record() commits its own entry, and on failure it rolls back,
logs and returns None instead of raising.
"""

import logging
from datetime import datetime, timedelta

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from personnel_records.models.audit_log import AuditLog
from personnel_records.models.user import User

logger = logging.getLogger(__name__)

STATS_TOP_N = 10
TIMELINE_DAYS = 30


class AuditService:

    def __init__(self, db: Session):
        self.db = db

    def record(
        self,
        action: str,
        user_id: int | None = None,
        target_id: int | None = None,
        details: dict | None = None,
    ) -> AuditLog | None:
        """Append one entry. Returns None if the write failed."""
        entry = AuditLog(
            user_id=user_id,
            target_user_id=target_id,
            action=action,
            details=details,
        )
        try:
            self.db.add(entry)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            logger.exception(
                "Audit log write failed (action=%s, user=%s, target=%s)",
                action, user_id, target_id,
            )
            return None
        return entry

    def list_logs(
        self,
        page: int = 1,
        limit: int = 50,
        user_id: int | None = None,
        action: str | None = None,
    ) -> tuple[list[dict], int]:
        """
        One page of entries, newest first.

        user_id filters on the target of the action; action is a
        case-insensitive substring match. Each row carries the
        target user's username and email when the target is a user.
        """
        target = aliased(User)
        conditions = []
        if user_id is not None:
            conditions.append(AuditLog.target_user_id == user_id)
        if action:
            conditions.append(AuditLog.action.ilike(f"%{action}%"))

        query = (
            select(AuditLog, target.username, target.email)
            .outerjoin(target, AuditLog.target_user_id == target.id)
            .where(*conditions)
            .order_by(AuditLog.created_at.desc(), AuditLog.id.desc())
            .limit(limit)
            .offset((page - 1) * limit)
        )
        rows = self.db.execute(query).all()

        total = self.db.execute(
            select(func.count(AuditLog.id)).where(*conditions)
        ).scalar_one()

        logs = [
            {
                "id": entry.id,
                "user_id": entry.user_id,
                "target_user_id": entry.target_user_id,
                "action": entry.action,
                "details": entry.details,
                "created_at": entry.created_at,
                "user_username": username,
                "user_email": email,
            }
            for entry, username, email in rows
        ]
        return logs, total

    def stats(self) -> dict:
        """Most-targeted users, most common actions and a 30-day timeline."""
        action_count = func.count(AuditLog.id).label("action_count")
        active_users = self.db.execute(
            select(User.id, User.username, User.email, action_count)
            .select_from(AuditLog)
            .join(User, AuditLog.target_user_id == User.id)
            .group_by(User.id, User.username, User.email)
            .order_by(action_count.desc())
            .limit(STATS_TOP_N)
        ).all()

        count = func.count(AuditLog.id).label("count")
        common_actions = self.db.execute(
            select(AuditLog.action, count)
            .group_by(AuditLog.action)
            .order_by(count.desc())
            .limit(STATS_TOP_N)
        ).all()

        day = func.date(AuditLog.created_at).label("date")
        since = datetime.combine(
            datetime.utcnow().date() - timedelta(days=TIMELINE_DAYS),
            datetime.min.time(),
        )
        timeline = self.db.execute(
            select(day, func.count(AuditLog.id).label("actions_count"))
            .where(AuditLog.created_at >= since)
            .group_by(day)
            .order_by(day.desc())
        ).all()

        return {
            "active_users": [row._asdict() for row in active_users],
            "common_actions": [row._asdict() for row in common_actions],
            "timeline": [
                {"date": row.date, "actions_count": row.actions_count}
                for row in timeline
            ],
        }
