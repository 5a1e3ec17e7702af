"""
Audit log model.

Records who did what to which target. The trail exists for
compliance: every record mutation and account change must be
traceable.
"""

from datetime import datetime

from sqlalchemy import String, DateTime, Integer, JSON
from sqlalchemy.orm import Mapped, mapped_column

from personnel_records.models.base import Base


class AuditLog(Base):
    """
    Immutable record of an action.

    Audit logs are append-only. The application never updates
    or deletes an entry.

    user_id and target_user_id are plain integers, not foreign
    keys: an entry must survive the deletion of the user it
    mentions, and target_user_id also carries record ids for
    record actions.
    """

    __tablename__ = "audit_log"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, index=True
    )
    target_user_id: Mapped[int | None] = mapped_column(
        Integer, nullable=True, index=True
    )
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    details: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=datetime.utcnow, nullable=False, index=True
    )

    def __repr__(self) -> str:
        return f"<AuditLog {self.action} by {self.user_id} on {self.target_user_id}>"
