"""
Database models package.

All models must be imported here so that Alembic can discover
them through Base.metadata when generating migrations.
"""

from personnel_records.models.base import Base
from personnel_records.models.user import User
from personnel_records.models.record import Record
from personnel_records.models.audit_log import AuditLog

__all__ = [
    "Base",
    "User",
    "Record",
    "AuditLog",
]
