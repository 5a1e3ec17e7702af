"""Business logic services."""

from personnel_records.services.token_service import TokenService
from personnel_records.services.auth_service import AuthService
from personnel_records.services.user_service import UserService
from personnel_records.services.record_service import RecordService
from personnel_records.services.audit_service import AuditService
from personnel_records.services.stats_service import StatsService
from personnel_records.services.storage import UploadStorage

__all__ = [
    "TokenService",
    "AuthService",
    "UserService",
    "RecordService",
    "AuditService",
    "StatsService",
    "UploadStorage",
]
