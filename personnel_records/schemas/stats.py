"""
Pydantic schemas for the audit trail and the statistics endpoints.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


# --- Audit Log Schemas ---

class AuditLogResponse(BaseModel):
    id: int
    user_id: int | None
    target_user_id: int | None
    action: str
    details: dict | None
    created_at: datetime
    user_username: str | None = None
    user_email: str | None = None


class AuditLogListResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    logs: list[AuditLogResponse]
    total_logs: int = Field(alias="totalLogs")
    total_pages: int = Field(alias="totalPages")
    current_page: int = Field(alias="currentPage")


class ActiveUser(BaseModel):
    id: int
    username: str
    email: str
    action_count: int


class ActionCount(BaseModel):
    action: str
    count: int


class TimelinePoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    day: date = Field(alias="date")
    actions_count: int


class AuditStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    active_users: list[ActiveUser] = Field(alias="activeUsers")
    common_actions: list[ActionCount] = Field(alias="commonActions")
    timeline: list[TimelinePoint]


# --- Dashboard Schemas ---

class DashboardStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_records: int = Field(alias="totalRecords")
    today_records: int = Field(alias="todayRecords")
    pending_records: int = Field(alias="pendingRecords")
    completed_records: int = Field(alias="completedRecords")


class AdminStatsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    total_users: int = Field(alias="totalUsers")
    total_records: int = Field(alias="totalRecords")
    today_records: int = Field(alias="todayRecords")
