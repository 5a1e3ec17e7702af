"""
Admin API endpoints: user management, audit trail and statistics.

Every route requires the admin gate.
"""

import math

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from personnel_records.api.audit import audit_action, user_update_summary
from personnel_records.api.deps import require_admin
from personnel_records.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationFailed,
)
from personnel_records.models.base import get_db
from personnel_records.models.user import User
from personnel_records.schemas.stats import (
    AdminStatsResponse,
    AuditLogListResponse,
    AuditLogResponse,
    AuditStatsResponse,
)
from personnel_records.schemas.user import (
    AdminUserSummary,
    AdminUserUpdate,
    AdminUserUpdateResponse,
    MessageResponse,
    UserListResponse,
    UserResponse,
)
from personnel_records.services.audit_service import AuditService
from personnel_records.services.stats_service import StatsService
from personnel_records.services.user_service import UserService

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
)


# --- User Management ---

@router.get("/users", response_model=UserListResponse)
def list_users(db: Session = Depends(get_db)):
    service = UserService(db)
    users = service.list_users()
    return UserListResponse(users=[UserResponse.model_validate(u) for u in users])


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    admin: User = Depends(require_admin),
    _audit: None = Depends(audit_action("DELETE_USER")),
    db: Session = Depends(get_db),
):
    """Delete an account. An admin cannot delete their own."""
    service = UserService(db)
    try:
        service.delete_user(admin, user_id)
        db.commit()
    except ValidationFailed as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    return MessageResponse(message="User deleted successfully")


async def user_update_body(request: Request) -> AdminUserUpdate:
    """
    Parse and validate the edit before the audit step runs.

    Invalid bodies are rejected with the usual 422 and leave no
    audit entry, matching the record form.
    """
    try:
        body = await request.json()
    except ValueError:
        raise RequestValidationError([{
            "type": "json_invalid",
            "loc": ("body",),
            "msg": "JSON decode error",
            "input": None,
        }])
    try:
        return AdminUserUpdate.model_validate(body)
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False))


@router.put(
    "/users/{user_id}",
    response_model=AdminUserUpdateResponse,
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": AdminUserUpdate.model_json_schema()},
            },
        },
    },
)
def update_user(
    user_id: int,
    request: AdminUserUpdate = Depends(user_update_body),
    _audit: None = Depends(audit_action("UPDATE_USER", user_update_summary)),
    db: Session = Depends(get_db),
):
    service = UserService(db)
    try:
        user = service.update_user(
            user_id,
            username=request.username,
            email=request.email,
            is_admin=request.is_admin,
        )
        db.commit()
    except ConflictError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))
    return AdminUserUpdateResponse(user=AdminUserSummary.model_validate(user))


# --- Audit Trail ---

@router.get("/audit-logs", response_model=AuditLogListResponse)
def list_audit_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1, le=500),
    user_id: int | None = None,
    action: str | None = None,
    db: Session = Depends(get_db),
):
    """
    Page through the audit trail, newest first.

    user_id filters on the target of the action, action on a
    case-insensitive substring of the action tag.
    """
    service = AuditService(db)
    logs, total = service.list_logs(
        page=page, limit=limit, user_id=user_id, action=action
    )
    return AuditLogListResponse(
        logs=[AuditLogResponse(**log) for log in logs],
        total_logs=total,
        total_pages=math.ceil(total / limit),
        current_page=page,
    )


@router.get("/audit-stats", response_model=AuditStatsResponse)
def audit_stats(db: Session = Depends(get_db)):
    stats = AuditService(db).stats()
    return AuditStatsResponse(
        active_users=stats["active_users"],
        common_actions=stats["common_actions"],
        timeline=stats["timeline"],
    )


# --- Statistics ---

@router.get("/stats", response_model=AdminStatsResponse)
def admin_stats(db: Session = Depends(get_db)):
    return AdminStatsResponse(**StatsService(db).admin())
