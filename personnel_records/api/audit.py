"""
Audit interceptor for mutating endpoints.

audit_action() builds a dependency that writes one audit entry
before the endpoint body runs. The entry records:

- user_id: the acting user
- target_user_id: the id path parameter of the route, if any
- action: the given tag
- details: whatever the optional extractor returns

Because it runs first, the entry captures intent: an update or
delete that then fails with 404 still leaves an entry. A failed
write is logged by AuditService and never blocks the request.
"""

import inspect
import logging
from typing import Awaitable, Callable

from fastapi import Depends, Request
from sqlalchemy.orm import Session
from starlette.concurrency import run_in_threadpool

from personnel_records.api.deps import get_current_user
from personnel_records.models.base import get_db
from personnel_records.models.user import User
from personnel_records.services.audit_service import AuditService

logger = logging.getLogger(__name__)

DetailExtractor = Callable[[Request], dict | None | Awaitable[dict | None]]

TARGET_PARAMS = ("record_id", "user_id", "id")


def target_from_path(request: Request) -> int | None:
    for name in TARGET_PARAMS:
        value = request.path_params.get(name)
        if value is None:
            continue
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
    return None


def audit_action(action: str, details: DetailExtractor | None = None):
    """Return a dependency that audits `action` for the current request."""

    async def write_audit_entry(
        request: Request,
        current_user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> None:
        extracted = None
        if details is not None:
            try:
                extracted = details(request)
                if inspect.isawaitable(extracted):
                    extracted = await extracted
            except Exception:
                logger.exception("Audit detail extraction failed for %s", action)
                extracted = None

        # Sync session work runs off the event loop
        await run_in_threadpool(
            AuditService(db).record,
            action,
            user_id=current_user.id,
            target_id=target_from_path(request),
            details=extracted,
        )

    return write_audit_entry


async def record_form_summary(request: Request) -> dict | None:
    """Details for record create/update: who the record is about."""
    form = await request.form()
    full_name = form.get("fullName")
    if not full_name:
        return None
    return {"full_name": full_name}


async def user_update_summary(request: Request) -> dict | None:
    """Details for an admin user edit: the requested identity and role."""
    body = await request.json()
    return {
        "username": body.get("username"),
        "email": body.get("email"),
        "is_admin": body.get("isAdmin"),
    }
