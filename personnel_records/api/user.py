"""
Self-service profile endpoints.

A profile update is audited after it is saved, with a
{before, after} snapshot of the changed account.
"""

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from sqlalchemy.orm import Session

from personnel_records.api.deps import get_current_user, get_upload_storage
from personnel_records.config import get_settings
from personnel_records.exceptions import (
    ConflictError,
    NotFoundError,
    ValidationFailed,
)
from personnel_records.models.base import get_db
from personnel_records.models.user import User
from personnel_records.schemas.user import ProfileResponse, ProfileUpdateResponse
from personnel_records.services.audit_service import AuditService
from personnel_records.services.storage import AVATAR_FOLDER, UploadStorage, is_present
from personnel_records.services.user_service import UserService

router = APIRouter(prefix="/api/user", tags=["Profile"])


@router.get("/profile", response_model=ProfileResponse)
def get_profile(current_user: User = Depends(get_current_user)):
    return current_user


@router.put("/profile", response_model=ProfileUpdateResponse)
def update_profile(
    username: str = Form(..., min_length=3, max_length=50),
    email: str = Form(..., min_length=5, max_length=255),
    first_name: str | None = Form(None, alias="firstName"),
    last_name: str | None = Form(None, alias="lastName"),
    avatar: UploadFile | None = File(None),
    current_user: User = Depends(get_current_user),
    storage: UploadStorage = Depends(get_upload_storage),
    db: Session = Depends(get_db),
):
    """Update the caller's own name, username, email and avatar."""
    avatar_url = None
    if is_present(avatar):
        try:
            storage.check_image(avatar, get_settings().MAX_AVATAR_BYTES, "avatar")
        except ValidationFailed as e:
            raise HTTPException(status_code=400, detail=str(e))
        avatar_url = storage.save(
            avatar, AVATAR_FOLDER, prefix=f"avatar-{current_user.id}-"
        )

    service = UserService(db)
    try:
        before, after = service.update_profile(
            current_user,
            first_name=first_name,
            last_name=last_name,
            username=username,
            email=email,
            avatar_url=avatar_url,
        )
        db.commit()
    except ConflictError as e:
        db.rollback()
        storage.remove(avatar_url)
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        db.rollback()
        storage.remove(avatar_url)
        raise HTTPException(status_code=404, detail=str(e))

    if avatar_url and before["avatar_url"] != avatar_url:
        storage.remove(before["avatar_url"])

    AuditService(db).record(
        "update_profile",
        user_id=current_user.id,
        target_id=current_user.id,
        details={"before": before, "after": after},
    )

    return ProfileUpdateResponse(user=ProfileResponse(**after))
