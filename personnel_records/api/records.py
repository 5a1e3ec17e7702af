"""
Person record API endpoints.

Every route requires a signed-in user. Create and update take
multipart form data with optional `photo` and `fingerprint`
image files. Each mutating request passes through these steps
in order: user gate, upload checks, form validation, audit
entry, then the change itself.
"""

import math
from dataclasses import dataclass

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile
from sqlalchemy.orm import Session

from personnel_records.api.audit import audit_action, record_form_summary
from personnel_records.api.deps import get_current_user, get_upload_storage
from personnel_records.config import get_settings
from personnel_records.exceptions import NotFoundError, ValidationFailed
from personnel_records.models.base import get_db
from personnel_records.models.user import User
from personnel_records.schemas.record import (
    RecordForm,
    RecordResponse,
    RecordListResponse,
)
from personnel_records.schemas.user import MessageResponse
from personnel_records.services.record_service import RecordService
from personnel_records.services.storage import (
    FINGERPRINT_FOLDER,
    PHOTO_FOLDER,
    UploadStorage,
    is_present,
)
from personnel_records.services.validation import validate_record_form

router = APIRouter(
    prefix="/api/records",
    tags=["Records"],
    dependencies=[Depends(get_current_user)],
)


@dataclass
class RecordUploads:
    photo: UploadFile | None = None
    fingerprint: UploadFile | None = None


def record_uploads(
    photo: UploadFile | None = File(None),
    fingerprint: UploadFile | None = File(None),
    storage: UploadStorage = Depends(get_upload_storage),
) -> RecordUploads:
    """Check the optional image parts before anything is written."""
    max_bytes = get_settings().MAX_UPLOAD_BYTES
    uploads = RecordUploads()
    try:
        if is_present(photo):
            storage.check_image(photo, max_bytes, "photo")
            uploads.photo = photo
        if is_present(fingerprint):
            storage.check_image(fingerprint, max_bytes, "fingerprint")
            uploads.fingerprint = fingerprint
    except ValidationFailed as e:
        raise HTTPException(status_code=400, detail=str(e))
    return uploads


def record_form(
    full_name: str | None = Form(None, alias="fullName"),
    nickname: str | None = Form(None),
    mothers_name: str | None = Form(None, alias="mothersName"),
    date_of_birth: str | None = Form(None, alias="dateOfBirth"),
    tribe: str | None = Form(None),
    parent_phone: str | None = Form(None, alias="parentPhone"),
    phone: str | None = Form(None),
    marital_status: str | None = Form(None, alias="maritalStatus"),
    number_of_children: str | None = Form(None, alias="numberOfChildren"),
    residence: str | None = Form(None),
    education_level: str | None = Form(None, alias="educationLevel"),
    languages: str | None = Form(None),
    technical_skills: str | None = Form(None, alias="technicalSkills"),
    additional_details: str | None = Form(None, alias="additionalDetails"),
    has_passport: str | None = Form(None, alias="hasPassport"),
    ever_arrested: str | None = Form(None, alias="everArrested"),
    arrest_location: str | None = Form(None, alias="arrestLocation"),
    arrest_reason: str | None = Form(None, alias="arrestReason"),
    arrest_date: str | None = Form(None, alias="arrestDate"),
    arresting_authority: str | None = Form(None, alias="arrestingAuthority"),
    feel_no: str | None = Form(None, alias="feelNo"),
    baare: str | None = Form(None),
) -> RecordForm:
    """Collect the text fields and reject the form if any are invalid."""
    form = RecordForm(
        full_name=full_name,
        nickname=nickname,
        mothers_name=mothers_name,
        date_of_birth=date_of_birth,
        tribe=tribe,
        parent_phone=parent_phone,
        phone=phone,
        marital_status=marital_status,
        number_of_children=number_of_children,
        residence=residence,
        education_level=education_level,
        languages=languages,
        technical_skills=technical_skills,
        additional_details=additional_details,
        has_passport=has_passport,
        ever_arrested=ever_arrested,
        arrest_location=arrest_location,
        arrest_reason=arrest_reason,
        arrest_date=arrest_date,
        arresting_authority=arresting_authority,
        feel_no=feel_no,
        baare=baare,
    )
    errors = validate_record_form(form)
    if errors:
        raise HTTPException(status_code=400, detail=errors)
    return form


def _store_uploads(storage: UploadStorage, uploads: RecordUploads) -> tuple[str | None, str | None]:
    photo_url = fingerprint_url = None
    if uploads.photo:
        photo_url = storage.save(uploads.photo, PHOTO_FOLDER)
    if uploads.fingerprint:
        fingerprint_url = storage.save(uploads.fingerprint, FINGERPRINT_FOLDER)
    return photo_url, fingerprint_url


@router.get("", response_model=RecordListResponse)
def list_records(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str = "",
    db: Session = Depends(get_db),
):
    """Search records by name, tribe, phone or nickname, newest first."""
    service = RecordService(db)
    records, total = service.list(search=search, page=page, limit=limit)
    return RecordListResponse(
        records=[RecordResponse.model_validate(r) for r in records],
        total_records=total,
        total_pages=math.ceil(total / limit),
        current_page=page,
    )


@router.get("/{record_id}", response_model=RecordResponse)
def get_record(
    record_id: int,
    db: Session = Depends(get_db),
):
    service = RecordService(db)
    try:
        return service.get(record_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=RecordResponse, status_code=201)
def create_record(
    current_user: User = Depends(get_current_user),
    uploads: RecordUploads = Depends(record_uploads),
    form: RecordForm = Depends(record_form),
    _audit: None = Depends(audit_action("CREATE_RECORD", record_form_summary)),
    storage: UploadStorage = Depends(get_upload_storage),
    db: Session = Depends(get_db),
):
    """Create a record, storing any attached photo and fingerprint."""
    service = RecordService(db)
    photo_url, fingerprint_url = _store_uploads(storage, uploads)
    try:
        record = service.create(form, photo_url, fingerprint_url)
        db.commit()
    except Exception:
        db.rollback()
        storage.remove(photo_url)
        storage.remove(fingerprint_url)
        raise
    return record


@router.put("/{record_id}", response_model=RecordResponse)
def update_record(
    record_id: int,
    current_user: User = Depends(get_current_user),
    uploads: RecordUploads = Depends(record_uploads),
    form: RecordForm = Depends(record_form),
    _audit: None = Depends(audit_action("UPDATE_RECORD", record_form_summary)),
    storage: UploadStorage = Depends(get_upload_storage),
    db: Session = Depends(get_db),
):
    """
    Update a record.

    Photo and fingerprint are replaced only when a new file is
    attached; the replaced files are then removed from storage.
    """
    service = RecordService(db)
    try:
        existing = service.get(record_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    old_photo, old_fingerprint = existing.photo_url, existing.fingerprint_url

    photo_url, fingerprint_url = _store_uploads(storage, uploads)
    try:
        record = service.update(record_id, form, photo_url, fingerprint_url)
        db.commit()
    except NotFoundError as e:
        db.rollback()
        storage.remove(photo_url)
        storage.remove(fingerprint_url)
        raise HTTPException(status_code=404, detail=str(e))
    except Exception:
        db.rollback()
        storage.remove(photo_url)
        storage.remove(fingerprint_url)
        raise

    if photo_url:
        storage.remove(old_photo)
    if fingerprint_url:
        storage.remove(old_fingerprint)
    return record


@router.delete("/{record_id}", response_model=MessageResponse)
def delete_record(
    record_id: int,
    current_user: User = Depends(get_current_user),
    _audit: None = Depends(audit_action("DELETE_RECORD")),
    storage: UploadStorage = Depends(get_upload_storage),
    db: Session = Depends(get_db),
):
    """Hard-delete a record and its stored images."""
    service = RecordService(db)
    try:
        record = service.delete(record_id)
        stored_files = (record.photo_url, record.fingerprint_url)
        db.commit()
    except NotFoundError as e:
        db.rollback()
        raise HTTPException(status_code=404, detail=str(e))

    for url in stored_files:
        storage.remove(url)
    return MessageResponse(message="Record deleted successfully")
