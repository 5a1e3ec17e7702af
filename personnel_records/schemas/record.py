"""
Pydantic schemas for person records.

RecordForm is the raw multipart submission: every value is the
text the client sent, before coercion. RecordResponse is the
stored row.
"""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


# --- Request Schemas ---

class RecordForm(BaseModel):
    """Text fields of a record create/update form, uncoerced."""
    full_name: str | None = None
    nickname: str | None = None
    mothers_name: str | None = None
    date_of_birth: str | None = None
    tribe: str | None = None
    parent_phone: str | None = None
    phone: str | None = None
    marital_status: str | None = None
    number_of_children: str | None = None
    residence: str | None = None
    education_level: str | None = None
    languages: str | None = None
    technical_skills: str | None = None
    additional_details: str | None = None
    has_passport: str | None = None
    ever_arrested: str | None = None
    arrest_location: str | None = None
    arrest_reason: str | None = None
    arrest_date: str | None = None
    arresting_authority: str | None = None
    feel_no: str | None = None
    baare: str | None = None


# --- Response Schemas ---

class RecordResponse(BaseModel):
    id: int
    full_name: str
    nickname: str | None
    mothers_name: str | None
    date_of_birth: date | None
    tribe: str | None
    parent_phone: str | None
    phone: str | None
    marital_status: str | None
    number_of_children: int
    residence: str | None
    education_level: str | None
    languages_spoken: str | None
    technical_skills: str | None
    additional_details: str | None
    has_passport: bool
    ever_arrested: bool
    arrest_location: str | None
    arrest_reason: str | None
    arrest_date: date | None
    arresting_authority: str | None
    photo_url: str | None
    fingerprint_url: str | None
    feel_no: str | None
    baare: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RecordListResponse(BaseModel):
    """One page of search results."""
    model_config = ConfigDict(populate_by_name=True)

    records: list[RecordResponse]
    total_records: int = Field(alias="totalRecords")
    total_pages: int = Field(alias="totalPages")
    current_page: int = Field(alias="currentPage")
