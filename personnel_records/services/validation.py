"""
Record form validation.

Returns every problem at once so the form can show them all.
"""

from datetime import date

from personnel_records.schemas.record import RecordForm

MIN_NAME_LENGTH = 2
MAX_FEEL_NO_LENGTH = 50
MAX_BAARE_LENGTH = 100


def _stripped(value: str | None) -> str:
    return (value or "").strip()


def _is_iso_date(value: str) -> bool:
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def validate_record_form(form: RecordForm) -> list[str]:
    errors: list[str] = []

    if len(_stripped(form.full_name)) < MIN_NAME_LENGTH:
        errors.append("Full name must be at least 2 characters long")

    if len(_stripped(form.mothers_name)) < MIN_NAME_LENGTH:
        errors.append("Mother's name must be at least 2 characters long")

    if len(_stripped(form.feel_no)) > MAX_FEEL_NO_LENGTH:
        errors.append("Document number (Feel No) must be 50 characters or less")

    if len(_stripped(form.baare)) > MAX_BAARE_LENGTH:
        errors.append("Investigator name (Baare) must be 100 characters or less")

    for label, value in (
        ("Date of birth", form.date_of_birth),
        ("Arrest date", form.arrest_date),
    ):
        text = _stripped(value)
        if text and not _is_iso_date(text):
            errors.append(f"{label} must be a valid date (YYYY-MM-DD)")

    return errors
