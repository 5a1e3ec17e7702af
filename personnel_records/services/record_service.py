"""
Record service: create, read, search, update and delete person records.

Form values arrive as text. Coercion rules applied on both
create and update:

- number_of_children: the leading integer of the text, 0 when
  missing, non-numeric or negative
- dates: empty strings become NULL
- booleans: only the literal "true" is true
- other text: empty strings become NULL

Arrest fields are stored as submitted, even when ever_arrested
is false.
"""

import re
from datetime import date, datetime

from sqlalchemy import select, func, or_, update
from sqlalchemy.orm import Session

from personnel_records.exceptions import NotFoundError
from personnel_records.models.record import Record
from personnel_records.schemas.record import RecordForm

# Columns a record form can set, in statement order.
# Each entry maps a Record column to the form field it comes from.
FORM_COLUMNS: list[tuple[str, str]] = [
    ("full_name", "full_name"),
    ("nickname", "nickname"),
    ("mothers_name", "mothers_name"),
    ("date_of_birth", "date_of_birth"),
    ("tribe", "tribe"),
    ("parent_phone", "parent_phone"),
    ("phone", "phone"),
    ("marital_status", "marital_status"),
    ("number_of_children", "number_of_children"),
    ("residence", "residence"),
    ("education_level", "education_level"),
    ("languages_spoken", "languages"),
    ("technical_skills", "technical_skills"),
    ("additional_details", "additional_details"),
    ("has_passport", "has_passport"),
    ("ever_arrested", "ever_arrested"),
    ("arrest_location", "arrest_location"),
    ("arrest_reason", "arrest_reason"),
    ("arrest_date", "arrest_date"),
    ("arresting_authority", "arresting_authority"),
    ("feel_no", "feel_no"),
    ("baare", "baare"),
]

DATE_COLUMNS = {"date_of_birth", "arrest_date"}
BOOLEAN_COLUMNS = {"has_passport", "ever_arrested"}
SEARCH_COLUMNS = (Record.full_name, Record.tribe, Record.phone, Record.nickname)
LEADING_INT = re.compile(r"\s*[+-]?\d+")


# --- Coercion ---

def parse_children(value: str | None) -> int:
    """Leading integer of the text: "3.5" is 3, "2 kids" is 2."""
    match = LEADING_INT.match(value or "")
    if not match:
        return 0
    count = int(match.group(0))
    return count if count > 0 else 0


def parse_date(value: str | None) -> date | None:
    if value is None or value.strip() == "":
        return None
    return date.fromisoformat(value.strip())


def parse_flag(value: str | None) -> bool:
    return value == "true"


def text_or_none(value: str | None) -> str | None:
    return value if value else None


def coerce_column(column: str, raw: str | None):
    if column == "number_of_children":
        return parse_children(raw)
    if column in DATE_COLUMNS:
        return parse_date(raw)
    if column in BOOLEAN_COLUMNS:
        return parse_flag(raw)
    if column == "full_name":
        return raw
    return text_or_none(raw)


# --- Change set ---

class RecordChangeSet:
    """
    Ordered (column, value) assignments for one UPDATE statement.

    Columns are appended as they are decided; the statement is
    rendered from the accumulated sequence, so bind parameter
    positions always match however many optional columns were
    added.
    """

    def __init__(self):
        self._assignments: list[tuple[str, object]] = []

    def set(self, column: str, value) -> "RecordChangeSet":
        if column in self.columns:
            raise ValueError(f"Column {column} assigned twice")
        self._assignments.append((column, value))
        return self

    @property
    def columns(self) -> list[str]:
        return [column for column, _ in self._assignments]

    def __len__(self) -> int:
        return len(self._assignments)

    def __iter__(self):
        return iter(self._assignments)

    def as_values(self) -> dict:
        return dict(self._assignments)

    @classmethod
    def from_form(
        cls,
        form: RecordForm,
        photo_url: str | None = None,
        fingerprint_url: str | None = None,
    ) -> "RecordChangeSet":
        """All form columns, then file columns only if a new file was stored."""
        changes = cls()
        for column, field in FORM_COLUMNS:
            changes.set(column, coerce_column(column, getattr(form, field)))
        if photo_url:
            changes.set("photo_url", photo_url)
        if fingerprint_url:
            changes.set("fingerprint_url", fingerprint_url)
        changes.set("updated_at", datetime.utcnow())
        return changes


class RecordService:

    def __init__(self, db: Session):
        self.db = db

    def list(self, search: str = "", page: int = 1, limit: int = 10) -> tuple[list[Record], int]:
        """
        One page of records matching search, newest first.

        An empty search is not skipped: it becomes the pattern
        '%%', which matches every row with a non-null column.
        """
        pattern = f"%{search}%"
        condition = or_(*(column.ilike(pattern) for column in SEARCH_COLUMNS))
        offset = (page - 1) * limit

        records = self.db.execute(
            select(Record)
            .where(condition)
            .order_by(Record.created_at.desc(), Record.id.desc())
            .limit(limit)
            .offset(offset)
        ).scalars().all()

        total = self.db.execute(
            select(func.count()).select_from(Record).where(condition)
        ).scalar_one()

        return list(records), total

    def get(self, record_id: int) -> Record:
        record = self.db.get(Record, record_id)
        if not record:
            raise NotFoundError("Record not found")
        return record

    def create(
        self,
        form: RecordForm,
        photo_url: str | None = None,
        fingerprint_url: str | None = None,
    ) -> Record:
        """Insert a record with every column in one statement."""
        values = {
            column: coerce_column(column, getattr(form, field))
            for column, field in FORM_COLUMNS
        }
        record = Record(
            **values,
            photo_url=photo_url,
            fingerprint_url=fingerprint_url,
        )
        self.db.add(record)
        self.db.flush()
        return record

    def update(
        self,
        record_id: int,
        form: RecordForm,
        photo_url: str | None = None,
        fingerprint_url: str | None = None,
    ) -> Record:
        """
        Overwrite a record's form columns.

        photo_url and fingerprint_url are only written when a new
        file was supplied; otherwise the stored values are kept.
        """
        changes = RecordChangeSet.from_form(form, photo_url, fingerprint_url)
        result = self.db.execute(
            update(Record)
            .where(Record.id == record_id)
            .values(changes.as_values())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("Record not found")

        record = self.db.get(Record, record_id, populate_existing=True)
        return record

    def delete(self, record_id: int) -> Record:
        """Hard delete. Returns the deleted row."""
        record = self.get(record_id)
        self.db.delete(record)
        self.db.flush()
        return record
