"""
Person record model.

Biographical data plus arrest history and two optional image
attachments (photo and fingerprint). The arrest_* columns are
only meaningful when ever_arrested is true; the database does
not enforce this.
"""

from datetime import date, datetime

from sqlalchemy import String, Boolean, Date, DateTime, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from personnel_records.models.base import Base


class Record(Base):
    __tablename__ = "records"

    id: Mapped[int] = mapped_column(primary_key=True)
    full_name: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True
    )
    nickname: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mothers_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_of_birth: Mapped[date | None] = mapped_column(Date, nullable=True)
    tribe: Mapped[str | None] = mapped_column(String(100), nullable=True)
    parent_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    marital_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    number_of_children: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0
    )
    residence: Mapped[str | None] = mapped_column(String(255), nullable=True)
    education_level: Mapped[str | None] = mapped_column(String(100), nullable=True)
    languages_spoken: Mapped[str | None] = mapped_column(Text, nullable=True)
    technical_skills: Mapped[str | None] = mapped_column(Text, nullable=True)
    additional_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    has_passport: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    ever_arrested: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False
    )
    arrest_location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    arrest_reason: Mapped[str | None] = mapped_column(Text, nullable=True)
    arrest_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    arresting_authority: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    photo_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    fingerprint_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    # Document number and investigator name
    feel_no: Mapped[str | None] = mapped_column(String(50), nullable=True)
    baare: Mapped[str | None] = mapped_column(String(100), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    def __repr__(self) -> str:
        return f"<Record {self.id} {self.full_name}>"
