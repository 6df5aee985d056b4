"""Pydantic models for absenteeism records."""

from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import date, datetime
from enum import Enum

from ats.utils.date_utils import parse_datetime


class DocumentType(str, Enum):
    """Document justifying (or not) an absence."""
    MEDICAL_CERTIFICATE = "medical_certificate"
    DECLARATION = "declaration"
    DEPENDENT_COMPANION = "dependent_companion"
    UNJUSTIFIED_ABSENCE = "unjustified_absence"


class DurationUnit(str, Enum):
    DAYS = "days"
    HOURS = "hours"


class AbsenceRecord(BaseModel):
    """An absence of an employee, with the document that covers it.

    Older records only carry the free-text document_duration; newer ones
    also store the amount and its unit.

    Attributes:
        id: Unique record identifier.
        employee_name: Name of the absent employee, as typed by HR.
        absence_date: Day the absence started.
        document_duration: Free-text duration (e.g. "2 days").
        duration_unit: Unit of duration_amount.
        duration_amount: Length of the absence in duration_unit.
        document_type: Kind of document presented.
        reason: Why the employee was absent.
        companion_name: Dependent accompanied, for companion documents.
        companion_bond: Relationship to that dependent.
        created_at: When the record was registered.
        deleted_at: When the record was soft-deleted.
    """
    id: str
    employee_name: str
    absence_date: date
    document_duration: str = ""
    duration_unit: Optional[DurationUnit] = None
    duration_amount: Optional[float] = None
    document_type: DocumentType = DocumentType.MEDICAL_CERTIFICATE
    reason: str = ""
    companion_name: Optional[str] = None
    companion_bond: Optional[str] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @field_validator("absence_date", mode="before")
    @classmethod
    def _date_part(cls, value):
        if isinstance(value, str) and "T" in value:
            return value.split("T")[0]
        return value

    @field_validator("created_at", "deleted_at", mode="before")
    @classmethod
    def _parse_dates(cls, value):
        return parse_datetime(value)

    @property
    def duration_label(self) -> str:
        """Duration as shown to HR, preferring the structured amount."""
        if self.duration_amount is not None and self.duration_unit:
            amount = f"{self.duration_amount:g}"
            return f"{amount} {DurationUnit(self.duration_unit).value}"
        return self.document_duration

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
