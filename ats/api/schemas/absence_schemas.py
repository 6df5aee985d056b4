"""Request schemas for absenteeism endpoints."""

from pydantic import BaseModel
from typing import Optional
from datetime import date

from ats.models.absence import DocumentType, DurationUnit


class CreateAbsenceRequest(BaseModel):
    """Request model for registering an absence."""
    employee_name: str
    absence_date: date
    document_type: DocumentType = DocumentType.MEDICAL_CERTIFICATE
    document_duration: str = ""
    duration_unit: Optional[DurationUnit] = None
    duration_amount: Optional[float] = None
    reason: str = ""
    companion_name: Optional[str] = None
    companion_bond: Optional[str] = None


class UpdateAbsenceRequest(BaseModel):
    """Request model for correcting an absence record."""
    employee_name: Optional[str] = None
    absence_date: Optional[date] = None
    document_type: Optional[DocumentType] = None
    document_duration: Optional[str] = None
    duration_unit: Optional[DurationUnit] = None
    duration_amount: Optional[float] = None
    reason: Optional[str] = None
    companion_name: Optional[str] = None
    companion_bond: Optional[str] = None
