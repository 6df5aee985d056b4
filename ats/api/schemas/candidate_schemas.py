"""Request schemas for candidate endpoints."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from ats.models.candidate import (
    CandidateOrigin,
    CandidateStatus,
    CandidateTimeline,
    TechTestResult
)


class CreateCandidateRequest(BaseModel):
    """Request model for registering a candidate on a job or the general pool."""
    job_id: str
    name: str
    status: CandidateStatus = CandidateStatus.AWAITING_SCREENING
    origin: Optional[CandidateOrigin] = None
    city: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    salary_expectation: Optional[str] = None
    interview_at: Optional[datetime] = None
    tech_test: bool = False
    tech_test_date: Optional[datetime] = None
    tech_test_result: Optional[TechTestResult] = None
    tech_test_evaluator: Optional[str] = None
    timeline: Optional[CandidateTimeline] = None
    notes: Optional[str] = None


class UpdateCandidateStatusRequest(BaseModel):
    """Request model for moving a candidate to a new status."""
    status: CandidateStatus
    rejection_reason: Optional[str] = None
    changed_at: Optional[datetime] = None
