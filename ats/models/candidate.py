"""Pydantic models for candidates moving through a job's funnel."""

from pydantic import BaseModel, field_validator
from typing import Optional
from datetime import datetime
from enum import Enum

from ats.utils.date_utils import parse_datetime


class CandidateStatus(str, Enum):
    """Stage of a candidate in the hiring funnel."""
    AWAITING_SCREENING = "awaiting_screening"
    IN_ANALYSIS = "in_analysis"
    IN_TEST = "in_test"
    INTERVIEW = "interview"
    APPROVED = "approved"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"
    HIRED = "hired"
    PROPOSAL_ACCEPTED = "proposal_accepted"
    PROPOSAL_DECLINED = "proposal_declined"


# Statuses that must carry a rejection_reason
LOSS_STATUSES = (CandidateStatus.REJECTED, CandidateStatus.WITHDRAWN)

# Candidates that reached the final stages of a job
FINALIST_STATUSES = (
    CandidateStatus.IN_TEST,
    CandidateStatus.INTERVIEW,
    CandidateStatus.APPROVED,
    CandidateStatus.PROPOSAL_ACCEPTED,
    CandidateStatus.HIRED,
)


class CandidateOrigin(str, Enum):
    """Sourcing channel of a candidate."""
    LINKEDIN = "linkedin"
    INSTAGRAM = "instagram"
    SINE = "sine"
    SPONTANEOUS = "spontaneous"
    TALENT_POOL = "talent_pool"
    REFERRAL = "referral"
    INTERNAL = "internal"


class TechTestResult(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


class CandidateTimeline(BaseModel):
    """Milestones of a candidate's hiring process.

    Attributes:
        first_contact: First contact with the candidate.
        interview: Interview date.
        test: Technical test date.
        docs_delivery: Date the admission documents were delivered.
        admission_exam: Date of the admission medical exam.
        contract_sign: Date the contract was signed.
        integration: Onboarding date.
        start_date: First working day.
    """
    first_contact: Optional[datetime] = None
    interview: Optional[datetime] = None
    test: Optional[datetime] = None
    docs_delivery: Optional[datetime] = None
    admission_exam: Optional[datetime] = None
    contract_sign: Optional[datetime] = None
    integration: Optional[datetime] = None
    start_date: Optional[datetime] = None

    @field_validator("*", mode="before")
    @classmethod
    def _parse_dates(cls, value):
        return parse_datetime(value)


class Candidate(BaseModel):
    """Represents a candidate applying to a job (or the general pool).

    Attributes:
        id: Unique candidate identifier.
        job_id: Owning job, or the general-pool sentinel.
        name: Full name.
        status: Current funnel stage.
        origin: Sourcing channel.
        city: City of residence.
        email: Contact email.
        phone: Contact phone.
        salary_expectation: Salary expectation as typed by the recruiter.
        first_contact_at: When the candidate left screening.
        interview_at: When the candidate was interviewed.
        last_interaction_at: Last edit or note on the candidate.
        rejection_date: When the candidate was rejected or withdrew.
        rejection_reason: Why the candidate was lost.
        rejected_by: Name of the user who recorded the loss.
        tech_test: Whether a technical test was applied.
        tech_test_date: When the technical test was applied.
        tech_test_result: Outcome of the technical test.
        tech_test_evaluator: Who evaluated the technical test.
        test_approval_date: When the technical test was approved.
        timeline: Hiring milestones.
        notes: Free-text notes.
        created_at: When the candidate was registered.
        deleted_at: When the candidate was soft-deleted.
    """
    id: str
    job_id: str
    name: str = ""
    status: CandidateStatus = CandidateStatus.AWAITING_SCREENING
    origin: Optional[CandidateOrigin] = None
    city: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    salary_expectation: Optional[str] = None
    first_contact_at: Optional[datetime] = None
    interview_at: Optional[datetime] = None
    last_interaction_at: Optional[datetime] = None
    rejection_date: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    rejected_by: Optional[str] = None
    tech_test: bool = False
    tech_test_date: Optional[datetime] = None
    tech_test_result: Optional[TechTestResult] = None
    tech_test_evaluator: Optional[str] = None
    test_approval_date: Optional[datetime] = None
    timeline: CandidateTimeline = CandidateTimeline()
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    @field_validator(
        "first_contact_at",
        "interview_at",
        "last_interaction_at",
        "rejection_date",
        "tech_test_date",
        "test_approval_date",
        "created_at",
        "deleted_at",
        mode="before",
    )
    @classmethod
    def _parse_dates(cls, value):
        return parse_datetime(value)

    @property
    def interview_date(self) -> Optional[datetime]:
        """Interview timestamp, falling back to the timeline entry."""
        return self.interview_at or self.timeline.interview

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
