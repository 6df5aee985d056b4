"""Pydantic models for the talent pool."""

from pydantic import BaseModel, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

from ats.utils.date_utils import parse_datetime

# Separator between email and phone in a talent's contact field
CONTACT_SEPARATOR = "|"


class TransportType(str, Enum):
    OWN_MEANS = "own_means"
    NEEDS_TRANSPORT = "needs_transport"


class TalentSort(str, Enum):
    """Orderings offered when listing the talent pool."""
    NAME_ASC = "name_asc"
    NAME_DESC = "name_desc"
    DATE_DESC = "date_desc"
    DATE_ASC = "date_asc"


class Education(BaseModel):
    institution: str = ""
    level: str = ""
    status: str = ""
    conclusion_year: str = ""


class Experience(BaseModel):
    company: str = ""
    role: str = ""
    period: str = ""
    description: str = ""


class TalentProfile(BaseModel):
    """A person kept in the talent pool for future openings.

    Attributes:
        id: Unique talent identifier.
        name: Full name.
        age: Age in years.
        contact: Email and phone joined by "|".
        city: City of residence.
        target_role: Role the talent is aiming for.
        tags: Free skill tags used by the search.
        education: Education history.
        experience: Professional experience.
        created_at: When the talent entered the pool.
        salary_expectation: Salary expectation as typed by the recruiter.
        transportation: Whether the talent can commute on their own.
        needs_review: Flag for profiles imported without a recruiter check.
        observations: Dated recruiter notes, oldest first.
        deleted_at: When the talent was soft-deleted.
    """
    id: str
    name: str
    age: Optional[int] = None
    contact: str = ""
    city: str = ""
    target_role: str = ""
    tags: List[str] = []
    education: List[Education] = []
    experience: List[Experience] = []
    created_at: Optional[datetime] = None
    salary_expectation: Optional[str] = None
    transportation: Optional[TransportType] = TransportType.OWN_MEANS
    needs_review: bool = False
    observations: List[str] = []
    deleted_at: Optional[datetime] = None

    @field_validator("created_at", "deleted_at", mode="before")
    @classmethod
    def _parse_dates(cls, value):
        return parse_datetime(value)

    @property
    def contact_parts(self) -> List[str]:
        return [part.strip() for part in self.contact.split(CONTACT_SEPARATOR) if part.strip()]

    @property
    def email(self) -> Optional[str]:
        return next((part for part in self.contact_parts if "@" in part), None)

    @property
    def phone(self) -> Optional[str]:
        return next((part for part in self.contact_parts if "@" not in part), None)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class TalentHistoryEntry(BaseModel):
    """A past application of a talent, matched by email or phone.

    Attributes:
        candidate_id: Candidate record of the application.
        job_id: Job applied to.
        job_title: Title of that job.
        job_status: Status of that job, empty when unknown.
        status: Funnel stage reached by the candidate.
        notes: Loss reason, or a short outcome summary.
        date: When the candidate was registered.
    """
    candidate_id: str
    job_id: str
    job_title: str
    job_status: str = ""
    status: str
    notes: str = ""
    date: Optional[datetime] = None
