"""Pydantic models for job openings and their freeze history."""

from pydantic import BaseModel, field_validator
from typing import List, Optional
from datetime import datetime
from enum import Enum

from ats.utils.date_utils import parse_datetime


class JobStatus(str, Enum):
    """Status of a job opening."""
    OPEN = "open"
    CLOSED = "closed"
    FROZEN = "frozen"
    CANCELED = "canceled"


TERMINAL_JOB_STATUSES = (JobStatus.CLOSED, JobStatus.CANCELED)


class OpeningReason(str, Enum):
    """Why a job was opened."""
    EXPANSION = "expansion"
    REPLACEMENT = "replacement"


class ReplacementReason(str, Enum):
    """Why the replaced employee left the position."""
    DISMISSAL_WITHOUT_CAUSE = "dismissal_without_cause"
    RESIGNATION = "resignation"
    INTERNAL_TRANSFER = "internal_transfer"
    CONTRACT_END = "contract_end"
    MATERNITY_LEAVE = "maternity_leave"
    JOB_ABANDONMENT = "job_abandonment"


class FreezeEvent(BaseModel):
    """A period during which hiring for a job was on hold.

    Attributes:
        start_date: When the job was frozen.
        end_date: When the job was unfrozen. None while still frozen.
        reason: Why the job was frozen.
        requester: Who asked for the freeze.
    """
    start_date: datetime
    end_date: Optional[datetime] = None
    reason: str = ""
    requester: str = ""

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_dates(cls, value):
        return parse_datetime(value)


class OpeningDetails(BaseModel):
    """Context for why a job was opened.

    Attributes:
        reason: Expansion of headcount or replacement of an employee.
        replaced_employee: Name of the employee being replaced.
        replacement_reason: Why that employee left.
    """
    reason: OpeningReason = OpeningReason.EXPANSION
    replaced_employee: Optional[str] = None
    replacement_reason: Optional[ReplacementReason] = None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class Job(BaseModel):
    """Represents a job opening.

    Attributes:
        id: Unique job identifier.
        title: Job title/position.
        sector: Sector (area) the job belongs to.
        unit: Business unit (site) the job belongs to.
        status: Current status of the job.
        opened_at: When the job was opened.
        closed_at: When the job was closed or canceled.
        description: Free-text description.
        hired_candidate_ids: Candidates hired through this job.
        freeze_history: Freeze periods, oldest first.
        is_confidential: Whether the job is restricted to its ACL.
        created_by: ID of the user who opened the job.
        allowed_user_ids: Users explicitly allowed to see a confidential job.
        opening_details: Why the job was opened.
        cancellation_reason: Why the job was canceled.
        requester_name: Who asked for the cancellation.
        is_hidden: Legacy soft-delete flag.
        deleted_at: When the job was soft-deleted.
        deleted_by: ID of the user who deleted the job.
    """
    id: str
    title: str
    sector: str = ""
    unit: str = ""
    status: JobStatus = JobStatus.OPEN
    opened_at: datetime
    closed_at: Optional[datetime] = None
    description: Optional[str] = None
    hired_candidate_ids: List[str] = []
    freeze_history: List[FreezeEvent] = []
    is_confidential: bool = False
    created_by: Optional[str] = None
    allowed_user_ids: List[str] = []
    opening_details: Optional[OpeningDetails] = None
    cancellation_reason: Optional[str] = None
    requester_name: Optional[str] = None
    is_hidden: bool = False
    deleted_at: Optional[datetime] = None
    deleted_by: Optional[str] = None

    @field_validator("opened_at", "closed_at", "deleted_at", mode="before")
    @classmethod
    def _parse_dates(cls, value):
        return parse_datetime(value)

    @property
    def is_deleted(self) -> bool:
        return self.is_hidden or self.deleted_at is not None

    @property
    def open_freeze(self) -> Optional[FreezeEvent]:
        """The freeze interval still running, if any."""
        if self.freeze_history and self.freeze_history[-1].end_date is None:
            return self.freeze_history[-1]
        return None

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
