"""Pydantic models for SLA results and report snapshots."""

from pydantic import BaseModel, model_validator
from typing import Dict, List, Optional
from datetime import date, datetime

from ats.errors import InvalidRange
from ats.utils.date_utils import end_of_day, start_of_day


class SlaResult(BaseModel):
    """Elapsed days of a job, with and without frozen time."""
    gross_days: int
    frozen_days: int
    net_days: int


class DateRange(BaseModel):
    """Inclusive reporting window expressed in calendar days.

    Attributes:
        start: First day of the window.
        end: Last day of the window (counted through end of day).
    """
    start: date
    end: date

    @model_validator(mode="after")
    def _check_order(self):
        if self.start > self.end:
            raise InvalidRange(
                f"Range start {self.start.isoformat()} is after range end {self.end.isoformat()}"
            )
        return self

    @classmethod
    def between(cls, start: date, end: date) -> "DateRange":
        """Build a range, raising InvalidRange itself rather than a ValidationError.

        Raises:
            InvalidRange: If start is after end.
        """
        if start > end:
            raise InvalidRange(
                f"Range start {start.isoformat()} is after range end {end.isoformat()}"
            )
        return cls(start=start, end=end)

    @property
    def starts_at(self) -> datetime:
        return start_of_day(self.start)

    @property
    def ends_at(self) -> datetime:
        return end_of_day(self.end)

    def contains(self, moment: Optional[datetime]) -> bool:
        """Whether a timestamp falls inside the window. Missing never does."""
        if moment is None:
            return False
        return self.starts_at <= moment <= self.ends_at


class ReasonHistogram(BaseModel):
    """Count of candidate losses grouped by recorded reason."""
    total: int = 0
    reasons: Dict[str, int] = {}


class SectorRollup(BaseModel):
    """Job movements inside the window for a single sector."""
    opened: int = 0
    closed: int = 0
    frozen: int = 0
    canceled: int = 0


class OpenedBreakdown(BaseModel):
    """Jobs opened inside the window, split by opening reason."""
    total: int = 0
    expansion: int = 0
    replacement: int = 0


class ReportSnapshot(BaseModel):
    """Aggregates for the jobs and candidates visible to one user.

    Job buckets are id lists so callers can drill down; the count fields
    mirror their lengths for convenience.

    Attributes:
        range_start: First day of the window.
        range_end: Last day of the window.
        job_ids: Jobs visible after access and unit/sector filtering.
        backlog: Jobs opened before the window and still live entering it.
        opened_in_range: Jobs opened inside the window.
        closed_in_range: Jobs closed inside the window.
        canceled_in_range: Jobs canceled inside the window.
        frozen_in_range: Jobs with a freeze starting inside the window.
        active_total: Backlog plus jobs opened inside the window.
        balance_open: Jobs still open at the end of the window.
        opened: Opened-in-range counts by opening reason.
        interviews: Interviews held inside the window.
        tech_tests: Technical tests applied inside the window.
        rejected: Company-side losses inside the window.
        withdrawn: Candidate-side losses inside the window.
        by_sector: Per-sector job movements.
        average_net_sla_closed: Mean net SLA of jobs closed in the window.
    """
    range_start: date
    range_end: date
    job_ids: List[str] = []
    backlog: List[str] = []
    opened_in_range: List[str] = []
    closed_in_range: List[str] = []
    canceled_in_range: List[str] = []
    frozen_in_range: List[str] = []
    active_total: List[str] = []
    balance_open: List[str] = []
    opened: OpenedBreakdown = OpenedBreakdown()
    interviews: int = 0
    tech_tests: int = 0
    rejected: ReasonHistogram = ReasonHistogram()
    withdrawn: ReasonHistogram = ReasonHistogram()
    by_sector: Dict[str, SectorRollup] = {}
    average_net_sla_closed: Optional[float] = None

    @property
    def counts(self) -> Dict[str, int]:
        """Bucket sizes, in the order they are shown on the dashboard."""
        return {
            "backlog": len(self.backlog),
            "opened": len(self.opened_in_range),
            "closed": len(self.closed_in_range),
            "canceled": len(self.canceled_in_range),
            "frozen": len(self.frozen_in_range),
            "active_total": len(self.active_total),
            "balance_open": len(self.balance_open),
        }


class ProbationDeadline(BaseModel):
    """Where an employee stands in the probation calendar."""
    employee_id: str
    employee_name: str
    sector: str
    current_period: str
    days_left: int
    urgency: str
    end_first_period: date
    end_second_period: date
    already_interviewed: bool


class NpsScore(BaseModel):
    """eNPS breakdown for one interview question."""
    promoters: int = 0
    passives: int = 0
    detractors: int = 0
    score: int = 0
    total: int = 0
