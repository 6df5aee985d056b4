"""SLA accounting for jobs and candidates.

Gross SLA counts every started calendar day a job stayed open (ceil); frozen
time is counted in fully elapsed days (floor). The asymmetry matches the
numbers historically reported to the business and must not be "fixed".
"""

from datetime import datetime, timedelta
from typing import Optional

from ats.models.candidate import Candidate, CandidateStatus
from ats.models.job import Job, TERMINAL_JOB_STATUSES
from ats.models.report import SlaResult
from ats.utils.date_utils import ceil_days, floor_days, utc_now


def sla_end_date(job: Job, as_of: Optional[datetime] = None) -> datetime:
    """Instant the job's clock stops: its close date if terminal, else as_of."""
    if job.status in TERMINAL_JOB_STATUSES and job.closed_at is not None:
        return job.closed_at
    return as_of or utc_now()


def total_frozen_time(job: Job, end_date: datetime) -> timedelta:
    """Sum of all freeze intervals, an open interval running until end_date.

    Intervals ending before they start contribute nothing.
    """
    total = timedelta(0)
    for freeze in job.freeze_history:
        effective_end = freeze.end_date or end_date
        if effective_end > freeze.start_date:
            total += effective_end - freeze.start_date
    return total


def compute_sla(job: Job, as_of: Optional[datetime] = None) -> SlaResult:
    """Compute gross, frozen and net SLA days of a job.

    Args:
        job: Job to evaluate.
        as_of: Evaluation instant for jobs that are still running. Defaults to
            now. Ignored for closed or canceled jobs with a close date.

    Returns:
        SlaResult with non-negative day counts.
    """
    end_date = sla_end_date(job, as_of)

    gross_days = max(0, ceil_days(end_date - job.opened_at))
    frozen_days = floor_days(total_frozen_time(job, end_date))
    net_days = max(0, gross_days - frozen_days)

    return SlaResult(gross_days=gross_days, frozen_days=frozen_days, net_days=net_days)


def compute_candidate_sla(
    candidate: Candidate,
    job: Job,
    as_of: Optional[datetime] = None
) -> Optional[int]:
    """Days from a hired candidate's first contact to their first working day.

    Falls back to the job's close date, then to as_of, when the start date is
    not recorded yet.

    Returns:
        Day count, or None when the first contact was never recorded.
    """
    if candidate.first_contact_at is None:
        return None

    end_date = candidate.timeline.start_date or job.closed_at or as_of or utc_now()
    return ceil_days(max(timedelta(0), end_date - candidate.first_contact_at))


def candidate_process_days(candidate: Candidate, as_of: Optional[datetime] = None) -> Optional[int]:
    """Days a candidate has spent in the process since first contact.

    Hired and rejected candidates stop the clock at their start date or
    rejection date; everyone else is measured until as_of.
    """
    if candidate.first_contact_at is None:
        return None

    end_date = None
    if candidate.status in (CandidateStatus.HIRED, CandidateStatus.REJECTED):
        end_date = candidate.timeline.start_date or candidate.rejection_date

    end_date = end_date or as_of or utc_now()
    return ceil_days(max(timedelta(0), end_date - candidate.first_contact_at))
