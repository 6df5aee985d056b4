"""Role-scoped report aggregation over in-memory jobs and candidates."""

import logging
from datetime import datetime
from typing import Dict, Iterable, List, Optional

from ats.constants import GENERAL_POOL_JOB_ID, NOT_INFORMED
from ats.models.candidate import Candidate, CandidateStatus
from ats.models.job import Job, JobStatus, OpeningReason, TERMINAL_JOB_STATUSES
from ats.models.report import (
    DateRange,
    OpenedBreakdown,
    ReasonHistogram,
    ReportSnapshot,
    SectorRollup
)
from ats.models.user import User
from ats.services.access_service import visible_jobs
from ats.services.sla_service import compute_sla

logger = logging.getLogger(__name__)


def filter_jobs(
    jobs: Iterable[Job],
    user: Optional[User],
    unit: Optional[str] = None,
    sector: Optional[str] = None
) -> List[Job]:
    """Apply the access filter first, then the optional unit/sector narrowing."""
    filtered = visible_jobs(jobs, user)
    if unit:
        filtered = [job for job in filtered if job.unit == unit]
    if sector:
        filtered = [job for job in filtered if job.sector == sector]
    return filtered


def scope_candidates(
    candidates: Iterable[Candidate],
    jobs: Iterable[Job],
    include_general_pool: bool
) -> List[Candidate]:
    """Candidates attached to the given jobs, optionally plus the general pool.

    Candidates pointing at unknown (or invisible) jobs are dropped.
    """
    job_ids = {job.id for job in jobs}
    return [
        candidate for candidate in candidates
        if candidate.deleted_at is None and (
            candidate.job_id in job_ids
            or (include_general_pool and candidate.job_id == GENERAL_POOL_JOB_ID)
        )
    ]


def is_backlog(job: Job, date_range: DateRange) -> bool:
    """Opened before the window and not closed before it started."""
    return job.opened_at < date_range.starts_at and (
        job.closed_at is None or job.closed_at >= date_range.starts_at
    )


def is_closed_in_range(job: Job, date_range: DateRange) -> bool:
    return job.status == JobStatus.CLOSED and date_range.contains(job.closed_at)


def is_canceled_in_range(job: Job, date_range: DateRange) -> bool:
    return job.status == JobStatus.CANCELED and date_range.contains(job.closed_at)


def is_frozen_in_range(job: Job, date_range: DateRange) -> bool:
    return any(date_range.contains(freeze.start_date) for freeze in job.freeze_history)


def is_frozen_at(job: Job, moment: datetime) -> bool:
    """Whether some freeze interval covers the instant (end exclusive)."""
    return any(
        freeze.start_date <= moment and (freeze.end_date is None or freeze.end_date > moment)
        for freeze in job.freeze_history
    )


def is_balance_open(job: Job, date_range: DateRange) -> bool:
    """Opened by the end of the window and neither finished nor on hold at that instant."""
    ends_at = date_range.ends_at
    if job.opened_at > ends_at:
        return False
    if job.status in TERMINAL_JOB_STATUSES and (job.closed_at is None or job.closed_at <= ends_at):
        return False
    return not is_frozen_at(job, ends_at)


def reason_histogram(candidates: Iterable[Candidate]) -> ReasonHistogram:
    reasons: Dict[str, int] = {}
    total = 0
    for candidate in candidates:
        reason = (candidate.rejection_reason or "").strip() or NOT_INFORMED
        reasons[reason] = reasons.get(reason, 0) + 1
        total += 1
    return ReasonHistogram(total=total, reasons=reasons)


def opened_breakdown(jobs: Iterable[Job]) -> OpenedBreakdown:
    breakdown = OpenedBreakdown()
    for job in jobs:
        breakdown.total += 1
        if job.opening_details and job.opening_details.reason == OpeningReason.REPLACEMENT:
            breakdown.replacement += 1
        else:
            breakdown.expansion += 1
    return breakdown


def sector_rollup(jobs: Iterable[Job], date_range: DateRange) -> Dict[str, SectorRollup]:
    """Opened/closed/frozen/canceled counts per sector of the given jobs."""
    rollup: Dict[str, SectorRollup] = {}
    for job in jobs:
        counts = rollup.setdefault(job.sector, SectorRollup())
        if date_range.contains(job.opened_at):
            counts.opened += 1
        if is_closed_in_range(job, date_range):
            counts.closed += 1
        if is_frozen_in_range(job, date_range):
            counts.frozen += 1
        if is_canceled_in_range(job, date_range):
            counts.canceled += 1
    return rollup


def _ids(jobs: Iterable[Job]) -> List[str]:
    return [job.id for job in jobs]


def build_report(
    jobs: Iterable[Job],
    candidates: Iterable[Candidate],
    user: Optional[User],
    date_range: DateRange,
    unit: Optional[str] = None,
    sector: Optional[str] = None
) -> ReportSnapshot:
    """Aggregate the jobs and candidates a user may see over a date range.

    Access filtering happens before anything else, so confidential jobs the
    user cannot see never contribute to any count, histogram or rollup.

    Args:
        jobs: All jobs loaded for the request.
        candidates: All candidates loaded for the request.
        user: User the report is built for.
        date_range: Inclusive reporting window.
        unit: Optional unit to narrow to.
        sector: Optional sector to narrow to.

    Returns:
        ReportSnapshot with job buckets, candidate metrics and sector rollup.
    """
    filtered_jobs = filter_jobs(jobs, user, unit=unit, sector=sector)

    backlog = [job for job in filtered_jobs if is_backlog(job, date_range)]
    opened = [job for job in filtered_jobs if date_range.contains(job.opened_at)]
    closed = [job for job in filtered_jobs if is_closed_in_range(job, date_range)]
    canceled = [job for job in filtered_jobs if is_canceled_in_range(job, date_range)]
    frozen = [job for job in filtered_jobs if is_frozen_in_range(job, date_range)]
    balance_open = [job for job in filtered_jobs if is_balance_open(job, date_range)]

    active_total = list(dict.fromkeys(_ids(backlog) + _ids(opened)))

    # General-pool interviews carry no unit or sector, so any narrowing drops them
    scoped_candidates = scope_candidates(
        candidates, filtered_jobs, include_general_pool=not unit and not sector
    )
    interviews = [c for c in scoped_candidates if date_range.contains(c.interview_date)]
    tech_tests = [c for c in scoped_candidates if date_range.contains(c.tech_test_date)]
    rejected = [
        c for c in scoped_candidates
        if c.status == CandidateStatus.REJECTED and date_range.contains(c.rejection_date)
    ]
    withdrawn = [
        c for c in scoped_candidates
        if c.status == CandidateStatus.WITHDRAWN and date_range.contains(c.rejection_date)
    ]

    average_net_sla = None
    if closed:
        average_net_sla = round(
            sum(compute_sla(job).net_days for job in closed) / len(closed), 1
        )

    logger.debug(
        f"Report for user {user.id if user else None}: {len(filtered_jobs)} jobs, "
        f"{len(scoped_candidates)} candidates in scope"
    )

    return ReportSnapshot(
        range_start=date_range.start,
        range_end=date_range.end,
        job_ids=_ids(filtered_jobs),
        backlog=_ids(backlog),
        opened_in_range=_ids(opened),
        closed_in_range=_ids(closed),
        canceled_in_range=_ids(canceled),
        frozen_in_range=_ids(frozen),
        active_total=active_total,
        balance_open=_ids(balance_open),
        opened=opened_breakdown(opened),
        interviews=len(interviews),
        tech_tests=len(tech_tests),
        rejected=reason_histogram(rejected),
        withdrawn=reason_histogram(withdrawn),
        by_sector=sector_rollup(filtered_jobs, date_range),
        average_net_sla_closed=average_net_sla
    )
