"""Service for job management and the freeze/close/cancel workflow."""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ats.models import (
    CandidateStatus,
    FreezeEvent,
    Job,
    JobStatus,
    OpeningDetails,
    SlaResult,
    TERMINAL_JOB_STATUSES,
    User
)
from ats.repositories.candidate_repository import CandidateRepository
from ats.repositories.job_repository import JobRepository
from ats.services.access_service import can_view_job, visible_jobs
from ats.services.sla_service import compute_sla
from ats.utils.date_utils import utc_now, utc_or_now
from ats.utils.text_utils import display_value

logger = logging.getLogger(__name__)

MANUAL_FREEZE_REASON = "Manual status change"


def end_running_freeze(job: Job, moment: datetime) -> Optional[FreezeEvent]:
    """Close the running freeze interval of a job, if any.

    The interval never ends before it started, so a close date set earlier
    than the freeze start collapses it to zero length.

    Returns:
        The interval that was closed, or None when nothing was running.
    """
    open_freeze = job.open_freeze
    if open_freeze is None:
        return None
    open_freeze.end_date = max(moment, open_freeze.start_date)
    return open_freeze


class JobService:
    """Service for managing jobs with business logic.

    Every lookup goes through the access rules: a confidential job the user
    may not see is reported as not found.

    Attributes:
        job_repository: Repository for job data access.
        candidate_repository: Repository used to mark hires on close.
    """

    def __init__(self, job_repository: JobRepository, candidate_repository: CandidateRepository):
        """Initialize the service with its repositories.

        Args:
            job_repository: JobRepository instance.
            candidate_repository: CandidateRepository instance.
        """
        self.job_repository = job_repository
        self.candidate_repository = candidate_repository

    def create_job(
        self,
        user: User,
        title: str,
        sector: str,
        unit: str,
        opened_at: Optional[datetime] = None,
        description: Optional[str] = None,
        is_confidential: bool = False,
        allowed_user_ids: Optional[List[str]] = None,
        opening_details: Optional[OpeningDetails] = None
    ) -> Job:
        """Open a new job owned by the calling user.

        Args:
            user: User opening the job (becomes created_by).
            title: Job title/position.
            sector: Sector of the job.
            unit: Business unit of the job.
            opened_at: Opening instant. Defaults to now.
            description: Free-text description.
            is_confidential: Restrict visibility to the ACL.
            allowed_user_ids: Users allowed to see a confidential job.
            opening_details: Expansion or replacement details.

        Returns:
            Created Job.

        Raises:
            ValueError: If required fields are missing.
        """
        if not title or not sector or not unit:
            raise ValueError("title, sector and unit are required")

        job = Job(
            id=str(uuid.uuid4()),
            title=title,
            sector=sector,
            unit=unit,
            status=JobStatus.OPEN,
            opened_at=utc_or_now(opened_at),
            description=description,
            is_confidential=is_confidential,
            created_by=user.id,
            allowed_user_ids=allowed_user_ids or [],
            opening_details=opening_details or OpeningDetails()
        )

        logger.info(f"User {user.id} opened job {job.id} ({job.title})")
        return self.job_repository.save(job)

    def get_job(self, job_id: str, user: User) -> Job:
        """Get a job the user may see.

        Raises:
            ValueError: If the job does not exist or is hidden from the user.
        """
        job = self.job_repository.get_by_id(job_id)
        if not job or job.is_deleted or not can_view_job(job, user):
            raise ValueError(f"Job with ID {job_id} not found")
        return job

    def list_jobs(
        self,
        user: User,
        status: Optional[JobStatus] = None,
        unit: Optional[str] = None,
        sector: Optional[str] = None
    ) -> List[Job]:
        """List the jobs visible to a user with optional filters."""
        jobs = visible_jobs(self.job_repository.get_all(), user)

        if status:
            jobs = [job for job in jobs if job.status == status]
        if unit:
            jobs = [job for job in jobs if job.unit == unit]
        if sector:
            jobs = [job for job in jobs if job.sector == sector]

        return sorted(jobs, key=lambda job: job.opened_at, reverse=True)

    def update_job(self, job_id: str, user: User, updates: Dict[str, Any]) -> Job:
        """Apply a partial update to a job.

        Status may be reassigned freely here, as a manual correction. The
        same bookkeeping as the workflow methods is applied on the way:
        finishing a job stamps closed_at (the given one, or now) and ends a
        running freeze there; leaving frozen ends the running freeze now;
        going back to open or frozen from a finished state clears closed_at;
        entering frozen without a running freeze starts one now.

        Raises:
            ValueError: If the job is not found or the update is invalid.
        """
        job = self.get_job(job_id, user)

        protected_fields = ["id", "freeze_history", "created_by", "deleted_at", "deleted_by"]
        for field in protected_fields:
            if field in updates:
                raise ValueError(f"Cannot manually update {field}")

        updated = Job(**{**job.model_dump(), **updates})
        if updated.status != job.status:
            logger.info(f"Job {job_id} status manually changed from {display_value(job.status)} to {display_value(updated.status)}")
            self._apply_manual_status_change(updated, job.status, user)

        return self.job_repository.save(updated)

    def _apply_manual_status_change(self, job: Job, previous_status: JobStatus, user: User) -> None:
        now = utc_now()

        if job.status in TERMINAL_JOB_STATUSES:
            job.closed_at = utc_or_now(job.closed_at)
            end_running_freeze(job, job.closed_at)
            return

        if previous_status in TERMINAL_JOB_STATUSES:
            end_running_freeze(job, utc_or_now(job.closed_at))
            job.closed_at = None

        if job.status == JobStatus.FROZEN:
            if job.open_freeze is None:
                job.freeze_history.append(
                    FreezeEvent(start_date=now, reason=MANUAL_FREEZE_REASON, requester=user.name or user.id)
                )
        else:
            end_running_freeze(job, now)

    def freeze_job(
        self,
        job_id: str,
        user: User,
        reason: str,
        requester: str,
        frozen_at: Optional[datetime] = None
    ) -> Job:
        """Put an open job on hold, opening a new freeze interval.

        Raises:
            ValueError: If the job is not open or already has a running freeze.
        """
        job = self.get_job(job_id, user)

        if job.status != JobStatus.OPEN:
            raise ValueError(f"Only open jobs can be frozen (job is {display_value(job.status)})")
        if job.open_freeze is not None:
            raise ValueError(f"Job {job_id} already has a running freeze")

        job.freeze_history.append(
            FreezeEvent(start_date=utc_or_now(frozen_at), reason=reason, requester=requester)
        )
        job.status = JobStatus.FROZEN

        logger.info(f"Job {job_id} frozen by {requester}: {reason}")
        return self.job_repository.save(job)

    def unfreeze_job(self, job_id: str, user: User, unfrozen_at: Optional[datetime] = None) -> Job:
        """Resume a frozen job, closing its running freeze interval.

        Raises:
            ValueError: If the job is not frozen.
        """
        job = self.get_job(job_id, user)

        if job.status != JobStatus.FROZEN:
            raise ValueError(f"Only frozen jobs can be unfrozen (job is {display_value(job.status)})")

        open_freeze = job.open_freeze
        if open_freeze is not None:
            end_date = utc_or_now(unfrozen_at)
            if end_date < open_freeze.start_date:
                raise ValueError("Unfreeze date cannot be before the freeze started")
            open_freeze.end_date = end_date
        else:
            logger.warning(f"Job {job_id} was frozen without a running freeze interval")

        job.status = JobStatus.OPEN
        return self.job_repository.save(job)

    def cancel_job(
        self,
        job_id: str,
        user: User,
        reason: str,
        requester: str,
        canceled_at: Optional[datetime] = None
    ) -> Job:
        """Cancel a job, recording who asked for it and why.

        Raises:
            ValueError: If the job is already closed or canceled, or no reason given.
        """
        job = self.get_job(job_id, user)

        if job.status in (JobStatus.CLOSED, JobStatus.CANCELED):
            raise ValueError(f"Job {job_id} is already {display_value(job.status)}")
        if not reason:
            raise ValueError("A cancellation reason is required")

        job.status = JobStatus.CANCELED
        job.closed_at = utc_or_now(canceled_at)
        end_running_freeze(job, job.closed_at)
        job.cancellation_reason = reason
        job.requester_name = requester

        logger.info(f"Job {job_id} canceled by {requester}: {reason}")
        return self.job_repository.save(job)

    def close_job(
        self,
        job_id: str,
        user: User,
        hired_candidate_id: Optional[str] = None,
        closed_at: Optional[datetime] = None
    ) -> Job:
        """Close a job, optionally recording the hired candidate.

        Raises:
            ValueError: If the job is canceled, or the candidate is not on this job.
        """
        job = self.get_job(job_id, user)

        if job.status == JobStatus.CANCELED:
            raise ValueError(f"Job {job_id} is canceled and cannot be closed")

        if hired_candidate_id:
            candidate = self.candidate_repository.get_by_id(hired_candidate_id)
            if not candidate or candidate.job_id != job.id:
                raise ValueError(f"Candidate with ID {hired_candidate_id} not found for job {job_id}")

            candidate.status = CandidateStatus.HIRED
            candidate.last_interaction_at = utc_now()
            if candidate.first_contact_at is None:
                candidate.first_contact_at = candidate.last_interaction_at
            self.candidate_repository.save(candidate)

            if hired_candidate_id not in job.hired_candidate_ids:
                job.hired_candidate_ids.append(hired_candidate_id)

        job.status = JobStatus.CLOSED
        job.closed_at = utc_or_now(closed_at)
        end_running_freeze(job, job.closed_at)

        logger.info(f"Job {job_id} closed (hired: {hired_candidate_id})")
        return self.job_repository.save(job)

    def reopen_job(self, job_id: str, user: User) -> Job:
        """Reopen a closed job, clearing its close date.

        A freeze left running by older records is ended at the close date, so
        the job can be frozen again afterwards.

        Raises:
            ValueError: If the job is not closed.
        """
        job = self.get_job(job_id, user)

        if job.status != JobStatus.CLOSED:
            raise ValueError(f"Only closed jobs can be reopened (job is {display_value(job.status)})")

        if end_running_freeze(job, utc_or_now(job.closed_at)) is not None:
            logger.warning(f"Job {job_id} was closed with a running freeze interval")

        job.status = JobStatus.OPEN
        job.closed_at = None
        return self.job_repository.save(job)

    def delete_job(self, job_id: str, user: User) -> bool:
        """Soft-delete a job, keeping who deleted it in the payload."""
        job = self.get_job(job_id, user)

        job.deleted_at = utc_now()
        job.deleted_by = user.id
        self.job_repository.save(job)

        logger.info(f"Job {job_id} deleted by {user.id}")
        return self.job_repository.soft_delete(job_id)

    def get_job_sla(self, job_id: str, user: User, as_of: Optional[datetime] = None) -> SlaResult:
        """SLA of a single visible job."""
        return compute_sla(self.get_job(job_id, user), as_of)
