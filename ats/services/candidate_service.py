"""Service for candidate registration and status changes."""

import logging
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from ats.constants import GENERAL_POOL_JOB_ID
from ats.models import Candidate, CandidateStatus, LOSS_STATUSES, User
from ats.repositories.candidate_repository import CandidateRepository
from ats.services.job_service import JobService
from ats.utils.date_utils import utc_now, utc_or_now
from ats.utils.text_utils import display_value

logger = logging.getLogger(__name__)


class CandidateService:
    """Service for managing candidates with business logic.

    Candidates inherit the visibility of their job: a candidate on a job the
    user cannot see is reported as not found.

    Attributes:
        candidate_repository: Repository for candidate data access.
        job_service: JobService used for job lookups and access checks.
    """

    def __init__(self, candidate_repository: CandidateRepository, job_service: JobService):
        self.candidate_repository = candidate_repository
        self.job_service = job_service

    def _check_job(self, job_id: str, user: User) -> None:
        if job_id != GENERAL_POOL_JOB_ID:
            self.job_service.get_job(job_id, user)

    def create_candidate(self, user: User, candidate_data: Dict[str, Any]) -> Candidate:
        """Register a candidate on a job or in the general pool.

        Args:
            user: User registering the candidate.
            candidate_data: Candidate fields; job_id and name are required.

        Returns:
            Created Candidate.

        Raises:
            ValueError: If the job is not found or required fields are missing.
        """
        job_id = candidate_data.get("job_id")
        if not job_id or not candidate_data.get("name"):
            raise ValueError("job_id and name are required")

        self._check_job(job_id, user)

        now = utc_now()
        candidate = Candidate(**{
            **candidate_data,
            "id": str(uuid.uuid4()),
            "created_at": now,
            "last_interaction_at": candidate_data.get("last_interaction_at") or now,
        })

        if candidate.status != CandidateStatus.AWAITING_SCREENING and candidate.first_contact_at is None:
            candidate.first_contact_at = now

        return self.candidate_repository.save(candidate)

    def get_candidate(self, candidate_id: str, user: User) -> Candidate:
        """Get a candidate whose job the user may see.

        Raises:
            ValueError: If the candidate (or its job) is not found.
        """
        candidate = self.candidate_repository.get_by_id(candidate_id)
        if not candidate:
            raise ValueError(f"Candidate with ID {candidate_id} not found")

        try:
            self._check_job(candidate.job_id, user)
        except ValueError:
            raise ValueError(f"Candidate with ID {candidate_id} not found")

        return candidate

    def list_job_candidates(self, job_id: str, user: User) -> List[Candidate]:
        """List the candidates of a visible job (or of the general pool)."""
        self._check_job(job_id, user)
        return self.candidate_repository.get_by_job(job_id)

    def update_status(
        self,
        candidate_id: str,
        user: User,
        status: CandidateStatus,
        rejection_reason: Optional[str] = None,
        changed_at: Optional[datetime] = None
    ) -> Candidate:
        """Move a candidate to a new status.

        Any status can be reached from any other; losses must say why. The
        first move out of screening stamps first_contact_at, and every change
        refreshes last_interaction_at.

        Args:
            candidate_id: Candidate to update.
            user: User making the change.
            status: New status.
            rejection_reason: Required for rejected and withdrawn.
            changed_at: When the change happened. Defaults to now.

        Returns:
            Updated Candidate.

        Raises:
            ValueError: If the candidate is not found or a loss has no reason.
        """
        candidate = self.get_candidate(candidate_id, user)
        moment = utc_or_now(changed_at)

        if status in LOSS_STATUSES:
            if not rejection_reason or not rejection_reason.strip():
                raise ValueError(f"A rejection reason is required for status {display_value(status)}")
            candidate.rejection_reason = rejection_reason.strip()
            candidate.rejection_date = moment
            candidate.rejected_by = user.name or user.id

        if status != CandidateStatus.AWAITING_SCREENING and candidate.first_contact_at is None:
            candidate.first_contact_at = moment

        candidate.status = status
        candidate.last_interaction_at = moment

        logger.info(f"Candidate {candidate_id} moved to {display_value(status)} by {user.id}")
        return self.candidate_repository.save(candidate)

    def delete_candidate(self, candidate_id: str, user: User) -> bool:
        self.get_candidate(candidate_id, user)
        return self.candidate_repository.soft_delete(candidate_id)
