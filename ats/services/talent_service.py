"""Service for the talent pool: search, notes, job links and history."""

import logging
import re
import uuid
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ats.constants import EXPORT_DATE_FORMAT, GENERAL_POOL_JOB_ID, GENERAL_POOL_JOB_TITLE, UNKNOWN_JOB_TITLE
from ats.models import (
    Candidate,
    CandidateOrigin,
    CandidateStatus,
    JobStatus,
    TalentHistoryEntry,
    TalentProfile,
    TalentSort,
    User
)
from ats.repositories.candidate_repository import CandidateRepository
from ats.repositories.talent_repository import TalentRepository
from ats.services.access_service import can_view_job
from ats.services.candidate_service import CandidateService
from ats.services.job_service import JobService
from ats.utils.date_utils import utc_now
from ats.utils.text_utils import display_value

logger = logging.getLogger(__name__)

# Separates alternative terms in a talent search ("python; excel")
SEARCH_TERM_SEPARATOR = ";"

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def search_terms(query: Optional[str]) -> List[str]:
    if not query:
        return []
    return [term.strip() for term in query.lower().split(SEARCH_TERM_SEPARATOR) if term.strip()]


def matches_any_term(talent: TalentProfile, terms: List[str]) -> bool:
    """Whether any term appears in the tags, experience, name or target role."""
    haystack = [tag.lower() for tag in talent.tags]
    for experience in talent.experience:
        haystack.append(experience.description.lower())
        haystack.append(experience.role.lower())
    haystack.append(talent.name.lower())
    haystack.append(talent.target_role.lower())

    return any(term in text for term in terms for text in haystack)


def search_talents(
    talents: Iterable[TalentProfile],
    query: Optional[str] = None,
    sort: TalentSort = TalentSort.DATE_DESC
) -> List[TalentProfile]:
    """Filter talents by a ';'-separated query and order them.

    Args:
        talents: Talents to search.
        query: Alternative terms; a talent matching any of them is kept.
        sort: Ordering by name or by pool entry date.

    Returns:
        Matching talents in the requested order.
    """
    terms = search_terms(query)
    result = [talent for talent in talents if not terms or matches_any_term(talent, terms)]

    sort = TalentSort(sort)
    if sort in (TalentSort.NAME_ASC, TalentSort.NAME_DESC):
        return sorted(result, key=lambda talent: talent.name.casefold(), reverse=sort == TalentSort.NAME_DESC)
    return sorted(result, key=lambda talent: talent.created_at or _OLDEST, reverse=sort == TalentSort.DATE_DESC)


def _digits(value: Optional[str]) -> str:
    return re.sub(r"\D", "", value or "")


def is_same_person(talent: TalentProfile, candidate: Candidate) -> bool:
    """Match a candidate to a talent by email, or by the digits of the phone."""
    email = talent.email
    if email and candidate.email and email.lower() in candidate.email.lower():
        return True

    phone = _digits(talent.phone)
    candidate_phone = _digits(candidate.phone)
    return bool(phone and candidate_phone and phone in candidate_phone)


def _outcome_notes(candidate: Candidate) -> str:
    if candidate.rejection_reason:
        return candidate.rejection_reason
    if candidate.status == CandidateStatus.HIRED:
        return "Hired"
    return "In progress"


class TalentService:
    """Service for managing the talent pool.

    Attributes:
        talent_repository: Repository for talent data access.
        candidate_repository: Repository scanned for past applications.
        job_service: JobService used for job lookups and access checks.
        candidate_service: CandidateService that registers linked talents.
    """

    def __init__(
        self,
        talent_repository: TalentRepository,
        candidate_repository: CandidateRepository,
        job_service: JobService,
        candidate_service: CandidateService
    ):
        self.talent_repository = talent_repository
        self.candidate_repository = candidate_repository
        self.job_service = job_service
        self.candidate_service = candidate_service

    def create_talent(self, user: User, talent_data: Dict[str, Any]) -> TalentProfile:
        """Add a person to the talent pool.

        Raises:
            ValueError: If the name is missing.
        """
        if not (talent_data.get("name") or "").strip():
            raise ValueError("name is required")

        talent = TalentProfile(**{
            **talent_data,
            "id": str(uuid.uuid4()),
            "created_at": talent_data.get("created_at") or utc_now(),
        })

        logger.info(f"User {user.id} added talent {talent.id} ({talent.name})")
        return self.talent_repository.save(talent)

    def get_talent(self, talent_id: str) -> TalentProfile:
        talent = self.talent_repository.get_by_id(talent_id)
        if not talent:
            raise ValueError(f"Talent with ID {talent_id} not found")
        return talent

    def list_talents(self, query: Optional[str] = None, sort: TalentSort = TalentSort.DATE_DESC) -> List[TalentProfile]:
        return search_talents(self.talent_repository.get_all(), query, sort)

    def update_talent(self, talent_id: str, updates: Dict[str, Any]) -> TalentProfile:
        """Apply a partial update to a talent profile.

        Observations are append-only and go through add_observation.

        Raises:
            ValueError: If the talent is not found or a protected field is set.
        """
        talent = self.get_talent(talent_id)

        protected_fields = ["id", "created_at", "deleted_at", "observations"]
        for field in protected_fields:
            if field in updates:
                raise ValueError(f"Cannot manually update {field}")

        updated = TalentProfile(**{**talent.model_dump(), **updates})
        return self.talent_repository.save(updated)

    def add_observation(self, talent_id: str, text: str, today: Optional[date] = None) -> TalentProfile:
        """Append a note prefixed with the day it was written (dd/mm/YYYY)."""
        if not text or not text.strip():
            raise ValueError("An observation cannot be empty")

        talent = self.get_talent(talent_id)
        day = today or date.today()
        talent.observations.append(f"{day.strftime(EXPORT_DATE_FORMAT)}: {text.strip()}")
        return self.talent_repository.save(talent)

    def delete_talent(self, talent_id: str) -> bool:
        self.get_talent(talent_id)
        return self.talent_repository.soft_delete(talent_id)

    def link_to_job(self, talent_id: str, job_id: str, user: User) -> Candidate:
        """Register a talent as a new candidate on an open job.

        Args:
            talent_id: Talent to link.
            job_id: Open job the talent applies to.
            user: User making the link.

        Returns:
            The Candidate created for the job, in screening.

        Raises:
            ValueError: If the talent or job is not found, the job is not
                open, or the talent is already a candidate on it.
        """
        talent = self.get_talent(talent_id)
        job = self.job_service.get_job(job_id, user)

        if job.status != JobStatus.OPEN:
            raise ValueError(f"Only open jobs can receive talents (job is {display_value(job.status)})")

        if any(is_same_person(talent, candidate) for candidate in self.candidate_repository.get_by_job(job_id)):
            raise ValueError(f"Talent {talent_id} already exists on job {job_id}")

        tags = ", ".join(talent.tags)
        candidate = self.candidate_service.create_candidate(user, {
            "job_id": job.id,
            "name": talent.name,
            "email": talent.email,
            "phone": talent.phone,
            "city": talent.city or None,
            "origin": CandidateOrigin.TALENT_POOL,
            "status": CandidateStatus.AWAITING_SCREENING,
            "salary_expectation": talent.salary_expectation,
            "notes": f"Imported from talent pool. Tags: {tags}",
        })

        logger.info(f"Talent {talent_id} linked to job {job_id} as candidate {candidate.id}")
        return candidate

    def get_history(self, talent_id: str, user: User) -> List[TalentHistoryEntry]:
        """Past applications of a talent, newest first.

        Applications on confidential jobs the user cannot see are left out.
        """
        talent = self.get_talent(talent_id)
        if not talent.email and not talent.phone:
            return []

        jobs = {job.id: job for job in self.job_service.job_repository.get_all()}
        history = []

        for candidate in self.candidate_repository.get_all():
            if not is_same_person(talent, candidate):
                continue

            job = jobs.get(candidate.job_id)
            if job is not None and not can_view_job(job, user):
                continue

            if candidate.job_id == GENERAL_POOL_JOB_ID:
                job_title, job_status = GENERAL_POOL_JOB_TITLE, ""
            elif job is None or job.is_deleted:
                job_title, job_status = UNKNOWN_JOB_TITLE, ""
            else:
                job_title, job_status = job.title, display_value(job.status)

            history.append(TalentHistoryEntry(
                candidate_id=candidate.id,
                job_id=candidate.job_id,
                job_title=job_title,
                job_status=job_status,
                status=display_value(candidate.status),
                notes=_outcome_notes(candidate),
                date=candidate.created_at
            ))

        return sorted(history, key=lambda entry: entry.date or _OLDEST, reverse=True)
