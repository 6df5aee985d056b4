"""Confidentiality rules for job visibility.

A confidential job the user may not see is omitted, never reported as
forbidden, so callers cannot tell it apart from a job that does not exist.
"""

from typing import Iterable, List, Optional

from ats.models.job import Job
from ats.models.user import User


def can_view_job(job: Job, user: Optional[User]) -> bool:
    """Whether a user may see a job.

    Non-confidential jobs are visible to everyone. Confidential jobs are
    visible to masters, to their creator and to allow-listed users.
    """
    if not job.is_confidential:
        return True
    if user is None:
        return False
    return user.is_master or job.created_by == user.id or user.id in job.allowed_user_ids


def visible_jobs(jobs: Iterable[Job], user: Optional[User], include_deleted: bool = False) -> List[Job]:
    """Jobs the user may see, dropping soft-deleted ones unless asked not to."""
    return [
        job for job in jobs
        if can_view_job(job, user) and (include_deleted or not job.is_deleted)
    ]


def has_confidential_access(jobs: Iterable[Job], user: Optional[User]) -> bool:
    """Whether the user can see at least one confidential job (masters always can)."""
    if user is None:
        return False
    if user.is_master:
        return True
    return any(job.is_confidential and can_view_job(job, user) for job in jobs)
