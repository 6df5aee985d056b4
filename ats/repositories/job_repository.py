"""Repository for job data access operations."""

from typing import List, Optional

from supabase import Client

from ats.constants import ENTITY_TYPE_JOB
from ats.models import Job
from ats.repositories.base_repository import BaseRepository
from ats.transformers.entity_rows import db_row_to_job, job_to_db_row


class JobRepository(BaseRepository):
    """Repository for managing job persistence.

    Attributes:
        db_client: Supabase client instance for database operations.
        entity_type: Set to "JOB" for this repository.
    """

    def __init__(self, db_client: Client):
        super().__init__(db_client, ENTITY_TYPE_JOB)

    def get_by_id(self, job_id: str) -> Optional[Job]:
        """Retrieve a job by its ID.

        Args:
            job_id: The unique identifier of the job.

        Returns:
            Job if found, None otherwise.

        Raises:
            InvalidDate: If the stored job carries an unparsable date.
        """
        database_row = self.get_row(job_id)
        if not database_row:
            return None
        return db_row_to_job(database_row)

    def get_all(self) -> List[Job]:
        """Retrieve all live jobs, skipping malformed records."""
        return self.load_all(db_row_to_job)

    def save(self, job: Job) -> Job:
        """Insert or update a job.

        Args:
            job: Job to persist.

        Returns:
            The persisted job.
        """
        self.save_row(job_to_db_row(job))
        return job
