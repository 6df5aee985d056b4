"""Repository for candidate data access operations."""

from typing import List, Optional

from supabase import Client

from ats.constants import ENTITY_TYPE_CANDIDATE
from ats.models import Candidate
from ats.repositories.base_repository import BaseRepository
from ats.transformers.entity_rows import candidate_to_db_row, db_row_to_candidate


class CandidateRepository(BaseRepository):
    """Repository for managing candidate persistence.

    Extends BaseRepository to provide candidate-specific operations
    while inheriting common entity functionality.

    Attributes:
        db_client: Supabase client instance for database operations.
        entity_type: Set to "CANDIDATE" for this repository.
    """

    def __init__(self, db_client: Client):
        super().__init__(db_client, ENTITY_TYPE_CANDIDATE)

    def get_by_id(self, candidate_id: str) -> Optional[Candidate]:
        """Retrieve a single candidate by their ID.

        Args:
            candidate_id: The unique identifier of the candidate.

        Returns:
            Candidate if found, None otherwise.
        """
        database_row = self.get_row(candidate_id)
        if not database_row:
            return None
        return db_row_to_candidate(database_row)

    def get_all(self) -> List[Candidate]:
        """Retrieve all live candidates, skipping malformed records."""
        return self.load_all(db_row_to_candidate)

    def get_by_job(self, job_id: str) -> List[Candidate]:
        """Retrieve the candidates attached to a job.

        Args:
            job_id: Owning job ID (or the general-pool sentinel).

        Returns:
            List of candidates for the job.
        """
        return [candidate for candidate in self.get_all() if candidate.job_id == job_id]

    def save(self, candidate: Candidate) -> Candidate:
        self.save_row(candidate_to_db_row(candidate))
        return candidate
