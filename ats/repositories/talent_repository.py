"""Repository for talent pool data access operations."""

from typing import List, Optional

from supabase import Client

from ats.constants import ENTITY_TYPE_TALENT
from ats.models import TalentProfile
from ats.repositories.base_repository import BaseRepository
from ats.transformers.entity_rows import db_row_to_talent, talent_to_db_row


class TalentRepository(BaseRepository):
    """Repository for managing talent pool persistence."""

    def __init__(self, db_client: Client):
        super().__init__(db_client, ENTITY_TYPE_TALENT)

    def get_by_id(self, talent_id: str) -> Optional[TalentProfile]:
        database_row = self.get_row(talent_id)
        if not database_row:
            return None
        return db_row_to_talent(database_row)

    def get_all(self) -> List[TalentProfile]:
        return self.load_all(db_row_to_talent)

    def save(self, talent: TalentProfile) -> TalentProfile:
        self.save_row(talent_to_db_row(talent))
        return talent
