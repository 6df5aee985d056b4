"""Repository for absenteeism records."""

from typing import List, Optional

from supabase import Client

from ats.constants import ENTITY_TYPE_ABSENCE
from ats.models import AbsenceRecord
from ats.repositories.base_repository import BaseRepository
from ats.transformers.entity_rows import absence_to_db_row, db_row_to_absence


class AbsenceRepository(BaseRepository):
    """Repository for managing absence record persistence."""

    def __init__(self, db_client: Client):
        super().__init__(db_client, ENTITY_TYPE_ABSENCE)

    def get_by_id(self, absence_id: str) -> Optional[AbsenceRecord]:
        database_row = self.get_row(absence_id)
        if not database_row:
            return None
        return db_row_to_absence(database_row)

    def get_all(self) -> List[AbsenceRecord]:
        return self.load_all(db_row_to_absence)

    def get_by_employee_name(self, employee_name: str) -> List[AbsenceRecord]:
        """Absences registered under a name, compared case-insensitively.

        Absences are keyed by the typed name, not by employee id, so the
        match happens after loading.
        """
        wanted = employee_name.strip().lower()
        return [
            absence for absence in self.get_all()
            if absence.employee_name.strip().lower() == wanted
        ]

    def save(self, absence: AbsenceRecord) -> AbsenceRecord:
        self.save_row(absence_to_db_row(absence))
        return absence
