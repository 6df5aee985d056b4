"""Repository for employee data access operations."""

from typing import List, Optional

from supabase import Client

from ats.constants import ENTITY_TYPE_EMPLOYEE
from ats.models import Employee
from ats.repositories.base_repository import BaseRepository
from ats.transformers.entity_rows import db_row_to_employee, employee_to_db_row


class EmployeeRepository(BaseRepository):
    """Repository for managing employee persistence."""

    def __init__(self, db_client: Client):
        super().__init__(db_client, ENTITY_TYPE_EMPLOYEE)

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        database_row = self.get_row(employee_id)
        if not database_row:
            return None
        return db_row_to_employee(database_row)

    def get_all(self) -> List[Employee]:
        return self.load_all(db_row_to_employee)

    def save(self, employee: Employee) -> Employee:
        self.save_row(employee_to_db_row(employee))
        return employee
