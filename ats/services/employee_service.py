"""Service for employee registration, career history and timelines."""

import logging
import uuid
from datetime import date
from typing import Any, Dict, List, Optional

from ats.models import (
    Employee,
    EmployeeHistoryRecord,
    EmployeeHistoryType,
    EmployeeStatus,
    TimelineEntry,
    User
)
from ats.repositories.absence_repository import AbsenceRepository
from ats.repositories.employee_repository import EmployeeRepository
from ats.services.absence_service import can_manage_absences
from ats.utils.date_utils import utc_now
from ats.utils.text_utils import display_value

logger = logging.getLogger(__name__)

ABSENCE_TIMELINE_TYPE = "absence"


class EmployeeService:
    """Service for managing employees with business logic.

    Attributes:
        employee_repository: Repository for employee data access.
        absence_repository: Repository read to merge absences into timelines.
    """

    def __init__(self, employee_repository: EmployeeRepository, absence_repository: AbsenceRepository):
        self.employee_repository = employee_repository
        self.absence_repository = absence_repository

    def create_employee(self, user: User, employee_data: Dict[str, Any]) -> Employee:
        """Register (admit) an employee.

        Args:
            user: User registering the employee.
            employee_data: Employee fields; name and admission_date are required.

        Returns:
            Created Employee.

        Raises:
            ValueError: If required fields are missing.
        """
        if not (employee_data.get("name") or "").strip() or not employee_data.get("admission_date"):
            raise ValueError("name and admission_date are required")

        employee = Employee(**{
            **employee_data,
            "id": str(uuid.uuid4()),
            "created_at": utc_now(),
            "history": [],
            "experience_interviews": [],
        })

        logger.info(f"User {user.id} admitted employee {employee.id} ({employee.name})")
        return self.employee_repository.save(employee)

    def get_employee(self, employee_id: str) -> Employee:
        employee = self.employee_repository.get_by_id(employee_id)
        if not employee or employee.deleted_at:
            raise ValueError(f"Employee with ID {employee_id} not found")
        return employee

    def list_employees(self, status: Optional[EmployeeStatus] = None, search: Optional[str] = None) -> List[Employee]:
        """List employees by name, filtered by status and by a name/role search."""
        employees = [employee for employee in self.employee_repository.get_all() if not employee.deleted_at]

        if status:
            employees = [employee for employee in employees if employee.status == status]
        if search:
            term = search.strip().lower()
            employees = [
                employee for employee in employees
                if term in employee.name.lower() or term in employee.role.lower()
            ]

        return sorted(employees, key=lambda employee: employee.name.casefold())

    def update_employee(self, employee_id: str, updates: Dict[str, Any]) -> Employee:
        """Apply a partial update to an employee.

        History and probation interviews have their own endpoints and cannot
        be replaced here.

        Raises:
            ValueError: If the employee is not found or the update is invalid.
        """
        employee = self.get_employee(employee_id)

        protected_fields = ["id", "history", "experience_interviews", "created_at", "deleted_at"]
        for field in protected_fields:
            if field in updates:
                raise ValueError(f"Cannot manually update {field}")

        updated = Employee(**{**employee.model_dump(), **updates})
        if updated.status != employee.status:
            logger.info(f"Employee {employee_id} status changed from {display_value(employee.status)} to {display_value(updated.status)}")

        return self.employee_repository.save(updated)

    def add_history_record(
        self,
        employee_id: str,
        user: User,
        record_type: EmployeeHistoryType,
        description: str,
        record_date: Optional[date] = None
    ) -> EmployeeHistoryRecord:
        """Append a career event (promotion, sector change, leave...) to an employee.

        Raises:
            ValueError: If the employee is not found or the description is empty.
        """
        if not description or not description.strip():
            raise ValueError("A history description is required")

        employee = self.get_employee(employee_id)
        record = EmployeeHistoryRecord(
            id=str(uuid.uuid4()),
            date=record_date or date.today(),
            type=record_type,
            description=description.strip(),
            created_by=user.name or user.id
        )

        employee.history.append(record)
        self.employee_repository.save(employee)
        return record

    def get_timeline(self, employee_id: str, user: User) -> List[TimelineEntry]:
        """History entries merged with absences, newest first.

        Absences are matched by employee name and only shown to users who
        may manage absences.
        """
        employee = self.get_employee(employee_id)

        entries = [
            TimelineEntry(
                id=record.id,
                date=record.date,
                type=display_value(record.type),
                description=record.description
            )
            for record in employee.history
        ]

        if can_manage_absences(user):
            for absence in self.absence_repository.get_by_employee_name(employee.name):
                entries.append(TimelineEntry(
                    id=absence.id,
                    date=absence.absence_date,
                    type=ABSENCE_TIMELINE_TYPE,
                    description=f"{display_value(absence.document_type)}: {absence.reason} ({absence.duration_label})",
                    is_absence=True
                ))

        return sorted(entries, key=lambda entry: entry.date, reverse=True)

    def delete_employee(self, employee_id: str, user: User) -> bool:
        self.get_employee(employee_id)

        logger.info(f"Employee {employee_id} deleted by {user.id}")
        return self.employee_repository.soft_delete(employee_id)
