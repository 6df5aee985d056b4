"""Service for absenteeism records, restricted to HR roles."""

import logging
import uuid
from typing import Any, Dict, List, Optional

from ats.errors import PermissionDenied
from ats.models import AbsenceRecord, DocumentType, User, UserRole
from ats.repositories.absence_repository import AbsenceRepository
from ats.utils.date_utils import utc_now

logger = logging.getLogger(__name__)

# Roles allowed to read and write absences
ABSENCE_ROLES = (UserRole.MASTER, UserRole.HR_ASSISTANT)


def can_manage_absences(user: Optional[User]) -> bool:
    return user is not None and user.role in ABSENCE_ROLES


def validate_absence(absence: AbsenceRecord) -> AbsenceRecord:
    """Check the rules a record must meet before being stored.

    A record without the free-text duration gets one built from the
    structured amount, so older readers still show it.

    Raises:
        ValueError: If a required field is missing or the duration is invalid.
    """
    if not absence.employee_name.strip():
        raise ValueError("employee_name is required")

    if absence.document_type == DocumentType.DEPENDENT_COMPANION:
        if not (absence.companion_name or "").strip() or not (absence.companion_bond or "").strip():
            raise ValueError("companion_name and companion_bond are required for dependent companion absences")

    if absence.duration_amount is not None:
        if absence.duration_amount <= 0:
            raise ValueError("duration_amount must be positive")
        if not absence.duration_unit:
            raise ValueError("duration_unit is required with duration_amount")
        if not absence.document_duration.strip():
            absence.document_duration = absence.duration_label
    elif not absence.document_duration.strip():
        raise ValueError("A duration is required")

    return absence


class AbsenceService:
    """Service for managing absence records.

    Only masters and HR assistants may use it; anyone else gets
    PermissionDenied on every operation.

    Attributes:
        absence_repository: Repository for absence data access.
    """

    def __init__(self, absence_repository: AbsenceRepository):
        self.absence_repository = absence_repository

    def _require_access(self, user: User) -> None:
        if not can_manage_absences(user):
            raise PermissionDenied(f"User {user.id} cannot manage absences")

    def list_absences(self, user: User, employee_name: Optional[str] = None) -> List[AbsenceRecord]:
        """List absences, most recent first, optionally for one employee name."""
        self._require_access(user)

        if employee_name:
            absences = self.absence_repository.get_by_employee_name(employee_name)
        else:
            absences = self.absence_repository.get_all()

        return sorted(absences, key=lambda absence: absence.absence_date, reverse=True)

    def get_absence(self, absence_id: str, user: User) -> AbsenceRecord:
        self._require_access(user)

        absence = self.absence_repository.get_by_id(absence_id)
        if not absence:
            raise ValueError(f"Absence with ID {absence_id} not found")
        return absence

    def create_absence(self, user: User, absence_data: Dict[str, Any]) -> AbsenceRecord:
        """Register an absence.

        Args:
            user: User registering the record.
            absence_data: Record fields; employee_name, absence_date and a
                duration are required.

        Returns:
            Created AbsenceRecord.

        Raises:
            PermissionDenied: If the user is not allowed to manage absences.
            ValueError: If the record is incomplete.
        """
        self._require_access(user)

        absence = validate_absence(AbsenceRecord(**{
            **absence_data,
            "id": str(uuid.uuid4()),
            "created_at": utc_now(),
        }))

        logger.info(f"User {user.id} registered absence {absence.id} for {absence.employee_name}")
        return self.absence_repository.save(absence)

    def update_absence(self, absence_id: str, user: User, updates: Dict[str, Any]) -> AbsenceRecord:
        """Apply a partial update to an absence record.

        Raises:
            ValueError: If the record is not found or the result is invalid.
        """
        absence = self.get_absence(absence_id, user)

        protected_fields = ["id", "created_at", "deleted_at"]
        for field in protected_fields:
            if field in updates:
                raise ValueError(f"Cannot manually update {field}")

        updated = validate_absence(AbsenceRecord(**{**absence.model_dump(), **updates}))
        return self.absence_repository.save(updated)

    def delete_absence(self, absence_id: str, user: User) -> bool:
        self.get_absence(absence_id, user)

        logger.info(f"Absence {absence_id} deleted by {user.id}")
        return self.absence_repository.soft_delete(absence_id)
