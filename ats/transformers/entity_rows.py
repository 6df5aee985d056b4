"""Convert entities/users table rows to Pydantic models and back."""

import json
from typing import Any, Dict, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ats.constants import (
    ENTITY_TYPE_ABSENCE,
    ENTITY_TYPE_CANDIDATE,
    ENTITY_TYPE_EMPLOYEE,
    ENTITY_TYPE_JOB,
    ENTITY_TYPE_TALENT
)
from ats.errors import InvalidDate
from ats.models import AbsenceRecord, Candidate, Employee, Job, TalentProfile, User, UserRole

ModelT = TypeVar("ModelT", bound=BaseModel)


def _caused_by_invalid_date(error: ValidationError) -> bool:
    for detail in error.errors():
        if isinstance(detail.get("ctx", {}).get("error"), InvalidDate):
            return True
    return False


def _entity_payload(database_row: Dict[str, Any]) -> Dict[str, Any]:
    """Merge the row id into its JSONB payload.

    The payload may come back as a JSON string depending on how the row was
    written, so both shapes are accepted.
    """
    data = database_row.get("data") or {}
    if isinstance(data, str):
        data = json.loads(data)

    payload = dict(data)
    payload["id"] = database_row["id"]
    return payload


def _validate(model_class: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
    """Validate a payload, surfacing bad timestamps as InvalidDate.

    Raises:
        InvalidDate: If a date field cannot be parsed.
        ValueError: If the payload does not match the model otherwise.
    """
    label = model_class.__name__.lower()
    try:
        return model_class(**payload)
    except ValidationError as error:
        if _caused_by_invalid_date(error):
            raise InvalidDate(f"Invalid date on {label} {payload.get('id')}: {error}")
        raise ValueError(f"Invalid {label} record {payload.get('id')}: {error}")


def db_row_to_job(database_row: Dict[str, Any]) -> Job:
    return _validate(Job, _entity_payload(database_row))


def db_row_to_candidate(database_row: Dict[str, Any]) -> Candidate:
    return _validate(Candidate, _entity_payload(database_row))


def db_row_to_employee(database_row: Dict[str, Any]) -> Employee:
    return _validate(Employee, _entity_payload(database_row))


def db_row_to_talent(database_row: Dict[str, Any]) -> TalentProfile:
    return _validate(TalentProfile, _entity_payload(database_row))


def db_row_to_absence(database_row: Dict[str, Any]) -> AbsenceRecord:
    return _validate(AbsenceRecord, _entity_payload(database_row))


def db_row_to_user(database_row: Dict[str, Any]) -> User:
    """Convert a users table row to a User. The password column is never read."""
    return _validate(User, {
        "id": database_row["id"],
        "username": database_row.get("username") or "",
        "name": database_row.get("name") or "",
        "role": database_row.get("role") or UserRole.RECRUITER,
        "created_by": database_row.get("created_by"),
    })


def _model_to_entity_row(model: BaseModel, entity_type: str) -> Dict[str, Any]:
    data = model.model_dump(mode="json", exclude={"id"})
    return {"id": model.id, "type": entity_type, "data": data}


def job_to_db_row(job: Job) -> Dict[str, Any]:
    return _model_to_entity_row(job, ENTITY_TYPE_JOB)


def candidate_to_db_row(candidate: Candidate) -> Dict[str, Any]:
    return _model_to_entity_row(candidate, ENTITY_TYPE_CANDIDATE)


def employee_to_db_row(employee: Employee) -> Dict[str, Any]:
    return _model_to_entity_row(employee, ENTITY_TYPE_EMPLOYEE)


def talent_to_db_row(talent: TalentProfile) -> Dict[str, Any]:
    return _model_to_entity_row(talent, ENTITY_TYPE_TALENT)


def absence_to_db_row(absence: AbsenceRecord) -> Dict[str, Any]:
    return _model_to_entity_row(absence, ENTITY_TYPE_ABSENCE)
