import json

import pytest

from ats.errors import InvalidDate
from ats.transformers.entity_rows import (
    absence_to_db_row,
    db_row_to_absence,
    db_row_to_candidate,
    db_row_to_employee,
    db_row_to_job,
    db_row_to_talent,
    db_row_to_user,
    job_to_db_row,
    talent_to_db_row
)
from conftest import make_job, utc


def job_row(**data):
    payload = {"title": "Backend Developer", "opened_at": "2024-01-01T00:00:00.000Z", "status": "open"}
    payload.update(data)
    return {"id": "job-1", "type": "JOB", "data": payload}


def test_job_row_is_parsed_with_utc_dates():
    job = db_row_to_job(job_row(freeze_history=[{"start_date": "2024-01-03T00:00:00Z", "end_date": None}]))

    assert job.id == "job-1"
    assert job.opened_at == utc(2024, 1, 1)
    assert job.open_freeze.start_date == utc(2024, 1, 3)


def test_payload_stored_as_json_string_is_accepted():
    row = job_row()
    row["data"] = json.dumps(row["data"])

    assert db_row_to_job(row).title == "Backend Developer"


def test_unparsable_date_raises_invalid_date():
    with pytest.raises(InvalidDate):
        db_row_to_job(job_row(opened_at="next tuesday"))


def test_unparsable_freeze_date_raises_invalid_date():
    with pytest.raises(InvalidDate):
        db_row_to_job(job_row(freeze_history=[{"start_date": "31/02/2024"}]))


def test_missing_required_field_is_a_plain_value_error():
    with pytest.raises(ValueError) as error:
        db_row_to_job({"id": "job-1", "data": {"opened_at": "2024-01-01"}})

    assert not isinstance(error.value, InvalidDate)


def test_null_like_strings_are_missing_dates():
    candidate = db_row_to_candidate({
        "id": "cand-1",
        "data": {"job_id": "job-1", "name": "Ana", "interview_at": "undefined", "rejection_date": ""},
    })

    assert candidate.interview_at is None
    assert candidate.rejection_date is None


def test_employee_admission_timestamp_keeps_date_part():
    employee = db_row_to_employee({
        "id": "emp-1",
        "data": {"name": "Carla", "admission_date": "2024-03-01T03:00:00.000Z", "probation_type": "45+45"},
    })

    assert employee.admission_date.isoformat() == "2024-03-01"


def test_user_row_without_role_defaults_to_recruiter():
    user = db_row_to_user({"id": "user-1", "username": "ana", "name": None, "role": None})

    assert user.role == "recruiter"
    assert user.name == ""


def test_job_to_db_row_round_trips_through_json():
    job = make_job(freeze_history=[{"start_date": utc(2024, 1, 3), "end_date": utc(2024, 1, 5)}])

    row = job_to_db_row(job)

    assert row["id"] == "job-1"
    assert row["type"] == "JOB"
    assert "id" not in row["data"]
    assert db_row_to_job(json.loads(json.dumps(row))) == job


def test_talent_row_reads_nested_profile():
    talent = db_row_to_talent({"id": "tal-1", "type": "TALENT", "data": {
        "name": "Marina Alves",
        "contact": "marina@example.com | 11 98765-4321",
        "education": [{"institution": "USP", "level": "Bachelor"}],
        "created_at": "2024-01-10T12:00:00.000Z",
    }})

    assert talent.education[0].institution == "USP"
    assert talent.created_at == utc(2024, 1, 10, 12)
    assert talent_to_db_row(talent)["type"] == "TALENT"


def test_legacy_absence_row_keeps_text_duration():
    absence = db_row_to_absence({"id": "abs-1", "type": "ABSENCE", "data": {
        "employee_name": "Carla Dias",
        "absence_date": "2024-03-04T00:00:00.000Z",
        "document_duration": "2 dias",
    }})

    assert absence.duration_label == "2 dias"
    assert absence.document_type == "medical_certificate"
    row = absence_to_db_row(absence)
    assert (row["type"], row["data"]["absence_date"]) == ("ABSENCE", "2024-03-04")
