from unittest.mock import MagicMock

import pytest

from ats.repositories.candidate_repository import CandidateRepository
from ats.repositories.job_repository import JobRepository
from ats.repositories.user_repository import UserRepository
from conftest import make_job


def supabase_returning(rows):
    """Supabase client mock whose every query chain ends with the given rows."""
    client = MagicMock()
    query = client.table.return_value
    for method in ("select", "eq", "is_", "limit", "upsert", "update"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=rows)
    return client


def test_get_all_skips_corrupt_records(caplog):
    client = supabase_returning([
        {"id": "job-1", "data": {"title": "Ok", "opened_at": "2024-01-01T00:00:00Z"}},
        {"id": "job-2", "data": {"title": "Bad", "opened_at": "not a date"}},
    ])

    jobs = JobRepository(client).get_all()

    assert [job.id for job in jobs] == ["job-1"]
    assert "Skipping JOB job-2" in caplog.text
    client.table.assert_called_with("entities")
    client.table.return_value.eq.assert_any_call("type", "JOB")
    client.table.return_value.is_.assert_any_call("deleted_at", "null")


def test_get_by_id_returns_none_when_missing():
    assert JobRepository(supabase_returning([])).get_by_id("job-1") is None


def test_save_upserts_entity_row():
    client = supabase_returning([])

    JobRepository(client).save(make_job())

    payload = client.table.return_value.upsert.call_args[0][0]
    assert payload["id"] == "job-1"
    assert payload["type"] == "JOB"
    assert payload["deleted_at"] is None
    assert payload["data"]["title"] == "Backend Developer"


def test_soft_delete_stamps_deleted_at():
    client = supabase_returning([])

    assert CandidateRepository(client).soft_delete("cand-1") is True

    update = client.table.return_value.update.call_args[0][0]
    assert update["deleted_at"]
    client.table.return_value.eq.assert_called_with("id", "cand-1")


def test_database_failures_are_wrapped():
    client = MagicMock()
    client.table.side_effect = RuntimeError("connection reset")

    with pytest.raises(Exception, match="Failed to get all CANDIDATE: connection reset"):
        CandidateRepository(client).get_all()


def test_get_by_job_filters_candidates():
    client = supabase_returning([
        {"id": "cand-1", "data": {"job_id": "job-1", "name": "Ana"}},
        {"id": "cand-2", "data": {"job_id": "general", "name": "Bruno"}},
    ])

    assert [c.id for c in CandidateRepository(client).get_by_job("general")] == ["cand-2"]


def test_user_repository_reads_users_table():
    client = supabase_returning([{"id": "user-1", "username": "ana", "name": "Ana", "role": "master"}])

    user = UserRepository(client).get_by_id("user-1")

    assert user.is_master
    client.table.assert_called_with("users")
