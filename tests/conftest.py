"""Shared factories for building jobs, candidates and users in tests."""

from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from ats.models import Candidate, Job, User


def utc(year, month, day, hour=0, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_job(job_id="job-1", **overrides) -> Job:
    data = {
        "id": job_id,
        "title": "Backend Developer",
        "sector": "Tech",
        "unit": "Matriz",
        "status": "open",
        "opened_at": utc(2024, 1, 1),
        "created_by": "user-a",
    }
    data.update(overrides)
    return Job(**data)


def make_candidate(candidate_id="cand-1", job_id="job-1", **overrides) -> Candidate:
    data = {"id": candidate_id, "job_id": job_id, "name": "Ana Souza"}
    data.update(overrides)
    return Candidate(**data)


def make_user(user_id="user-c", role="recruiter", name=None) -> User:
    return User(id=user_id, username=user_id, name=name or user_id.title(), role=role)


@pytest.fixture
def master():
    return make_user("user-master", role="master", name="Master")


@pytest.fixture
def creator():
    return make_user("user-a", name="Alice")


@pytest.fixture
def allowed_user():
    return make_user("user-b", name="Bruno")


@pytest.fixture
def outsider():
    return make_user("user-c", name="Carla")


@pytest.fixture
def confidential_job():
    return make_job(
        "job-secret",
        title="Head of Finance",
        sector="Finance",
        is_confidential=True,
        created_by="user-a",
        allowed_user_ids=["user-b"],
    )


@pytest.fixture
def job_repository():
    """In-memory stand-in for JobRepository keyed by job id."""
    store = {}
    repository = MagicMock()
    repository.store = store
    repository.get_by_id.side_effect = lambda job_id: store.get(job_id)
    repository.get_all.side_effect = lambda: list(store.values())
    repository.save.side_effect = lambda job: store.__setitem__(job.id, job) or job
    repository.soft_delete.side_effect = lambda job_id: store.pop(job_id, None) is not None
    return repository


@pytest.fixture
def candidate_repository():
    """In-memory stand-in for CandidateRepository keyed by candidate id."""
    store = {}
    repository = MagicMock()
    repository.store = store
    repository.get_by_id.side_effect = lambda candidate_id: store.get(candidate_id)
    repository.get_all.side_effect = lambda: list(store.values())
    repository.get_by_job.side_effect = lambda job_id: [c for c in store.values() if c.job_id == job_id]
    repository.save.side_effect = lambda candidate: store.__setitem__(candidate.id, candidate) or candidate
    repository.soft_delete.side_effect = lambda candidate_id: store.pop(candidate_id, None) is not None
    return repository


def in_memory_repository():
    """MagicMock repository over a dict, for entities with no extra lookups."""
    store = {}
    repository = MagicMock()
    repository.store = store
    repository.get_by_id.side_effect = lambda record_id: store.get(record_id)
    repository.get_all.side_effect = lambda: list(store.values())
    repository.save.side_effect = lambda record: store.__setitem__(record.id, record) or record
    repository.soft_delete.side_effect = lambda record_id: store.pop(record_id, None) is not None
    return repository


@pytest.fixture
def hr_assistant():
    return make_user("user-hr", role="hr_assistant", name="Helena")


@pytest.fixture
def employee_repository():
    return in_memory_repository()


@pytest.fixture
def talent_repository():
    return in_memory_repository()


@pytest.fixture
def absence_repository():
    repository = in_memory_repository()
    repository.get_by_employee_name.side_effect = lambda name: [
        absence for absence in repository.store.values()
        if absence.employee_name.strip().lower() == name.strip().lower()
    ]
    return repository
