import pytest

from ats.models import CandidateStatus
from ats.services.candidate_service import CandidateService
from ats.services.job_service import JobService
from conftest import make_candidate, make_job, utc


@pytest.fixture
def candidate_service(job_repository, candidate_repository):
    job_repository.store["job-1"] = make_job()
    return CandidateService(candidate_repository, JobService(job_repository, candidate_repository))


def test_create_candidate_on_job(candidate_service, candidate_repository, creator):
    candidate = candidate_service.create_candidate(creator, {"job_id": "job-1", "name": "Ana Souza"})

    assert candidate.status == CandidateStatus.AWAITING_SCREENING
    assert candidate.created_at is not None
    assert candidate.last_interaction_at == candidate.created_at
    assert candidate.first_contact_at is None
    assert candidate_repository.store[candidate.id] is candidate


def test_create_candidate_past_screening_stamps_first_contact(candidate_service, creator):
    candidate = candidate_service.create_candidate(
        creator, {"job_id": "general", "name": "Bruno Lima", "status": "interview"}
    )

    assert candidate.job_id == "general"
    assert candidate.first_contact_at is not None


def test_create_candidate_requires_job_and_name(candidate_service, creator):
    with pytest.raises(ValueError, match="required"):
        candidate_service.create_candidate(creator, {"job_id": "job-1"})


def test_create_candidate_on_unknown_job_fails(candidate_service, creator):
    with pytest.raises(ValueError, match="not found"):
        candidate_service.create_candidate(creator, {"job_id": "nope", "name": "Ana"})


def test_candidate_of_hidden_job_looks_missing(
    candidate_service, job_repository, candidate_repository, confidential_job, outsider
):
    job_repository.store[confidential_job.id] = confidential_job
    candidate_repository.store["cand-1"] = make_candidate(job_id=confidential_job.id)

    with pytest.raises(ValueError, match="Candidate with ID cand-1 not found"):
        candidate_service.get_candidate("cand-1", outsider)
    with pytest.raises(ValueError, match="not found"):
        candidate_service.list_job_candidates(confidential_job.id, outsider)


def test_rejection_requires_reason(candidate_service, candidate_repository, creator):
    candidate_repository.store["cand-1"] = make_candidate()

    with pytest.raises(ValueError, match="rejection reason is required"):
        candidate_service.update_status("cand-1", creator, CandidateStatus.REJECTED, rejection_reason="  ")


def test_rejection_records_reason_date_and_author(candidate_service, candidate_repository, creator):
    candidate_repository.store["cand-1"] = make_candidate()

    candidate = candidate_service.update_status(
        "cand-1", creator, CandidateStatus.WITHDRAWN, rejection_reason=" Counter offer ", changed_at=utc(2024, 2, 2)
    )

    assert candidate.status == CandidateStatus.WITHDRAWN
    assert candidate.rejection_reason == "Counter offer"
    assert candidate.rejection_date == utc(2024, 2, 2)
    assert candidate.rejected_by == creator.name
    assert candidate.first_contact_at == utc(2024, 2, 2)
    assert candidate.last_interaction_at == utc(2024, 2, 2)


def test_status_can_move_backwards(candidate_service, candidate_repository, creator):
    candidate_repository.store["cand-1"] = make_candidate(status="hired", first_contact_at=utc(2024, 1, 2))

    candidate = candidate_service.update_status("cand-1", creator, CandidateStatus.IN_ANALYSIS)

    assert candidate.status == CandidateStatus.IN_ANALYSIS
    assert candidate.first_contact_at == utc(2024, 1, 2)


def test_list_and_delete_candidates(candidate_service, candidate_repository, creator):
    candidate_repository.store["cand-1"] = make_candidate("cand-1")
    candidate_repository.store["cand-2"] = make_candidate("cand-2", job_id="job-2")

    assert [c.id for c in candidate_service.list_job_candidates("job-1", creator)] == ["cand-1"]
    assert candidate_service.delete_candidate("cand-1", creator) is True
    assert candidate_service.list_job_candidates("job-1", creator) == []
