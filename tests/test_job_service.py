import pytest

from ats.models import JobStatus
from ats.services.job_service import JobService
from conftest import make_candidate, make_job, utc


@pytest.fixture
def job_service(job_repository, candidate_repository):
    return JobService(job_repository, candidate_repository)


def store(repository, *models):
    for model in models:
        repository.store[model.id] = model


def test_create_job_belongs_to_caller(job_service, job_repository, creator):
    job = job_service.create_job(creator, "Data Analyst", "Tech", "Matriz", opened_at=utc(2024, 3, 1))

    assert job.created_by == creator.id
    assert job.status == JobStatus.OPEN
    assert job.opened_at == utc(2024, 3, 1)
    assert job_repository.store[job.id] is job


def test_create_job_requires_title_sector_and_unit(job_service, creator):
    with pytest.raises(ValueError, match="required"):
        job_service.create_job(creator, "", "Tech", "Matriz")


def test_hidden_confidential_job_looks_missing(job_service, job_repository, confidential_job, outsider, allowed_user):
    store(job_repository, confidential_job)

    with pytest.raises(ValueError, match="not found"):
        job_service.get_job(confidential_job.id, outsider)
    assert job_service.get_job(confidential_job.id, allowed_user) is confidential_job


def test_list_jobs_filters_and_sorts_newest_first(job_service, job_repository, confidential_job, outsider):
    store(
        job_repository,
        make_job("old", opened_at=utc(2024, 1, 1)),
        make_job("new", opened_at=utc(2024, 2, 1)),
        make_job("sales", sector="Sales", opened_at=utc(2024, 3, 1)),
        confidential_job,
    )

    assert [job.id for job in job_service.list_jobs(outsider)] == ["sales", "new", "old"]
    assert [job.id for job in job_service.list_jobs(outsider, sector="Tech")] == ["new", "old"]


def test_update_job_rejects_protected_fields(job_service, job_repository, creator):
    store(job_repository, make_job())

    with pytest.raises(ValueError, match="freeze_history"):
        job_service.update_job("job-1", creator, {"freeze_history": []})


def test_update_job_allows_manual_status_change(job_service, job_repository, creator):
    store(job_repository, make_job(status="closed", closed_at=utc(2024, 1, 5)))

    updated = job_service.update_job("job-1", creator, {"status": "open", "title": "Senior Developer"})

    assert updated.status == JobStatus.OPEN
    assert updated.title == "Senior Developer"


def test_freeze_and_unfreeze_record_history(job_service, job_repository, creator):
    store(job_repository, make_job())

    frozen = job_service.freeze_job("job-1", creator, "Budget review", "CFO", frozen_at=utc(2024, 1, 3))
    assert frozen.status == JobStatus.FROZEN
    assert frozen.open_freeze.start_date == utc(2024, 1, 3)

    resumed = job_service.unfreeze_job("job-1", creator, unfrozen_at=utc(2024, 1, 5))
    assert resumed.status == JobStatus.OPEN
    assert resumed.freeze_history[0].end_date == utc(2024, 1, 5)
    assert job_service.get_job_sla("job-1", creator, as_of=utc(2024, 1, 11)).net_days == 8


def test_freeze_requires_open_job(job_service, job_repository, creator):
    store(job_repository, make_job(status="closed", closed_at=utc(2024, 1, 5)))

    with pytest.raises(ValueError, match="Only open jobs"):
        job_service.freeze_job("job-1", creator, "Budget", "CFO")


def test_unfreeze_requires_frozen_job(job_service, job_repository, creator):
    store(job_repository, make_job())

    with pytest.raises(ValueError, match="Only frozen jobs"):
        job_service.unfreeze_job("job-1", creator)


def test_unfreeze_before_freeze_start_is_rejected(job_service, job_repository, creator):
    store(job_repository, make_job())
    job_service.freeze_job("job-1", creator, "Budget", "CFO", frozen_at=utc(2024, 1, 10))

    with pytest.raises(ValueError, match="cannot be before"):
        job_service.unfreeze_job("job-1", creator, unfrozen_at=utc(2024, 1, 9))


def test_cancel_job_sets_close_date_and_reason(job_service, job_repository, creator):
    store(job_repository, make_job())

    canceled = job_service.cancel_job("job-1", creator, "Position removed", "Director", canceled_at=utc(2024, 1, 8))

    assert canceled.status == JobStatus.CANCELED
    assert canceled.closed_at == utc(2024, 1, 8)
    assert canceled.cancellation_reason == "Position removed"
    assert canceled.requester_name == "Director"

    with pytest.raises(ValueError, match="already"):
        job_service.cancel_job("job-1", creator, "Again", "Director")


def test_close_job_marks_hired_candidate(job_service, job_repository, candidate_repository, creator):
    store(job_repository, make_job())
    store(candidate_repository, make_candidate("cand-1", status="approved"))

    closed = job_service.close_job("job-1", creator, hired_candidate_id="cand-1", closed_at=utc(2024, 1, 20))

    assert closed.status == JobStatus.CLOSED
    assert closed.closed_at == utc(2024, 1, 20)
    assert closed.hired_candidate_ids == ["cand-1"]
    hired = candidate_repository.store["cand-1"]
    assert hired.status == "hired"
    assert hired.first_contact_at is not None


def test_close_job_with_candidate_of_another_job_fails(job_service, job_repository, candidate_repository, creator):
    store(job_repository, make_job())
    store(candidate_repository, make_candidate("cand-9", job_id="job-2"))

    with pytest.raises(ValueError, match="not found"):
        job_service.close_job("job-1", creator, hired_candidate_id="cand-9")


def test_reopen_clears_close_date(job_service, job_repository, creator):
    store(job_repository, make_job(status="closed", closed_at=utc(2024, 1, 5)))

    reopened = job_service.reopen_job("job-1", creator)

    assert reopened.status == JobStatus.OPEN
    assert reopened.closed_at is None


def test_reopen_requires_closed_job(job_service, job_repository, creator):
    store(job_repository, make_job())

    with pytest.raises(ValueError, match="Only closed jobs"):
        job_service.reopen_job("job-1", creator)


def test_freeze_close_reopen_freeze_again(job_service, job_repository, creator):
    store(job_repository, make_job())
    job_service.freeze_job("job-1", creator, "Budget review", "CFO", frozen_at=utc(2024, 1, 3))

    closed = job_service.close_job("job-1", creator, closed_at=utc(2024, 1, 10))
    assert closed.open_freeze is None
    assert closed.freeze_history[0].end_date == utc(2024, 1, 10)
    sla = job_service.get_job_sla("job-1", creator, as_of=utc(2024, 2, 1))
    assert (sla.gross_days, sla.frozen_days, sla.net_days) == (9, 7, 2)

    job_service.reopen_job("job-1", creator)
    job_service.freeze_job("job-1", creator, "Hiring pause", "CFO", frozen_at=utc(2024, 1, 15))
    resumed = job_service.unfreeze_job("job-1", creator, unfrozen_at=utc(2024, 1, 17))

    assert len(resumed.freeze_history) == 2
    sla = job_service.get_job_sla("job-1", creator, as_of=utc(2024, 1, 21))
    assert (sla.gross_days, sla.frozen_days, sla.net_days) == (20, 9, 11)


def test_cancel_frozen_job_ends_running_freeze(job_service, job_repository, creator):
    store(job_repository, make_job())
    job_service.freeze_job("job-1", creator, "Budget review", "CFO", frozen_at=utc(2024, 1, 3))

    canceled = job_service.cancel_job("job-1", creator, "Position removed", "Director", canceled_at=utc(2024, 1, 8))

    assert canceled.status == JobStatus.CANCELED
    assert canceled.freeze_history[0].end_date == utc(2024, 1, 8)


def test_close_dated_before_freeze_start_collapses_freeze(job_service, job_repository, creator):
    store(job_repository, make_job())
    job_service.freeze_job("job-1", creator, "Budget review", "CFO", frozen_at=utc(2024, 1, 10))

    closed = job_service.close_job("job-1", creator, closed_at=utc(2024, 1, 8))

    assert closed.freeze_history[0].end_date == utc(2024, 1, 10)


def test_reopen_ends_freeze_left_running_by_old_records(job_service, job_repository, creator):
    store(job_repository, make_job(
        status="closed",
        closed_at=utc(2024, 1, 10),
        freeze_history=[{"start_date": utc(2024, 1, 3)}],
    ))

    reopened = job_service.reopen_job("job-1", creator)

    assert reopened.freeze_history[0].end_date == utc(2024, 1, 10)
    frozen = job_service.freeze_job("job-1", creator, "Hiring pause", "CFO", frozen_at=utc(2024, 1, 15))
    assert frozen.open_freeze.start_date == utc(2024, 1, 15)


def test_manual_close_stamps_close_date_and_ends_freeze(job_service, job_repository, creator):
    store(job_repository, make_job())
    job_service.freeze_job("job-1", creator, "Budget review", "CFO", frozen_at=utc(2024, 1, 3))

    updated = job_service.update_job("job-1", creator, {"status": "closed"})

    assert updated.status == JobStatus.CLOSED
    assert updated.closed_at is not None
    assert updated.freeze_history[0].end_date == updated.closed_at


def test_manual_cancel_uses_given_close_date(job_service, job_repository, creator):
    store(job_repository, make_job())
    job_service.freeze_job("job-1", creator, "Budget review", "CFO", frozen_at=utc(2024, 1, 3))

    updated = job_service.update_job("job-1", creator, {"status": "canceled", "closed_at": utc(2024, 1, 6)})

    assert updated.closed_at == utc(2024, 1, 6)
    assert updated.freeze_history[0].end_date == utc(2024, 1, 6)
    sla = job_service.get_job_sla("job-1", creator, as_of=utc(2024, 3, 1))
    assert (sla.gross_days, sla.frozen_days, sla.net_days) == (5, 3, 2)


def test_manual_unfreeze_ends_running_freeze(job_service, job_repository, creator):
    store(job_repository, make_job())
    job_service.freeze_job("job-1", creator, "Budget review", "CFO", frozen_at=utc(2024, 1, 3))

    updated = job_service.update_job("job-1", creator, {"status": "open"})

    assert updated.open_freeze is None
    assert updated.freeze_history[0].end_date is not None
    job_service.freeze_job("job-1", creator, "Hiring pause", "CFO")


def test_manual_freeze_starts_freeze_interval(job_service, job_repository, creator):
    store(job_repository, make_job(status="closed", closed_at=utc(2024, 1, 5)))

    updated = job_service.update_job("job-1", creator, {"status": "frozen"})

    assert updated.closed_at is None
    assert updated.open_freeze is not None
    assert updated.open_freeze.requester == "Alice"


def test_manual_reopen_ends_old_freeze_at_close_date(job_service, job_repository, creator):
    store(job_repository, make_job(
        status="closed",
        closed_at=utc(2024, 1, 10),
        freeze_history=[{"start_date": utc(2024, 1, 3)}],
    ))

    updated = job_service.update_job("job-1", creator, {"status": "open"})

    assert updated.closed_at is None
    assert updated.freeze_history[0].end_date == utc(2024, 1, 10)


def test_delete_job_records_who_deleted(job_service, job_repository, creator):
    job = make_job()
    store(job_repository, job)

    assert job_service.delete_job("job-1", creator) is True
    assert job.deleted_by == creator.id
    job_repository.soft_delete.assert_called_once_with("job-1")
    with pytest.raises(ValueError, match="not found"):
        job_service.get_job("job-1", creator)
