from datetime import timedelta

import pytest

from ats.models import CandidateTimeline, FreezeEvent
from ats.services.sla_service import (
    candidate_process_days,
    compute_candidate_sla,
    compute_sla,
    total_frozen_time
)
from conftest import make_candidate, make_job, utc


AS_OF = utc(2024, 1, 11)


def test_never_frozen_open_job():
    sla = compute_sla(make_job(), AS_OF)

    assert (sla.gross_days, sla.frozen_days, sla.net_days) == (10, 0, 10)


def test_closed_freeze_interval_is_discounted():
    job = make_job(freeze_history=[
        FreezeEvent(start_date=utc(2024, 1, 3), end_date=utc(2024, 1, 5), reason="Budget", requester="CFO")
    ])

    sla = compute_sla(job, AS_OF)

    assert sla.gross_days == 10
    assert sla.frozen_days == 2
    assert sla.net_days == 8


def test_running_freeze_is_charged_until_as_of():
    job = make_job(
        status="frozen",
        freeze_history=[FreezeEvent(start_date=utc(2024, 1, 3), reason="Budget", requester="CFO")],
    )

    sla = compute_sla(job, AS_OF)

    assert sla.frozen_days == 8
    assert sla.net_days == 2


def test_closed_job_stops_the_clock_at_close_date():
    job = make_job(status="closed", closed_at=utc(2024, 1, 6))

    sla = compute_sla(job, utc(2024, 6, 1))

    assert sla.gross_days == 5


def test_partial_day_rounds_gross_up_and_frozen_down():
    job = make_job(freeze_history=[
        FreezeEvent(start_date=utc(2024, 1, 2), end_date=utc(2024, 1, 3, 12), reason="", requester="")
    ])

    sla = compute_sla(job, utc(2024, 1, 5, 1))

    assert sla.gross_days == 5
    assert sla.frozen_days == 1
    assert sla.net_days == 4


def test_iso_string_timestamps_are_parsed_as_utc():
    job = make_job(opened_at="2024-01-01T00:00:00Z", freeze_history=[
        {"start_date": "2024-01-03T00:00:00.000Z", "end_date": "2024-01-05T00:00:00.000Z"}
    ])

    assert compute_sla(job, AS_OF).net_days == 8


@pytest.mark.parametrize("freeze_history", [
    # Overlapping intervals frozen longer than the job was open
    [
        {"start_date": utc(2024, 1, 1), "end_date": utc(2024, 1, 10)},
        {"start_date": utc(2024, 1, 2), "end_date": utc(2024, 1, 11)},
    ],
    # Interval ending before it starts
    [{"start_date": utc(2024, 1, 9), "end_date": utc(2024, 1, 2)}],
    # Freeze starting after the evaluation instant
    [{"start_date": utc(2024, 2, 1)}],
])
def test_malformed_freezes_never_produce_negative_days(freeze_history):
    sla = compute_sla(make_job(freeze_history=freeze_history), AS_OF)

    assert sla.frozen_days >= 0
    assert sla.net_days >= 0
    if sla.frozen_days <= sla.gross_days:
        assert sla.gross_days == sla.frozen_days + sla.net_days
    else:
        assert sla.net_days == 0


def test_opened_after_as_of_clamps_gross_to_zero():
    sla = compute_sla(make_job(opened_at=utc(2024, 2, 1)), AS_OF)

    assert sla.gross_days == 0
    assert sla.net_days == 0


def test_total_frozen_time_ignores_inverted_intervals():
    job = make_job(freeze_history=[{"start_date": utc(2024, 1, 9), "end_date": utc(2024, 1, 2)}])

    assert total_frozen_time(job, AS_OF) == timedelta(0)


def test_candidate_sla_runs_from_first_contact_to_start_date():
    job = make_job(status="closed", closed_at=utc(2024, 1, 20))
    candidate = make_candidate(
        status="hired",
        first_contact_at=utc(2024, 1, 5),
        timeline=CandidateTimeline(start_date=utc(2024, 1, 15)),
    )

    assert compute_candidate_sla(candidate, job, AS_OF) == 10


def test_candidate_sla_falls_back_to_job_close_date():
    job = make_job(status="closed", closed_at=utc(2024, 1, 20))
    candidate = make_candidate(status="hired", first_contact_at=utc(2024, 1, 5))

    assert compute_candidate_sla(candidate, job, AS_OF) == 15


def test_candidate_sla_without_first_contact_is_none():
    assert compute_candidate_sla(make_candidate(status="hired"), make_job(), AS_OF) is None


def test_process_days_stop_at_rejection():
    candidate = make_candidate(
        status="rejected",
        first_contact_at=utc(2024, 1, 2),
        rejection_date=utc(2024, 1, 4),
        rejection_reason="Salary",
    )

    assert candidate_process_days(candidate, AS_OF) == 2


def test_process_days_of_active_candidate_run_until_as_of():
    candidate = make_candidate(status="interview", first_contact_at=utc(2024, 1, 2))

    assert candidate_process_days(candidate, AS_OF) == 9
