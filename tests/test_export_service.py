from datetime import date
from io import BytesIO

from openpyxl import load_workbook

from ats.models import CandidateTimeline, DateRange, FreezeEvent, OpeningDetails
from ats.services.export_service import (
    SLA_HEADERS,
    build_candidate_rows,
    build_job_list_rows,
    build_sla_rows,
    export_job_candidates,
    export_sla_workbook,
    export_strategic_report
)
from ats.services.report_service import build_report
from conftest import make_candidate, make_job, make_user, utc


AS_OF = utc(2024, 1, 11)


def sla_row(row):
    return dict(zip(SLA_HEADERS, row))


def test_sla_row_for_frozen_job():
    job = make_job(status="frozen", freeze_history=[
        FreezeEvent(start_date=utc(2024, 1, 3), reason="Budget", requester="CFO")
    ])
    candidates = [
        make_candidate("c-1", interview_at=utc(2024, 1, 2), status="interview"),
        make_candidate("c-2"),
    ]

    row = sla_row(build_sla_rows([job], candidates, [make_user("user-a", name="Alice")], AS_OF)[0])

    assert row["Recruiter"] == "Alice"
    assert row["Status"] == "frozen"
    assert row["Was Frozen?"] == "Yes"
    assert row["Last Freeze"] == "03/01/2024"
    assert row["Last Unfreeze"] == "Ongoing"
    assert row["Total Frozen Days"] == 8
    assert row["Closed"] == "-"
    assert row["Applicants"] == 2
    assert row["Interviewed"] == 1
    assert row["Finalists"] == 1
    assert (row["Gross SLA (days)"], row["Net SLA (days)"]) == (10, 2)
    assert row["Hired Candidate"] == "-"


def test_sla_row_for_closed_job_with_hire():
    job = make_job(status="closed", closed_at=utc(2024, 1, 20))
    hired = make_candidate(
        status="hired",
        origin="referral",
        first_contact_at=utc(2024, 1, 5),
        tech_test_evaluator="Dora",
        timeline=CandidateTimeline(start_date=utc(2024, 1, 25)),
    )

    row = sla_row(build_sla_rows([job, job], [hired], [], AS_OF)[0])

    assert row["Recruiter"] == "N/A"
    assert row["Hired Candidate"] == "Ana Souza"
    assert row["Origin"] == "referral"
    assert row["Start Date"] == "25/01/2024"
    assert row["Candidate SLA (days)"] == 20
    assert row["Gross SLA (days)"] == 19
    assert len(build_sla_rows([job, job], [hired], [], AS_OF)) == 1


def test_deleted_jobs_are_not_exported():
    assert build_sla_rows([make_job(is_hidden=True)], [], [], AS_OF) == []


def test_sla_workbook_layout():
    content = export_sla_workbook([make_job()], [], [], AS_OF)

    worksheet = load_workbook(BytesIO(content))["SLA Analytics"]
    assert worksheet["A1"].value == "Job SLA and Audit Report"
    assert [cell.value for cell in worksheet[4]] == SLA_HEADERS
    assert worksheet["A5"].value == "job-1"


def test_candidate_rows():
    candidate = make_candidate(
        status="rejected",
        city="Recife",
        first_contact_at=utc(2024, 1, 2),
        rejection_date=utc(2024, 1, 6),
        rejection_reason="Salary",
        rejected_by="Alice",
        tech_test=True,
    )

    row = build_candidate_rows([candidate], AS_OF)[0]

    assert row[:5] == ["Ana Souza", "Recife", "-", "-", "rejected"]
    assert row[7] == "Yes"
    assert row[8] == "Salary"
    assert row[9] == "4 days"


def test_job_candidates_workbook():
    content = export_job_candidates(make_job(), [make_candidate()], AS_OF)

    worksheet = load_workbook(BytesIO(content))["Candidates"]
    assert worksheet["A1"].value == "Candidates Report - Backend Developer"
    assert worksheet["A5"].value == "Ana Souza"


def test_job_list_masks_replaced_employee_of_confidential_jobs():
    replacement = OpeningDetails(reason="replacement", replaced_employee="João Pereira")
    jobs = [
        make_job("public", opening_details=replacement),
        make_job("secret", opening_details=replacement, is_confidential=True),
        make_job("expansion"),
    ]

    rows = build_job_list_rows(jobs, [make_candidate(job_id="public")])

    assert rows[0]["Replaced Employee"] == "João Pereira"
    assert rows[0]["Total Candidates"] == 1
    assert rows[1]["Replaced Employee"] == "CONFIDENTIAL"
    assert rows[2]["Opening Type"] == "expansion"
    assert rows[2]["Replaced Employee"] == ""


def test_strategic_report_sheets():
    user = make_user("user-master", role="master")
    jobs = [make_job(opened_at=utc(2024, 2, 5))]
    candidates = [make_candidate(status="rejected", rejection_date=utc(2024, 2, 6))]
    snapshot = build_report(jobs, candidates, user, DateRange.between(date(2024, 2, 1), date(2024, 2, 29)))

    workbook = load_workbook(BytesIO(export_strategic_report(snapshot)))

    assert workbook.sheetnames == ["Indicators", "Sectors", "Losses"]
    indicators = {row[0]: row[1] for row in workbook["Indicators"].iter_rows(min_row=5, values_only=True)}
    assert indicators["Opened"] == 1
    assert indicators["Rejections"] == 1
    assert indicators["Average net SLA of closed jobs"] == "-"
    assert workbook["Sectors"]["A5"].value == "Tech"
    assert list(workbook["Losses"].iter_rows(min_row=5, values_only=True)) == [("Company", "Not informed", 1)]
