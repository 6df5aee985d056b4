"""Excel exports for jobs, candidates and report snapshots."""

import logging
from datetime import datetime
from io import BytesIO
from typing import Any, Dict, Iterable, List, Optional, Sequence

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from ats.constants import CONFIDENTIAL_MASK
from ats.models import (
    Candidate,
    CandidateStatus,
    FINALIST_STATUSES,
    Job,
    JobStatus,
    OpeningReason,
    ReportSnapshot,
    User
)
from ats.services.sla_service import (
    candidate_process_days,
    compute_candidate_sla,
    compute_sla
)
from ats.utils.date_utils import format_date, utc_now
from ats.utils.text_utils import display_value

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
HEADER_FONT = Font(bold=True, color="FFFFFF", size=11)
TITLE_FONT = Font(bold=True, size=14)
SUBTITLE_FONT = Font(italic=True, size=10)
THIN_BORDER = Border(
    left=Side(style='thin'),
    right=Side(style='thin'),
    top=Side(style='thin'),
    bottom=Side(style='thin')
)
CENTER_ALIGN = Alignment(horizontal='center', vertical='center', wrap_text=True)

SLA_HEADERS = [
    # Identification
    "Job ID", "Job Title", "Unit", "Sector", "Recruiter",
    # Timeline and freezes
    "Opened", "Status", "Was Frozen?", "Last Freeze", "Last Unfreeze", "Total Frozen Days", "Closed",
    # Hired candidate
    "Hired Candidate", "Origin", "First Contact", "Test Approver", "Test Approval", "Start Date",
    # Funnel volume
    "Applicants", "Interviewed", "Finalists",
    # SLA
    "Gross SLA (days)", "Frozen Discount (days)", "Net SLA (days)", "Candidate SLA (days)",
]
SLA_WIDTHS = [
    10, 30, 15, 15, 20,
    12, 12, 15, 12, 12, 10, 12,
    25, 15, 12, 20, 12, 12,
    10, 10, 10,
    10, 10, 10, 10,
]

CANDIDATE_HEADERS = [
    "Candidate", "City", "Salary Expectation", "Origin", "Status", "First Contact",
    "Interview", "Test Result", "Loss Reason", "Process Time", "Rejected By",
    "Rejection Date", "Test Approval Date",
]
CANDIDATE_WIDTHS = [30, 20, 20, 15, 20, 15, 15, 15, 30, 18, 20, 15, 15]


def _write_sheet(
    worksheet,
    title: str,
    subtitle: str,
    headers: Sequence[str],
    rows: Iterable[Sequence[Any]],
    widths: Optional[Sequence[int]] = None
) -> None:
    """Title and subtitle merged across the table, a blank row, then the table."""
    last_column = get_column_letter(len(headers))

    worksheet.merge_cells(f"A1:{last_column}1")
    worksheet["A1"] = title
    worksheet["A1"].font = TITLE_FONT

    worksheet.merge_cells(f"A2:{last_column}2")
    worksheet["A2"] = subtitle
    worksheet["A2"].font = SUBTITLE_FONT

    header_row = 4
    for column, header in enumerate(headers, start=1):
        cell = worksheet.cell(row=header_row, column=column, value=header)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.border = THIN_BORDER
        cell.alignment = CENTER_ALIGN

    for row_index, row in enumerate(rows, start=header_row + 1):
        for column, value in enumerate(row, start=1):
            cell = worksheet.cell(row=row_index, column=column, value=value)
            cell.border = THIN_BORDER

    for column, width in enumerate(widths or [], start=1):
        worksheet.column_dimensions[get_column_letter(column)].width = width


def _to_bytes(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _unique_jobs(jobs: Iterable[Job]) -> List[Job]:
    return list({job.id: job for job in jobs}.values())


def build_sla_rows(
    jobs: Iterable[Job],
    candidates: Iterable[Candidate],
    users: Iterable[User],
    as_of: Optional[datetime] = None
) -> List[List[Any]]:
    """One analytical SLA row per job, columns in SLA_HEADERS order.

    Args:
        jobs: Jobs already filtered for the requesting user.
        candidates: Candidates of those jobs.
        users: Users, to resolve recruiter names.
        as_of: Evaluation instant for running jobs. Defaults to now.

    Returns:
        List of row values.
    """
    as_of = as_of or utc_now()
    user_names = {user.id: user.name for user in users}
    candidates = list(candidates)

    rows = []
    for job in _unique_jobs(jobs):
        if job.is_deleted:
            continue

        sla = compute_sla(job, as_of)

        last_freeze = max(job.freeze_history, key=lambda freeze: freeze.start_date, default=None)
        last_freeze_date = format_date(last_freeze.start_date) if last_freeze else "-"
        if last_freeze and last_freeze.end_date:
            last_unfreeze_date = format_date(last_freeze.end_date)
        elif job.status == JobStatus.FROZEN:
            last_unfreeze_date = "Ongoing"
        else:
            last_unfreeze_date = "-"

        job_candidates = [c for c in candidates if c.job_id == job.id]
        hired = next((c for c in job_candidates if c.status == CandidateStatus.HIRED), None)

        hired_columns = ["-", "-", "-", "-", "-", "-"]
        candidate_sla: Any = "-"
        if hired:
            hired_columns = [
                hired.name,
                display_value(hired.origin) or "-",
                format_date(hired.first_contact_at),
                hired.tech_test_evaluator or "-",
                format_date(hired.test_approval_date),
                format_date(hired.timeline.start_date),
            ]
            days = compute_candidate_sla(hired, job, as_of)
            candidate_sla = days if days is not None else 0

        rows.append([
            job.id,
            job.title,
            job.unit,
            job.sector,
            user_names.get(job.created_by, "N/A"),
            format_date(job.opened_at),
            display_value(job.status),
            "Yes" if job.freeze_history else "No",
            last_freeze_date,
            last_unfreeze_date,
            sla.frozen_days,
            format_date(job.closed_at) or "-",
            *hired_columns,
            len(job_candidates),
            sum(1 for c in job_candidates if c.interview_date),
            sum(1 for c in job_candidates if c.status in FINALIST_STATUSES),
            sla.gross_days,
            sla.frozen_days,
            sla.net_days,
            candidate_sla,
        ])

    return rows


def export_sla_workbook(
    jobs: Iterable[Job],
    candidates: Iterable[Candidate],
    users: Iterable[User],
    as_of: Optional[datetime] = None
) -> bytes:
    """Analytical SLA and audit workbook for a set of jobs."""
    as_of = as_of or utc_now()
    rows = build_sla_rows(jobs, candidates, users, as_of)

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "SLA Analytics"
    _write_sheet(
        worksheet,
        "Job SLA and Audit Report",
        f"Generated on {format_date(as_of)} | Freeze accounting and funnel",
        SLA_HEADERS,
        rows,
        SLA_WIDTHS,
    )

    logger.info(f"Exported SLA workbook with {len(rows)} jobs")
    return _to_bytes(workbook)


def build_candidate_rows(candidates: Iterable[Candidate], as_of: Optional[datetime] = None) -> List[List[Any]]:
    rows = []
    for candidate in candidates:
        process_days = candidate_process_days(candidate, as_of)
        if candidate.tech_test:
            test_result = display_value(candidate.tech_test_result) or "Yes"
        else:
            test_result = "No"

        rows.append([
            candidate.name,
            candidate.city or "-",
            candidate.salary_expectation or "-",
            display_value(candidate.origin) or "-",
            display_value(candidate.status),
            format_date(candidate.first_contact_at),
            format_date(candidate.interview_date),
            test_result,
            candidate.rejection_reason or "-",
            f"{process_days} days" if process_days is not None else "-",
            candidate.rejected_by or "-",
            format_date(candidate.rejection_date),
            format_date(candidate.test_approval_date),
        ])
    return rows


def export_job_candidates(job: Job, candidates: Iterable[Candidate], as_of: Optional[datetime] = None) -> bytes:
    """Candidates workbook for a single job."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Candidates"
    _write_sheet(
        worksheet,
        f"Candidates Report - {job.title}",
        f"Sector: {job.sector} | Unit: {job.unit} | Job Status: {display_value(job.status)}",
        CANDIDATE_HEADERS,
        build_candidate_rows(candidates, as_of),
        CANDIDATE_WIDTHS,
    )
    return _to_bytes(workbook)


def build_job_list_rows(jobs: Iterable[Job], candidates: Iterable[Candidate]) -> List[Dict[str, Any]]:
    """Summary line per job. Replaced employees of confidential jobs are masked."""
    candidate_counts: Dict[str, int] = {}
    for candidate in candidates:
        candidate_counts[candidate.job_id] = candidate_counts.get(candidate.job_id, 0) + 1

    rows = []
    for job in jobs:
        if job.is_deleted:
            continue

        details = job.opening_details
        reason = details.reason if details else OpeningReason.EXPANSION.value
        replaced = ""
        if details and details.reason == OpeningReason.REPLACEMENT:
            replaced = CONFIDENTIAL_MASK if job.is_confidential else (details.replaced_employee or "")

        rows.append({
            "Job Title": job.title,
            "Opened": format_date(job.opened_at),
            "Status": display_value(job.status),
            "Opening Type": display_value(reason),
            "Replaced Employee": replaced,
            "Total Candidates": candidate_counts.get(job.id, 0),
        })
    return rows


def export_jobs_list(jobs: Iterable[Job], candidates: Iterable[Candidate]) -> bytes:
    rows = build_job_list_rows(jobs, candidates)

    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = "Jobs"

    headers = ["Job Title", "Opened", "Status", "Opening Type", "Replaced Employee", "Total Candidates"]
    worksheet.append(headers)
    for cell in worksheet[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
    for row in rows:
        worksheet.append([row[header] for header in headers])

    return _to_bytes(workbook)


def export_strategic_report(snapshot: ReportSnapshot) -> bytes:
    """Strategic report workbook: indicators, sector movements and loss reasons."""
    workbook = Workbook()
    subtitle = (
        f"Period: {snapshot.range_start.strftime('%d/%m/%Y')} "
        f"to {snapshot.range_end.strftime('%d/%m/%Y')}"
    )

    indicators = workbook.active
    indicators.title = "Indicators"
    counts = snapshot.counts
    indicator_rows = [
        ["Backlog", counts["backlog"]],
        ["Opened", counts["opened"]],
        ["Opened (expansion)", snapshot.opened.expansion],
        ["Opened (replacement)", snapshot.opened.replacement],
        ["Closed", counts["closed"]],
        ["Canceled", counts["canceled"]],
        ["Frozen", counts["frozen"]],
        ["Active total", counts["active_total"]],
        ["Open balance", counts["balance_open"]],
        ["Interviews", snapshot.interviews],
        ["Technical tests", snapshot.tech_tests],
        ["Rejections", snapshot.rejected.total],
        ["Withdrawals", snapshot.withdrawn.total],
        ["Average net SLA of closed jobs", snapshot.average_net_sla_closed if snapshot.average_net_sla_closed is not None else "-"],
    ]
    _write_sheet(indicators, "Strategic Report", subtitle, ["Indicator", "Value"], indicator_rows, [35, 15])

    sectors = workbook.create_sheet("Sectors")
    sector_rows = [
        [sector, rollup.opened, rollup.closed, rollup.frozen, rollup.canceled]
        for sector, rollup in sorted(snapshot.by_sector.items())
    ]
    _write_sheet(
        sectors, "Movements by Sector", subtitle,
        ["Sector", "Opened", "Closed", "Frozen", "Canceled"], sector_rows, [30, 12, 12, 12, 12]
    )

    losses = workbook.create_sheet("Losses")
    loss_rows = []
    for decision, histogram in (("Company", snapshot.rejected), ("Candidate", snapshot.withdrawn)):
        for reason, count in sorted(histogram.reasons.items(), key=lambda item: item[1], reverse=True):
            loss_rows.append([decision, reason, count])
    _write_sheet(losses, "Loss Reasons", subtitle, ["Decision", "Reason", "Count"], loss_rows, [15, 40, 10])

    return _to_bytes(workbook)
