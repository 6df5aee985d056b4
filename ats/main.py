"""FastAPI application for job SLA tracking, recruiting reports and exports."""

import logging
from datetime import date, datetime
from typing import List, Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ats.config import get_settings
from ats.database.client import get_supabase
from ats.errors import PermissionDenied
from ats.logging_config import setup_logging
from ats.models import (
    AbsenceRecord,
    Candidate,
    DateRange,
    Employee,
    EmployeeHistoryRecord,
    EmployeeStatus,
    ExperienceInterview,
    Job,
    JobStatus,
    NpsScore,
    ProbationDeadline,
    SlaResult,
    TalentHistoryEntry,
    TalentProfile,
    TalentSort,
    TimelineEntry,
    User
)
from ats.repositories.absence_repository import AbsenceRepository
from ats.repositories.candidate_repository import CandidateRepository
from ats.repositories.employee_repository import EmployeeRepository
from ats.repositories.job_repository import JobRepository
from ats.repositories.talent_repository import TalentRepository
from ats.repositories.user_repository import UserRepository
from ats.services.absence_service import AbsenceService
from ats.services.access_service import has_confidential_access
from ats.services.candidate_service import CandidateService
from ats.services.employee_service import EmployeeService
from ats.services.experience_service import ExperienceService
from ats.services.export_service import (
    export_job_candidates,
    export_jobs_list,
    export_sla_workbook,
    export_strategic_report
)
from ats.services.job_service import JobService
from ats.services.report_service import build_report, filter_jobs, scope_candidates
from ats.services.talent_service import TalentService
from ats.api.schemas.absence_schemas import CreateAbsenceRequest, UpdateAbsenceRequest
from ats.api.schemas.candidate_schemas import CreateCandidateRequest, UpdateCandidateStatusRequest
from ats.api.schemas.employee_schemas import (
    AddHistoryRecordRequest,
    CreateEmployeeRequest,
    UpdateEmployeeRequest
)
from ats.api.schemas.job_schemas import (
    CancelJobRequest,
    CloseJobRequest,
    CreateJobRequest,
    FreezeJobRequest,
    UnfreezeJobRequest,
    UpdateJobRequest
)
from ats.api.schemas.requests import CreateExperienceInterviewRequest
from ats.api.schemas.responses import ReportSnapshotResponse
from ats.api.schemas.talent_schemas import (
    AddObservationRequest,
    CreateTalentRequest,
    LinkTalentRequest,
    UpdateTalentRequest
)

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

settings = get_settings()
setup_logging(settings)
logger = logging.getLogger(__name__)

app = FastAPI()

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Global exception handlers
@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    """Convert ValueError to appropriate HTTP exception.

    Automatically handles common patterns:
    - "not found" → 404 Not Found
    - "duplicate" or "already exists" → 409 Conflict
    - Everything else → 400 Bad Request (InvalidDate and InvalidRange included)
    """
    error_msg = str(exc).lower()

    if "not found" in error_msg:
        status_code = 404
    elif "duplicate" in error_msg or "already exists" in error_msg:
        status_code = 409
    else:
        status_code = 400

    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc)}
    )


@app.exception_handler(PermissionDenied)
async def permission_denied_handler(request: Request, exc: PermissionDenied):
    """Convert PermissionDenied to 403 Forbidden."""
    logger.warning(f"Forbidden {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=403,
        content={"detail": str(exc)}
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Convert generic exceptions to 500 Internal Server Error.

    This catches all unhandled exceptions and returns a clean error response.
    Prevents stack traces from being exposed to clients.
    """
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")

    error_msg = str(exc).lower()

    # Check if it's actually a "not found" error from database
    if "not found" in error_msg or "invalid input syntax for type uuid" in error_msg:
        status_code = 404
        detail = "Resource not found"
    else:
        status_code = 500
        detail = f"Internal server error: {str(exc)}"

    return JSONResponse(
        status_code=status_code,
        content={"detail": detail}
    )


# Repository and service wiring, overridable in tests
def get_job_repository() -> JobRepository:
    return JobRepository(get_supabase())


def get_candidate_repository() -> CandidateRepository:
    return CandidateRepository(get_supabase())


def get_employee_repository() -> EmployeeRepository:
    return EmployeeRepository(get_supabase())


def get_user_repository() -> UserRepository:
    return UserRepository(get_supabase())


def get_talent_repository() -> TalentRepository:
    return TalentRepository(get_supabase())


def get_absence_repository() -> AbsenceRepository:
    return AbsenceRepository(get_supabase())


def get_job_service(
    job_repository: JobRepository = Depends(get_job_repository),
    candidate_repository: CandidateRepository = Depends(get_candidate_repository)
) -> JobService:
    return JobService(job_repository, candidate_repository)


def get_candidate_service(
    candidate_repository: CandidateRepository = Depends(get_candidate_repository),
    job_service: JobService = Depends(get_job_service)
) -> CandidateService:
    return CandidateService(candidate_repository, job_service)


def get_experience_service(
    employee_repository: EmployeeRepository = Depends(get_employee_repository)
) -> ExperienceService:
    return ExperienceService(employee_repository)


def get_absence_service(
    absence_repository: AbsenceRepository = Depends(get_absence_repository)
) -> AbsenceService:
    return AbsenceService(absence_repository)


def get_employee_service(
    employee_repository: EmployeeRepository = Depends(get_employee_repository),
    absence_repository: AbsenceRepository = Depends(get_absence_repository)
) -> EmployeeService:
    return EmployeeService(employee_repository, absence_repository)


def get_talent_service(
    talent_repository: TalentRepository = Depends(get_talent_repository),
    candidate_repository: CandidateRepository = Depends(get_candidate_repository),
    job_service: JobService = Depends(get_job_service),
    candidate_service: CandidateService = Depends(get_candidate_service)
) -> TalentService:
    return TalentService(talent_repository, candidate_repository, job_service, candidate_service)


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    user_repository: UserRepository = Depends(get_user_repository)
) -> User:
    """Resolve the calling user from the X-User-Id header.

    Raises:
        HTTPException: 401 if the header is missing, names no live user, or
            the user lookup itself fails.
    """
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")

    try:
        user = user_repository.get_by_id(x_user_id)
    except Exception as e:
        logger.warning(f"Could not resolve user {x_user_id}: {e}")
        raise HTTPException(status_code=401, detail="Unknown user")
    if not user:
        raise HTTPException(status_code=401, detail="Unknown user")
    return user


def _xlsx_response(content: bytes, filename: str) -> Response:
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@app.get("/")
def root():
    """Health check endpoint.

    Returns:
        Dictionary with status indicator.
    """
    return {"status": "ok"}


# Job endpoints
@app.get("/jobs", response_model=List[Job])
def list_jobs(
    status: Optional[JobStatus] = None,
    unit: Optional[str] = None,
    sector: Optional[str] = None,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """List the jobs visible to the caller, newest first.

    Args:
        status: Optional job status filter.
        unit: Optional unit filter.
        sector: Optional sector filter.

    Returns:
        List of Job objects.
    """
    return job_service.list_jobs(user, status=status, unit=unit, sector=sector)


@app.get("/jobs/export")
def export_jobs(
    unit: Optional[str] = None,
    sector: Optional[str] = None,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service),
    candidate_repository: CandidateRepository = Depends(get_candidate_repository)
):
    """Download the visible job list as a spreadsheet."""
    jobs = job_service.list_jobs(user, unit=unit, sector=sector)
    candidates = scope_candidates(candidate_repository.get_all(), jobs, include_general_pool=False)
    return _xlsx_response(export_jobs_list(jobs, candidates), f"jobs_{date.today().isoformat()}.xlsx")


@app.post("/jobs", response_model=Job)
def create_job(
    request: CreateJobRequest,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Open a new job owned by the caller."""
    return job_service.create_job(
        user=user,
        title=request.title,
        sector=request.sector,
        unit=request.unit,
        opened_at=request.opened_at,
        description=request.description,
        is_confidential=request.is_confidential,
        allowed_user_ids=request.allowed_user_ids,
        opening_details=request.opening_details
    )


@app.get("/jobs/{job_id}", response_model=Job)
def get_job(
    job_id: str,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Get a single job.

    Note:
        Confidential jobs the caller may not see answer 404, the same as
        jobs that do not exist.
    """
    return job_service.get_job(job_id, user)


@app.patch("/jobs/{job_id}", response_model=Job)
def update_job(
    job_id: str,
    request: UpdateJobRequest,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Partially update a job. Only fields present in the body change."""
    updates = request.model_dump(exclude_unset=True)
    return job_service.update_job(job_id, user, updates)


@app.delete("/jobs/{job_id}")
def delete_job(
    job_id: str,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Soft-delete a job."""
    job_service.delete_job(job_id, user)
    return {"message": f"Job {job_id} deleted"}


@app.post("/jobs/{job_id}/freeze", response_model=Job)
def freeze_job(
    job_id: str,
    request: FreezeJobRequest,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Put an open job on hold."""
    return job_service.freeze_job(
        job_id, user, request.reason, request.requester, frozen_at=request.frozen_at
    )


@app.post("/jobs/{job_id}/unfreeze", response_model=Job)
def unfreeze_job(
    job_id: str,
    request: Optional[UnfreezeJobRequest] = None,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Resume a frozen job."""
    unfrozen_at = request.unfrozen_at if request else None
    return job_service.unfreeze_job(job_id, user, unfrozen_at=unfrozen_at)


@app.post("/jobs/{job_id}/cancel", response_model=Job)
def cancel_job(
    job_id: str,
    request: CancelJobRequest,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Cancel a job."""
    return job_service.cancel_job(
        job_id, user, request.reason, request.requester, canceled_at=request.canceled_at
    )


@app.post("/jobs/{job_id}/close", response_model=Job)
def close_job(
    job_id: str,
    request: Optional[CloseJobRequest] = None,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Close a job, optionally marking the hired candidate."""
    request = request or CloseJobRequest()
    return job_service.close_job(
        job_id, user, hired_candidate_id=request.hired_candidate_id, closed_at=request.closed_at
    )


@app.post("/jobs/{job_id}/reopen", response_model=Job)
def reopen_job(
    job_id: str,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Reopen a closed job."""
    return job_service.reopen_job(job_id, user)


@app.get("/jobs/{job_id}/sla", response_model=SlaResult)
def get_job_sla(
    job_id: str,
    as_of: Optional[datetime] = None,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service)
):
    """Gross, frozen and net days of a job.

    Args:
        job_id: Job to measure.
        as_of: Reference instant for jobs still running. Defaults to now.

    Returns:
        SlaResult with the three day counts.
    """
    return job_service.get_job_sla(job_id, user, as_of)


@app.get("/jobs/{job_id}/candidates", response_model=List[Candidate])
def list_job_candidates(
    job_id: str,
    user: User = Depends(get_current_user),
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """List the candidates of a job (use "general" for the general pool)."""
    return candidate_service.list_job_candidates(job_id, user)


@app.get("/jobs/{job_id}/candidates/export")
def export_candidates(
    job_id: str,
    user: User = Depends(get_current_user),
    job_service: JobService = Depends(get_job_service),
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Download the candidates of a job as a spreadsheet."""
    job = job_service.get_job(job_id, user)
    candidates = candidate_service.list_job_candidates(job_id, user)
    return _xlsx_response(export_job_candidates(job, candidates), f"candidates_{job_id}.xlsx")


# Candidate endpoints
@app.post("/candidates", response_model=Candidate)
def create_candidate(
    request: CreateCandidateRequest,
    user: User = Depends(get_current_user),
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Register a candidate on a job or in the general pool."""
    return candidate_service.create_candidate(user, request.model_dump(exclude_none=True))


@app.patch("/candidates/{candidate_id}/status", response_model=Candidate)
def update_candidate_status(
    candidate_id: str,
    request: UpdateCandidateStatusRequest,
    user: User = Depends(get_current_user),
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Move a candidate to a new status. Losses require a reason."""
    return candidate_service.update_status(
        candidate_id,
        user,
        request.status,
        rejection_reason=request.rejection_reason,
        changed_at=request.changed_at
    )


@app.delete("/candidates/{candidate_id}")
def delete_candidate(
    candidate_id: str,
    user: User = Depends(get_current_user),
    candidate_service: CandidateService = Depends(get_candidate_service)
):
    """Soft-delete a candidate."""
    candidate_service.delete_candidate(candidate_id, user)
    return {"message": f"Candidate {candidate_id} deleted"}


# Report endpoints
@app.get("/reports/snapshot", response_model=ReportSnapshotResponse)
def get_report_snapshot(
    start: date,
    end: date,
    unit: Optional[str] = None,
    sector: Optional[str] = None,
    user: User = Depends(get_current_user),
    job_repository: JobRepository = Depends(get_job_repository),
    candidate_repository: CandidateRepository = Depends(get_candidate_repository)
):
    """Strategic report for the caller over an inclusive date range.

    Args:
        start: First day of the window.
        end: Last day of the window.
        unit: Optional unit filter.
        sector: Optional sector filter.

    Returns:
        ReportSnapshotResponse with the snapshot and its bucket counts.

    Note:
        A start after the end answers 400.
    """
    date_range = DateRange.between(start, end)
    jobs = job_repository.get_all()
    snapshot = build_report(jobs, candidate_repository.get_all(), user, date_range, unit=unit, sector=sector)

    return ReportSnapshotResponse(
        snapshot=snapshot,
        counts=snapshot.counts,
        has_confidential_access=has_confidential_access(jobs, user)
    )


@app.get("/reports/snapshot/export")
def export_report_snapshot(
    start: date,
    end: date,
    unit: Optional[str] = None,
    sector: Optional[str] = None,
    user: User = Depends(get_current_user),
    job_repository: JobRepository = Depends(get_job_repository),
    candidate_repository: CandidateRepository = Depends(get_candidate_repository)
):
    """Download the strategic report as a spreadsheet."""
    date_range = DateRange.between(start, end)
    snapshot = build_report(
        job_repository.get_all(), candidate_repository.get_all(), user, date_range, unit=unit, sector=sector
    )
    filename = f"strategic_report_{start.isoformat()}_{end.isoformat()}.xlsx"
    return _xlsx_response(export_strategic_report(snapshot), filename)


@app.get("/reports/sla/export")
def export_sla_report(
    unit: Optional[str] = None,
    sector: Optional[str] = None,
    user: User = Depends(get_current_user),
    job_repository: JobRepository = Depends(get_job_repository),
    candidate_repository: CandidateRepository = Depends(get_candidate_repository),
    user_repository: UserRepository = Depends(get_user_repository)
):
    """Download the SLA and audit workbook for the visible jobs."""
    jobs = filter_jobs(job_repository.get_all(), user, unit=unit, sector=sector)
    candidates = scope_candidates(candidate_repository.get_all(), jobs, include_general_pool=False)
    content = export_sla_workbook(jobs, candidates, user_repository.get_all())
    return _xlsx_response(content, f"sla_report_{date.today().isoformat()}.xlsx")


# Experience endpoints
@app.get("/experience/probation", response_model=List[ProbationDeadline])
def get_probation_deadlines(
    user: User = Depends(get_current_user),
    experience_service: ExperienceService = Depends(get_experience_service)
):
    """Employees still inside their probation, most urgent first."""
    return experience_service.get_probation_deadlines()


@app.get("/experience/enps")
def get_enps(
    user: User = Depends(get_current_user),
    experience_service: ExperienceService = Depends(get_experience_service)
):
    """eNPS per question over all recorded probation interviews."""
    analytics = experience_service.get_enps()
    return {
        key: value.model_dump() if isinstance(value, NpsScore) else value
        for key, value in analytics.items()
    }


@app.post("/employees/{employee_id}/experience-interviews", response_model=ExperienceInterview)
def record_experience_interview(
    employee_id: str,
    request: CreateExperienceInterviewRequest,
    user: User = Depends(get_current_user),
    experience_service: ExperienceService = Depends(get_experience_service)
):
    """Record a probation interview for an employee."""
    return experience_service.record_interview(employee_id, request.model_dump(exclude_none=True))


# Employee endpoints
@app.get("/employees", response_model=List[Employee])
def list_employees(
    status: Optional[EmployeeStatus] = None,
    search: Optional[str] = None,
    user: User = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service)
):
    """List employees by name.

    Args:
        status: Optional employment status filter.
        search: Optional text matched against name and role.
    """
    return employee_service.list_employees(status=status, search=search)


@app.post("/employees", response_model=Employee)
def create_employee(
    request: CreateEmployeeRequest,
    user: User = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service)
):
    """Admit a new employee."""
    return employee_service.create_employee(user, request.model_dump())


@app.get("/employees/{employee_id}", response_model=Employee)
def get_employee(
    employee_id: str,
    user: User = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service)
):
    return employee_service.get_employee(employee_id)


@app.patch("/employees/{employee_id}", response_model=Employee)
def update_employee(
    employee_id: str,
    request: UpdateEmployeeRequest,
    user: User = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service)
):
    """Partially update an employee. Only fields present in the body change."""
    return employee_service.update_employee(employee_id, request.model_dump(exclude_unset=True))


@app.delete("/employees/{employee_id}")
def delete_employee(
    employee_id: str,
    user: User = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service)
):
    """Soft-delete an employee."""
    employee_service.delete_employee(employee_id, user)
    return {"message": f"Employee {employee_id} deleted"}


@app.post("/employees/{employee_id}/history", response_model=EmployeeHistoryRecord)
def add_employee_history(
    employee_id: str,
    request: AddHistoryRecordRequest,
    user: User = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service)
):
    """Record a career event (promotion, sector change, leave...) for an employee."""
    return employee_service.add_history_record(
        employee_id, user, request.type, request.description, record_date=request.record_date
    )


@app.get("/employees/{employee_id}/timeline", response_model=List[TimelineEntry])
def get_employee_timeline(
    employee_id: str,
    user: User = Depends(get_current_user),
    employee_service: EmployeeService = Depends(get_employee_service)
):
    """Career history merged with absences, newest first.

    Absences only appear for users allowed to manage them.
    """
    return employee_service.get_timeline(employee_id, user)


# Absenteeism endpoints (master and HR assistant only)
@app.get("/absences", response_model=List[AbsenceRecord])
def list_absences(
    employee_name: Optional[str] = None,
    user: User = Depends(get_current_user),
    absence_service: AbsenceService = Depends(get_absence_service)
):
    """List absence records, most recent first."""
    return absence_service.list_absences(user, employee_name=employee_name)


@app.post("/absences", response_model=AbsenceRecord)
def create_absence(
    request: CreateAbsenceRequest,
    user: User = Depends(get_current_user),
    absence_service: AbsenceService = Depends(get_absence_service)
):
    """Register an absence and the document covering it."""
    return absence_service.create_absence(user, request.model_dump())


@app.patch("/absences/{absence_id}", response_model=AbsenceRecord)
def update_absence(
    absence_id: str,
    request: UpdateAbsenceRequest,
    user: User = Depends(get_current_user),
    absence_service: AbsenceService = Depends(get_absence_service)
):
    return absence_service.update_absence(absence_id, user, request.model_dump(exclude_unset=True))


@app.delete("/absences/{absence_id}")
def delete_absence(
    absence_id: str,
    user: User = Depends(get_current_user),
    absence_service: AbsenceService = Depends(get_absence_service)
):
    absence_service.delete_absence(absence_id, user)
    return {"message": f"Absence {absence_id} deleted"}


# Talent pool endpoints
@app.get("/talents", response_model=List[TalentProfile])
def list_talents(
    search: Optional[str] = None,
    sort: TalentSort = TalentSort.DATE_DESC,
    user: User = Depends(get_current_user),
    talent_service: TalentService = Depends(get_talent_service)
):
    """Search the talent pool.

    Args:
        search: Terms separated by ";"; a talent matching any of them is listed.
        sort: name_asc, name_desc, date_desc (default) or date_asc.
    """
    return talent_service.list_talents(search, sort)


@app.post("/talents", response_model=TalentProfile)
def create_talent(
    request: CreateTalentRequest,
    user: User = Depends(get_current_user),
    talent_service: TalentService = Depends(get_talent_service)
):
    """Add a person to the talent pool."""
    return talent_service.create_talent(user, request.model_dump())


@app.get("/talents/{talent_id}", response_model=TalentProfile)
def get_talent(
    talent_id: str,
    user: User = Depends(get_current_user),
    talent_service: TalentService = Depends(get_talent_service)
):
    return talent_service.get_talent(talent_id)


@app.patch("/talents/{talent_id}", response_model=TalentProfile)
def update_talent(
    talent_id: str,
    request: UpdateTalentRequest,
    user: User = Depends(get_current_user),
    talent_service: TalentService = Depends(get_talent_service)
):
    """Partially update a talent profile."""
    return talent_service.update_talent(talent_id, request.model_dump(exclude_unset=True))


@app.delete("/talents/{talent_id}")
def delete_talent(
    talent_id: str,
    user: User = Depends(get_current_user),
    talent_service: TalentService = Depends(get_talent_service)
):
    """Move a talent to the trash (soft delete)."""
    talent_service.delete_talent(talent_id)
    return {"message": f"Talent {talent_id} deleted"}


@app.post("/talents/{talent_id}/observations", response_model=TalentProfile)
def add_talent_observation(
    talent_id: str,
    request: AddObservationRequest,
    user: User = Depends(get_current_user),
    talent_service: TalentService = Depends(get_talent_service)
):
    """Append a dated recruiter note to a talent."""
    return talent_service.add_observation(talent_id, request.text)


@app.post("/talents/{talent_id}/link", response_model=Candidate)
def link_talent_to_job(
    talent_id: str,
    request: LinkTalentRequest,
    user: User = Depends(get_current_user),
    talent_service: TalentService = Depends(get_talent_service)
):
    """Register a talent as a candidate on an open job."""
    return talent_service.link_to_job(talent_id, request.job_id, user)


@app.get("/talents/{talent_id}/history", response_model=List[TalentHistoryEntry])
def get_talent_history(
    talent_id: str,
    user: User = Depends(get_current_user),
    talent_service: TalentService = Depends(get_talent_service)
):
    """Past applications of a talent, matched by email or phone."""
    return talent_service.get_history(talent_id, user)
