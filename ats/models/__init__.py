"""Pydantic models for the ATS application."""

from ats.models.job import (
    JobStatus,
    TERMINAL_JOB_STATUSES,
    OpeningReason,
    ReplacementReason,
    FreezeEvent,
    OpeningDetails,
    Job
)
from ats.models.candidate import (
    CandidateStatus,
    LOSS_STATUSES,
    FINALIST_STATUSES,
    CandidateOrigin,
    TechTestResult,
    CandidateTimeline,
    Candidate
)
from ats.models.user import UserRole, User
from ats.models.employee import (
    EmployeeStatus,
    ContractType,
    ProbationType,
    ProbationPeriod,
    EmployeeHistoryType,
    EmployeeHistoryRecord,
    TimelineEntry,
    ExperienceInterview,
    Employee
)
from ats.models.absence import DocumentType, DurationUnit, AbsenceRecord
from ats.models.talent import (
    TransportType,
    TalentSort,
    Education,
    Experience,
    TalentProfile,
    TalentHistoryEntry
)
from ats.models.report import (
    SlaResult,
    DateRange,
    ReasonHistogram,
    SectorRollup,
    OpenedBreakdown,
    ReportSnapshot,
    ProbationDeadline,
    NpsScore
)

__all__ = [
    "JobStatus",
    "TERMINAL_JOB_STATUSES",
    "OpeningReason",
    "ReplacementReason",
    "FreezeEvent",
    "OpeningDetails",
    "Job",
    "CandidateStatus",
    "LOSS_STATUSES",
    "FINALIST_STATUSES",
    "CandidateOrigin",
    "TechTestResult",
    "CandidateTimeline",
    "Candidate",
    "UserRole",
    "User",
    "EmployeeStatus",
    "ContractType",
    "ProbationType",
    "ProbationPeriod",
    "EmployeeHistoryType",
    "EmployeeHistoryRecord",
    "TimelineEntry",
    "ExperienceInterview",
    "Employee",
    "DocumentType",
    "DurationUnit",
    "AbsenceRecord",
    "TransportType",
    "TalentSort",
    "Education",
    "Experience",
    "TalentProfile",
    "TalentHistoryEntry",
    "SlaResult",
    "DateRange",
    "ReasonHistogram",
    "SectorRollup",
    "OpenedBreakdown",
    "ReportSnapshot",
    "ProbationDeadline",
    "NpsScore"
]
