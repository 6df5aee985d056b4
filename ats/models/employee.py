"""Pydantic models for employees, their history and probation interviews."""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional
from datetime import date, datetime
from enum import Enum

from ats.utils.date_utils import parse_datetime


def _strip_time(value):
    # Stored as full ISO timestamps by older clients
    if isinstance(value, str) and "T" in value:
        return value.split("T")[0]
    return value


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    ON_LEAVE = "on_leave"


class ContractType(str, Enum):
    CLT = "clt"
    PJ = "pj"
    INTERN = "intern"
    JA = "ja"


class ProbationType(str, Enum):
    """Split of the 90-day probation into two evaluation periods."""
    FORTY_FIVE_FORTY_FIVE = "45+45"
    THIRTY_SIXTY = "30+60"
    NONE = "none"


class ProbationPeriod(str, Enum):
    FIRST_PERIOD = "first_period"
    SECOND_PERIOD = "second_period"
    TERMINATION = "termination"


class EmployeeHistoryType(str, Enum):
    PROMOTION = "promotion"
    SECTOR_CHANGE = "sector_change"
    LEAVE = "leave"
    TERMINATION = "termination"
    OTHER = "other"


class EmployeeHistoryRecord(BaseModel):
    """A manual entry in an employee's career history.

    Attributes:
        id: Unique entry identifier.
        date: Day the event happened.
        type: Kind of event.
        description: What happened.
        created_by: Name of the user who recorded it.
    """
    id: str
    date: date
    type: EmployeeHistoryType = EmployeeHistoryType.OTHER
    description: str = ""
    created_by: Optional[str] = None

    @field_validator("date", mode="before")
    @classmethod
    def _date_part(cls, value):
        return _strip_time(value)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class TimelineEntry(BaseModel):
    """One line of an employee timeline: a history entry or an absence."""
    id: str
    date: date
    type: str
    description: str
    is_absence: bool = False


class ExperienceInterview(BaseModel):
    """A probation interview with 1-4 satisfaction scores.

    Attributes:
        id: Unique interview identifier.
        interview_date: When the interview took place.
        period: Probation period the interview closes.
        employee_role: Role of the employee at interview time.
        employee_sector: Sector of the employee at interview time.
        employee_unit: Unit of the employee at interview time.
        q_leader: Satisfaction with the direct leader.
        q_colleagues: Satisfaction with colleagues.
        q_training: Satisfaction with the training received.
        q_job_satisfaction: Satisfaction with the job itself.
        q_company_satisfaction: Satisfaction with the company.
        q_benefits: Satisfaction with benefits.
        trainer_name: Who trained the employee.
        comments: Open comments.
        interviewer_name: Who ran the interview.
    """
    id: str
    interview_date: date
    period: ProbationPeriod
    employee_role: Optional[str] = None
    employee_sector: Optional[str] = None
    employee_unit: Optional[str] = None
    q_leader: int = Field(ge=1, le=4)
    q_colleagues: int = Field(ge=1, le=4)
    q_training: int = Field(ge=1, le=4)
    q_job_satisfaction: int = Field(ge=1, le=4)
    q_company_satisfaction: int = Field(ge=1, le=4)
    q_benefits: int = Field(ge=1, le=4)
    trainer_name: str = ""
    comments: str = ""
    interviewer_name: str = ""

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class Employee(BaseModel):
    """Represents an employee tracked by HR.

    Attributes:
        id: Unique employee identifier.
        name: Full name.
        sector: Sector the employee works in.
        unit: Business unit.
        role: Job role.
        phone: Contact phone.
        birth_date: Date of birth.
        admission_date: First working day.
        status: Employment status.
        contract_type: Hiring regime.
        has_pending_info: Registration still missing data.
        daily_workload: Contracted hours per day.
        probation_type: Probation split, when under CLT.
        experience_interviews: Probation interviews already done.
        termination_reason: Why the employee left, once inactive.
        leave_reason: Why the employee is away, while on leave.
        leave_expected_return: Expected return day from leave.
        history: Manual career history, in insertion order.
        created_at: When the employee was registered.
        deleted_at: When the employee record was soft-deleted.
    """
    id: str
    name: str
    sector: str = ""
    unit: Optional[str] = None
    role: str = ""
    phone: str = ""
    birth_date: Optional[date] = None
    admission_date: date
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    contract_type: ContractType = ContractType.CLT
    has_pending_info: bool = False
    daily_workload: Optional[float] = None
    probation_type: ProbationType = ProbationType.NONE
    experience_interviews: List[ExperienceInterview] = []
    termination_reason: Optional[str] = None
    leave_reason: Optional[str] = None
    leave_expected_return: Optional[date] = None
    history: List[EmployeeHistoryRecord] = []
    created_at: Optional[datetime] = None
    deleted_at: Optional[str] = None

    @field_validator("admission_date", "birth_date", "leave_expected_return", mode="before")
    @classmethod
    def _date_part(cls, value):
        return _strip_time(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def _parse_created_at(cls, value):
        return parse_datetime(value)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
