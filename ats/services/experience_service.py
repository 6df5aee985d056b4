"""Probation deadlines and eNPS analytics for employees."""

import uuid
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from ats.constants import (
    PROBATION_FIRST_PERIOD_DAYS,
    PROBATION_TOTAL_DAYS,
    PROBATION_WARNING_DAYS
)
from ats.models import (
    ContractType,
    Employee,
    EmployeeStatus,
    ExperienceInterview,
    NpsScore,
    ProbationDeadline,
    ProbationPeriod,
    ProbationType
)
from ats.repositories.employee_repository import EmployeeRepository

# Interview questions scored 1-4, keyed by the name used in the analytics output
NPS_QUESTIONS = {
    "leader": "q_leader",
    "colleagues": "q_colleagues",
    "training": "q_training",
    "job": "q_job_satisfaction",
    "company": "q_company_satisfaction",
    "benefits": "q_benefits",
}


def _urgency(days_left: int) -> str:
    if days_left < 0:
        return "danger"
    if days_left <= PROBATION_WARNING_DAYS:
        return "warning"
    return "ok"


def probation_deadlines(employees: Iterable[Employee], today: Optional[date] = None) -> List[ProbationDeadline]:
    """Active CLT employees still inside their 90-day probation, most urgent first.

    Args:
        employees: Employees to evaluate.
        today: Reference day. Defaults to today.

    Returns:
        One ProbationDeadline per employee still in probation.
    """
    today = today or date.today()
    deadlines = []

    for employee in employees:
        if employee.deleted_at or employee.status != EmployeeStatus.ACTIVE:
            continue
        if employee.contract_type != ContractType.CLT or employee.probation_type == ProbationType.NONE:
            continue

        first_days = PROBATION_FIRST_PERIOD_DAYS[ProbationType(employee.probation_type).value]
        end_first = employee.admission_date + timedelta(days=first_days)
        end_second = employee.admission_date + timedelta(days=PROBATION_TOTAL_DAYS)

        days_to_first = (end_first - today).days
        days_to_second = (end_second - today).days

        if days_to_first >= 0:
            period, days_left = ProbationPeriod.FIRST_PERIOD, days_to_first
        elif days_to_second >= 0:
            period, days_left = ProbationPeriod.SECOND_PERIOD, days_to_second
        else:
            # Past the 90 days: effective, nothing left to track
            continue

        already_interviewed = any(
            interview.period == period for interview in employee.experience_interviews
        )

        deadlines.append(ProbationDeadline(
            employee_id=employee.id,
            employee_name=employee.name,
            sector=employee.sector,
            current_period=period.value,
            days_left=days_left,
            urgency=_urgency(days_left),
            end_first_period=end_first,
            end_second_period=end_second,
            already_interviewed=already_interviewed
        ))

    return sorted(deadlines, key=lambda deadline: deadline.days_left)


def nps_score(scores: List[int]) -> NpsScore:
    """eNPS on a 1-4 scale: 4 promotes, 3 is passive, 1-2 detract."""
    if not scores:
        return NpsScore()

    total = len(scores)
    promoters = sum(1 for score in scores if score == 4)
    passives = sum(1 for score in scores if score == 3)
    detractors = sum(1 for score in scores if score <= 2)

    return NpsScore(
        promoters=promoters,
        passives=passives,
        detractors=detractors,
        score=round(promoters / total * 100 - detractors / total * 100),
        total=total
    )


def enps_analytics(employees: Iterable[Employee]) -> Dict[str, object]:
    """eNPS per interview question over every recorded probation interview."""
    interviews = [
        interview
        for employee in employees
        if not employee.deleted_at
        for interview in employee.experience_interviews
    ]

    analytics: Dict[str, object] = {"total": len(interviews)}
    for name, field in NPS_QUESTIONS.items():
        analytics[name] = nps_score([getattr(interview, field) for interview in interviews])
    return analytics


class ExperienceService:
    """Records probation interviews and serves the experience dashboards.

    Attributes:
        employee_repository: Repository for employee data access.
    """

    def __init__(self, employee_repository: EmployeeRepository):
        self.employee_repository = employee_repository

    def get_probation_deadlines(self, today: Optional[date] = None) -> List[ProbationDeadline]:
        return probation_deadlines(self.employee_repository.get_all(), today)

    def get_enps(self) -> Dict[str, object]:
        return enps_analytics(self.employee_repository.get_all())

    def record_interview(self, employee_id: str, interview_data: Dict[str, object]) -> ExperienceInterview:
        """Append a probation interview to an employee, snapshotting their position.

        Raises:
            ValueError: If the employee is not found.
        """
        employee = self.employee_repository.get_by_id(employee_id)
        if not employee:
            raise ValueError(f"Employee with ID {employee_id} not found")

        interview = ExperienceInterview(**{
            "interview_date": date.today(),
            **interview_data,
            "id": str(uuid.uuid4()),
            "employee_role": employee.role,
            "employee_sector": employee.sector,
            "employee_unit": employee.unit,
        })

        employee.experience_interviews.append(interview)
        self.employee_repository.save(employee)
        return interview
