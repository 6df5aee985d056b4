"""Request schemas for employee management endpoints."""

from pydantic import BaseModel
from typing import Optional
from datetime import date

from ats.models.employee import ContractType, EmployeeHistoryType, EmployeeStatus, ProbationType


class CreateEmployeeRequest(BaseModel):
    """Request model for admitting an employee."""
    name: str
    admission_date: date
    sector: str = ""
    unit: Optional[str] = None
    role: str = ""
    phone: str = ""
    birth_date: Optional[date] = None
    status: EmployeeStatus = EmployeeStatus.ACTIVE
    contract_type: ContractType = ContractType.CLT
    has_pending_info: bool = False
    daily_workload: Optional[float] = None
    probation_type: ProbationType = ProbationType.NONE


class UpdateEmployeeRequest(BaseModel):
    """Request model for editing an employee."""
    name: Optional[str] = None
    admission_date: Optional[date] = None
    sector: Optional[str] = None
    unit: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    birth_date: Optional[date] = None
    status: Optional[EmployeeStatus] = None
    contract_type: Optional[ContractType] = None
    has_pending_info: Optional[bool] = None
    daily_workload: Optional[float] = None
    probation_type: Optional[ProbationType] = None
    termination_reason: Optional[str] = None
    leave_reason: Optional[str] = None
    leave_expected_return: Optional[date] = None


class AddHistoryRecordRequest(BaseModel):
    """Request model for appending a career event to an employee."""
    type: EmployeeHistoryType
    description: str
    record_date: Optional[date] = None
