"""Request schemas for experience-tracking endpoints."""

from pydantic import BaseModel, Field
from typing import Optional
from datetime import date

from ats.models.employee import ProbationPeriod


class CreateExperienceInterviewRequest(BaseModel):
    """Request model for recording a probation interview."""
    period: ProbationPeriod
    interview_date: Optional[date] = None
    q_leader: int = Field(ge=1, le=4)
    q_colleagues: int = Field(ge=1, le=4)
    q_training: int = Field(ge=1, le=4)
    q_job_satisfaction: int = Field(ge=1, le=4)
    q_company_satisfaction: int = Field(ge=1, le=4)
    q_benefits: int = Field(ge=1, le=4)
    trainer_name: str = ""
    comments: str = ""
    interviewer_name: str = ""
