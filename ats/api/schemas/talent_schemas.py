"""Request schemas for talent pool endpoints."""

from pydantic import BaseModel
from typing import List, Optional

from ats.models.talent import Education, Experience, TransportType


class CreateTalentRequest(BaseModel):
    """Request model for adding a person to the talent pool."""
    name: str
    age: Optional[int] = None
    contact: str = ""
    city: str = ""
    target_role: str = ""
    tags: List[str] = []
    education: List[Education] = []
    experience: List[Experience] = []
    salary_expectation: Optional[str] = None
    transportation: TransportType = TransportType.OWN_MEANS


class UpdateTalentRequest(BaseModel):
    """Request model for editing a talent profile."""
    name: Optional[str] = None
    age: Optional[int] = None
    contact: Optional[str] = None
    city: Optional[str] = None
    target_role: Optional[str] = None
    tags: Optional[List[str]] = None
    education: Optional[List[Education]] = None
    experience: Optional[List[Experience]] = None
    salary_expectation: Optional[str] = None
    transportation: Optional[TransportType] = None
    needs_review: Optional[bool] = None


class AddObservationRequest(BaseModel):
    text: str


class LinkTalentRequest(BaseModel):
    job_id: str
