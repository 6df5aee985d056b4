"""Request and response schemas for job endpoints."""

from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from ats.models.job import JobStatus, OpeningDetails


class CreateJobRequest(BaseModel):
    """Request model for opening a new job."""
    title: str
    sector: str
    unit: str
    opened_at: Optional[datetime] = None
    description: Optional[str] = None
    is_confidential: bool = False
    allowed_user_ids: List[str] = []
    opening_details: Optional[OpeningDetails] = None


class UpdateJobRequest(BaseModel):
    """Request model for updating a job."""
    title: Optional[str] = None
    sector: Optional[str] = None
    unit: Optional[str] = None
    status: Optional[JobStatus] = None
    description: Optional[str] = None
    is_confidential: Optional[bool] = None
    allowed_user_ids: Optional[List[str]] = None
    opening_details: Optional[OpeningDetails] = None
    closed_at: Optional[datetime] = None


class FreezeJobRequest(BaseModel):
    """Request model for putting a job on hold."""
    reason: str
    requester: str
    frozen_at: Optional[datetime] = None


class UnfreezeJobRequest(BaseModel):
    """Request model for resuming a frozen job."""
    unfrozen_at: Optional[datetime] = None


class CancelJobRequest(BaseModel):
    """Request model for canceling a job."""
    reason: str
    requester: str
    canceled_at: Optional[datetime] = None


class CloseJobRequest(BaseModel):
    """Request model for closing a job."""
    hired_candidate_id: Optional[str] = None
    closed_at: Optional[datetime] = None
