"""Response schemas for API endpoints."""

from pydantic import BaseModel
from typing import Dict

from ats.models.report import ReportSnapshot


class ReportSnapshotResponse(BaseModel):
    """Report snapshot plus the size of each job bucket."""
    snapshot: ReportSnapshot
    counts: Dict[str, int]
    has_confidential_access: bool
