"""Pydantic models for application users."""

from pydantic import BaseModel
from typing import Optional
from enum import Enum


class UserRole(str, Enum):
    """Role of an application user."""
    MASTER = "master"
    RECRUITER = "recruiter"
    HR_ASSISTANT = "hr_assistant"


class User(BaseModel):
    """Represents an application user.

    Attributes:
        id: Unique user identifier.
        username: Login name.
        name: Display name.
        role: Access role. Master bypasses confidentiality checks.
        created_by: ID of the user who registered this one.
    """
    id: str
    username: str = ""
    name: str = ""
    role: UserRole = UserRole.RECRUITER
    created_by: Optional[str] = None

    @property
    def is_master(self) -> bool:
        return self.role == UserRole.MASTER

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
