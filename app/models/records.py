"""
Internal records for the application-submission workflow.

These are what the stores hand to the gamification core - not API
schemas. Ids are the string form of the MongoDB ObjectId.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class ApplicationStatus(str, Enum):
    applied = "Applied"
    reviewed = "Reviewed"
    accepted = "Accepted"
    rejected = "Rejected"


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class StudentRecord(BaseModel):
    """Gamification view of a student document."""
    id: str
    points: int = Field(0, ge=0)
    badges: List[str] = []


class ApplicationRecord(BaseModel):
    id: str
    student_id: str
    job_id: str
    status: ApplicationStatus = ApplicationStatus.applied
    submission_date: datetime = Field(default_factory=utc_now)


class AwardEvent(BaseModel):
    """
    Points to add and the badge they may unlock.

    points is validated by the engine, not here, so a bad delta surfaces
    as the portal's ValidationError rather than pydantic's.
    """
    points: int
    badge_name: Optional[str] = None
    badge_threshold: int = 50


class SubmissionResult(BaseModel):
    """What the workflow returns: the new application plus the student's standing."""
    application: ApplicationRecord
    points: int = 0
    badges: List[str] = []
