"""
Models module - internal records passed between stores and services.

Difference from schemas:
- Models: what the workflow and stores exchange
- Schemas: API contract (what client sends/receives)
"""

from app.models.records import (
    ApplicationRecord,
    ApplicationStatus,
    AwardEvent,
    StudentRecord,
    SubmissionResult,
)

__all__ = [
    "ApplicationRecord",
    "ApplicationStatus",
    "AwardEvent",
    "StudentRecord",
    "SubmissionResult",
]
