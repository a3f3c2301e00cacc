"""
Application Submission Workflow

A student applies to a job or internship:
1. Validate both identifiers are present (no store access otherwise)
2. Persist the application (status "Applied", submitted now)
3. Load the student, award points/badge, save the student
4. Return the application with the student's resulting points/badges

Step 2 failing aborts everything. Step 3 is lenient: an unknown student or
a failed lookup still returns the application with 0 points / no badges,
and a failed save returns the student's last persisted standing.

The two writes are independent. In the default read-modify-write mode two
concurrent applications by the same student can lose an award; set
atomic_awards to let MongoDB apply the award in place instead.
"""

import logging
from typing import Optional

from app.core.config import get_settings
from app.core.errors import StoreError, ValidationError
from app.models.records import AwardEvent, SubmissionResult
from app.services.gamification_service import GamificationEngine, get_application_award
from app.services.mongo_service import ApplicationStore, StudentStore

logger = logging.getLogger(__name__)


class ApplicationSubmissionWorkflow:
    """
    Orchestrates application creation followed by the gamification update.

    Stores are injected so the workflow can run against any backing store
    exposing ApplicationStore.create and StudentStore.find_by_id/save.
    """

    def __init__(
        self,
        applications: ApplicationStore,
        students: StudentStore,
        engine: Optional[GamificationEngine] = None,
        award: Optional[AwardEvent] = None,
        atomic: bool = False
    ):
        self.applications = applications
        self.students = students
        self.engine = engine or GamificationEngine()
        self.award = award or get_application_award()
        self.atomic = atomic
        # Reject a bad award up front so it cannot fail after the insert
        self.engine.validate(self.award)

    def submit(self, student_id: Optional[str], job_id: Optional[str]) -> SubmissionResult:
        """Create the application and award the student. See module docstring."""
        if not student_id or not job_id:
            raise ValidationError("student ID and job ID are required")

        # CreationError propagates: no application, no points
        application = self.applications.create(student_id, job_id)
        logger.info(
            "Application %s created: student=%s job=%s",
            application.id, student_id, job_id
        )

        if self.atomic:
            return self._award_atomic(application, student_id)
        return self._award(application, student_id)

    def _award(self, application, student_id: str) -> SubmissionResult:
        try:
            student = self.students.find_by_id(student_id)
        except StoreError as e:
            logger.warning("Student lookup failed for %s, skipping award: %s", student_id, e)
            return SubmissionResult(application=application)

        if student is None:
            logger.warning("Student %s not found, application %s kept without award", student_id, application.id)
            return SubmissionResult(application=application)

        points, badges = self.engine.award(student.points, student.badges, self.award)
        updated = student.model_copy(update={"points": points, "badges": badges})

        try:
            self.students.save(updated)
        except StoreError as e:
            logger.warning("Saving award for student %s failed: %s", student_id, e)
            return SubmissionResult(application=application, points=student.points, badges=student.badges)

        if len(badges) > len(student.badges):
            logger.info("Student %s earned badge %r", student_id, self.award.badge_name)
        return SubmissionResult(application=application, points=points, badges=badges)

    def _award_atomic(self, application, student_id: str) -> SubmissionResult:
        try:
            student = self.students.apply_award(student_id, self.award)
        except StoreError as e:
            logger.warning("Atomic award failed for student %s: %s", student_id, e)
            return SubmissionResult(application=application)

        if student is None:
            logger.warning("Student %s not found, application %s kept without award", student_id, application.id)
            return SubmissionResult(application=application)
        return SubmissionResult(application=application, points=student.points, badges=student.badges)


def get_application_workflow() -> ApplicationSubmissionWorkflow:
    """Workflow wired to the MongoDB stores and configured award."""
    settings = get_settings()
    return ApplicationSubmissionWorkflow(
        applications=ApplicationStore(),
        students=StudentStore(),
        atomic=settings.atomic_awards
    )
