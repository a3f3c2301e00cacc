"""
Application Routes

POST /applications - Apply to a job (awards points/badges)
GET /applications - List applications with student and job details
GET /applications/student?student_id= - Applications of one student
GET /applications/{application_id} - Get application
PUT /applications/{application_id} - Update status / submission date
DELETE /applications/{application_id} - Delete application
"""

from fastapi import APIRouter, HTTPException, Query
from typing import List, Optional

from app.services.application_service import get_application_workflow
from app.services.mongo_service import (
    ApplicationStore, StudentStore, JobStore, InternshipStore
)
from app.schemas.schemas import (
    ApplicationCreate, ApplicationUpdate, ApplicationResponse, SubmissionResponse,
    ApplicationDetailResponse, StudentApplicationsResponse, StudentSummary,
    PositionSummary, MessageResponse
)

router = APIRouter(prefix="/applications", tags=["Applications"])


class _Resolver:
    """Resolves the student and position an application points to."""

    def __init__(self):
        self.students = StudentStore()
        self.jobs = JobStore()
        self.internships = InternshipStore()

    def position(self, position_id: str) -> Optional[PositionSummary]:
        # job_id may reference a job or an internship
        doc = self.jobs.get_by_id(position_id) or self.internships.get_by_id(position_id)
        if not doc:
            return None
        doc.setdefault("company_name", doc.get("company"))
        return PositionSummary(**doc)

    def student(self, student_id: str) -> Optional[StudentSummary]:
        doc = self.students.get_by_id(student_id)
        return StudentSummary(**doc) if doc else None

    def detail(self, application: dict) -> ApplicationDetailResponse:
        return ApplicationDetailResponse(
            id=application["_id"],
            student=self.student(application["student_id"]),
            job=self.position(application["job_id"]),
            status=application["status"],
            submission_date=application["submission_date"]
        )


@router.post("", response_model=SubmissionResponse, status_code=201)
def create_application(body: ApplicationCreate):
    """
    Create a new application for a student to a job.

    Awards the student 10 points and the "Job Hunter" badge at 50 points.
    An unknown student does not block the application; the response then
    reports 0 points and no badges.
    """
    result = get_application_workflow().submit(body.student_id, body.job_id)
    return SubmissionResponse(
        application=ApplicationResponse.from_record(result.application),
        points=result.points,
        badges=result.badges
    )


@router.get("", response_model=List[ApplicationDetailResponse])
def list_applications():
    """All applications with student info (points, badges) and job title."""
    resolver = _Resolver()
    return [resolver.detail(a) for a in ApplicationStore().list()]


@router.get("/student", response_model=StudentApplicationsResponse)
def student_applications(student_id: Optional[str] = Query(None)):
    """Student dashboard - every application of one student with position details."""
    if not student_id:
        raise HTTPException(status_code=400, detail="student_id is required")

    resolver = _Resolver()
    applications = ApplicationStore().list_by_student(student_id)
    return StudentApplicationsResponse(applications=[resolver.detail(a) for a in applications])


@router.get("/{application_id}", response_model=ApplicationDetailResponse)
def get_application(application_id: str):
    application = ApplicationStore().get_by_id(application_id)
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return _Resolver().detail(application)


@router.put("/{application_id}", response_model=ApplicationResponse)
def update_application(application_id: str, update: ApplicationUpdate):
    """Update the status or submission date of an application."""
    application = ApplicationStore().update(application_id, update.model_dump(exclude_none=True))
    if not application:
        raise HTTPException(status_code=404, detail="Application not found")
    return ApplicationResponse(**application)


@router.delete("/{application_id}", response_model=MessageResponse)
def delete_application(application_id: str):
    if not ApplicationStore().delete(application_id):
        raise HTTPException(status_code=404, detail="Application not found")
    return MessageResponse(message="Application deleted successfully")
