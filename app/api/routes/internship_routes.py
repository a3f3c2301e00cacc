"""
Internship Routes

GET /internships - List internships
GET /internships/{internship_id} - Get internship
POST /internships - Create internship (company only)
PUT /internships/{internship_id} - Update internship (company only)
DELETE /internships/{internship_id} - Delete internship (company only)
POST /internships/apply - Apply to an internship (awards points/badges)
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.core.auth import require_roles
from app.core.errors import ValidationError
from app.services.application_service import get_application_workflow
from app.services.mongo_service import InternshipStore
from app.schemas.schemas import (
    InternshipCreate, InternshipUpdate, InternshipResponse,
    InternshipApplyRequest, InternshipApplyResponse, ApplicationResponse, MessageResponse
)

router = APIRouter(prefix="/internships", tags=["Internships"])

company_or_admin = require_roles("Company", "Admin")


@router.get("", response_model=List[InternshipResponse])
def list_internships():
    return [InternshipResponse(**i) for i in InternshipStore().list()]


@router.get("/{internship_id}", response_model=InternshipResponse)
def get_internship(internship_id: str):
    internship = InternshipStore().get_by_id(internship_id)
    if not internship:
        raise HTTPException(status_code=404, detail="Internship not found")
    return InternshipResponse(**internship)


@router.post("", response_model=InternshipResponse, status_code=201)
def create_internship(data: InternshipCreate, company: dict = Depends(company_or_admin)):
    """Create a new internship. Title, company and description are required."""
    return InternshipResponse(**InternshipStore().create(data.model_dump()))


@router.put("/{internship_id}", response_model=InternshipResponse)
def update_internship(
    internship_id: str,
    data: InternshipUpdate,
    company: dict = Depends(company_or_admin)
):
    internship = InternshipStore().update(internship_id, data.model_dump(exclude_none=True))
    if not internship:
        raise HTTPException(status_code=404, detail="Internship not found")
    return InternshipResponse(**internship)


@router.delete("/{internship_id}", response_model=MessageResponse)
def delete_internship(internship_id: str, company: dict = Depends(company_or_admin)):
    if not InternshipStore().delete(internship_id):
        raise HTTPException(status_code=404, detail="Internship not found")
    return MessageResponse(message="Internship deleted successfully")


@router.post("/apply", response_model=InternshipApplyResponse, status_code=201)
def apply_to_internship(body: InternshipApplyRequest):
    """
    Apply for an internship.

    Each application awards 10 points; students earn the "Job Hunter"
    badge once they reach 50 points.
    """
    if not body.student_id or not body.internship_id:
        raise ValidationError("student ID and internship ID are required")

    if not InternshipStore().get_by_id(body.internship_id):
        raise HTTPException(status_code=404, detail="Internship not found")

    result = get_application_workflow().submit(body.student_id, body.internship_id)

    return InternshipApplyResponse(
        application=ApplicationResponse.from_record(result.application),
        points=result.points,
        badges=result.badges
    )
