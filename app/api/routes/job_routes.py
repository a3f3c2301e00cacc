"""
Job Routes

POST /jobs - Create job posting (company only)
GET /jobs - List all jobs
GET /jobs/my-jobs - Jobs posted by the current company (admin: all)
GET /jobs/{job_id} - Get job details
PUT /jobs/{job_id} - Update job (owning company or admin)
DELETE /jobs/{job_id} - Delete job (owning company or admin)
"""

from fastapi import APIRouter, HTTPException, Depends
from typing import List

from app.core.auth import require_roles
from app.services.mongo_service import JobStore
from app.schemas.schemas import JobCreate, JobUpdate, JobResponse, MessageResponse

router = APIRouter(prefix="/jobs", tags=["Jobs"])

company_or_admin = require_roles("Company", "Admin")


def _owned_job(store: JobStore, job_id: str, user: dict) -> dict:
    """Fetch a job the current user may modify."""
    job = store.get_by_id(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if user["role"] == "Company" and job["company_id"] != user["id"]:
        raise HTTPException(status_code=403, detail="Unauthorized to edit this job")
    return job


@router.post("", response_model=JobResponse, status_code=201)
def create_job(job: JobCreate, company: dict = Depends(company_or_admin)):
    """Create a new job posting. The posting company is the caller."""
    data = job.model_dump()
    data["company_id"] = company["id"]
    data["company_name"] = job.company_name or company["name"]
    return JobResponse(**JobStore().create(data))


@router.get("", response_model=List[JobResponse])
def list_jobs():
    """List all job postings."""
    return [JobResponse(**j) for j in JobStore().list()]


@router.get("/my-jobs", response_model=List[JobResponse])
def my_jobs(user: dict = Depends(company_or_admin)):
    """Jobs posted by the calling company. Admins see every job."""
    store = JobStore()
    jobs = store.list() if user["role"] == "Admin" else store.list_by_company(user["id"])
    return [JobResponse(**j) for j in jobs]


@router.get("/{job_id}", response_model=JobResponse)
def get_job(job_id: str):
    job = JobStore().get_by_id(job_id)
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse(**job)


@router.put("/{job_id}", response_model=JobResponse)
def update_job(job_id: str, update: JobUpdate, user: dict = Depends(company_or_admin)):
    """Update a job posting. Only title, description, category, type, salary and status."""
    store = JobStore()
    _owned_job(store, job_id, user)

    job = store.update(job_id, update.model_dump(exclude_none=True))
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return JobResponse(**job)


@router.delete("/{job_id}", response_model=MessageResponse)
def delete_job(job_id: str, user: dict = Depends(company_or_admin)):
    """Delete a job posting. Existing applications keep their reference."""
    store = JobStore()
    _owned_job(store, job_id, user)

    if not store.delete(job_id):
        raise HTTPException(status_code=404, detail="Job not found")
    return MessageResponse(message="Job deleted successfully")
