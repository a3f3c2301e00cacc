"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Responses expose the MongoDB id as "_id", like the documents they come from.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Optional, List
from datetime import datetime
from enum import Enum

from app.models.records import ApplicationRecord, ApplicationStatus


# ============================================================
# ENUMS
# ============================================================

class AccountType(str, Enum):
    student = "Student"
    company = "Company"


class StudentRole(str, Enum):
    student = "Student"
    admin = "Admin"


class CompanyRole(str, Enum):
    company = "Company"
    admin = "Admin"


class JobType(str, Enum):
    full_time = "Full-Time"
    internship = "Internship"


class PostingStatus(str, Enum):
    open = "Open"
    closed = "Closed"


class MongoModel(BaseModel):
    """Base for documents read back from MongoDB."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")


# ============================================================
# AUTH SCHEMAS
# ============================================================

class _AccountTypeMixin(BaseModel):
    type: AccountType

    @field_validator("type", mode="before")
    @classmethod
    def normalize_type(cls, value):
        # Clients send "student", " Student ", "COMPANY"...
        if isinstance(value, str):
            return value.strip().capitalize()
        return value


class RegisterRequest(_AccountTypeMixin):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class LoginRequest(_AccountTypeMixin):
    email: EmailStr
    password: str


class AccountInfo(BaseModel):
    id: str
    name: str
    role: str


class AuthResponse(BaseModel):
    message: str
    user: AccountInfo
    access_token: str
    token_type: str = "bearer"


# ============================================================
# STUDENT SCHEMAS
# ============================================================

class StudentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)


class StudentUpdate(BaseModel):
    """Profile fields only - points and badges change through applications."""
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1)


class StudentResponse(MongoModel):
    name: str
    email: str
    role: str = StudentRole.student.value
    points: int = 0
    badges: List[str] = []


# ============================================================
# COMPANY SCHEMAS
# ============================================================

class CompanyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: EmailStr
    password: str = Field(..., min_length=1)
    industry: Optional[str] = None


class CompanyUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=1)
    industry: Optional[str] = None


class CompanyResponse(MongoModel):
    name: str
    email: str
    role: str = CompanyRole.company.value
    industry: Optional[str] = None


# ============================================================
# JOB SCHEMAS
# ============================================================

class JobCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    type: JobType
    salary: str
    application_deadline: Optional[datetime] = None
    status: PostingStatus = PostingStatus.open
    # Defaults to the posting company's name
    company_name: Optional[str] = None


class JobUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[JobType] = None
    salary: Optional[str] = None
    status: Optional[PostingStatus] = None


class JobResponse(MongoModel):
    title: str
    description: str
    company_name: str
    company_id: str
    category: str
    type: str
    salary: str
    application_deadline: Optional[datetime] = None
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


# ============================================================
# INTERNSHIP SCHEMAS
# ============================================================

class InternshipCreate(BaseModel):
    title: str = Field(..., min_length=1)
    company: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: Optional[str] = None
    type: str = "Internship"
    salary: Optional[str] = None
    application_deadline: Optional[datetime] = None


class InternshipUpdate(BaseModel):
    title: Optional[str] = None
    company: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    type: Optional[str] = None
    salary: Optional[str] = None
    application_deadline: Optional[datetime] = None
    status: Optional[PostingStatus] = None


class InternshipResponse(MongoModel):
    title: str
    company: str
    description: str
    category: Optional[str] = None
    type: str = "Internship"
    salary: Optional[str] = None
    application_deadline: Optional[datetime] = None
    status: str = PostingStatus.open.value


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

class ApplicationCreate(BaseModel):
    # Optional here so a missing id is reported by the workflow (400),
    # not by request validation
    student_id: Optional[str] = None
    job_id: Optional[str] = None


class InternshipApplyRequest(BaseModel):
    student_id: Optional[str] = None
    internship_id: Optional[str] = None


class ApplicationUpdate(BaseModel):
    status: Optional[ApplicationStatus] = None
    submission_date: Optional[datetime] = None


class ApplicationResponse(MongoModel):
    student_id: str
    job_id: str
    status: str
    submission_date: datetime

    @classmethod
    def from_record(cls, record: ApplicationRecord) -> "ApplicationResponse":
        return cls(
            id=record.id,
            student_id=record.student_id,
            job_id=record.job_id,
            status=ApplicationStatus(record.status).value,
            submission_date=record.submission_date
        )


class SubmissionResponse(BaseModel):
    application: ApplicationResponse
    points: int
    badges: List[str]


class InternshipApplyResponse(SubmissionResponse):
    message: str = "Internship application successful"


class StudentSummary(MongoModel):
    name: Optional[str] = None
    email: Optional[str] = None
    points: int = 0
    badges: List[str] = []


class PositionSummary(MongoModel):
    title: str
    company_name: Optional[str] = None
    description: Optional[str] = None
    type: Optional[str] = None
    category: Optional[str] = None
    salary: Optional[str] = None
    status: Optional[str] = None


class ApplicationDetailResponse(MongoModel):
    """Application with its student and position resolved (None if deleted)."""
    student: Optional[StudentSummary] = None
    job: Optional[PositionSummary] = None
    status: str
    submission_date: datetime


class StudentApplicationsResponse(BaseModel):
    applications: List[ApplicationDetailResponse]


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True
