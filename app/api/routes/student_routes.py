"""
Student Routes

POST /students - Create student
GET /students - List all students
GET /students/{student_id} - Get student (with points and badges)
PUT /students/{student_id} - Update profile fields
DELETE /students/{student_id} - Delete student
"""

from fastapi import APIRouter, HTTPException
from typing import List

from app.core.auth import hash_password
from app.services.mongo_service import StudentStore
from app.schemas.schemas import StudentCreate, StudentUpdate, StudentResponse, MessageResponse

router = APIRouter(prefix="/students", tags=["Students"])


@router.post("", response_model=StudentResponse, status_code=201)
def create_student(data: StudentCreate):
    """Create a student. Points start at 0 with no badges."""
    store = StudentStore()
    if store.get_by_email(data.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    student = store.create({
        "name": data.name,
        "email": data.email,
        "password": hash_password(data.password)
    })
    return StudentResponse(**student)


@router.get("", response_model=List[StudentResponse])
def list_students():
    """Get all students."""
    return [StudentResponse(**s) for s in StudentStore().list()]


@router.get("/{student_id}", response_model=StudentResponse)
def get_student(student_id: str):
    """Get a student's details including gamification standing."""
    student = StudentStore().get_by_id(student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return StudentResponse(**student)


@router.put("/{student_id}", response_model=StudentResponse)
def update_student(student_id: str, data: StudentUpdate):
    """Update student profile. Only provided fields are updated."""
    updates = data.model_dump(exclude_none=True)
    if "password" in updates:
        updates["password"] = hash_password(updates["password"])

    student = StudentStore().update(student_id, updates)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return StudentResponse(**student)


@router.delete("/{student_id}", response_model=MessageResponse)
def delete_student(student_id: str):
    """Delete a student profile. Their applications are kept."""
    if not StudentStore().delete(student_id):
        raise HTTPException(status_code=404, detail="Student not found")
    return MessageResponse(message="Student deleted successfully")
