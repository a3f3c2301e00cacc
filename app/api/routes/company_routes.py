"""
Company Routes

POST /companies - Create company
GET /companies - List companies
GET /companies/{company_id} - Get company
PUT /companies/{company_id} - Update company
DELETE /companies/{company_id} - Delete company
"""

from fastapi import APIRouter, HTTPException
from typing import List

from app.core.auth import hash_password
from app.services.mongo_service import CompanyStore
from app.schemas.schemas import CompanyCreate, CompanyUpdate, CompanyResponse, MessageResponse

router = APIRouter(prefix="/companies", tags=["Companies"])


@router.post("", response_model=CompanyResponse, status_code=201)
def create_company(data: CompanyCreate):
    store = CompanyStore()
    if store.get_by_email(data.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    company = store.create({
        "name": data.name,
        "email": data.email,
        "password": hash_password(data.password),
        "industry": data.industry
    })
    return CompanyResponse(**company)


@router.get("", response_model=List[CompanyResponse])
def list_companies():
    return [CompanyResponse(**c) for c in CompanyStore().list()]


@router.get("/{company_id}", response_model=CompanyResponse)
def get_company(company_id: str):
    company = CompanyStore().get_by_id(company_id)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return CompanyResponse(**company)


@router.put("/{company_id}", response_model=CompanyResponse)
def update_company(company_id: str, data: CompanyUpdate):
    """Update company. Only provided fields are updated."""
    updates = data.model_dump(exclude_none=True)
    if "password" in updates:
        updates["password"] = hash_password(updates["password"])

    company = CompanyStore().update(company_id, updates)
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return CompanyResponse(**company)


@router.delete("/{company_id}", response_model=MessageResponse)
def delete_company(company_id: str):
    if not CompanyStore().delete(company_id):
        raise HTTPException(status_code=404, detail="Company not found")
    return MessageResponse(message="Company deleted successfully")
