"""
Authentication Routes

POST /auth/register - Register a student or company account
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
"""

from fastapi import APIRouter, HTTPException, Depends

from app.core.auth import (
    ACCOUNT_STORES, hash_password, verify_password, token_for_account, get_current_user
)
from app.schemas.schemas import RegisterRequest, LoginRequest, AuthResponse, AccountInfo

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _store_for(account_type):
    # AccountType.student -> "student"
    return ACCOUNT_STORES[account_type.value.lower()]()


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(request: RegisterRequest):
    """
    Register a new account.

    type is "Student" or "Company" (case-insensitive). The response already
    carries an access token, so no separate login is needed.
    """
    store = _store_for(request.type)
    if store.get_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already registered")

    account = store.create({
        "name": request.name,
        "email": request.email,
        "password": hash_password(request.password)
    })
    account_type = request.type.value.lower()

    return AuthResponse(
        message=f"{request.type.value} registered successfully",
        user=AccountInfo(id=account["_id"], name=account["name"], role=account["role"]),
        access_token=token_for_account(account, account_type)
    )


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    account = _store_for(request.type).get_by_email(request.email)

    if not account or not verify_password(request.password, account.get("password", "")):
        raise HTTPException(status_code=400, detail="Invalid email or password")

    return AuthResponse(
        message="Login Successful",
        user=AccountInfo(id=account["_id"], name=account["name"], role=account["role"]),
        access_token=token_for_account(account, request.type.value.lower())
    )


@router.get("/me", response_model=AccountInfo)
def get_me(user: dict = Depends(get_current_user)):
    """Get current authenticated user's info."""
    return AccountInfo(id=user["id"], name=user["name"], role=user["role"])
