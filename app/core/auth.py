"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies for protected routes

Tokens carry the account id (sub), its role and which collection it lives
in (account), so a request never has to trust caller-supplied identity
headers.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from app.core.config import get_settings
from app.core.errors import AuthError, PermissionDeniedError
from app.services.mongo_service import StudentStore, CompanyStore

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor (missing header handled below as 401)
bearer_scheme = HTTPBearer(auto_error=False)

ACCOUNT_STORES = {
    "student": StudentStore,
    "company": CompanyStore,
}


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    settings = get_settings()
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def token_for_account(account: dict, account_type: str) -> str:
    return create_access_token(data={
        "sub": account["_id"],
        "role": account.get("role"),
        "account": account_type
    })


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> dict:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @app.get("/protected")
        def route(user: dict = Depends(get_current_user)):
            return user
    """
    if credentials is None:
        raise AuthError("Unauthorized access")

    payload = decode_token(credentials.credentials)
    if not payload:
        raise AuthError("Invalid or expired token")

    user_id = payload.get("sub")
    store_cls = ACCOUNT_STORES.get(payload.get("account"))
    if not user_id or store_cls is None:
        raise AuthError("Invalid or expired token")

    # Verify account still exists (role may have changed since login)
    account = store_cls().get_by_id(user_id)
    if not account:
        raise AuthError("Account no longer exists")

    return {
        "id": account["_id"],
        "name": account.get("name"),
        "role": account.get("role"),
        "account": payload["account"]
    }


def require_roles(*roles: str):
    """Dependency factory - allow only the given roles (e.g. "Company", "Admin")."""

    async def dependency(user: dict = Depends(get_current_user)) -> dict:
        if user["role"] not in roles:
            raise PermissionDeniedError(f"Only {', '.join(roles)} accounts allowed")
        return user

    return dependency
