"""
Error hierarchy for the portal.

Every error carries a code, a user-facing message and the HTTP status the
API layer answers with. The gamification core only raises ValidationError,
StoreError and CreationError; the rest belong to the CRUD and auth paths.
"""


class PortalError(Exception):
    """Base class - the global handler renders all of these."""

    code = "PORTAL_ERROR"
    http_status = 500

    def __init__(self, message: str = "Unexpected error"):
        super().__init__(message)
        self.message = message

    def to_response(self) -> dict:
        return {"error": {"code": self.code, "message": self.message}}


class ValidationError(PortalError):
    """Required input missing or out of range. Raised before any store access."""

    code = "VALIDATION_ERROR"
    http_status = 400


class StoreError(PortalError):
    """MongoDB operation failed."""

    code = "STORE_ERROR"
    http_status = 500


class CreationError(StoreError):
    """Insert failed (bad reference, duplicate key, driver error)."""

    code = "CREATION_FAILED"
    http_status = 400


class ConflictError(StoreError):
    """Write would duplicate a unique key (e.g. an email already in use)."""

    code = "CONFLICT"
    http_status = 400


class AuthError(PortalError):
    code = "UNAUTHORIZED"
    http_status = 401


class PermissionDeniedError(PortalError):
    code = "FORBIDDEN"
    http_status = 403
