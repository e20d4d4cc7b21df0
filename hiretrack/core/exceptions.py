"""Custom exceptions for the application."""

from fastapi import HTTPException, status


class HireTrackError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ValidationError(HireTrackError):
    """Raised when required fields are missing or malformed."""

    def __init__(self, fields: list[str], message: str | None = None):
        self.fields = fields
        super().__init__(message or f"Missing or invalid fields: {', '.join(fields)}")


class NotFoundError(HireTrackError):
    """Raised when a record does not exist in the store."""

    def __init__(self, kind: str, record_id: str):
        self.kind = kind
        self.record_id = record_id
        super().__init__(f"{kind} {record_id} not found")


class InvalidTransitionError(HireTrackError):
    """Raised when strict transitions are enabled and a move is not allowed."""

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot move application from {current} to {requested}")


class CollaboratorError(HireTrackError):
    """Raised when a round trip to an external collaborator fails."""

    def __init__(self, collaborator: str, detail: str):
        self.collaborator = collaborator
        self.detail = detail
        super().__init__(f"{collaborator} error: {detail}")


class UploadError(HireTrackError):
    """Raised when an attachment is rejected or cannot be stored."""

    def __init__(self, slot: str, reason: str):
        self.slot = slot
        self.reason = reason
        super().__init__(f"Upload to {slot} failed: {reason}")


class AuthenticationError(HireTrackError):
    """Raised when authentication fails."""

    def __init__(self, detail: str = "Authentication failed"):
        self.detail = detail
        super().__init__(detail)


class PermissionDenied(HireTrackError):
    """Raised when the signed-in principal lacks the required role."""

    def __init__(self, detail: str = "Not enough permissions"):
        self.detail = detail
        super().__init__(detail)


def unauthorized_exception(detail: str = "Not authenticated") -> HTTPException:
    """Return a 401 Unauthorized exception."""
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def forbidden_exception(detail: str = "Not enough permissions") -> HTTPException:
    """Return a 403 Forbidden exception."""
    return HTTPException(
        status_code=status.HTTP_403_FORBIDDEN,
        detail=detail,
    )


def not_found_exception(detail: str = "Resource not found") -> HTTPException:
    """Return a 404 Not Found exception."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=detail,
    )


def validation_exception(error: ValidationError) -> HTTPException:
    """Return a 422 exception listing the offending fields."""
    return HTTPException(
        status_code=422,
        detail={"message": error.message, "fields": error.fields},
    )


def collaborator_exception(error: CollaboratorError) -> HTTPException:
    """Return a 502 exception for a failed collaborator round trip."""
    return HTTPException(
        status_code=status.HTTP_502_BAD_GATEWAY,
        detail=f"{error.collaborator} unavailable",
    )
