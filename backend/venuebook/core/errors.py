"""
Domain error taxonomy.

Services raise these instead of HTTPException so the same rules hold for
any caller; the API layer maps them to responses in one place.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from venuebook.core.logging import get_logger

logger = get_logger(__name__)


class VenuebookError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST
    code: str = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(VenuebookError):
    """A required field is missing or malformed."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    code = "validation_error"

    def __init__(self, field: str, message: str = None):
        super().__init__(message or f"{field} is required")
        self.field = field


class NotFoundError(VenuebookError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "not_found"


class AuthorizationError(VenuebookError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "not_permitted"

    def __init__(self, message: str = "Not permitted"):
        super().__init__(message)


class ConflictError(VenuebookError):
    status_code = status.HTTP_409_CONFLICT
    code = "conflict"


class InvalidTransitionError(VenuebookError):
    """Booking status change not allowed from its current state."""

    status_code = status.HTTP_409_CONFLICT
    code = "invalid_transition"

    def __init__(self, booking_id: int, current: str, requested: str):
        super().__init__(
            f"Booking {booking_id} is already {current}; cannot change it to {requested}"
        )
        self.booking_id = booking_id
        self.current = current
        self.requested = requested


async def venuebook_error_handler(request: Request, exc: VenuebookError) -> JSONResponse:
    body = {"detail": exc.message, "code": exc.code}
    if isinstance(exc, ValidationError):
        body["field"] = exc.field

    logger.warning(
        "request_rejected",
        code=exc.code,
        status_code=exc.status_code,
        reason=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=body)
