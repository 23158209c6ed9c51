"""
Application errors.

Services raise these instead of HTTPException; the handlers registered in
app.main render each one as ``{"message": ...}`` with its status code.

    from app.core.exceptions import NotFoundError

    if not thesis:
        raise NotFoundError("Thesis not found")
"""
from typing import Optional


class ThesisAppError(Exception):
    """Base class for every error the API reports to clients"""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ThesisAppError):
    """Missing or malformed input"""

    status_code = 400
    default_message = "Invalid request data"


class AuthenticationError(ThesisAppError):
    """Missing, invalid or expired token"""

    status_code = 401
    default_message = "Unauthorized"


class InvalidCredentialsError(AuthenticationError):
    """Login failed. Never says which part was wrong"""

    default_message = "Invalid email or password"


class AuthorizationError(ThesisAppError):
    """Authenticated, but the role does not allow this action"""

    status_code = 403
    default_message = "Access denied"


class NotFoundError(ThesisAppError):
    """Entity missing or not owned by the caller"""

    status_code = 404
    default_message = "Not found"


class ConflictError(ThesisAppError):
    """Entity is not in a state that allows the transition"""

    status_code = 409
    default_message = "Conflict"


class InternalError(ThesisAppError):
    """Storage or filesystem failure"""

    status_code = 500
