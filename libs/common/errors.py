"""Domain errors raised by league workflows.

Workflows raise these instead of ``HTTPException`` so the same code paths
can run outside a request (tests, scripts). ``libs.common.error_handler``
maps them onto HTTP responses.
"""

from typing import Optional


class LeagueError(Exception):
    """Base class for all domain errors."""

    status_code = 500
    code = "LEAGUE_ERROR"

    def __init__(self, message: str, *, field: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.field = field


class ValidationFailed(LeagueError):
    """Malformed or missing fields in a request or roster row."""

    status_code = 400
    code = "VALIDATION_FAILED"


class PermissionDenied(LeagueError):
    """Actor failed the role gate, or the operation is disabled for the gym."""

    status_code = 403
    code = "PERMISSION_DENIED"


class NotFound(LeagueError):
    status_code = 404
    code = "NOT_FOUND"


class ConflictError(LeagueError):
    """Uniqueness or state conflict (email already claimed, request resolved)."""

    status_code = 409
    code = "CONFLICT"


class NotificationFailure(LeagueError):
    """A best-effort email send failed.

    Never propagated to callers; carried on ``NotificationResult`` for logging.
    """

    status_code = 502
    code = "NOTIFICATION_FAILED"
