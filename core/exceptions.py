"""
Custom exception classes and error handling.

Two families live here:
- APIException and subclasses: consistent HTTP error responses.
- PlannerError and subclasses: domain failures raised by the planner
  services and recovered at the orchestration boundary.
"""
from fastapi import HTTPException, status
from typing import Optional, Dict, Any


class APIException(HTTPException):
    """Base API exception with consistent structure."""

    def __init__(
        self,
        status_code: int,
        detail: str,
        error_code: Optional[str] = None,
        headers: Optional[Dict[str, Any]] = None
    ):
        super().__init__(status_code=status_code, detail=detail, headers=headers)
        self.error_code = error_code


class NotFoundError(APIException):
    """Resource not found."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"{resource} not found: {identifier}",
            error_code="NOT_FOUND"
        )


class ValidationError(APIException):
    """Validation error."""

    def __init__(self, detail: str, field: Optional[str] = None):
        error_code = f"VALIDATION_ERROR_{field.upper()}" if field else "VALIDATION_ERROR"
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
            error_code=error_code
        )


class ConflictError(APIException):
    """Request conflicts with the current session state."""

    def __init__(self, detail: str):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            error_code="CONFLICT"
        )


# ---------------------------------------------------------------------------
# Planner domain errors
# ---------------------------------------------------------------------------

class PlannerError(Exception):
    """Base class for planner domain failures."""


class PreconditionError(PlannerError):
    """A generation attempt was rejected before any request was built.

    The message is user-facing.
    """


class PlayerNotFoundError(PlannerError):
    """A player id (or custom skill id) does not exist on the roster."""

    def __init__(self, player_id: str, skill_id: Optional[str] = None):
        self.player_id = player_id
        self.skill_id = skill_id
        if skill_id is not None:
            super().__init__(f"Custom skill {skill_id} not found for player {player_id}")
        else:
            super().__init__(f"Player not found: {player_id}")


class GenerationInProgressError(PlannerError):
    """A generation was requested while another one is still outstanding."""


class PlanGenerationError(PlannerError):
    """Base class for failures at the generation client boundary."""


class ConfigurationError(PlanGenerationError):
    """The generation service cannot be reached because credentials are missing."""


class PlanServiceError(PlanGenerationError):
    """The generation service failed or returned data outside the plan schema."""
