"""
Custom exceptions for the fitness insights package.

Missing inputs (no health snapshot, no recovery score) are not errors and
never raise. These exceptions cover the collaborators around the engine:
- Workout admission and lookup in the workout log
- Failures reported by a health data source
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Error codes for consistent error reporting."""

    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"

    # Workout errors
    WORKOUT_NOT_FOUND = "WORKOUT_NOT_FOUND"
    WORKOUT_VALIDATION_ERROR = "WORKOUT_VALIDATION_ERROR"

    # Health data errors
    HEALTH_DATA_UNAVAILABLE = "HEALTH_DATA_UNAVAILABLE"


class FitnessInsightsError(Exception):
    """
    Base exception for all fitness insights errors.

    Attributes:
        message: Human-readable error message
        code: Error code from ErrorCode enum
        details: Optional dictionary with additional error details
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for display or logging."""
        result: Dict[str, Any] = {
            "error": {
                "code": self.code.value,
                "message": self.message,
            }
        }
        if self.details:
            result["error"]["details"] = self.details
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


# ============================================================================
# Validation Errors
# ============================================================================

class ValidationError(FitnessInsightsError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        error_details = details or {}
        if field:
            error_details["field"] = field
        super().__init__(
            message=message,
            code=ErrorCode.VALIDATION_ERROR,
            details=error_details,
        )


class WorkoutValidationError(ValidationError):
    """Raised when workout data is rejected by the workout log."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message=message, field=field, details=details)
        self.code = ErrorCode.WORKOUT_VALIDATION_ERROR


# ============================================================================
# Not Found Errors
# ============================================================================

class NotFoundError(FitnessInsightsError):
    """Raised when a requested resource is not found."""

    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        message = f"{resource_type} with ID '{resource_id}' not found"
        error_details = details or {}
        error_details["resource_type"] = resource_type
        error_details["resource_id"] = resource_id
        super().__init__(
            message=message,
            code=ErrorCode.NOT_FOUND,
            details=error_details,
        )


class WorkoutNotFoundError(NotFoundError):
    """Raised when a workout is not found."""

    def __init__(self, workout_id: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(
            resource_type="Workout",
            resource_id=workout_id,
            details=details,
        )
        self.code = ErrorCode.WORKOUT_NOT_FOUND


# ============================================================================
# Health Data Errors
# ============================================================================

class HealthDataError(FitnessInsightsError):
    """Raised by a health data source that cannot deliver metrics."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCode.HEALTH_DATA_UNAVAILABLE,
            details=details,
        )
