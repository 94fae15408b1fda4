"""Custom exception classes"""
import enum
from typing import Any, Optional


class AppException(Exception):
    """Base exception for application errors"""

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_type: str = "AppError",
        details: Optional[Any] = None
    ):
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.details = details
        super().__init__(self.message)


class ValidationError(AppException):
    """Validation error exception"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=400,
            error_type="ValidationError",
            details=details
        )


class SplitField(str, enum.Enum):
    """Input field a split validation error belongs to"""
    AMOUNT = "amount"
    PARTICIPANTS = "participants"


class SplitValidationError(ValidationError):
    """Bill split input rejected, attributable to a single form field"""

    def __init__(self, message: str, field: SplitField):
        self.field = field
        super().__init__(message=message, details={"field": field.value})
        self.error_type = "SplitValidationError"


class InvalidStatusTransitionError(ValidationError):
    """Payment status change that is not allowed"""

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message=message, details=details)
        self.error_type = "InvalidStatusTransitionError"


class SplitError(AppException):
    """Partitioner called with arguments it cannot split"""

    def __init__(self, message: str, error_type: str = "SplitError"):
        super().__init__(
            message=message,
            status_code=400,
            error_type=error_type
        )


class InvalidCountError(SplitError):
    """Split requested for zero or negative participant count"""

    def __init__(self, message: str = "Count must be greater than 0"):
        super().__init__(message=message, error_type="InvalidCountError")


class InvalidTotalError(SplitError):
    """Split requested for a negative or non-integer total"""

    def __init__(self, message: str = "Total must be non-negative"):
        super().__init__(message=message, error_type="InvalidTotalError")


class NotFoundError(AppException):
    """Resource not found exception"""

    def __init__(self, message: str = "Resource not found", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=404,
            error_type="NotFoundError",
            details=details
        )


class DatabaseError(AppException):
    """Database operation error exception"""

    def __init__(self, message: str = "Database error occurred", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=500,
            error_type="DatabaseError",
            details=details
        )


class ConflictError(AppException):
    """Resource conflict exception (e.g., duplicate entry)"""

    def __init__(self, message: str = "Resource already exists", details: Optional[Any] = None):
        super().__init__(
            message=message,
            status_code=409,
            error_type="ConflictError",
            details=details
        )
