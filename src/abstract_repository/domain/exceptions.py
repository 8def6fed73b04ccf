"""
Exception hierarchy for the repository layer.

All exceptions inherit from AppError which provides:
- error_code: Machine-readable error code (from ErrorCode enum)
- message: Human-readable error message
- details: Optional dictionary with additional context

Repository operations raise only RepositoryError (or a subclass). The
subclass tells the caller what kind of failure happened; the message is
fixed per operation and the original failure is kept as ``__cause__``.

Usage:
    from abstract_repository.domain.exceptions import (
        RepositoryError,
        RecordNotFound,
    )

    try:
        product = await repo.get_by_id(42)
    except RecordNotFound:
        ...
    except RepositoryError as exc:
        logger.error("lookup failed", kind=exc.kind, code=exc.code)
"""

from enum import Enum
from typing import Any, Optional, Union

from abstract_repository.domain.error_codes import ErrorCode


class AppError(Exception):
    """
    Base exception for all errors raised by this package.

    Attributes:
        error_code: Machine-readable error code (from ErrorCode enum)
        message: Human-readable error message
        details: Optional dictionary with additional error context
    """

    error_code: ErrorCode = ErrorCode.INTERNAL_ERROR
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"error_code={self.error_code.value}, "
            f"message={self.message!r}, "
            f"details={self.details!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for serialization.

        Returns:
            Dictionary with error information
        """
        result = {
            "error_code": self.error_code.value,
            "message": self.message,
        }

        if self.details:
            result["details"] = self.details

        return result


# ========================================
# Repository Errors
# ========================================


class RepositoryErrorKind(str, Enum):
    """Category of a repository failure."""

    NOT_FOUND = "not_found"
    VALIDATION_FAILED = "validation_failed"
    BACKEND_UNAVAILABLE = "backend_unavailable"
    UNKNOWN = "unknown"


class RepositoryError(AppError):
    """
    Uniform failure raised by every repository operation.

    Attributes:
        kind: Failure category (RepositoryErrorKind)
        code: Code of the original failure (driver or SQLAlchemy code), if any
        operation: Name of the repository operation that failed
        cause: The original exception (same as ``__cause__``)
    """

    kind: RepositoryErrorKind = RepositoryErrorKind.UNKNOWN
    error_code = ErrorCode.DATABASE_ERROR
    default_message = "The repository operation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        code: Union[int, str, None] = None,
        operation: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.code = code
        self.operation = operation
        super().__init__(message, details)

    @property
    def cause(self) -> Optional[BaseException]:
        return self.__cause__

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"kind={self.kind.value}, "
            f"operation={self.operation!r}, "
            f"code={self.code!r}, "
            f"message={self.message!r})"
        )

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        result["kind"] = self.kind.value
        if self.operation is not None:
            result["operation"] = self.operation
        if self.code is not None:
            result["code"] = self.code
        return result


class RecordNotFound(RepositoryError):
    """No record matches the given identifier."""

    kind = RepositoryErrorKind.NOT_FOUND
    error_code = ErrorCode.NOT_FOUND
    default_message = "Record not found"


class ValidationFailed(RepositoryError):
    """Arguments or record data were rejected."""

    kind = RepositoryErrorKind.VALIDATION_FAILED
    error_code = ErrorCode.VALIDATION_ERROR
    default_message = "Record data failed validation"


class InvalidPageSize(ValidationFailed):
    error_code = ErrorCode.INVALID_PARAMETER
    default_message = "Page size must be greater than zero"


class UnknownField(ValidationFailed):
    error_code = ErrorCode.UNKNOWN_FIELD
    default_message = "Field is not a column of the model"


class UnknownRelation(ValidationFailed):
    error_code = ErrorCode.UNKNOWN_RELATION
    default_message = "Relation is not defined on the model"


class ConstraintViolation(ValidationFailed):
    """A database constraint (unique, not null, foreign key) rejected the write."""

    error_code = ErrorCode.CONFLICT
    default_message = "Database constraint violated"


class BackendUnavailable(RepositoryError):
    """The database could not be reached or dropped the connection."""

    kind = RepositoryErrorKind.BACKEND_UNAVAILABLE
    error_code = ErrorCode.DATABASE_UNAVAILABLE
    default_message = "Database is unavailable"
