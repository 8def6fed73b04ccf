"""Error codes, messages and exceptions."""

from abstract_repository.domain.error_codes import ErrorCode
from abstract_repository.domain.exceptions import (
    AppError,
    RepositoryErrorKind,
    RepositoryError,
    RecordNotFound,
    ValidationFailed,
    InvalidPageSize,
    UnknownField,
    UnknownRelation,
    ConstraintViolation,
    BackendUnavailable,
)

__all__ = [
    "ErrorCode",
    "AppError",
    "RepositoryErrorKind",
    "RepositoryError",
    "RecordNotFound",
    "ValidationFailed",
    "InvalidPageSize",
    "UnknownField",
    "UnknownRelation",
    "ConstraintViolation",
    "BackendUnavailable",
]
