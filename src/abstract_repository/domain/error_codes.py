"""Machine-readable error codes."""

from enum import Enum


class ErrorCode(str, Enum):
    """
    Standard error codes attached to every AppError.

    Codes describe the category of failure, not the operation that failed.
    Repository errors additionally carry the original backend code.
    """

    # ===== Validation Errors =====
    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Input or record data failed validation"""

    INVALID_PARAMETER = "INVALID_PARAMETER"
    """Invalid argument such as a non-positive page size"""

    UNKNOWN_FIELD = "UNKNOWN_FIELD"
    """Field name is not a column of the bound model"""

    UNKNOWN_RELATION = "UNKNOWN_RELATION"
    """Relation name is not a relationship of the bound model"""

    # ===== Not Found Errors =====
    NOT_FOUND = "NOT_FOUND"
    """Record not found"""

    # ===== Conflict Errors =====
    CONFLICT = "CONFLICT"
    """Constraint violation such as a duplicate key"""

    # ===== Server Errors =====
    INTERNAL_ERROR = "INTERNAL_ERROR"
    """Unclassified failure"""

    DATABASE_ERROR = "DATABASE_ERROR"
    """Database operation failed"""

    # ===== Service Unavailable =====
    DATABASE_UNAVAILABLE = "DATABASE_UNAVAILABLE"
    """Database unreachable or connection lost"""
