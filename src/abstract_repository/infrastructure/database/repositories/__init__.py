"""Database repository implementations."""
from .base import (
    BaseRepository,
    PaginatedResult,
    repository_operation,
    classify_error,
    extract_error_code,
)

__all__ = [
    "BaseRepository",
    "PaginatedResult",
    "repository_operation",
    "classify_error",
    "extract_error_code",
]
