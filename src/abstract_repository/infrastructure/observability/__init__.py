"""
Observability infrastructure for the repository layer.

This package provides structured logging via structlog.
"""

from abstract_repository.infrastructure.observability.logging import (
    configure_logging,
    get_logger,
)

__all__ = [
    "configure_logging",
    "get_logger",
]
