"""
Generic async repository over SQLModel/SQLAlchemy table models.

Usage:
    from abstract_repository import BaseRepository, DatabaseManager

    db = DatabaseManager()
    await db.connect("sqlite+aiosqlite:///app.db")
    async with db.session() as session:
        products = BaseRepository(Product, session)
        page = await products.search(10, "widget")
"""

from abstract_repository.domain.exceptions import (
    AppError,
    RepositoryErrorKind,
    RepositoryError,
    RecordNotFound,
    ValidationFailed,
    BackendUnavailable,
)
from abstract_repository.infrastructure.database.connection import DatabaseManager
from abstract_repository.infrastructure.database.repositories.base import (
    BaseRepository,
    PaginatedResult,
)
from abstract_repository.interfaces import IRepository, RecordId

__all__ = [
    "AppError",
    "RepositoryErrorKind",
    "RepositoryError",
    "RecordNotFound",
    "ValidationFailed",
    "BackendUnavailable",
    "DatabaseManager",
    "BaseRepository",
    "PaginatedResult",
    "IRepository",
    "RecordId",
]
