"""Database connection, base model and repositories."""
from .connection import DatabaseManager, db
from .base_model import BaseModel

__all__ = [
    "DatabaseManager",
    "db",
    "BaseModel",
]
