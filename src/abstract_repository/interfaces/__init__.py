# src/abstract_repository/interfaces/__init__.py
from .repository import IRepository, RecordId

__all__ = [
    "IRepository",
    "RecordId",
]
