# src/abstract_repository/interfaces/repository.py
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TypeVar, Generic, Sequence, Mapping, Any, Union

if TYPE_CHECKING:
    from abstract_repository.infrastructure.database.repositories.base import PaginatedResult

T = TypeVar("T")

RecordId = Union[int, str]


class IRepository(ABC, Generic[T]):
    """
    Generic repository interface for data access over one entity type.

    Every operation raises RepositoryError (or a subclass) on failure.

    Example:
        class ProductRepository(IRepository[Product]):
            async def get_by_id(self, id: RecordId) -> Product:
                ...
    """

    @abstractmethod
    async def get_all(self, page_size: int, page: int = 1) -> PaginatedResult:
        """Get one page of all records."""
        pass

    @abstractmethod
    async def get_by_id(self, id: RecordId) -> T:
        """Get record by primary key, raising RecordNotFound if absent."""
        pass

    @abstractmethod
    async def create(self, data: Mapping[str, Any]) -> T:
        """Create a record from field values."""
        pass

    @abstractmethod
    async def update(self, id: RecordId, data: Mapping[str, Any]) -> bool:
        """Update record by primary key."""
        pass

    @abstractmethod
    async def delete(self, id: RecordId) -> bool:
        """Delete record by primary key."""
        pass

    @abstractmethod
    async def find_by(
        self,
        criteria: Mapping[str, Any],
        columns: Sequence[str] | None = None,
    ) -> Sequence[T]:
        """Get all records whose fields equal the criteria."""
        pass

    @abstractmethod
    async def update_or_create(
        self,
        attributes: Mapping[str, Any],
        values: Mapping[str, Any] | None = None,
    ) -> T:
        """Update the record matching attributes, or create it."""
        pass

    @abstractmethod
    async def with_relations(
        self,
        page_size: int,
        relations: Union[str, Sequence[str]],
        page: int = 1,
    ) -> PaginatedResult:
        """Get one page of records with the named relations loaded."""
        pass

    @abstractmethod
    async def search(
        self,
        page_size: int,
        keyword: str,
        columns: Sequence[str] | None = None,
        page: int = 1,
    ) -> PaginatedResult:
        """Get one page of records matching keyword."""
        pass
