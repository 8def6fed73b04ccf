# src/abstract_repository/infrastructure/database/repositories/base.py
from typing import TypeVar, Generic, Sequence, Mapping, Any, Iterable, Optional, NamedTuple, Union
from functools import wraps

from sqlalchemy import select, Select, func, inspect, or_
from sqlalchemy import exc as sa_exc
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import load_only, selectinload
from sqlmodel import SQLModel

from abstract_repository.config.settings import get_settings
from abstract_repository.domain.error_messages import get_operation_message
from abstract_repository.domain.exceptions import (
    RepositoryError,
    RecordNotFound,
    ValidationFailed,
    InvalidPageSize,
    UnknownField,
    UnknownRelation,
    ConstraintViolation,
    BackendUnavailable,
)
from abstract_repository.infrastructure.observability.logging import get_logger
from abstract_repository.interfaces import IRepository, RecordId

T = TypeVar("T", bound=SQLModel)

logger = get_logger(__name__)

ALL_COLUMNS = "*"


class PaginatedResult(NamedTuple):
    """Result of a paginated query."""
    items: Sequence[Any]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool


def classify_error(exc: BaseException) -> type[RepositoryError]:
    """
    Map a failure raised by the persistence layer to a RepositoryError class.

    Order matters: IntegrityError, OperationalError, InterfaceError and
    DataError are all DBAPIError subclasses, which are StatementError
    subclasses.
    """
    if isinstance(exc, RepositoryError):
        return type(exc)
    if isinstance(exc, sa_exc.NoResultFound):
        return RecordNotFound
    if isinstance(exc, sa_exc.IntegrityError):
        return ConstraintViolation
    if isinstance(
        exc,
        (sa_exc.OperationalError, sa_exc.InterfaceError, sa_exc.DisconnectionError, sa_exc.TimeoutError),
    ):
        return BackendUnavailable
    if isinstance(exc, sa_exc.DataError):
        return ValidationFailed
    if isinstance(exc, sa_exc.DBAPIError):
        return RepositoryError
    # pydantic's ValidationError is a ValueError
    if isinstance(exc, (sa_exc.StatementError, sa_exc.ArgumentError, TypeError, ValueError)):
        return ValidationFailed
    return RepositoryError


def extract_error_code(exc: BaseException) -> Union[int, str, None]:
    """
    Get the code of the original failure.

    Driver codes (SQLite extended result code, PostgreSQL SQLSTATE, MySQL
    errno) take precedence over SQLAlchemy's own error code.
    """
    if isinstance(exc, RepositoryError):
        return exc.code

    orig = getattr(exc, "orig", None)
    if orig is not None:
        for attr in ("sqlite_errorcode", "pgcode", "errno"):
            value = getattr(orig, attr, None)
            if value is not None:
                return value
        args = getattr(orig, "args", ())
        if args and isinstance(args[0], int):
            return args[0]

    return getattr(exc, "code", None)


def repository_operation(operation: str):
    """
    Decorator that wraps every failure of a repository method in a RepositoryError.

    The raised error carries the operation's fixed message, the original
    failure's code, and the original exception as ``__cause__``. A
    RepositoryError raised by a nested operation (e.g. get_by_id inside
    update) keeps its kind and code but takes this operation's message.

    Example:
        @repository_operation("archive")
        async def archive(self, id):
            ...
    """
    def decorator(func):
        @wraps(func)
        async def wrapper(self, *args, **kwargs):
            try:
                return await func(self, *args, **kwargs)
            except Exception as exc:
                error_class = classify_error(exc)
                details = exc.details if isinstance(exc, RepositoryError) else {}
                error = error_class(
                    message=get_operation_message(operation),
                    code=extract_error_code(exc),
                    operation=operation,
                    details=details,
                )

                # Errors from a nested operation were logged where they were raised
                if not (isinstance(exc, RepositoryError) and exc.operation is not None):
                    logger.warning(
                        "repository_operation_failed",
                        operation=operation,
                        model=self.model.__name__,
                        kind=error.kind.value,
                        code=error.code,
                        error_type=type(exc).__name__,
                    )

                cause = exc
                if isinstance(exc, RepositoryError) and exc.__cause__ is not None:
                    cause = exc.__cause__
                raise error from cause
        return wrapper
    return decorator


class BaseRepository(IRepository[T], Generic[T]):
    """
    Generic repository bound to one SQLModel table class.

    Features:
    - Nine operations: get_all, get_by_id, create, update, delete, find_by,
      update_or_create, with_relations, search
    - Pagination helper with metadata
    - Column projection (load only the requested columns)
    - Eager loading of named (and dotted, nested) relationships
    - Keyword search over configurable fields
    - Uniform error wrapping via @repository_operation
    - Query logging for debugging

    The repository never commits; the caller owns the transaction
    (see DatabaseManager.session()).

    Use it directly:
        repo = BaseRepository(Product, session)

    or extend it for entity-specific repositories:
        class ProductRepository(BaseRepository[Product]):
            search_fields = ("name", "sku")

            def __init__(self, session: AsyncSession):
                super().__init__(Product, session)
    """

    search_fields: Optional[Sequence[str]] = None

    def __init__(
        self,
        model: type[T],
        session: AsyncSession,
        search_fields: Optional[Sequence[str]] = None,
        enable_query_logging: Optional[bool] = None,
    ):
        settings = get_settings()
        self._model = model
        self._mapper = inspect(model)
        self.session = session

        if search_fields is not None:
            self.search_fields = tuple(search_fields)
        elif self.search_fields is None:
            self.search_fields = tuple(settings.repository_search_fields)

        if enable_query_logging is None:
            enable_query_logging = settings.repository_query_logging
        self.enable_query_logging = enable_query_logging

    @property
    def model(self) -> type[T]:
        """The bound model class."""
        return self._model

    @property
    def column_names(self) -> frozenset[str]:
        return frozenset(attr.key for attr in self._mapper.column_attrs)

    # ------------------------------------------------------------------
    # Query helpers
    # ------------------------------------------------------------------

    def _check_fields(self, names: Iterable[str]) -> None:
        """Raise UnknownField if any name is not a column of the model."""
        columns = self.column_names
        unknown = [name for name in names if name not in columns]
        if unknown:
            raise UnknownField(
                f"Unknown field(s) for {self.model.__name__}: {', '.join(unknown)}",
                details={"model": self.model.__name__, "fields": unknown},
            )

    def _check_page_size(self, page_size: int) -> None:
        if page_size <= 0:
            raise InvalidPageSize(details={"page_size": page_size})

    def _order_by_primary_key(self, query: Select) -> Select:
        return query.order_by(*self._mapper.primary_key)

    def _apply_criteria(self, query: Select, criteria: Mapping[str, Any]) -> Select:
        """Apply equality filters (field == value), combined with AND."""
        self._check_fields(criteria.keys())
        for key, value in criteria.items():
            query = query.where(getattr(self.model, key) == value)
        return query

    def _apply_projection(self, query: Select, columns: Optional[Sequence[str]]) -> Select:
        """
        Load only the given columns. None or ["*"] loads all of them.

        The primary key is always loaded.
        """
        if not columns or list(columns) == [ALL_COLUMNS]:
            return query
        self._check_fields(columns)
        return query.options(load_only(*(getattr(self.model, name) for name in columns)))

    def _relation_loader(self, path: str):
        """
        Build a selectinload option for a relationship path.

        Dotted paths load nested relationships:
            "category"          -> selectinload(Product.category)
            "category.parent"   -> selectinload(Product.category).selectinload(Category.parent)
        """
        mapper = self._mapper
        loader = None
        for name in path.split("."):
            if name not in mapper.relationships:
                raise UnknownRelation(
                    f"Unknown relation for {self.model.__name__}: {path}",
                    details={"model": self.model.__name__, "relation": path},
                )
            attribute = getattr(mapper.class_, name)
            loader = selectinload(attribute) if loader is None else loader.selectinload(attribute)
            mapper = mapper.relationships[name].mapper
        return loader

    def _search_condition(self, keyword: str):
        """OR of case-insensitive substring matches over search_fields."""
        if not self.search_fields:
            raise ValidationFailed(
                f"No search fields configured for {self.model.__name__}",
                details={"model": self.model.__name__},
            )
        self._check_fields(self.search_fields)
        return or_(
            *(
                getattr(self.model, name).icontains(keyword, autoescape=True)
                for name in self.search_fields
            )
        )

    def _log_query(self, query: Select, params: dict = None) -> None:
        """Log SQL query with parameters for debugging."""
        if self.enable_query_logging:
            logger.debug("repository_query", model=self.model.__name__, query=str(query), params=params)

    async def paginate(
        self,
        query: Select,
        page: int = 1,
        page_size: int = 20
    ) -> PaginatedResult:
        """
        Paginate query results with metadata.

        Args:
            query: SQLAlchemy select over the bound model (before pagination)
            page: Page number (1-indexed, values below 1 are treated as 1)
            page_size: Number of items per page

        Returns:
            PaginatedResult with items and pagination metadata

        Example:
            query = select(Product).where(Product.price > 10)
            result = await repo.paginate(query, page=2, page_size=10)
            print(f"Page {result.page} of {result.total_pages}")
        """
        page = max(1, page)

        # Count on the filter alone; loader options and ordering don't change the total
        count_query = select(func.count()).select_from(self.model)
        if query.whereclause is not None:
            count_query = count_query.where(query.whereclause)
        total_result = await self.session.execute(count_query)
        total = total_result.scalar_one()

        total_pages = (total + page_size - 1) // page_size  # Ceiling division
        has_next = page < total_pages
        has_prev = page > 1

        offset = (page - 1) * page_size
        paginated_query = query.offset(offset).limit(page_size)

        self._log_query(paginated_query, {"page": page, "page_size": page_size})

        result = await self.session.execute(paginated_query)
        items = result.scalars().all()

        return PaginatedResult(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages,
            has_next=has_next,
            has_prev=has_prev,
        )

    # ------------------------------------------------------------------
    # Repository operations
    # ------------------------------------------------------------------

    @repository_operation("get_all")
    async def get_all(self, page_size: int, page: int = 1) -> PaginatedResult:
        """
        Get one page of all records, ordered by primary key.

        Args:
            page_size: Number of items per page (> 0)
            page: Page number (1-indexed)
        """
        self._check_page_size(page_size)
        query = self._order_by_primary_key(select(self.model))
        return await self.paginate(query, page=page, page_size=page_size)

    @repository_operation("get_by_id")
    async def get_by_id(self, id: RecordId) -> T:
        """
        Get record by primary key.

        The row is always read from the database, so a record left
        partly loaded by a projected find_by/search comes back complete.

        Raises:
            RecordNotFound: No record has this primary key
        """
        entity = await self.session.get(self.model, id, populate_existing=True)
        if entity is None:
            raise RecordNotFound(
                f"{self.model.__name__} {id!r} not found",
                details={"model": self.model.__name__, "id": id},
            )
        return entity

    @repository_operation("create")
    async def create(self, data: Mapping[str, Any]) -> T:
        """
        Create new record.

        Args:
            data: Field values for the new record

        Returns:
            Created record with generated primary key and defaults loaded
        """
        self._check_fields(data.keys())
        entity = self.model(**data)
        self.session.add(entity)
        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    @repository_operation("update")
    async def update(self, id: RecordId, data: Mapping[str, Any]) -> bool:
        """
        Update record by primary key.

        The record is resolved with get_by_id first, so a missing id raises
        RecordNotFound (even when data also names unknown fields) and
        nothing is written.

        Returns:
            True once the changes are flushed
        """
        entity = await self.get_by_id(id)
        self._check_fields(data.keys())
        for key, value in data.items():
            setattr(entity, key, value)
        await self.session.flush()
        return True

    @repository_operation("delete")
    async def delete(self, id: RecordId) -> bool:
        """
        Permanently delete record by primary key.

        Returns:
            True once the delete is flushed
        """
        entity = await self.get_by_id(id)
        await self.session.delete(entity)
        await self.session.flush()
        return True

    @repository_operation("find_by")
    async def find_by(
        self,
        criteria: Mapping[str, Any],
        columns: Optional[Sequence[str]] = None,
    ) -> Sequence[T]:
        """
        Get all records whose fields equal the criteria.

        Args:
            criteria: Equality filters (field: value); None matches NULL
            columns: Columns to load (default: all)

        Returns:
            Records ordered by primary key, possibly empty

        Example:
            active = await repo.find_by({"is_active": True}, columns=["id", "name"])
        """
        query = self._apply_criteria(select(self.model), criteria)
        query = self._apply_projection(query, columns)
        query = self._order_by_primary_key(query)
        self._log_query(query, dict(criteria))

        result = await self.session.execute(query)
        return result.scalars().all()

    @repository_operation("update_or_create")
    async def update_or_create(
        self,
        attributes: Mapping[str, Any],
        values: Optional[Mapping[str, Any]] = None,
    ) -> T:
        """
        Update the first record matching attributes, or create one.

        Args:
            attributes: Equality lookup used to find the record
            values: Fields to set on the found record, or to add to the new one

        Returns:
            The updated record (same identity) or the newly created one
        """
        values = dict(values or {})
        self._check_fields(values.keys())

        query = self._apply_criteria(select(self.model), attributes)
        query = self._order_by_primary_key(query).limit(1)
        self._log_query(query, dict(attributes))

        result = await self.session.execute(query)
        entity = result.scalars().first()

        if entity is None:
            entity = self.model(**{**attributes, **values})
            self.session.add(entity)
        else:
            for key, value in values.items():
                setattr(entity, key, value)

        await self.session.flush()
        await self.session.refresh(entity)
        return entity

    @repository_operation("with_relations")
    async def with_relations(
        self,
        page_size: int,
        relations: Union[str, Sequence[str]],
        page: int = 1,
    ) -> PaginatedResult:
        """
        Get one page of records with the named relationships eager loaded.

        Args:
            page_size: Number of items per page (> 0)
            relations: Relationship names, or a single name; dotted paths
                load nested ones
            page: Page number (1-indexed)

        Raises:
            UnknownRelation (wrapped): A name is not a relationship of the model
        """
        if isinstance(relations, str):
            relations = [relations]
        self._check_page_size(page_size)
        loaders = [self._relation_loader(path) for path in relations]
        query = self._order_by_primary_key(select(self.model).options(*loaders))
        return await self.paginate(query, page=page, page_size=page_size)

    @repository_operation("search")
    async def search(
        self,
        page_size: int,
        keyword: str,
        columns: Optional[Sequence[str]] = None,
        page: int = 1,
    ) -> PaginatedResult:
        """
        Get one page of records where any search field contains keyword.

        Matching is a case-insensitive substring match; ``%`` and ``_`` in
        the keyword are matched literally.

        Args:
            page_size: Number of items per page (> 0)
            keyword: Text to look for
            columns: Columns to load (default: all)
            page: Page number (1-indexed)
        """
        self._check_page_size(page_size)
        query = select(self.model).where(self._search_condition(keyword))
        query = self._apply_projection(query, columns)
        query = self._order_by_primary_key(query)
        return await self.paginate(query, page=page, page_size=page_size)
