# tests/factories/base.py
"""
Base factory classes for Factory Boy integration.

Provides a base class that builds SQLModel instances with Factory Boy and
persists them through an async session.
"""

from typing import Any

import factory
from sqlalchemy.ext.asyncio import AsyncSession


class AsyncSQLModelFactory(factory.Factory):
    """
    Base factory for SQLModel table models with async session support.

    Instances are flushed, not committed; the db_session fixture owns the
    transaction.

    Usage:
        class ProductFactory(AsyncSQLModelFactory):
            class Meta:
                model = Product

            name = factory.Sequence(lambda n: f"Product {n}")

        # In tests:
        async def test_product(db_session):
            product = await ProductFactory.create_async(session=db_session)
            assert product.id is not None
    """

    class Meta:
        abstract = True

    @classmethod
    async def create_async(cls, session: AsyncSession, **kwargs: Any):
        """
        Build a model instance and flush it to the database.

        Args:
            session: Async database session to use
            **kwargs: Attributes to override on the model

        Returns:
            Flushed and refreshed model instance
        """
        instance = cls.build(**kwargs)
        session.add(instance)
        await session.flush()
        await session.refresh(instance)
        return instance

    @classmethod
    async def create_batch_async(
        cls,
        session: AsyncSession,
        size: int,
        **kwargs: Any
    ):
        """
        Build and flush multiple model instances.

        Args:
            session: Async database session to use
            size: Number of instances to create
            **kwargs: Attributes to override on all models

        Returns:
            List of flushed model instances, in creation order
        """
        instances = cls.build_batch(size, **kwargs)
        session.add_all(instances)
        await session.flush()

        for instance in instances:
            await session.refresh(instance)

        return instances
