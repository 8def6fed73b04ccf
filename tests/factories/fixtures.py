# tests/factories/fixtures.py
"""
Factory fixtures for pytest integration.

This module provides fixtures that seed the test database with factories.
It's automatically loaded via pytest_plugins in conftest.py.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from tests.factories.models import CategoryFactory, DepartmentFactory, ProductFactory


@pytest.fixture
async def catalog(db_session: AsyncSession) -> dict:
    """
    Seed one department, two categories and five products.

    Product names/descriptions are chosen for search tests:
        "Red Widget"     / "A small red widget"       (Tools)
        "Blue Widget"    / None                       (Tools)
        "Garden Hose"    / "Fifty feet, WIDGET-proof" (Garden)
        "Rake"           / "Steel tines"              (Garden)
        "Lamp"           / None                       (no category)

    Returns:
        Dict with "department", "categories" and "products" (in id order)
    """
    department = await DepartmentFactory.create_async(db_session, title="Home")
    tools = await CategoryFactory.create_async(
        db_session, name="Tools", department_id=department.id
    )
    garden = await CategoryFactory.create_async(
        db_session, name="Garden", department_id=department.id
    )

    products = [
        await ProductFactory.create_async(
            db_session, name="Red Widget", description="A small red widget", category_id=tools.id
        ),
        await ProductFactory.create_async(
            db_session, name="Blue Widget", category_id=tools.id, is_active=False
        ),
        await ProductFactory.create_async(
            db_session, name="Garden Hose", description="Fifty feet, WIDGET-proof", category_id=garden.id
        ),
        await ProductFactory.create_async(
            db_session, name="Rake", description="Steel tines", category_id=garden.id
        ),
        await ProductFactory.create_async(db_session, name="Lamp", price=25.0),
    ]

    return {"department": department, "categories": [tools, garden], "products": products}
