# tests/factories/models.py
"""Factories for the test table models."""

import factory

from tests.factories.base import AsyncSQLModelFactory
from tests.models import Category, Department, Product, Setting


class DepartmentFactory(AsyncSQLModelFactory):
    class Meta:
        model = Department

    title = factory.Sequence(lambda n: f"Department {n}")


class CategoryFactory(AsyncSQLModelFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")
    description = None
    department_id = None


class ProductFactory(AsyncSQLModelFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    description = None
    sku = factory.Sequence(lambda n: f"SKU-{n:05d}")
    price = 9.99
    is_active = True
    category_id = None


class SettingFactory(AsyncSQLModelFactory):
    class Meta:
        model = Setting

    key = factory.Sequence(lambda n: f"setting.{n}")
    value = "on"
