# tests/__init__.py
"""
Test suite for abstract-repository.

- unit: Unit tests with mocked sessions
- integration: Repository and DatabaseManager tests against in-memory SQLite
- factories: Test data factories using Factory Boy
"""
