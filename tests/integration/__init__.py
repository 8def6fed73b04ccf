# tests/integration/__init__.py
"""
Integration tests for component interactions.

Integration tests verify that different parts of the application work
together correctly. They may use real database connections (test DB)
but should still mock external services.

Guidelines:
- Test interactions between components
- Use the in-memory test database (discarded after each test)
- Test error handling and edge cases
- Keep tests independent and isolated
"""
