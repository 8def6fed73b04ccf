# tests/unit/__init__.py
"""
Unit tests for individual components.

These tests never open a database: repository sessions are AsyncMock
objects, so error wrapping and argument validation can be checked in
isolation.
"""
