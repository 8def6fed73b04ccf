"""Configuration management for the repository layer."""

from abstract_repository.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
