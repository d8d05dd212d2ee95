"""
Dependency injection services.

Provides provider functions for the application-scoped singletons.
"""

from infrastructure.services.providers import (
    get_settings,
    get_localization_service,
)

__all__ = [
    "get_settings",
    "get_localization_service",
]
