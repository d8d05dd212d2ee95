"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from infrastructure.configuration import Settings

if TYPE_CHECKING:
    from infrastructure.i18n.service import LocalizationService


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    This is the single source of truth for settings across the entire application.
    The @lru_cache decorator ensures only ONE instance is created per process,
    even if called from multiple packages.

    Infrastructure packages should use this directly to ensure singleton consistency:
        from infrastructure.services.providers import get_settings
        settings = get_settings()

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_localization_service() -> "LocalizationService":
    """
    Get application-scoped localization service singleton.

    The tables are loaded from the configured storage root on first call.

    Returns:
        LocalizationService: Cached service built from get_settings().

    Usage:
        localization = get_localization_service()
        label = localization.wrap("menu.play", suffix="!")
    """
    from infrastructure.i18n.service import LocalizationService

    return LocalizationService(settings=get_settings())
