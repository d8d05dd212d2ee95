"""Infrastructure configuration module - public API.

Centralized configuration management using Pydantic BaseSettings.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    LocalizationSettings: Localization settings class (for testing)

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()
    root = settings.localization.storage_root
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.localization import LocalizationSettings

__all__ = ["Settings", "LocalizationSettings", "settings"]
