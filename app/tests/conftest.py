import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.i18n`) works during pytest collection. Pytest
# may import `conftest` before the project root is on sys.path depending on
# invocation; add it explicitly here before importing application modules.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest

from infrastructure.configuration import LocalizationSettings, Settings
from infrastructure.logging import configure_logging
from infrastructure.services import providers


@pytest.fixture(autouse=True, scope="session")
def suppress_logging():
    """Configure structlog once with output suppressed for the test run."""
    configure_logging(log_level="CRITICAL", is_production=False)


@pytest.fixture(autouse=True)
def clear_provider_caches():
    """Reset the application-scoped singletons between tests."""
    providers.get_settings.cache_clear()
    providers.get_localization_service.cache_clear()
    yield
    providers.get_settings.cache_clear()
    providers.get_localization_service.cache_clear()


@pytest.fixture
def locale_dir(tmp_path):
    """Storage root with an index and three languages.

    en is the fallback superset, de is partially translated and fr lacks
    most keys. temp.json holds one override for an existing key and one for
    a new key.
    """
    from tests.factories.i18n import write_locale_dir

    return write_locale_dir(tmp_path / "locale")


@pytest.fixture
def make_settings(locale_dir):
    """Factory for Settings pointing at the temporary storage root."""

    def _factory(prefix: str = "", **localization_overrides) -> Settings:
        values = {
            "bundled_root": locale_dir,
            "app_data_root": locale_dir,
        }
        values.update(localization_overrides)
        return Settings(
            PREFIX=prefix,
            localization=LocalizationSettings(**values),
        )

    return _factory
