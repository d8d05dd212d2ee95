"""Unit tests for infrastructure.configuration settings modules.

Tests cover:
- LocalizationSettings defaults and environment overrides
- Parsing of LOCALIZATION_IGNORED_LANGUAGES
- Storage location properties
- Settings aggregation and production detection
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from infrastructure.configuration import LocalizationSettings, Settings
from infrastructure.configuration.localization import DEFAULT_BUNDLED_ROOT
from infrastructure.i18n.models import EnvelopeVersion, ResolutionMode, StorageLocation

LOCALIZATION_ENV_VARS = [
    "LOCALIZATION_PROJECT_ID",
    "LOCALIZATION_API_BASE_URL",
    "LOCALIZATION_STORAGE_LOCATION",
    "LOCALIZATION_BUNDLED_ROOT",
    "LOCALIZATION_APP_DATA_ROOT",
    "LOCALIZATION_DEFAULT_LANGUAGE",
    "LOCALIZATION_FALLBACK_LANGUAGE",
    "LOCALIZATION_DEFAULT_MODE",
    "LOCALIZATION_IGNORED_LANGUAGES",
    "LOCALIZATION_INCLUDE_ALL_KEYS",
    "LOCALIZATION_INCLUDE_ALL_SUGGESTIONS",
    "LOCALIZATION_INCLUDE_MACHINE_TRANSLATED",
    "LOCALIZATION_LOAD_OVERRIDES",
    "LOCALIZATION_REQUEST_TIMEOUT_SECONDS",
    "LOCALIZATION_ENVELOPE_VERSION",
    "LOCALIZATION_STRICT_LANGUAGE_SETTERS",
    "PREFIX",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove localization variables so defaults are observable."""
    for name in LOCALIZATION_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.unit
class TestLocalizationSettings:
    """Test suite for LocalizationSettings configuration."""

    def test_defaults(self):
        """Test LocalizationSettings uses correct default values."""
        config = LocalizationSettings(_env_file=None)

        assert config.project_id == -1
        assert config.storage_location == StorageLocation.BUNDLED
        assert config.bundled_root == DEFAULT_BUNDLED_ROOT
        assert config.default_language == "en"
        assert config.fallback_language == "en"
        assert config.default_mode == ResolutionMode.GAME_MODE
        assert config.ignored_languages == []
        assert config.include_all_keys is False
        assert config.include_all_suggestions is True
        assert config.include_machine_translated is True
        assert config.load_overrides is False
        assert config.request_timeout_seconds == 30.0
        assert config.envelope_version == EnvelopeVersion.AUTO
        assert config.strict_language_setters is True

    def test_custom_values(self, monkeypatch):
        """Test LocalizationSettings accepts environment configuration."""
        monkeypatch.setenv("LOCALIZATION_PROJECT_ID", "1234")
        monkeypatch.setenv("LOCALIZATION_API_BASE_URL", "https://example.test/api")
        monkeypatch.setenv("LOCALIZATION_DEFAULT_LANGUAGE", " DE ")
        monkeypatch.setenv("LOCALIZATION_DEFAULT_MODE", "HalfTranslated")
        monkeypatch.setenv("LOCALIZATION_INCLUDE_ALL_KEYS", "true")
        monkeypatch.setenv("LOCALIZATION_REQUEST_TIMEOUT_SECONDS", "5")
        monkeypatch.setenv("LOCALIZATION_ENVELOPE_VERSION", "v2")
        monkeypatch.setenv("LOCALIZATION_STRICT_LANGUAGE_SETTERS", "false")

        config = LocalizationSettings(_env_file=None)

        assert config.project_id == 1234
        assert config.api_base_url == "https://example.test/api"
        assert config.default_language == "de"
        assert config.default_mode == ResolutionMode.HALF_TRANSLATED
        assert config.include_all_keys is True
        assert config.request_timeout_seconds == 5.0
        assert config.envelope_version == EnvelopeVersion.V2
        assert config.strict_language_setters is False

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ('["FR", "it"]', ["fr", "it"]),
            ("fr, it ,", ["fr", "it"]),
            ("", []),
        ],
    )
    def test_ignored_languages_parsing(self, monkeypatch, raw, expected):
        """Ignored languages accept a JSON list or comma separated codes."""
        monkeypatch.setenv("LOCALIZATION_IGNORED_LANGUAGES", raw)

        config = LocalizationSettings(_env_file=None)

        assert config.ignored_languages == expected

    def test_ignored_languages_invalid_json(self, monkeypatch):
        """A malformed JSON list is rejected."""
        monkeypatch.setenv("LOCALIZATION_IGNORED_LANGUAGES", "[fr")

        with pytest.raises(ValidationError):
            LocalizationSettings(_env_file=None)

    def test_invalid_mode_rejected(self, monkeypatch):
        """Unknown resolution modes fail validation."""
        monkeypatch.setenv("LOCALIZATION_DEFAULT_MODE", "Nope")

        with pytest.raises(ValidationError):
            LocalizationSettings(_env_file=None)

    def test_bundled_storage_is_read_only(self, tmp_path):
        """The bundled root never accepts live updates."""
        config = LocalizationSettings(_env_file=None, bundled_root=tmp_path)

        assert config.storage_root == tmp_path
        assert config.storage_writable is False

    def test_app_data_storage_is_writable(self, monkeypatch, tmp_path):
        """The app-data root is used and writable when selected."""
        monkeypatch.setenv("LOCALIZATION_STORAGE_LOCATION", "app_data")
        monkeypatch.setenv("LOCALIZATION_APP_DATA_ROOT", str(tmp_path))

        config = LocalizationSettings(_env_file=None)

        assert config.storage_root == Path(tmp_path)
        assert config.storage_writable is True

    def test_bundled_root_ships_sample_tables(self):
        """The default bundled root contains the shipped index."""
        assert (DEFAULT_BUNDLED_ROOT / "locale.json").is_file()


@pytest.mark.unit
class TestSettings:
    """Test suite for the Settings aggregator."""

    def test_localization_subsettings_instantiated(self):
        """Settings builds LocalizationSettings automatically."""
        settings = Settings(_env_file=None)

        assert isinstance(settings.localization, LocalizationSettings)

    def test_explicit_subsettings_kept(self, tmp_path):
        """An explicit LocalizationSettings instance is used as given."""
        localization = LocalizationSettings(_env_file=None, bundled_root=tmp_path)

        settings = Settings(_env_file=None, localization=localization)

        assert settings.localization.bundled_root == tmp_path

    def test_is_production_without_prefix(self):
        """An empty PREFIX means production."""
        assert Settings(_env_file=None, PREFIX="").is_production is True

    def test_is_not_production_with_prefix(self, monkeypatch):
        """A PREFIX marks a non-production deployment."""
        monkeypatch.setenv("PREFIX", "dev-")

        assert Settings(_env_file=None).is_production is False
