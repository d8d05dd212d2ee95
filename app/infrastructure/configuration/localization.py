"""Localization engine settings."""

import json
from pathlib import Path
from typing import Annotated, Any, List

from pydantic import Field, field_validator
from pydantic_settings import NoDecode

from infrastructure.configuration.base import InfrastructureSettings
from infrastructure.i18n.models import EnvelopeVersion, ResolutionMode, StorageLocation

DEFAULT_BUNDLED_ROOT = Path(__file__).resolve().parents[2] / "locale"
DEFAULT_APP_DATA_ROOT = Path.home() / ".local" / "share" / "localization" / "locale"


class LocalizationSettings(InfrastructureSettings):
    """Configuration for translation tables, lookups and remote sync.

    Environment Variables:
        LOCALIZATION_PROJECT_ID: Project identifier on the translation service
        LOCALIZATION_API_BASE_URL: Base URL of the public translation API
        LOCALIZATION_STORAGE_LOCATION: 'bundled' (read-only) or 'app_data' (writable)
        LOCALIZATION_BUNDLED_ROOT: Directory holding the bundled tables
        LOCALIZATION_APP_DATA_ROOT: Directory holding the writable tables
        LOCALIZATION_DEFAULT_LANGUAGE: Active language at startup
        LOCALIZATION_FALLBACK_LANGUAGE: Language consulted when a key is missing
        LOCALIZATION_DEFAULT_MODE: GameMode, HalfTranslated or KeysOnly
        LOCALIZATION_IGNORED_LANGUAGES: JSON list or comma separated codes to skip
        LOCALIZATION_INCLUDE_ALL_KEYS: Ask the API for untranslated keys too
        LOCALIZATION_INCLUDE_ALL_SUGGESTIONS: Ask the API for unapproved suggestions
        LOCALIZATION_INCLUDE_MACHINE_TRANSLATED: Ask the API for machine translations
        LOCALIZATION_LOAD_OVERRIDES: Merge temp.json into the fallback table on load
        LOCALIZATION_REQUEST_TIMEOUT_SECONDS: Timeout for each HTTP request
        LOCALIZATION_ENVELOPE_VERSION: 'auto', 'v1' or 'v2' remote payload shape
        LOCALIZATION_STRICT_LANGUAGE_SETTERS: Raise on unknown language codes

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        root = settings.localization.storage_root
        if settings.localization.storage_writable:
            # Live updates can be written...
        ```
    """

    project_id: int = Field(
        default=-1,
        alias="LOCALIZATION_PROJECT_ID",
        description="Project identifier used to scope the remote languages resource",
    )
    api_base_url: str = Field(
        default="https://www.localizor.com/api/public",
        alias="LOCALIZATION_API_BASE_URL",
        description="Base URL of the remote translation API",
    )
    storage_location: StorageLocation = Field(
        default=StorageLocation.BUNDLED,
        alias="LOCALIZATION_STORAGE_LOCATION",
        description="Which storage root the tables are read from and written to",
    )
    bundled_root: Path = Field(
        default=DEFAULT_BUNDLED_ROOT,
        alias="LOCALIZATION_BUNDLED_ROOT",
        description="Read-only directory with the tables shipped with the application",
    )
    app_data_root: Path = Field(
        default=DEFAULT_APP_DATA_ROOT,
        alias="LOCALIZATION_APP_DATA_ROOT",
        description="Writable directory used when live updates are enabled",
    )
    default_language: str = Field(
        default="en",
        alias="LOCALIZATION_DEFAULT_LANGUAGE",
        description="Active language at startup",
    )
    fallback_language: str = Field(
        default="en",
        alias="LOCALIZATION_FALLBACK_LANGUAGE",
        description="Language used when the active language lacks a key",
    )
    default_mode: ResolutionMode = Field(
        default=ResolutionMode.GAME_MODE,
        alias="LOCALIZATION_DEFAULT_MODE",
        description="Resolution mode at startup",
    )
    ignored_languages: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        alias="LOCALIZATION_IGNORED_LANGUAGES",
        description="Language codes listed in the index but never loaded",
    )
    include_all_keys: bool = Field(
        default=False,
        alias="LOCALIZATION_INCLUDE_ALL_KEYS",
    )
    include_all_suggestions: bool = Field(
        default=True,
        alias="LOCALIZATION_INCLUDE_ALL_SUGGESTIONS",
    )
    include_machine_translated: bool = Field(
        default=True,
        alias="LOCALIZATION_INCLUDE_MACHINE_TRANSLATED",
    )
    load_overrides: bool = Field(
        default=False,
        alias="LOCALIZATION_LOAD_OVERRIDES",
        description="Merge the override table on load even in production",
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        alias="LOCALIZATION_REQUEST_TIMEOUT_SECONDS",
    )
    envelope_version: EnvelopeVersion = Field(
        default=EnvelopeVersion.AUTO,
        alias="LOCALIZATION_ENVELOPE_VERSION",
    )
    strict_language_setters: bool = Field(
        default=True,
        alias="LOCALIZATION_STRICT_LANGUAGE_SETTERS",
        description="Raise ConfigurationError for unknown codes instead of notifying",
    )

    @field_validator("default_language", "fallback_language", mode="after")
    @classmethod
    def _normalize_language(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("ignored_languages", mode="before")
    @classmethod
    def _parse_ignored_languages(cls, v: Any) -> Any:
        """Parse LOCALIZATION_IGNORED_LANGUAGES from JSON list, CSV or list."""
        if v is None:
            return []
        if isinstance(v, str):
            s = v.strip()
            if s.startswith("["):
                try:
                    v = json.loads(s)
                except (json.JSONDecodeError, ValueError) as e:
                    raise ValueError(
                        f"Invalid LOCALIZATION_IGNORED_LANGUAGES JSON: {e}"
                    ) from e
            else:
                v = s.split(",")
        if isinstance(v, (list, tuple, set)):
            return [str(code).strip().lower() for code in v if str(code).strip()]
        raise ValueError("LOCALIZATION_IGNORED_LANGUAGES must be a list or string")

    @property
    def storage_root(self) -> Path:
        """Directory the tables live in for the selected storage location."""
        if self.storage_location == StorageLocation.APP_DATA:
            return self.app_data_root
        return self.bundled_root

    @property
    def storage_writable(self) -> bool:
        """Only the app-data root accepts live updates."""
        return self.storage_location == StorageLocation.APP_DATA
