"""Localization models.

Defines the enums and immutable data structures shared by the store,
resolver, formatter and sync coordinator.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, Mapping, Optional

# Value prefixes used to flag non-final text in resolver output
FALLBACK_MARKER = "$"
MISSING_MARKER = "$$"
PROVISIONAL_MARKER = "$TEMP$"

INDEX_FILE = "locale.json"
OVERRIDES_FILE = "temp.json"

TranslationTable = Mapping[str, str]


def normalize_key(key: str) -> str:
    """Lowercase and trim a localization key."""
    return key.strip().lower()


def normalize_language(code: str) -> str:
    """Lowercase and trim a language code."""
    return code.strip().lower()


class ResolutionMode(str, Enum):
    """Controls what resolve() returns.

    GAME_MODE returns final text. HALF_TRANSLATED flags fallback hits and
    missing keys with markers. KEYS_ONLY returns marked keys without lookup.
    """

    GAME_MODE = "GameMode"
    HALF_TRANSLATED = "HalfTranslated"
    KEYS_ONLY = "KeysOnly"

    @classmethod
    def from_index(cls, index: int) -> "ResolutionMode":
        """Convert a declaration-order index (0, 1, 2) into a mode.

        Raises:
            ValueError: If index does not name a mode.
        """
        modes = list(cls)
        if not 0 <= index < len(modes):
            raise ValueError(f"Unknown resolution mode index: {index}")
        return modes[index]


class StorageLocation(str, Enum):
    """Where translation tables are kept."""

    BUNDLED = "bundled"
    APP_DATA = "app_data"


class EnvelopeVersion(str, Enum):
    """Shape of the remote API payloads."""

    AUTO = "auto"
    V1 = "v1"
    V2 = "v2"


class ChangeReason(str, Enum):
    """Why observers of a localization context are being notified."""

    LANGUAGES_LOADED = "languages.loaded"
    OVERRIDES_APPLIED = "languages.overrides_applied"
    MODE_CHANGED = "languages.mode_changed"
    ACTIVE_LANGUAGE_CHANGED = "languages.active_changed"
    FALLBACK_LANGUAGE_CHANGED = "languages.fallback_changed"


@dataclass(frozen=True)
class LocaleSnapshot:
    """Immutable view of every loaded table.

    The store replaces its snapshot wholesale; readers grab one reference
    and never observe a half-built table set.

    Attributes:
        tables: language code -> (normalized key -> translated string).
        available_languages: language code -> display name, in index order.
        loaded: True once a load has completed.
    """

    tables: Mapping[str, TranslationTable] = field(
        default_factory=lambda: MappingProxyType({})
    )
    available_languages: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    loaded: bool = False

    @classmethod
    def build(
        cls,
        tables: Dict[str, Dict[str, str]],
        available_languages: Dict[str, str],
    ) -> "LocaleSnapshot":
        """Freeze freshly built tables into a loaded snapshot."""
        return cls(
            tables=MappingProxyType(
                {code: MappingProxyType(dict(table)) for code, table in tables.items()}
            ),
            available_languages=MappingProxyType(dict(available_languages)),
            loaded=True,
        )

    def table(self, language: str) -> Optional[TranslationTable]:
        return self.tables.get(language)

    def lookup(self, language: str, key: str) -> Optional[str]:
        """Return the value for an already-normalized key, or None."""
        table = self.tables.get(language)
        if table is None:
            return None
        return table.get(key)
