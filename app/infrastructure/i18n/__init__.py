"""i18n system - localization resolution engine.

Loads per-language translation tables, resolves keys with language fallback
and mode-dependent markers, expands placeholders, and refreshes the tables
from the remote translation service.

Main components:
- models: ResolutionMode, ChangeReason, LocaleSnapshot and the marker constants
- loader: TranslationLoader and JSONTranslationLoader
- store: LocaleStore (tables, index, overrides, statistics)
- resolver: Resolver (resolve, is_known_key)
- formatter: Formatter and LocalizedText
- context: LocalizationContext tying the pieces together
- sync: SyncCoordinator for concurrent remote refresh

The settings-aware factory and the LocalizationService facade live in
infrastructure.i18n.factory and infrastructure.i18n.service.
"""

from infrastructure.i18n.context import LocalizationContext
from infrastructure.i18n.errors import (
    ConfigurationError,
    FormatError,
    LoadError,
    LocalizationError,
    ParseError,
    TransportError,
)
from infrastructure.i18n.formatter import Formatter, LocalizedText
from infrastructure.i18n.loader import JSONTranslationLoader, TranslationLoader
from infrastructure.i18n.models import (
    FALLBACK_MARKER,
    MISSING_MARKER,
    PROVISIONAL_MARKER,
    ChangeReason,
    EnvelopeVersion,
    LocaleSnapshot,
    ResolutionMode,
    StorageLocation,
)
from infrastructure.i18n.resolver import Resolver
from infrastructure.i18n.store import LocaleStore
from infrastructure.i18n.sync import SyncCoordinator, SyncReport

__all__ = [
    "FALLBACK_MARKER",
    "MISSING_MARKER",
    "PROVISIONAL_MARKER",
    "ChangeReason",
    "EnvelopeVersion",
    "LocaleSnapshot",
    "ResolutionMode",
    "StorageLocation",
    "LocalizationError",
    "ParseError",
    "LoadError",
    "TransportError",
    "ConfigurationError",
    "FormatError",
    "TranslationLoader",
    "JSONTranslationLoader",
    "LocaleStore",
    "Resolver",
    "Formatter",
    "LocalizedText",
    "LocalizationContext",
    "SyncCoordinator",
    "SyncReport",
]
