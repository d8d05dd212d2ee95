"""Key lookup with language fallback and mode-dependent output."""

from typing import TYPE_CHECKING, Optional

from infrastructure.i18n.models import (
    FALLBACK_MARKER,
    MISSING_MARKER,
    ResolutionMode,
    normalize_key,
)
from infrastructure.logging import get_module_logger

if TYPE_CHECKING:
    from infrastructure.i18n.context import LocalizationContext

logger = get_module_logger()


class Resolver:
    """Resolves keys against a context's active and fallback tables.

    Nothing is cached: every call reads the context's current mode, current
    languages and current snapshot, so a change applies to the next call.

    Resolution order:
    1. KeysOnly mode: ``"$$" + key`` without any lookup
    2. Active language table: stored value
    3. Fallback language table: value, prefixed with ``"$"`` outside GameMode
    4. Missing: the key in GameMode, ``"$$" + normalized key`` otherwise
    """

    def __init__(self, context: "LocalizationContext"):
        self.context = context

    def resolve(self, key: str) -> str:
        """Return the text for a key under the current mode and languages.

        Args:
            key: Localization key, matched case-insensitively.

        Returns:
            Translated text, or a marked/raw key per the resolution order.
        """
        mode = self.context.mode
        if mode == ResolutionMode.KEYS_ONLY:
            return MISSING_MARKER + key

        normalized = normalize_key(key)
        snapshot = self.context.store.snapshot

        value = snapshot.lookup(self.context.active_language, normalized)
        if value is not None:
            return value

        value = snapshot.lookup(self.context.fallback_language, normalized)
        if value is not None:
            return value if mode == ResolutionMode.GAME_MODE else FALLBACK_MARKER + value

        logger.warning(
            "localization_not_found",
            key=normalized,
            active_language=self.context.active_language,
            fallback_language=self.context.fallback_language,
        )
        return key if mode == ResolutionMode.GAME_MODE else MISSING_MARKER + normalized

    def is_known_key(self, key: Optional[str]) -> bool:
        """True if the fallback table (the key superset) contains the key."""
        if not key:
            return False
        snapshot = self.context.store.snapshot
        return snapshot.lookup(self.context.fallback_language, normalize_key(key)) is not None
