"""Localization context.

Single owner of the locale store, the active/fallback language selection,
the resolution mode and the change notifications. Resolver and formatter
read through it, so several independent contexts can live side by side.
"""

from typing import Iterable, Optional

from infrastructure.events import EventDispatcher, EventHandler
from infrastructure.i18n.errors import ConfigurationError, LoadError
from infrastructure.i18n.formatter import Formatter
from infrastructure.i18n.loader import TranslationLoader
from infrastructure.i18n.models import ChangeReason, ResolutionMode, normalize_language
from infrastructure.i18n.resolver import Resolver
from infrastructure.i18n.store import LocaleStore
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()


class LocalizationContext:
    """State and wiring for one set of translation tables.

    Attributes:
        loader: Backing storage the tables are (re)loaded from.
        store: In-memory tables, replaced wholesale on reload.
        dispatcher: Subscription list notified after loads and changes.
        resolver: Key lookup bound to this context.
        formatter: Placeholder expansion bound to this context.
        load_overrides: Merge the override table on every reload.
        strict_language_setters: Raise ConfigurationError for unknown codes.
            When False, an unknown code is logged, state is kept and the
            change notification still fires.
    """

    def __init__(
        self,
        loader: TranslationLoader,
        default_language: str = "en",
        fallback_language: str = "en",
        mode: ResolutionMode = ResolutionMode.GAME_MODE,
        ignored_languages: Iterable[str] = (),
        load_overrides: bool = False,
        strict_language_setters: bool = True,
    ):
        self.loader = loader
        self.dispatcher = EventDispatcher()
        self.store = LocaleStore(
            fallback_language=fallback_language,
            ignored_languages=ignored_languages,
            dispatcher=self.dispatcher,
        )
        self.load_overrides = load_overrides
        self.strict_language_setters = strict_language_setters
        self._active_language = normalize_language(default_language)
        self._mode = ResolutionMode(mode)

        self.resolver = Resolver(self)
        self.formatter = Formatter(self.resolver)

    @property
    def active_language(self) -> str:
        return self._active_language

    @property
    def fallback_language(self) -> str:
        return self.store.fallback_language

    @property
    def mode(self) -> ResolutionMode:
        return self._mode

    def reload(self) -> OperationResult:
        """Rebuild every table from the backing storage.

        The override table is re-read and merged each time when
        load_overrides is set.

        Returns:
            OperationResult from the store, or PERMANENT_ERROR with
            LOAD_ERROR if the index cannot be read. Previous tables are kept
            on failure.
        """
        try:
            raw_index = self.loader.read_index()
            raw_overrides = self.loader.read_overrides() if self.load_overrides else None
        except LoadError as e:
            logger.error("locale_index_read_failed", error=str(e))
            return OperationResult.permanent_error(str(e), error_code="LOAD_ERROR")

        return self.store.load(raw_index, self.loader.read_table, raw_overrides)

    def apply_overrides(self, notify: bool = False) -> int:
        """Re-read the override table and merge it into the fallback table.

        Returns:
            Number of override entries merged.
        """
        try:
            raw_overrides = self.loader.read_overrides()
        except LoadError as e:
            logger.error("overrides_read_failed", error=str(e))
            return 0
        if raw_overrides is None:
            logger.info("no_overrides_found")
            return 0
        return self.store.apply_overrides(raw_overrides, notify=notify)

    def set_active_language(self, language: str) -> None:
        """Select the language preferred for lookups.

        Raises:
            ConfigurationError: If the code is not in the loaded index and
                strict_language_setters is set.
        """
        code = normalize_language(language)
        if self._accept_language(code, "active"):
            self._active_language = code
        self.store.notify(ChangeReason.ACTIVE_LANGUAGE_CHANGED, language=self._active_language)

    def set_fallback_language(self, language: str) -> None:
        """Select the language consulted when the active one lacks a key.

        Raises:
            ConfigurationError: If the code is not in the loaded index and
                strict_language_setters is set.
        """
        code = normalize_language(language)
        if self._accept_language(code, "fallback"):
            self.store.fallback_language = code
        self.store.notify(
            ChangeReason.FALLBACK_LANGUAGE_CHANGED, language=self.store.fallback_language
        )

    def _accept_language(self, code: str, role: str) -> bool:
        if self.store.has_language(code):
            return True
        if self.strict_language_setters:
            raise ConfigurationError(f"Unknown language '{code}'")
        logger.error("unknown_language_selected", language=code, role=role)
        return False

    def set_mode(self, mode: ResolutionMode) -> None:
        """Switch the resolution mode for every subsequent lookup."""
        self._mode = ResolutionMode(mode)
        self.store.notify(ChangeReason.MODE_CHANGED, mode=self._mode.value)

    def set_mode_by_index(self, index: int) -> None:
        """Switch the resolution mode by declaration order (0, 1, 2).

        Raises:
            ConfigurationError: If index does not name a mode.
        """
        try:
            mode = ResolutionMode.from_index(index)
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        self.set_mode(mode)
        logger.info("resolution_mode_set", mode=mode.value)

    def subscribe(
        self,
        handler: EventHandler,
        reasons: Optional[Iterable[ChangeReason]] = None,
    ) -> EventHandler:
        """Register an observer, optionally only for some change reasons."""
        event_types = [reason.value for reason in reasons] if reasons is not None else None
        return self.dispatcher.subscribe(handler, event_types=event_types)

    def unsubscribe(self, handler: EventHandler) -> None:
        self.dispatcher.unsubscribe(handler)
