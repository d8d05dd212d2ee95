"""Localization service for dependency injection.

Provides a class-based interface to the i18n system for easier DI and testing.
"""

from typing import Any, Iterable, List, Optional, Sequence

from infrastructure.configuration import Settings
from infrastructure.events import EventHandler
from infrastructure.i18n.context import LocalizationContext
from infrastructure.i18n.factory import create_localization_context, create_sync_coordinator
from infrastructure.i18n.formatter import LocalizedText, NamedArguments
from infrastructure.i18n.models import ChangeReason, ResolutionMode
from infrastructure.i18n.sync import SyncCoordinator
from infrastructure.operations import OperationResult


class LocalizationService:
    """Class-based localization service.

    Wraps a LocalizationContext and its SyncCoordinator with a service
    interface to support dependency injection and easier testing with mocks.

    This is a thin facade - all actual work is delegated to the context,
    resolver, formatter and coordinator created by the factory.

    Usage:
        # Via the provider
        from infrastructure.services import get_localization_service

        localization = get_localization_service()
        title = localization.resolve("menu.title")

        # Direct instantiation
        from infrastructure.i18n.service import LocalizationService

        service = LocalizationService(context=context)
        service.set_active_language("de")
    """

    def __init__(
        self,
        context: Optional[LocalizationContext] = None,
        coordinator: Optional[SyncCoordinator] = None,
        settings: Optional[Settings] = None,
    ):
        """Initialize localization service.

        Args:
            context: Optional pre-configured context.
                     If not provided, creates default via factory.
            coordinator: Optional pre-configured sync coordinator.
                     If not provided, creates one for the context.
            settings: Settings used for the defaults above.
        """
        self._context = context or create_localization_context(settings=settings)
        self._coordinator = coordinator or create_sync_coordinator(
            self._context, settings=settings
        )

    def resolve(self, key: str) -> str:
        """Return the text for a key under the current mode and languages."""
        return self._context.resolver.resolve(key)

    def is_known_key(self, key: Optional[str]) -> bool:
        return self._context.resolver.is_known_key(key)

    def resolve_with_arguments(self, key: str, arguments: Optional[NamedArguments]) -> str:
        return self._context.formatter.resolve_with_arguments(key, arguments)

    def format(self, template: str, args: Optional[Sequence[Any]]) -> str:
        """Apply a positional template to localized arguments.

        Raises:
            FormatError: If the template is empty or malformed.
        """
        return self._context.formatter.format(template, args)

    def wrap(
        self,
        key: str,
        prefix: str = "",
        suffix: str = "",
        format: Optional[str] = None,
        arguments: Any = None,
    ) -> str:
        return self._context.formatter.wrap(
            key, prefix=prefix, suffix=suffix, format=format, arguments=arguments
        )

    def localize(
        self,
        key: str,
        arguments: Any = None,
        prefix: str = "",
        suffix: str = "",
        format: str = "",
    ) -> LocalizedText:
        """Build a deferred LocalizedText that can be rendered repeatedly.

        Usage:
            title = localization.localize("menu.title", suffix="label.colon")
            label.text = localization.render(title)
        """
        return LocalizedText(
            key=key, arguments=arguments, prefix=prefix, suffix=suffix, format=format
        )

    def render(self, text: LocalizedText) -> str:
        """Render a deferred LocalizedText with the current state."""
        return text.render(self._context.formatter)

    def set_active_language(self, language: str) -> None:
        self._context.set_active_language(language)

    def set_fallback_language(self, language: str) -> None:
        self._context.set_fallback_language(language)

    def set_mode(self, mode: ResolutionMode) -> None:
        self._context.set_mode(mode)

    def set_mode_by_index(self, index: int) -> None:
        self._context.set_mode_by_index(index)

    def available_languages(self) -> List[str]:
        return self._context.store.available_languages()

    def display_name(self, language: str) -> Optional[str]:
        return self._context.store.display_name(language)

    def key_count(self, language: Optional[str] = None) -> int:
        return self._context.store.key_count(language)

    def language_count(self) -> int:
        return self._context.store.language_count()

    def progress(self, language: str) -> float:
        return self._context.store.progress(language)

    def reload(self) -> OperationResult:
        """Rebuild every table from the backing storage."""
        return self._context.reload()

    def apply_overrides(self, notify: bool = False) -> int:
        return self._context.apply_overrides(notify=notify)

    def subscribe(
        self,
        handler: EventHandler,
        reasons: Optional[Iterable[ChangeReason]] = None,
    ) -> EventHandler:
        return self._context.subscribe(handler, reasons=reasons)

    def unsubscribe(self, handler: EventHandler) -> None:
        self._context.unsubscribe(handler)

    async def sync(self) -> OperationResult:
        """Refresh the storage from the remote service and reload.

        Returns:
            OperationResult from the coordinator; ``data`` is a SyncReport
            on success.
        """
        return await self._coordinator.sync()

    @property
    def context(self) -> LocalizationContext:
        """Access underlying LocalizationContext instance.

        Provided for advanced use cases that need direct access
        to the store, resolver or formatter.

        Returns:
            The underlying LocalizationContext instance
        """
        return self._context

    @property
    def coordinator(self) -> SyncCoordinator:
        return self._coordinator
