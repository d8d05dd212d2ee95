"""Factory functions for creating i18n components.

Provides convenience functions for building a localization context and its
sync coordinator from the application settings.
"""

from typing import Optional

import httpx

from infrastructure.configuration import Settings
from infrastructure.i18n.context import LocalizationContext
from infrastructure.i18n.loader import JSONTranslationLoader, TranslationLoader
from infrastructure.i18n.sync import SyncCoordinator
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def _resolve_settings(settings: Optional[Settings]) -> Settings:
    if settings is not None:
        return settings
    from infrastructure.services.providers import get_settings

    return get_settings()


def create_localization_context(
    settings: Optional[Settings] = None,
    loader: Optional[TranslationLoader] = None,
    preload: bool = True,
) -> LocalizationContext:
    """Create and configure a LocalizationContext.

    The override table is merged on every load outside production, or in
    production when LOCALIZATION_LOAD_OVERRIDES is set.

    Args:
        settings: Application settings (default: the provider singleton)
        loader: Storage to read from (default: JSON files under the
            configured storage root)
        preload: Whether to load every table immediately (default: True)

    Returns:
        LocalizationContext: Configured context

    Usage:
        # Use defaults (configured storage root, preload all)
        context = create_localization_context()

        # Custom storage
        loader = JSONTranslationLoader(Path("/tmp/locale"), writable=True)
        context = create_localization_context(loader=loader)

        # Lazy loading
        context = create_localization_context(preload=False)
        context.reload()
    """
    settings = _resolve_settings(settings)
    config = settings.localization

    if loader is None:
        loader = JSONTranslationLoader(
            root=config.storage_root,
            writable=config.storage_writable,
        )

    context = LocalizationContext(
        loader=loader,
        default_language=config.default_language,
        fallback_language=config.fallback_language,
        mode=config.default_mode,
        ignored_languages=config.ignored_languages,
        load_overrides=config.load_overrides or not settings.is_production,
        strict_language_setters=config.strict_language_setters,
    )

    if preload:
        result = context.reload()
        logger.info(
            "localization_context_created_with_preload",
            storage_location=config.storage_location.value,
            is_success=result.is_success,
            language_count=context.store.language_count(),
            failed=sorted(result.failures),
        )
    else:
        logger.info(
            "localization_context_created_lazy",
            storage_location=config.storage_location.value,
        )

    return context


def create_sync_coordinator(
    context: LocalizationContext,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> SyncCoordinator:
    """Create a SyncCoordinator for a context from the settings.

    Args:
        context: Context whose storage is refreshed
        settings: Application settings (default: the provider singleton)
        client: Optional pre-configured HTTP client

    Returns:
        SyncCoordinator: Configured coordinator
    """
    config = _resolve_settings(settings).localization
    return SyncCoordinator(
        context=context,
        project_id=config.project_id,
        api_base_url=config.api_base_url,
        include_all_keys=config.include_all_keys,
        include_all_suggestions=config.include_all_suggestions,
        include_machine_translated=config.include_machine_translated,
        timeout=config.request_timeout_seconds,
        envelope_version=config.envelope_version,
        client=client,
    )
