"""Infrastructure modules for the localization engine.

Centralized infrastructure components:
- configuration: Settings management (Settings, LocalizationSettings)
- logging: Structured logging setup (configure_logging, get_module_logger)
- events: Change notifications (Event, EventDispatcher)
- operations: Operation results and error classification
- i18n: Locale store, resolver, formatter and sync coordinator
- services: Application-scoped providers (get_settings, get_localization_service)
"""
