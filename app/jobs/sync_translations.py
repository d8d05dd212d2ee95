"""Refresh the translation tables from the remote service.

Run as the ``localization-sync`` console script. Requires
LOCALIZATION_STORAGE_LOCATION=app_data; the bundled tables are read-only.
"""

import asyncio
import sys

from infrastructure.logging import configure_logging, get_module_logger
from infrastructure.services import get_localization_service, get_settings

logger = get_module_logger()


def sync_translations() -> int:
    """Run one sync pass and return a process exit code."""
    settings = get_settings()
    service = get_localization_service()

    logger.info(
        "translation_sync_started",
        project_id=settings.localization.project_id,
        storage_root=str(settings.localization.storage_root),
    )

    result = asyncio.run(service.sync())

    if not result.is_success:
        logger.error(
            "translation_sync_failed",
            status=result.status.value,
            error_code=result.error_code,
            message=result.message,
        )
        return 1

    report = result.data
    logger.info(
        "translation_sync_finished",
        updated=report.updated,
        failed=report.failed,
        language_count=service.language_count(),
    )
    return 0


def main() -> None:
    configure_logging(settings=get_settings())
    sys.exit(sync_translations())


if __name__ == "__main__":
    main()
