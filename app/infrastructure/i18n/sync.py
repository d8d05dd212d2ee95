"""Remote table synchronization.

Refreshes the backing storage from the translation service and reloads the
context once the new files are in place:

    GET {api_base_url}/{project_id}/languages
        -> one task per language: GET <translations url>?<include flags>
        -> write <code>.json for every language that parsed
    join all tasks
        -> write locale.json with the languages that succeeded
        -> context.reload()

A failed language is logged and skipped without touching its file. A failed
index fetch aborts the pass before anything is written.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import uuid4

import httpx
import structlog

from infrastructure.i18n.context import LocalizationContext
from infrastructure.i18n.envelope import (
    RemoteLanguage,
    parse_language_index,
    parse_translation_payload,
)
from infrastructure.i18n.errors import LoadError, ParseError, TransportError
from infrastructure.i18n.models import EnvelopeVersion
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult, classify_transport_error

logger = get_module_logger()


@dataclass
class SyncReport:
    """Outcome of a completed sync pass.

    Attributes:
        updated: Language codes whose tables were written, in index order.
        failed: Language code -> error message for skipped languages.
        index: The index document that was written (code -> display name).
    """

    updated: List[str] = field(default_factory=list)
    failed: Dict[str, str] = field(default_factory=dict)
    index: Dict[str, str] = field(default_factory=dict)


@dataclass
class _FetchOutcome:
    code: str
    name: Optional[str] = None
    error: Optional[str] = None


def _flag(value: bool) -> str:
    return "true" if value else "false"


class SyncCoordinator:
    """Fetches every language concurrently and republishes the tables.

    Only one pass may run at a time per coordinator. ``start_sync()`` runs a
    pass as a task that ``cancel()`` can stop; cancelling also cancels every
    per-language fetch still in flight.
    """

    def __init__(
        self,
        context: LocalizationContext,
        project_id: int,
        api_base_url: str,
        include_all_keys: bool = False,
        include_all_suggestions: bool = True,
        include_machine_translated: bool = True,
        timeout: float = 30.0,
        envelope_version: EnvelopeVersion = EnvelopeVersion.AUTO,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the coordinator.

        Args:
            context: Context whose loader is written to and which is reloaded.
            project_id: Project identifier on the translation service.
            api_base_url: Base URL of the public API.
            include_all_keys: Ask for keys without a translation.
            include_all_suggestions: Ask for unapproved suggestions.
            include_machine_translated: Ask for machine translations.
            timeout: Per-request timeout in seconds, when no client is given.
            envelope_version: Expected payload shape, or AUTO.
            client: Optional pre-configured client. It is not closed by the
                coordinator.
        """
        self.context = context
        self.project_id = project_id
        self.api_base_url = api_base_url.rstrip("/")
        self.include_all_keys = include_all_keys
        self.include_all_suggestions = include_all_suggestions
        self.include_machine_translated = include_machine_translated
        self.timeout = timeout
        self.envelope_version = envelope_version
        self._client = client
        self._task: Optional[asyncio.Task] = None
        self._running = False

    @property
    def index_url(self) -> str:
        return f"{self.api_base_url}/{self.project_id}/languages"

    @property
    def query_params(self) -> Dict[str, str]:
        return {
            "includeAllSuggestions": _flag(self.include_all_suggestions),
            "includeGoogleTranslate": _flag(self.include_machine_translated),
            "includeAllKeys": _flag(self.include_all_keys),
        }

    @property
    def is_running(self) -> bool:
        return self._running

    def start_sync(self) -> "asyncio.Task[OperationResult]":
        """Run sync() as a task on the running event loop."""
        self._task = asyncio.create_task(self.sync())
        return self._task

    def cancel(self) -> bool:
        """Cancel the pass started by start_sync(), if it is still running."""
        if self._task is None or self._task.done():
            return False
        return self._task.cancel()

    async def sync(self) -> OperationResult:
        """Run one sync pass.

        Returns:
            SUCCESS with a SyncReport in ``data`` (and per-language
            ``failures``) once the context has been reloaded. Errors:
            SYNC_IN_PROGRESS, READ_ONLY_STORAGE, transport or PARSE_ERROR
            for the index, NO_LANGUAGES_UPDATED, LOAD_ERROR for the index
            write.
        """
        if self._running:
            return OperationResult.permanent_error(
                "A sync is already in progress", error_code="SYNC_IN_PROGRESS"
            )
        if not self.context.loader.writable:
            logger.warning("sync_refused_read_only_storage", project_id=self.project_id)
            return OperationResult.permanent_error(
                "Translation storage is read-only", error_code="READ_ONLY_STORAGE"
            )

        self._running = True
        try:
            with structlog.contextvars.bound_contextvars(
                sync_id=str(uuid4()), project_id=self.project_id
            ):
                if self._client is not None:
                    return await self._sync_with(self._client)
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    return await self._sync_with(client)
        finally:
            self._running = False

    async def _sync_with(self, client: httpx.AsyncClient) -> OperationResult:
        try:
            document = await self._get_json(client, self.index_url)
            languages = parse_language_index(document, self.envelope_version)
        except TransportError as e:
            logger.error("language_index_fetch_failed", url=e.url, error=str(e))
            return e.result or OperationResult.transient_error(
                str(e), error_code="TRANSPORT_ERROR"
            )
        except ParseError as e:
            logger.error("language_index_parse_failed", error=str(e))
            return OperationResult.permanent_error(str(e), error_code="PARSE_ERROR")

        logger.info("fetched_language_index", language_count=len(languages))

        tasks = [
            asyncio.create_task(self._fetch_language(client, language))
            for language in languages
        ]
        try:
            outcomes = await asyncio.gather(*tasks)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            logger.warning("sync_cancelled", pending=sum(not t.done() for t in tasks))
            raise

        report = SyncReport()
        for outcome in outcomes:
            if outcome.error is None:
                report.updated.append(outcome.code)
                report.index[outcome.code] = outcome.name or outcome.code
            else:
                report.failed[outcome.code] = outcome.error

        if not report.updated:
            logger.error("sync_no_languages_updated", failed=sorted(report.failed))
            return OperationResult.transient_error(
                "No language could be updated", error_code="NO_LANGUAGES_UPDATED"
            )

        try:
            await asyncio.to_thread(self.context.loader.write_index, report.index)
        except LoadError as e:
            logger.error("language_index_write_failed", error=str(e))
            return OperationResult.permanent_error(str(e), error_code="LOAD_ERROR")

        reload_result = self.context.reload()
        if not reload_result.is_success:
            return reload_result

        logger.info(
            "sync_completed",
            updated=report.updated,
            failed=sorted(report.failed),
        )
        return OperationResult.success(
            data=report,
            message=f"Updated {len(report.updated)} of {len(outcomes)} languages",
            failures=report.failed,
        )

    async def _fetch_language(
        self, client: httpx.AsyncClient, language: RemoteLanguage
    ) -> _FetchOutcome:
        """Fetch, parse and persist one language. Never raises on failure."""
        try:
            document = await self._get_json(
                client, language.translations_url, params=self.query_params
            )
            table, language_name = parse_translation_payload(
                document, language.code, self.envelope_version
            )
            await asyncio.to_thread(self.context.loader.write_table, language.code, table)
        except (TransportError, ParseError, LoadError) as e:
            logger.error("language_fetch_failed", language=language.code, error=str(e))
            return _FetchOutcome(code=language.code, error=str(e))

        logger.info("language_updated", language=language.code, key_count=len(table))
        return _FetchOutcome(code=language.code, name=language_name or language.name)

    async def _get_json(
        self,
        client: httpx.AsyncClient,
        url: str,
        params: Optional[Dict[str, str]] = None,
    ) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            TransportError: On network failure, timeout or non-2xx status.
            ParseError: If the body is not JSON.
        """
        try:
            response = await client.get(url, params=params)
            response.raise_for_status()
        except httpx.HTTPError as e:
            result = classify_transport_error(e)
            raise TransportError(result.message, url=url, result=result) from e

        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"response is not JSON: {e}", source=url) from e
