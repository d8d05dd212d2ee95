"""In-memory translation store.

Owns the mapping of language code -> translation table plus the language
index, rebuilt wholesale on every load and published as an immutable
snapshot so lookups never see a half-built table set.
"""

import json
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from infrastructure.events import Event, EventDispatcher
from infrastructure.i18n.errors import ParseError
from infrastructure.i18n.models import (
    PROVISIONAL_MARKER,
    ChangeReason,
    LocaleSnapshot,
    normalize_key,
    normalize_language,
)
from infrastructure.logging import get_module_logger
from infrastructure.operations import OperationResult

logger = get_module_logger()

TableReader = Callable[[str], str]


class _Pairs(list):
    """Ordered (key, value) pairs of a JSON object, duplicates preserved."""


def _parse_object(raw: str, source: str) -> List[Tuple[str, Any]]:
    """Parse a JSON document whose top level must be an object.

    Raises:
        ParseError: If the text is not JSON or not an object.
    """
    try:
        document = json.loads(raw, object_pairs_hook=_Pairs)
    except (TypeError, ValueError) as e:
        raise ParseError(str(e), source=source) from e

    if not isinstance(document, _Pairs):
        raise ParseError(
            f"expected a JSON object, got {type(document).__name__}", source=source
        )
    return list(document)


def parse_index(raw: str) -> Dict[str, str]:
    """Parse a language index into code -> display name, preserving order."""
    index: Dict[str, str] = {}
    for code, name in _parse_object(raw, "locale index"):
        language = normalize_language(code)
        if language in index:
            logger.warning("duplicate_language_in_index", language=language)
            continue
        if name is None:
            name = language
        index[language] = name if isinstance(name, str) else str(name)
    return index


def parse_table(raw: str, language: str) -> Dict[str, str]:
    """Parse one language's table into normalized key -> value.

    The first occurrence of a key wins; every later occurrence is logged
    once and discarded. Values that are not strings are skipped.
    """
    table: Dict[str, str] = {}
    for raw_key, value in _parse_object(raw, f"table '{language}'"):
        key = normalize_key(raw_key)
        if not isinstance(value, str):
            logger.warning(
                "invalid_translation_value",
                language=language,
                key=key,
                value_type=type(value).__name__,
            )
            continue
        if key in table:
            logger.error("duplicate_key", language=language, key=key)
            continue
        table[key] = value
    return table


class LocaleStore:
    """Language index and translation tables for one localization context.

    Attributes:
        fallback_language: Language whose table is the key superset used for
            progress ratios and override merges.
        ignored_languages: Codes listed in the index that are never loaded.
        dispatcher: Receives the change notifications fired by loads.
    """

    def __init__(
        self,
        fallback_language: str = "en",
        ignored_languages: Iterable[str] = (),
        dispatcher: Optional[EventDispatcher] = None,
    ):
        self.fallback_language = normalize_language(fallback_language)
        self.ignored_languages = frozenset(
            normalize_language(code) for code in ignored_languages
        )
        self.dispatcher = dispatcher or EventDispatcher()
        self._snapshot = LocaleSnapshot()

    @property
    def snapshot(self) -> LocaleSnapshot:
        """Current published tables. Grab once per read."""
        return self._snapshot

    def load(
        self,
        raw_index: str,
        per_language_loader: TableReader,
        raw_overrides: Optional[str] = None,
    ) -> OperationResult:
        """Rebuild every table from a raw index and a per-language reader.

        Per-language failures are logged and recorded in the result's
        ``failures``; the remaining languages still load. The new tables
        replace the old ones only after they are fully built, then a single
        LANGUAGES_LOADED notification fires.

        Args:
            raw_index: JSON object of language code -> display name.
            per_language_loader: Returns the raw JSON table for a code.
            raw_overrides: Optional override document merged into the
                fallback table before publishing.

        Returns:
            OperationResult. PERMANENT_ERROR with PARSE_ERROR if the index
            itself is unreadable, in which case the previous tables stay.
        """
        try:
            index = parse_index(raw_index)
        except ParseError as e:
            logger.error("locale_index_parse_failed", error=str(e))
            return OperationResult.permanent_error(str(e), error_code="PARSE_ERROR")

        tables: Dict[str, Dict[str, str]] = {}
        failures: Dict[str, str] = {}

        for language in index:
            if language in self.ignored_languages:
                logger.info("skipped_ignored_language", language=language)
                continue
            try:
                tables[language] = parse_table(per_language_loader(language), language)
            except Exception as e:
                logger.error("locale_load_failed", language=language, error=str(e))
                failures[language] = str(e)

        if raw_overrides is not None:
            self._merge_overrides(tables, raw_overrides)

        self._snapshot = LocaleSnapshot.build(tables, index)
        logger.info(
            "locale_store_loaded",
            language_count=len(index),
            loaded_tables=len(tables),
            failed=sorted(failures),
            fallback_language=self.fallback_language,
        )
        self.notify(ChangeReason.LANGUAGES_LOADED)

        return OperationResult.success(
            data=sorted(tables),
            message=f"Loaded {len(tables)} of {len(index)} languages",
            failures=failures,
        )

    def apply_overrides(self, raw_overrides: str, notify: bool = False) -> int:
        """Merge override entries into the fallback table.

        Values are prefixed with the provisional marker and replace existing
        entries without a duplicate warning.

        Args:
            raw_overrides: JSON object of key -> provisional value.
            notify: Fire OVERRIDES_APPLIED after publishing.

        Returns:
            Number of entries merged. 0 if the document could not be parsed.
        """
        current = self._snapshot
        tables = {code: dict(table) for code, table in current.tables.items()}
        applied = self._merge_overrides(tables, raw_overrides)
        if applied:
            self._snapshot = LocaleSnapshot.build(tables, dict(current.available_languages))
        if notify:
            self.notify(ChangeReason.OVERRIDES_APPLIED)
        return applied

    def _merge_overrides(self, tables: Dict[str, Dict[str, str]], raw: str) -> int:
        try:
            entries = _parse_object(raw, "overrides")
        except ParseError as e:
            logger.error("overrides_parse_failed", error=str(e))
            return 0

        fallback_table = tables.get(self.fallback_language)
        if fallback_table is None:
            logger.warning(
                "overrides_skipped_no_fallback_table",
                fallback_language=self.fallback_language,
            )
            return 0

        for raw_key, value in entries:
            fallback_table[normalize_key(raw_key)] = PROVISIONAL_MARKER + (
                value if isinstance(value, str) else str(value)
            )

        logger.info("applied_overrides", count=len(entries))
        return len(entries)

    def notify(self, reason: ChangeReason, **metadata: Any) -> None:
        """Fire a change notification through the dispatcher."""
        self.dispatcher.dispatch(Event(event_type=reason.value, metadata=metadata))

    def has_language(self, language: str) -> bool:
        """True if the code is listed in the loaded index."""
        return normalize_language(language) in self._snapshot.available_languages

    def available_languages(self) -> List[str]:
        """Language codes in index order, including ignored ones."""
        return list(self._snapshot.available_languages)

    def display_name(self, language: str) -> Optional[str]:
        """Human-readable name of a language, or None if unknown."""
        return self._snapshot.available_languages.get(normalize_language(language))

    def key_count(self, language: Optional[str] = None) -> int:
        """Number of keys in a language's table (default: the fallback)."""
        code = normalize_language(language) if language else self.fallback_language
        table = self._snapshot.table(code)
        return len(table) if table is not None else 0

    def language_count(self) -> int:
        """Number of languages listed in the index."""
        return len(self._snapshot.available_languages)

    def progress(self, language: str) -> float:
        """Share of the fallback table's keys that a language has.

        Returns 0.0 before the first load and for languages without a table.
        """
        snapshot = self._snapshot
        if not snapshot.loaded:
            return 0.0

        table = snapshot.table(normalize_language(language))
        fallback_table = snapshot.table(self.fallback_language)
        if table is None or not fallback_table:
            return 0.0
        return len(table) / len(fallback_table)
