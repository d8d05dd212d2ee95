"""Backing storage for translation tables.

Defines the contract the locale store and sync coordinator use to read and
write raw table documents, and the JSON file implementation.

Layout under the storage root:
    locale.json   language code -> display name
    <code>.json   normalized key -> translated string, one per language
    temp.json     developer override entries (optional)
"""

import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Mapping, Optional

from infrastructure.i18n.errors import LoadError
from infrastructure.i18n.models import INDEX_FILE, OVERRIDES_FILE, normalize_language
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Language codes double as file names under the storage root
SAFE_LANGUAGE_CODE = re.compile(r"[a-z0-9_-]+")


class TranslationLoader(ABC):
    """Abstract base for translation storage.

    Readers return raw UTF-8 JSON text; parsing belongs to the locale store
    so that parse failures are handled in one place.
    """

    @property
    @abstractmethod
    def writable(self) -> bool:
        """Whether live updates may be written to this storage."""

    @abstractmethod
    def read_index(self) -> str:
        """Return the raw language index document.

        Raises:
            LoadError: If the index cannot be read.
        """

    @abstractmethod
    def read_table(self, language: str) -> str:
        """Return the raw table document for one language.

        Raises:
            LoadError: If the table cannot be read.
        """

    @abstractmethod
    def read_overrides(self) -> Optional[str]:
        """Return the raw override document, or None if there is none."""

    @abstractmethod
    def write_table(self, language: str, table: Mapping[str, str]) -> None:
        """Persist one language's table.

        Raises:
            LoadError: If the storage is read-only or the write fails.
        """

    @abstractmethod
    def write_index(self, index: Mapping[str, str]) -> None:
        """Persist the language index.

        Raises:
            LoadError: If the storage is read-only or the write fails.
        """


class JSONTranslationLoader(TranslationLoader):
    """Loader for a directory of JSON table files.

    Attributes:
        root: Directory containing locale.json and the per-language files.
    """

    def __init__(self, root: Path, writable: bool = False):
        """Initialize JSON translation loader.

        Args:
            root: Directory with the JSON files.
            writable: Whether sync may write into this directory.
        """
        self.root = Path(root)
        self._writable = writable

        logger.info(
            "initialized_json_loader",
            root=str(self.root),
            writable=writable,
        )

    @property
    def writable(self) -> bool:
        return self._writable

    def read_index(self) -> str:
        return self._read(self.root / INDEX_FILE)

    def read_table(self, language: str) -> str:
        return self._read(self._table_path(language))

    def read_overrides(self) -> Optional[str]:
        path = self.root / OVERRIDES_FILE
        if not path.exists():
            return None
        return self._read(path)

    def write_table(self, language: str, table: Mapping[str, str]) -> None:
        self._write(self._table_path(language), table)

    def write_index(self, index: Mapping[str, str]) -> None:
        self._write(self.root / INDEX_FILE, index)

    def _table_path(self, language: str) -> Path:
        """Map a language code to its table file.

        Raises:
            LoadError: If the code is not a plain file name.
        """
        code = normalize_language(language)
        if not SAFE_LANGUAGE_CODE.fullmatch(code):
            raise LoadError(f"Invalid language code {language!r}")
        return self.root / f"{code}.json"

    def _read(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise LoadError(f"Failed to read {path}: {e}") from e

    def _write(self, path: Path, document: Mapping[str, str]) -> None:
        """Write a JSON document atomically.

        The document is written to a temporary file next to the target and
        moved into place, so a failed write leaves the old file untouched.
        """
        if not self._writable:
            raise LoadError(f"Storage at {self.root} is read-only")

        try:
            self.root.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.root, prefix=f".{path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(dict(document), fh, indent=4, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                os.unlink(tmp_name)
                raise
        except OSError as e:
            raise LoadError(f"Failed to write {path}: {e}") from e

        logger.debug("wrote_translation_document", path=str(path), entries=len(document))
