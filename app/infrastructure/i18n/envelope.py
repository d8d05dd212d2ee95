"""Remote API payload contracts.

The translation service has changed its JSON envelope between releases, so
each shape is an explicit, versioned pydantic model instead of ad-hoc field
access.

v1:
    index   {"en": "<translations url>", ...}
    payload [{"languageName": "English", "translations": {...}}]

v2:
    index   {"data": [{"isoCode": "en", "name": "English",
                       "translations": {"links": {"related": "<url>"}}}]}
    payload {"data": [{"languageName": "English", "translations": {...}}]}
            (the "data" wrapper and the list are both optional)
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from infrastructure.i18n.errors import ParseError
from infrastructure.i18n.models import EnvelopeVersion, normalize_key, normalize_language
from infrastructure.logging import get_module_logger

logger = get_module_logger()


class RemoteLanguage(BaseModel):
    """One language listed by the remote index, independent of envelope version."""

    code: str
    name: Optional[str] = None
    translations_url: str


class RelatedLink(BaseModel):
    model_config = ConfigDict(extra="ignore")

    related: str


class TranslationsRelationship(BaseModel):
    model_config = ConfigDict(extra="ignore")

    links: RelatedLink


class LanguageResourceV2(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    iso_code: str = Field(alias="isoCode")
    name: Optional[str] = None
    translations: TranslationsRelationship


class TranslationPayload(BaseModel):
    """Translations document for one language (both versions)."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    language_name: Optional[str] = Field(default=None, alias="languageName")
    translations: Dict[str, Any]


_V1_INDEX = TypeAdapter(Dict[str, str])
_V2_INDEX = TypeAdapter(List[LanguageResourceV2])


def detect_version(document: Any) -> EnvelopeVersion:
    """Guess the envelope version of an index document."""
    if isinstance(document, list):
        return EnvelopeVersion.V2
    if isinstance(document, dict) and "data" in document:
        return EnvelopeVersion.V2
    return EnvelopeVersion.V1


def parse_language_index(
    document: Any, version: EnvelopeVersion = EnvelopeVersion.AUTO
) -> List[RemoteLanguage]:
    """Turn a decoded index document into RemoteLanguage entries.

    Args:
        document: Decoded JSON of the languages resource.
        version: Envelope version, or AUTO to detect it.

    Returns:
        Languages in the order the service listed them.

    Raises:
        ParseError: If the document does not match the envelope.
    """
    if version == EnvelopeVersion.AUTO:
        version = detect_version(document)

    try:
        if version == EnvelopeVersion.V1:
            urls = _V1_INDEX.validate_python(document)
            return [
                RemoteLanguage(code=normalize_language(code), translations_url=url)
                for code, url in urls.items()
            ]

        resources = document.get("data") if isinstance(document, dict) else document
        return [
            RemoteLanguage(
                code=normalize_language(resource.iso_code),
                name=resource.name,
                translations_url=resource.translations.links.related,
            )
            for resource in _V2_INDEX.validate_python(resources)
        ]
    except ValidationError as e:
        raise ParseError(
            f"does not match the {version.value} envelope: {e}", source="language index"
        ) from e


def parse_translation_payload(
    document: Any,
    language: str,
    version: EnvelopeVersion = EnvelopeVersion.AUTO,
) -> Tuple[Dict[str, str], Optional[str]]:
    """Turn a decoded translations document into a flat table.

    Args:
        document: Decoded JSON of one language's translations resource.
        language: Language code, for error messages and logs.
        version: Envelope version, or AUTO to accept either.

    Returns:
        (normalized key -> value table, language name if the payload has one)

    Raises:
        ParseError: If the document does not match the envelope.
    """
    source = f"translations '{language}'"

    if version != EnvelopeVersion.V1 and isinstance(document, dict) and "data" in document:
        document = document["data"]
    if isinstance(document, list):
        if not document:
            raise ParseError("empty payload list", source=source)
        document = document[0]

    try:
        payload = TranslationPayload.model_validate(document)
    except ValidationError as e:
        raise ParseError(f"does not match the translations envelope: {e}", source=source) from e

    return flatten_translations(payload.translations, language), payload.language_name


def flatten_translations(
    translations: Dict[str, Any], language: str, prefix: str = ""
) -> Dict[str, str]:
    """Flatten nested objects into dot-joined, normalized keys.

    Null values are dropped, scalars are stringified and the first
    occurrence of a normalized key wins.
    """
    table: Dict[str, str] = {}
    for raw_key, value in translations.items():
        key = normalize_key(f"{prefix}{raw_key}")
        if isinstance(value, dict):
            entries = flatten_translations(value, language, prefix=f"{key}.")
        elif value is None:
            continue
        else:
            entries = {key: value if isinstance(value, str) else str(value)}

        for entry_key, entry_value in entries.items():
            if entry_key in table:
                logger.error("duplicate_key", language=language, key=entry_key)
                continue
            table[entry_key] = entry_value
    return table
