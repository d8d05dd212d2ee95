"""Exceptions for the localization engine.

Load, parse and transport failures are normally recovered from and reported
through OperationResult; only FormatError and ConfigurationError are
expected to reach callers.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from infrastructure.operations import OperationResult


class LocalizationError(Exception):
    """Base exception for all localization errors.

    Example:
        try:
            formatter.format(template, args)
        except LocalizationError as e:
            logger.error("localization_error", error=str(e))
    """

    pass


class ParseError(LocalizationError):
    """Raised when an index, table or remote payload is not valid JSON of
    the expected shape."""

    def __init__(self, message: str, source: str = ""):
        self.source = source
        super().__init__(f"{source}: {message}" if source else message)


class LoadError(LocalizationError):
    """Raised when a backing file cannot be read or written."""

    pass


class TransportError(LocalizationError):
    """Raised when a remote fetch fails (network, non-2xx, timeout).

    Attributes:
        url: Requested URL.
        result: Classified OperationResult carrying status and error code.
    """

    def __init__(
        self, message: str, url: str = "", result: Optional["OperationResult"] = None
    ):
        self.url = url
        self.result = result
        super().__init__(message)


class ConfigurationError(LocalizationError):
    """Raised for unknown language codes or invalid mode selections.

    Example:
        >>> context.set_active_language("xx")
        Traceback (most recent call last):
        ...
        ConfigurationError: Unknown language 'xx'
    """

    pass


class FormatError(LocalizationError):
    """Raised for an empty or malformed format template."""

    pass
