"""Placeholder expansion on top of the resolver.

Three entry points:
- resolve_with_arguments(): named ``{field}`` substitution from explicit pairs
- format(): positional ``{0}`` templates, each argument resolved if it is a key
- wrap(): prefix + body + suffix, each part localized independently
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from infrastructure.i18n.errors import FormatError
from infrastructure.i18n.resolver import Resolver

NamedArguments = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def _argument_pairs(arguments: NamedArguments) -> List[Tuple[str, Any]]:
    if isinstance(arguments, Mapping):
        return list(arguments.items())
    return [(str(name), value) for name, value in arguments]


class Formatter:
    """Expands placeholders, resolving values that are themselves keys."""

    def __init__(self, resolver: Resolver):
        self.resolver = resolver

    def localize_value(self, value: Any) -> str:
        """Resolve a value if it is a known key, else return it as text."""
        text = "" if value is None else str(value)
        if text and self.resolver.is_known_key(text):
            return self.resolver.resolve(text)
        return text

    def resolve_with_arguments(
        self, key: str, arguments: Optional[NamedArguments]
    ) -> str:
        """Resolve a key, then substitute ``{name}`` for each supplied pair.

        Substitution walks the supplied pairs in order and replaces the literal
        ``{name}`` pattern. Pairs without a placeholder are unused; placeholders
        without a pair stay as they are. A None value substitutes an empty
        string.

        Args:
            key: Localization key.
            arguments: Mapping or ordered (name, value) pairs. None skips
                substitution entirely.

        Returns:
            The resolved, substituted text.

        Example:
            # greeting -> "Hi {Name}"
            formatter.resolve_with_arguments("greeting", {"Name": "Ann"})  # "Hi Ann"
        """
        text = self.resolver.resolve(key)
        if arguments is None:
            return text

        for name, value in _argument_pairs(arguments):
            text = text.replace("{" + name + "}", self.localize_value(value))
        return text

    def format(self, template: str, args: Optional[Sequence[Any]]) -> str:
        """Apply a positional template to localized arguments.

        Each argument is resolved if it is a known key, otherwise used as its
        string form; empty arguments stay empty.

        Args:
            template: ``str.format`` template with positional fields.
            args: Ordered arguments. None yields an empty string.

        Returns:
            Formatted text.

        Raises:
            FormatError: If the template is empty or does not match the
                arguments (bad index, named field, unbalanced braces).
        """
        if not template:
            raise FormatError("Format template must not be empty")
        if args is None:
            return ""

        localized = [self.localize_value(arg) for arg in args]
        try:
            return template.format(*localized)
        except (IndexError, KeyError, ValueError, AttributeError) as e:
            raise FormatError(f"Invalid format template {template!r}: {e}") from e

    def wrap(
        self,
        key: str,
        prefix: str = "",
        suffix: str = "",
        format: Optional[str] = None,
        arguments: Any = None,
    ) -> str:
        """Concatenate localized prefix, body and suffix.

        Prefix and suffix are resolved when they are known keys and passed
        through literally otherwise. The body comes from format() when a
        template is given, else from resolve_with_arguments()/resolve().
        """
        if format:
            body = self.format(format, arguments)
        elif arguments is None:
            body = self.resolver.resolve(key)
        else:
            body = self.resolve_with_arguments(key, arguments)

        return self.localize_value(prefix) + body + self.localize_value(suffix)


@dataclass
class LocalizedText:
    """Deferred localization request.

    Holds everything needed to render a piece of text so it can be rendered
    again after the language or mode changes.

    Attributes:
        key: Localization key of the body.
        arguments: Named arguments, or positional arguments when ``format``
            is set.
        prefix: Literal text or key placed before the body.
        suffix: Literal text or key placed after the body.
        format: Optional positional template used instead of ``key``.
    """

    key: str
    arguments: Any = None
    prefix: str = ""
    suffix: str = ""
    format: str = ""

    def render(self, formatter: Formatter) -> str:
        return formatter.wrap(
            self.key,
            prefix=self.prefix,
            suffix=self.suffix,
            format=self.format or None,
            arguments=self.arguments,
        )
