"""Errors raised while building attribute collections."""

from __future__ import annotations


class HtmlAttributesError(Exception):
    """Base class for attribute collection errors."""

    def __init__(self, message: str = "Invalid HTML attributes") -> None:
        super().__init__(message)
        self.message = message


class NullAttributeValue(HtmlAttributesError, ValueError):
    """Raised when an attribute value or class name is ``None``.

    Attributes:
        key: Attribute key the value was meant for.
    """

    def __init__(self, key: str) -> None:
        super().__init__(f"Attribute {key!r} cannot have a None value")
        self.key = key


class InvalidKeySource(HtmlAttributesError, TypeError):
    """Raised when an attribute key cannot be derived from a source.

    Attributes:
        source: The offending key, callable or object.
    """

    def __init__(self, message: str, source: object = None) -> None:
        super().__init__(message)
        self.source = source
