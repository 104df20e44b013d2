"""Mergeable HTML attribute collections."""

from .attributes import HtmlAttributes
from .conversion import to_html_attributes
from .errors import HtmlAttributesError, InvalidKeySource, NullAttributeValue
from .loader import load_attributes

__all__ = [
    "HtmlAttributes",
    "HtmlAttributesError",
    "InvalidKeySource",
    "NullAttributeValue",
    "load_attributes",
    "to_html_attributes",
]
