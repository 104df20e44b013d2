"""Explicit conversions from plain values to ``HtmlAttributes``."""

from __future__ import annotations

from collections.abc import Mapping

from .attributes import HtmlAttributes


def to_html_attributes(source: object = None) -> HtmlAttributes:
    """Return ``source`` as an ``HtmlAttributes`` instance.

    Args:
        source: Existing ``HtmlAttributes`` (returned unchanged), a mapping
            (keys kept verbatim), ``None`` (empty collection) or an object
            whose public fields become attributes.

    Returns:
        The converted attributes.
    """

    if isinstance(source, HtmlAttributes):
        return source
    if source is None:
        return HtmlAttributes()
    if isinstance(source, Mapping):
        return HtmlAttributes.from_mapping(source)
    return HtmlAttributes(source)
