"""Load attribute mappings from JSON or YAML files."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]

from .attributes import HtmlAttributes
from .errors import InvalidKeySource
from .json_utils import json_loads

logger = logging.getLogger(__name__)

JSON_SUFFIXES = (".json",)


def load_attributes(path: Path) -> HtmlAttributes:
    """Return the attributes stored in ``path``.

    The file must hold a single top-level mapping. Keys are used verbatim,
    exactly like a mapping passed to ``HtmlAttributes``. An empty file gives
    an empty collection.

    Args:
        path: Location of a ``.json``, ``.yaml`` or ``.yml`` file.

    Returns:
        The loaded attributes.

    Raises:
        InvalidKeySource: The file does not contain a mapping.
    """

    data = _load_attribute_file(path)
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise InvalidKeySource(
            f"{path} must contain a mapping of attributes, "
            f"found {type(data).__name__}",
            path,
        )

    logger.debug("Loaded %d attributes from %s", len(data), path)
    return HtmlAttributes.from_mapping(data)


def _load_attribute_file(path: Path) -> Any:  # noqa: ANN401
    """Read and decode ``path`` according to its extension."""

    text = path.read_text(encoding="utf-8")

    # JSON files go through the JSON helpers, everything else is YAML.
    if path.suffix.lower() in JSON_SUFFIXES:
        return json_loads(text) if text.strip() else None
    return yaml.safe_load(text)
