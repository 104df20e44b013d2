"""Shared fixtures for attribute tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml  # type: ignore[import-untyped]

SAMPLE_ATTRIBUTES = {
    "style": "width: 100%;",
    "class": "c1 c2",
    "data_foo": "bar",
    "tabindex": 0,
}


@pytest.fixture
def yaml_file(tmp_path: Path) -> Path:
    """Write the sample attributes to a YAML file."""

    path = tmp_path / "attrs.yaml"
    path.write_text(
        yaml.safe_dump(SAMPLE_ATTRIBUTES, allow_unicode=True, sort_keys=False),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def json_file(tmp_path: Path) -> Path:
    """Write the sample attributes to a JSON file."""

    path = tmp_path / "attrs.json"
    path.write_text(json.dumps(SAMPLE_ATTRIBUTES), encoding="utf-8")
    return path
