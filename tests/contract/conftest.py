"""Shared fixtures for contract tests.

Contract tests validate that error payloads produced by the HTTP surface
conform to the schemas kept under ``specs/contracts/``.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

_REPO_ROOT = Path(__file__).resolve().parents[2]
_LOCAL_SPECS = _REPO_ROOT / "specs" / "contracts"


def _load_schema(name: str, search_paths: list[Path]) -> dict[str, Any]:
    for base in search_paths:
        candidate = base / name
        if candidate.is_file():
            return json.loads(candidate.read_text(encoding="utf-8"))  # type: ignore[no-any-return]
    searched = [str(p / name) for p in search_paths]
    msg = f"Schema '{name}' not found in: {searched}"
    raise FileNotFoundError(msg)


@pytest.fixture()
def error_schema() -> dict[str, Any]:
    """The error payload schema defined in this repo."""
    return _load_schema("error.schema.json", [_LOCAL_SPECS])
