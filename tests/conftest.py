"""Shared fixtures for unit tests."""

from __future__ import annotations

import pytest

from playbook_verifier.document import Document, parse_playbook
from playbook_verifier.logging import configure_logging

DEMO_PLAYBOOK = """\
name: Demo
hosts:
  - h1
  - h2
vars:
  insights_signature_exclude: /hosts,/vars/insights_signature_exclude
  other: 1
"""

DEMO_CANONICAL = b"ordereddict([('name', 'Demo'), ('vars', ordereddict([('other', 1)]))])"


@pytest.fixture(autouse=True)
def _configure_logging() -> None:
    configure_logging(json_output=False, level="DEBUG")


@pytest.fixture()
def demo_yaml() -> str:
    return DEMO_PLAYBOOK


@pytest.fixture()
def demo_canonical() -> bytes:
    return DEMO_CANONICAL


@pytest.fixture()
def demo_document() -> Document:
    return parse_playbook(DEMO_PLAYBOOK)
