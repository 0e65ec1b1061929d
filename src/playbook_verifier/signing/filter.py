"""Removal of excluded fields, at most one level deep."""

from __future__ import annotations

from collections.abc import Iterable

from playbook_verifier.document import Document, Value
from playbook_verifier.signing.exclusions import ExclusionPath

__all__ = ["filter_document"]


def filter_document(document: Document, exclusions: Iterable[ExclusionPath]) -> Document:
    """Return a new Document without the excluded entries.

    A one-segment path drops the top-level entry with everything under it.
    Remaining nested mappings are always rebuilt and only lose children
    matched by a two-segment path. Matching is exact and case-sensitive.
    """
    excluded = {tuple(path) for path in exclusions}

    entries: list[tuple[str, Value]] = []
    for key, value in document.entries:
        if (key,) in excluded:
            continue
        if isinstance(value, Document):
            value = Document(
                tuple(
                    (child, child_value)
                    for child, child_value in value.entries
                    if (key, child) not in excluded
                )
            )
        entries.append((key, value))
    return Document(tuple(entries))
