"""End-to-end canonicalisation: parse → extract → filter → serialise."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from playbook_verifier.document import Document, parse_playbook
from playbook_verifier.logging import get_logger
from playbook_verifier.signing.canonical import canonicalise
from playbook_verifier.signing.exclusions import (
    EXCLUDABLE_KEYS,
    ExclusionPath,
    extract_exclusions,
)
from playbook_verifier.signing.filter import filter_document

__all__ = ["CanonicalResult", "canonicalise_playbook", "run_pipeline"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class CanonicalResult:
    """Outcome of one run, with the intermediate state kept for inspection."""

    document: Document
    exclusions: tuple[ExclusionPath, ...]
    canonical: bytes


def run_pipeline(raw: bytes | str, allowed: Iterable[str] = EXCLUDABLE_KEYS) -> CanonicalResult:
    playbook = parse_playbook(raw)
    exclusions = extract_exclusions(playbook, allowed)
    filtered = filter_document(playbook, exclusions)
    canonical = canonicalise(filtered)
    logger.debug(
        "playbook canonicalised",
        exclusions=len(exclusions),
        kept_keys=list(filtered.keys()),
        bytes=len(canonical),
    )
    return CanonicalResult(document=filtered, exclusions=tuple(exclusions), canonical=canonical)


def canonicalise_playbook(raw: bytes | str, allowed: Iterable[str] = EXCLUDABLE_KEYS) -> bytes:
    """Canonical bytes for a raw playbook."""
    return run_pipeline(raw, allowed).canonical
