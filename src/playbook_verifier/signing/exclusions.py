"""Extraction of the signature exclusion declaration from a playbook."""

from __future__ import annotations

from collections.abc import Iterable

from playbook_verifier.document import Document
from playbook_verifier.errors import PlaybookError, VerificationError
from playbook_verifier.logging import get_logger

__all__ = [
    "EXCLUDABLE_KEYS",
    "EXCLUSION_FIELD",
    "ExclusionPath",
    "extract_exclusions",
    "parse_exclusions",
]

logger = get_logger(__name__)

# ("hosts",) or ("vars", "insights_signature_exclude")
ExclusionPath = tuple[str, ...]

EXCLUSION_FIELD = "insights_signature_exclude"
EXCLUDABLE_KEYS: frozenset[str] = frozenset({"hosts", "vars"})

_MAX_DEPTH = 2


def parse_exclusions(raw: str) -> list[ExclusionPath]:
    """Split ``/hosts,/vars/insights_signature_exclude`` into paths.

    A single bad entry rejects the whole declaration.
    """
    paths: list[ExclusionPath] = []
    for expression in raw.split(","):
        trimmed = expression[1:] if expression.startswith("/") else expression
        if not trimmed:
            raise PlaybookError("empty exclusion path", declaration=raw)
        segments = tuple(trimmed.split("/"))
        if len(segments) > _MAX_DEPTH:
            raise PlaybookError(
                "exclusion path is deeper than two levels", path=expression, declaration=raw
            )
        if any(not segment for segment in segments):
            raise PlaybookError("exclusion path has an empty segment", path=expression)
        paths.append(segments)
    return paths


def _declaration(document: Document) -> str:
    play_vars = document.get("vars")
    if not isinstance(play_vars, Document):
        raise PlaybookError("missing exclusion declaration", key="vars")
    raw = play_vars.get(EXCLUSION_FIELD)
    if not isinstance(raw, str):
        raise PlaybookError("missing exclusion declaration", key=f"vars/{EXCLUSION_FIELD}")
    return raw


def extract_exclusions(
    document: Document, allowed: Iterable[str] = EXCLUDABLE_KEYS
) -> list[ExclusionPath]:
    """Read and validate ``vars.insights_signature_exclude``.

    Raises:
        PlaybookError: the declaration is missing or malformed.
        VerificationError: a path targets a key outside ``allowed``.
    """
    allowed = frozenset(allowed)
    paths = parse_exclusions(_declaration(document))
    for path in paths:
        if path[0] not in allowed:
            raise VerificationError(
                "key not allowed to be excluded",
                key=path[0],
                path="/".join(path),
                allowed=sorted(allowed),
            )
    logger.debug("exclusions extracted", paths=["/".join(p) for p in paths])
    return paths
