"""Location and loading of the raw playbook bytes."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from playbook_verifier.errors import SourceError
from playbook_verifier.logging import get_logger

if TYPE_CHECKING:
    from playbook_verifier.settings import Settings

__all__ = ["PlaybookSource", "read_playbook"]

logger = get_logger(__name__)


@dataclass(frozen=True)
class PlaybookSource:
    """Where the playbook comes from: a filesystem path, or stdin when empty."""

    path: str = ""

    @property
    def is_stdin(self) -> bool:
        return not self.path

    @classmethod
    def from_settings(cls, settings: Settings) -> PlaybookSource:
        source = cls(path=settings.source)
        logger.debug("determined playbook source", source=str(source))
        return source

    def __str__(self) -> str:
        return "stdin" if self.is_stdin else self.path


def read_playbook(source: PlaybookSource, stdin: BinaryIO | None = None) -> bytes:
    """Read the whole playbook; any failure is fatal."""
    try:
        if source.is_stdin:
            stream = stdin if stdin is not None else sys.stdin.buffer
            raw = stream.read()
        else:
            raw = Path(source.path).read_bytes()
    except OSError as exc:
        raise SourceError("could not read playbook", source=str(source), reason=str(exc)) from exc

    logger.debug("playbook obtained", source=str(source), bytes=len(raw))
    return raw
