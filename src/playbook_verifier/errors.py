"""Error taxonomy for the playbook verifier.

Every failure carries a stable ``error_code`` and a small ``context`` dict
(offending key / path) so it can be reported without re-running.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "PlaybookVerifierError",
    "SourceError",
    "ParseError",
    "PlaybookError",
    "VerificationError",
    "SerializationError",
    "ConfigError",
]


class PlaybookVerifierError(Exception):
    """Base class for all verifier failures."""

    error_code = "VERIFIER_ERROR"
    exit_code = 1

    def __init__(self, message: str, **context: Any) -> None:
        super().__init__(message)
        self.message = message
        self.context: dict[str, Any] = context

    def __str__(self) -> str:
        if not self.context:
            return self.message
        details = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
        return f"{self.message} ({details})"

    def to_dict(self) -> dict[str, Any]:
        return {"error_code": self.error_code, "message": self.message, **self.context}


class SourceError(PlaybookVerifierError):
    """The playbook could not be read from its source."""

    error_code = "SOURCE_ERROR"
    exit_code = 2


class ParseError(PlaybookVerifierError):
    """Input is not well-formed YAML or does not hold exactly one play."""

    error_code = "INVALID_PLAYBOOK"
    exit_code = 3


class PlaybookError(PlaybookVerifierError):
    """Playbook is valid YAML but lacks a required element or is malformed."""

    error_code = "PLAYBOOK_ERROR"
    exit_code = 4


class VerificationError(PlaybookVerifierError):
    """An exclusion is outside the allow-set; fail closed."""

    error_code = "POLICY_VIOLATION"
    exit_code = 5


class SerializationError(PlaybookVerifierError):
    """A value has a type the canonical encoder does not know about."""

    error_code = "INTERNAL_ERROR"
    exit_code = 70


class ConfigError(PlaybookVerifierError):
    """Environment configuration could not be parsed."""

    error_code = "CONFIG_ERROR"
    exit_code = 78
