"""Tests for exclusion declaration parsing and the allow-set."""

from __future__ import annotations

import pytest

from playbook_verifier.document import Document, parse_playbook
from playbook_verifier.errors import PlaybookError, VerificationError
from playbook_verifier.signing.exclusions import extract_exclusions, parse_exclusions


def _playbook(declaration: str) -> Document:
    return parse_playbook(f"name: x\nvars:\n  insights_signature_exclude: '{declaration}'\n")


class TestParseExclusions:
    def test_leading_slash_is_optional(self) -> None:
        assert parse_exclusions("/hosts,vars/x") == [("hosts",), ("vars", "x")]

    def test_only_one_leading_slash_stripped(self) -> None:
        with pytest.raises(PlaybookError):
            parse_exclusions("//hosts")

    def test_duplicates_kept(self) -> None:
        assert parse_exclusions("/hosts,/hosts") == [("hosts",), ("hosts",)]

    def test_empty_entry_rejected(self) -> None:
        with pytest.raises(PlaybookError, match="empty exclusion path"):
            parse_exclusions("/hosts,")

    def test_bare_slash_rejected(self) -> None:
        with pytest.raises(PlaybookError):
            parse_exclusions("/")

    def test_three_segments_rejected(self) -> None:
        with pytest.raises(PlaybookError, match="deeper than two levels"):
            parse_exclusions("/vars/a/b")

    def test_one_bad_entry_rejects_all(self) -> None:
        with pytest.raises(PlaybookError):
            parse_exclusions("/hosts,/vars/a/b,/vars/c")


class TestExtractExclusions:
    def test_demo_declaration(self, demo_document: Document) -> None:
        assert extract_exclusions(demo_document) == [
            ("hosts",),
            ("vars", "insights_signature_exclude"),
        ]

    def test_missing_vars(self) -> None:
        with pytest.raises(PlaybookError, match="missing exclusion declaration"):
            extract_exclusions(parse_playbook("name: x\nhosts: all\n"))

    def test_vars_not_a_mapping(self) -> None:
        with pytest.raises(PlaybookError, match="missing exclusion declaration"):
            extract_exclusions(parse_playbook("vars: [a, b]\n"))

    def test_missing_field(self) -> None:
        with pytest.raises(PlaybookError, match="missing exclusion declaration"):
            extract_exclusions(parse_playbook("vars:\n  other: 1\n"))

    def test_field_not_a_string(self) -> None:
        with pytest.raises(PlaybookError, match="missing exclusion declaration"):
            extract_exclusions(parse_playbook("vars:\n  insights_signature_exclude: [hosts]\n"))

    def test_disallowed_key(self) -> None:
        with pytest.raises(VerificationError, match="key not allowed to be excluded") as info:
            extract_exclusions(_playbook("/hosts,/secrets"))
        assert info.value.context["key"] == "secrets"

    def test_disallowed_nested_key(self) -> None:
        with pytest.raises(VerificationError):
            extract_exclusions(_playbook("/tasks/0"))

    def test_allow_set_is_case_sensitive(self) -> None:
        with pytest.raises(VerificationError):
            extract_exclusions(_playbook("/Hosts"))

    def test_custom_allow_set(self) -> None:
        paths = extract_exclusions(_playbook("/tags"), allowed={"tags"})
        assert paths == [("tags",)]

    def test_malformed_checked_before_policy(self) -> None:
        with pytest.raises(PlaybookError):
            extract_exclusions(_playbook("/secrets/a/b"))
