"""Order-preserving playbook document model and YAML loading."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Union

import yaml

from playbook_verifier.errors import ParseError
from playbook_verifier.logging import get_logger

__all__ = ["Document", "Value", "parse_playbook"]

logger = get_logger(__name__)

# Closed set of values a parsed playbook may contain.
Value = Union["Document", tuple["Value", ...], bool, str, int, float, None]

_MERGE_TAG = "tag:yaml.org,2002:merge"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


@dataclass(frozen=True)
class Document(Mapping[str, Value]):
    """Immutable mapping whose key order is part of its identity.

    Equality compares entries pairwise and in order, so two documents with
    the same keys in a different order are not equal.
    """

    entries: tuple[tuple[str, Value], ...] = ()
    _index: dict[str, Value] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        entries = tuple((key, value) for key, value in self.entries)
        index: dict[str, Value] = {}
        for key, value in entries:
            if not isinstance(key, str):
                raise ParseError("mapping keys must be strings", key=repr(key))
            if key in index:
                raise ParseError("duplicate key", key=key)
            index[key] = value
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "_index", index)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Value]]) -> Document:
        return cls(tuple(pairs))

    def __getitem__(self, key: str) -> Value:
        return self._index[key]

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __contains__(self, key: object) -> bool:
        return key in self._index


class _PlaybookLoader(yaml.SafeLoader):
    """SafeLoader that builds Documents and tuples instead of dicts and lists."""


# Timestamps stay strings; the canonical form only knows the closed value set.
_PlaybookLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag != _TIMESTAMP_TAG]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def _merge_sources(loader: _PlaybookLoader, node: yaml.Node) -> list[Document]:
    source = loader.construct_object(node, deep=True)
    sources = list(source) if isinstance(source, tuple) else [source]
    if not all(isinstance(item, Document) for item in sources):
        raise ParseError(
            "merge source must be a mapping or a list of mappings",
            line=node.start_mark.line + 1,
        )
    return sources


def _construct_document(loader: _PlaybookLoader, node: yaml.MappingNode) -> Document:
    # Merged keys come first; within a merge list, earlier sources win.
    # Sources are read from already built Documents, never by rewriting nodes.
    values: dict[str, Value] = {}
    for key_node, value_node in node.value:
        if key_node.tag == _MERGE_TAG:
            for source in reversed(_merge_sources(loader, value_node)):
                values.update(source.entries)

    explicit: set[str] = set()
    for key_node, value_node in node.value:
        if key_node.tag == _MERGE_TAG:
            continue
        key = loader.construct_object(key_node, deep=True)
        line = key_node.start_mark.line + 1
        if not isinstance(key, str):
            raise ParseError("mapping keys must be strings", key=repr(key), line=line)
        if key in explicit:
            raise ParseError("duplicate key", key=key, line=line)
        explicit.add(key)
        # Explicit keys override merged ones but keep the merged position.
        values[key] = loader.construct_object(value_node, deep=True)
    return Document(tuple(values.items()))


def _construct_sequence(loader: _PlaybookLoader, node: yaml.SequenceNode) -> tuple[Value, ...]:
    return tuple(loader.construct_sequence(node, deep=True))


def _reject_collection(loader: _PlaybookLoader, node: yaml.Node) -> None:
    raise ParseError(
        "unsupported YAML collection type", tag=node.tag, line=node.start_mark.line + 1
    )


_PlaybookLoader.add_constructor("tag:yaml.org,2002:map", _construct_document)
_PlaybookLoader.add_constructor("tag:yaml.org,2002:seq", _construct_sequence)
for _tag in ("omap", "pairs", "set"):
    _PlaybookLoader.add_constructor(f"tag:yaml.org,2002:{_tag}", _reject_collection)


def parse_playbook(raw: bytes | str) -> Document:
    """Parse raw YAML into the single play it describes.

    The root may be a mapping, or an Ansible-style sequence holding exactly
    one mapping. Anything else, including more than one YAML document in the
    stream, is a :class:`ParseError`.
    """
    try:
        documents = list(yaml.load_all(raw, Loader=_PlaybookLoader))
    except yaml.YAMLError as exc:
        raise ParseError("playbook is not valid YAML", reason=str(exc)) from exc

    if not documents:
        raise ParseError("playbook contains no documents")
    if len(documents) > 1:
        raise ParseError("playbook contains more than one document", documents=len(documents))

    root = documents[0]
    if isinstance(root, tuple):
        if len(root) != 1:
            raise ParseError("playbook must contain exactly one play", plays=len(root))
        root = root[0]
    if not isinstance(root, Document):
        raise ParseError("playbook root must be a mapping", root_type=type(root).__name__)

    logger.debug("playbook parsed", keys=list(root.keys()))
    return root
