"""Canonical serialisation for playbook signing.

The format mirrors the ``repr`` of a Python ``OrderedDict`` as emitted by the
reference signer, e.g.::

    ordereddict([('name', 'Demo'), ('vars', ordereddict([('other', 1)]))])

Strings are quoted without escaping. A string containing ``'`` therefore does
not round-trip; this matches the reference signer and must not be "fixed".
"""

from __future__ import annotations

from playbook_verifier.document import Document, Value
from playbook_verifier.errors import SerializationError

__all__ = ["canonicalise", "serialise"]


def _encode(value: Value, path: str) -> str:
    # bool before int: True is an int in Python.
    if isinstance(value, Document):
        return _encode_document(value, path)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_encode(item, f"{path}[{i}]") for i, item in enumerate(value)) + "]"
    if isinstance(value, bool):
        return "True" if value else "False"
    if isinstance(value, str):
        return f"'{value}'"
    if isinstance(value, (int, float)):
        return str(value)
    if value is None:
        return "None"
    raise SerializationError("cannot encode value", path=path or "/", type=type(value).__name__)


def _encode_document(document: Document, path: str) -> str:
    pairs = [
        f"('{key}', {_encode(value, f'{path}/{key}')})" for key, value in document.entries
    ]
    return "ordereddict([" + ", ".join(pairs) + "])"


def serialise(document: Document) -> str:
    """Render a filtered Document in canonical text form."""
    return _encode_document(document, "")


def canonicalise(document: Document) -> bytes:
    """Canonical bytes (UTF-8) of a filtered Document, ready for hashing."""
    return serialise(document).encode("utf-8")
