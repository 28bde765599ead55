"""RFC 6901 JSON Pointer helpers for ancestor chains.

``to_pointer`` renders the path a decision function is looking at::

    to_pointer(())      → ""      # the root
    to_pointer(chain)   → "/a/1"  # while visiting data["a"][1]

``resolve`` reads a pointer back against a document, using the same
``~0`` / ``~1`` escapes.
"""

from __future__ import annotations

from typing import Any, Iterable

from .core import AncestorFrame, NodeKind, classify


def encode_token(key: Any) -> str:
    """Escape one reference token (``~`` → ``~0``, ``/`` → ``~1``)."""
    return str(key).replace("~", "~0").replace("/", "~1")


def decode_token(tok: str) -> str:
    """Reverse of :func:`encode_token`."""
    return tok.replace("~1", "/").replace("~0", "~")


def to_pointer(chain: Iterable[AncestorFrame]) -> str:
    """Return the JSON Pointer of the node addressed by *chain* (root → ``""``)."""
    return "".join("/" + encode_token(frame.key) for frame in chain)


def resolve(doc: Any, ptr: str) -> Any:
    """Read the value at *ptr* inside *doc*.

    Raises ``KeyError`` / ``IndexError`` when a segment is missing and
    ``TypeError`` when a segment would descend into a scalar.
    """
    if ptr == "":
        return doc
    if not ptr.startswith("/"):
        raise ValueError(f"{ptr!r}: JSON Pointer must start with '/'")

    cur: Any = doc
    for raw_tok in ptr[1:].split("/"):
        key = decode_token(raw_tok)
        kind = classify(cur)
        if kind is NodeKind.SEQUENCE:
            if not key.isdigit():
                raise IndexError(f"{ptr}: {key!r} is not a list index")
            cur = cur[int(key)]
        elif kind is NodeKind.MAPPING:
            cur = cur[key]
        else:
            raise TypeError(f"{ptr}: cannot descend into {type(cur).__name__}")
    return cur
