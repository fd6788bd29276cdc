"""JSON Pointer (RFC 6901) helpers used to address source map entries."""

from __future__ import annotations

import re
from typing import Any
from typing import Final

_ARRAY_INDEX: Final = re.compile(r"0|[1-9][0-9]*")


def escape_pointer_segment(segment: str) -> str:
    """Escapes one reference token: ``~`` becomes ``~0``, ``/`` becomes ``~1``."""
    return segment.replace("~", "~0").replace("/", "~1")


def unescape_pointer_segment(segment: str) -> str:
    """Reverses :func:`escape_pointer_segment`.

    Raises:
        ValueError: If a ``~`` is not followed by ``0`` or ``1``.
    """
    if "~" not in segment:
        return segment

    pieces = segment.split("~")
    result = [pieces[0]]
    for piece in pieces[1:]:
        if piece[:1] == "0":
            result.append("~" + piece[1:])
        elif piece[:1] == "1":
            result.append("/" + piece[1:])
        else:
            raise ValueError(f"Invalid escape in pointer segment: {segment!r}")
    return "".join(result)


def join_pointer(parent: str, segment: str) -> str:
    """Appends an object key (escaped) to ``parent``."""
    return f"{parent}/{escape_pointer_segment(segment)}"


def split_pointer(pointer: str) -> list[str]:
    """Splits a pointer into its unescaped reference tokens.

    The empty pointer addresses the whole document and yields no tokens.

    Raises:
        ValueError: If the pointer is non-empty and does not start with ``/``,
            or one of its tokens has an invalid ``~`` escape.
    """
    if pointer == "":
        return []
    if not pointer.startswith("/"):
        raise ValueError(f"JSON pointer must start with '/': {pointer!r}")
    return [unescape_pointer_segment(token) for token in pointer[1:].split("/")]


def resolve_pointer(document: Any, pointer: str) -> Any:
    """Returns the value addressed by ``pointer`` inside a decoded document.

    Objects are walked by key, arrays by decimal index without leading zeros.

    Raises:
        KeyError: If an object has no such member, or the walk reaches a scalar.
        IndexError: If an array index is malformed or out of range.
        ValueError: If the pointer itself is malformed.
    """
    current = document
    for segment in split_pointer(pointer):
        if isinstance(current, dict):
            current = current[segment]
        elif isinstance(current, list):
            if not _ARRAY_INDEX.fullmatch(segment):
                raise IndexError(f"Invalid array index: {segment!r}")
            current = current[int(segment)]
        else:
            raise KeyError(segment)
    return current
