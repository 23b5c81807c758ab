"""Nesting-safe JSON text for tree strings.

A tree string nests one JSON object per tree level, and a malformed tree can
be arbitrarily deep.  ``json.dumps`` and ``json.loads`` recurse once per
nesting level, so both are only used here for scalars (strings, numbers and
literals).  Objects and arrays are written and read with explicit stacks.

The output of ``dump_document`` is identical to ``json.dumps`` with the same
``ensure_ascii`` / ``indent`` / separator settings, for documents whose
containers are non-empty dicts.
"""

from __future__ import annotations

import json
import re
from typing import Any

from red_black_node_visualizer.wire import schema

__all__ = ["dump_document", "load_document"]

_WHITESPACE = re.compile(r"[ \t\n\r]*")
_NUMBER = re.compile(r"(-?(?:0|[1-9]\d*))(\.\d+)?([eE][-+]?\d+)?")
_LITERALS = {"true": True, "false": False, "null": None}
_CLOSERS = {dict: "}", list: "]"}


# ----------------------------------------------------------------------
# Writing
# ----------------------------------------------------------------------


def dump_document(
    document: dict[str, Any], ensure_ascii: bool = True, indent: int | None = None
) -> str:
    """Serialize a document of nested dicts and scalars without recursion.

    Args:
        document:     The root JSON object.  Nested values are dicts or
                      JSON scalars.
        ensure_ascii: Escape every non-ASCII character.
        indent:       ``None`` for the compact form, else the number of
                      spaces per nesting level.
    """
    if indent is None:
        item_separator, key_separator = schema.COMPACT_SEPARATORS
    else:
        item_separator, key_separator = ",", ": "

    def newline(depth: int) -> str:
        return "" if indent is None else "\n" + " " * (indent * depth)

    parts = ["{"]
    # Frames are [items, depth, is_first].
    stack: list[list[Any]] = [[iter(document.items()), 1, True]]
    while stack:
        frame = stack[-1]
        items, depth, is_first = frame
        entry = next(items, None)
        if entry is None:
            stack.pop()
            parts.append(newline(depth - 1) + "}")
            continue

        if not is_first:
            parts.append(item_separator)
        frame[2] = False
        key, value = entry
        parts.append(newline(depth))
        parts.append(json.dumps(key, ensure_ascii=ensure_ascii))
        parts.append(key_separator)
        if isinstance(value, dict) and value:
            parts.append("{")
            stack.append([iter(value.items()), depth + 1, True])
        else:
            parts.append(json.dumps(value, ensure_ascii=ensure_ascii))
    return "".join(parts)


# ----------------------------------------------------------------------
# Reading
# ----------------------------------------------------------------------


def _skip(text: str, index: int) -> int:
    match = _WHITESPACE.match(text, index)
    return match.end() if match is not None else index


def _read_key(text: str, index: int) -> tuple[str, int]:
    """Read ``"key" :`` at ``index``; return the key and the index of its value."""
    if not text.startswith('"', index):
        msg = "Expecting property name enclosed in double quotes"
        raise json.JSONDecodeError(msg, text, index)
    key, index = json.decoder.scanstring(text, index + 1)
    index = _skip(text, index)
    if not text.startswith(":", index):
        raise json.JSONDecodeError("Expecting ':' delimiter", text, index)
    return key, _skip(text, index + 1)


def _read_scalar(text: str, index: int) -> tuple[Any, int]:
    if text.startswith('"', index):
        return json.decoder.scanstring(text, index + 1)
    for literal, value in _LITERALS.items():
        if text.startswith(literal, index):
            return value, index + len(literal)
    match = _NUMBER.match(text, index)
    if match is None:
        raise json.JSONDecodeError("Expecting value", text, index)
    integer, fraction, exponent = match.groups()
    if fraction or exponent:
        return float(integer + (fraction or "") + (exponent or "")), match.end()
    return int(integer), match.end()


def load_document(text: str) -> Any:
    """Parse JSON text without recursion.

    Raises:
        json.JSONDecodeError: If ``text`` is not valid JSON.
    """
    # Frames are [container, pending key].
    stack: list[list[Any]] = []
    index = _skip(text, 0)
    while True:
        if text.startswith("{", index):
            index = _skip(text, index + 1)
            if text.startswith("}", index):
                value: Any = {}
                index += 1
            else:
                key, index = _read_key(text, index)
                stack.append([{}, key])
                continue
        elif text.startswith("[", index):
            index = _skip(text, index + 1)
            if text.startswith("]", index):
                value = []
                index += 1
            else:
                stack.append([[], None])
                continue
        else:
            value, index = _read_scalar(text, index)

        # Store the finished value, closing every container it completes.
        while True:
            if not stack:
                index = _skip(text, index)
                if index != len(text):
                    raise json.JSONDecodeError("Extra data", text, index)
                return value
            container, key = stack[-1]
            if isinstance(container, dict):
                container[key] = value
            else:
                container.append(value)
            index = _skip(text, index)
            if text.startswith(",", index):
                index = _skip(text, index + 1)
                if isinstance(container, dict):
                    stack[-1][1], index = _read_key(text, index)
                break
            closer = _CLOSERS[type(container)]
            if not text.startswith(closer, index):
                msg = f"Expecting ',' delimiter or '{closer}'"
                raise json.JSONDecodeError(msg, text, index)
            index += 1
            stack.pop()
            value = container
