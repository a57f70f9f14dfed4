"""Notation encoding."""

from __future__ import annotations

import json
from collections.abc import Mapping, Sequence

from .config import ToonConfig, validate_config
from .constants import (
    CACHED_INDENT_LEVELS,
    DEFAULT_DELIMITER,
    DEFAULT_INDENT_SPACES,
    HEADER_UNSAFE_CHARS,
    KEY_SEPARATOR,
    LIST_ITEM_MARKER,
)
from .exceptions import InvalidInputError
from .models import ValueKind, classify
from .primitives import encode_scalar

_INDENT_CACHE = tuple(
    " " * (DEFAULT_INDENT_SPACES * depth) for depth in range(CACHED_INDENT_LEVELS)
)


def indentation(depth: int, width: int = DEFAULT_INDENT_SPACES) -> str:
    """Return the leading whitespace for a nesting depth.

    Strings for shallow depths at the default width are precomputed.
    """
    if width == DEFAULT_INDENT_SPACES and depth < CACHED_INDENT_LEVELS:
        return _INDENT_CACHE[depth]
    return " " * (width * depth)


class LineWriter:
    """Collects indented output lines."""

    def __init__(self, indent_spaces: int = DEFAULT_INDENT_SPACES) -> None:
        self.indent_spaces = indent_spaces
        self.lines: list[str] = []

    def push(self, depth: int, text: str) -> None:
        self.lines.append(f"{indentation(depth, self.indent_spaces)}{text}")

    def to_string(self) -> str:
        return "\n".join(self.lines)


def _is_header_safe(name: str) -> bool:
    return name == name.strip() and not any(char in HEADER_UNSAFE_CHARS for char in name)


def detect_tabular_fields(items: Sequence[object]) -> list[object] | None:
    """Return the header keys when `items` can be rendered as a table.

    Every element must be an object with the same key set as the first
    element, which must have at least one key. Key order may differ between
    elements; the first element's order is used for the header.

    Examples:
        detect_tabular_fields([{"id": 1}, {"id": 2}])  # ["id"]
        detect_tabular_fields([{"id": 1}, {"name": "x"}])  # None
    """
    if not items or classify(items[0]) is not ValueKind.OBJECT:
        return None

    first = items[0]
    fields = list(first)
    if not fields or not all(_is_header_safe(str(field)) for field in fields):
        return None

    for item in items[1:]:
        if classify(item) is not ValueKind.OBJECT:
            return None
        if len(item) != len(first) or not all(key in item for key in first):
            return None

    return fields


def _array_header(key: str, length: int, fields: list[object] | None = None) -> str:
    header = f"{key}[{length}]"
    if fields is not None:
        header += "{" + DEFAULT_DELIMITER.join(str(field) for field in fields) + "}"
    return header + KEY_SEPARATOR


def _as_indexed_object(items: Sequence[object]) -> dict[str, object]:
    return {str(index): item for index, item in enumerate(items)}


def encode_array(key: str, items: Sequence[object], writer: LineWriter, depth: int) -> None:
    """Render an array member as a table, an inline list, or a block list.

    Arrays of uniform objects become a header plus one row per element.
    Arrays of scalars fit on the key line. Anything else is written as
    ``-`` items; nested arrays are written as objects keyed by index so the
    decoder can turn them back into lists.
    """
    fields = detect_tabular_fields(items)
    if fields is not None:
        writer.push(depth, _array_header(key, len(items), fields))
        for item in items:
            row = DEFAULT_DELIMITER.join(encode_scalar(item[field]) for field in fields)
            writer.push(depth + 1, row)
        return

    if items and not any(classify(item).is_container for item in items):
        joined = DEFAULT_DELIMITER.join(encode_scalar(item) for item in items)
        writer.push(depth, f"{_array_header(key, len(items))} {joined}")
        return

    writer.push(depth, _array_header(key, len(items)))
    for item in items:
        kind = classify(item)
        if kind is ValueKind.OBJECT:
            writer.push(depth + 1, LIST_ITEM_MARKER)
            encode_object(item, writer, depth + 2)
        elif kind is ValueKind.ARRAY and item:
            writer.push(depth + 1, LIST_ITEM_MARKER)
            encode_object(_as_indexed_object(item), writer, depth + 2)
        else:
            writer.push(depth + 1, f"{LIST_ITEM_MARKER} {encode_scalar(item)}")


def encode_member(key: str, value: object, writer: LineWriter, depth: int) -> None:
    """Render one object member as one or more lines."""
    kind = classify(value)

    if kind is ValueKind.UNDEFINED:
        return
    if kind is ValueKind.ARRAY:
        encode_array(key, value, writer, depth)
    elif kind is ValueKind.OBJECT:
        writer.push(depth, f"{key}{KEY_SEPARATOR}")
        encode_object(value, writer, depth + 1)
    else:
        writer.push(depth, f"{key}{KEY_SEPARATOR} {encode_scalar(value)}")


def encode_object(obj: Mapping[object, object], writer: LineWriter, depth: int) -> None:
    for key, value in obj.items():
        encode_member(str(key), value, writer, depth)


def encode(value: object, config: ToonConfig | None = None) -> str:
    """Encode a value tree into notation text.

    A string argument is parsed as JSON text first. Only objects can be
    represented at the document root; any other value encodes to ``""``.

    Args:
        value: Object tree, or JSON text describing one.
        config: Encoding options. Defaults to a new `ToonConfig` when omitted.

    Returns:
        str: Notation text without a trailing newline.

    Raises:
        InvalidInputError: If `value` is a string that is not valid JSON.
        ConfigError: If the configuration fails validation.

    Examples:
        encode({"a": 1, "b": "x"})  # "a: 1\\nb: x"
        encode('{"tags": ["red", "blue"]}')  # "tags[2]: red,blue"
    """
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as error:
            raise InvalidInputError(str(error)) from error

    config = config or ToonConfig()
    validate_config(config)

    if classify(value) is not ValueKind.OBJECT:
        return ""

    writer = LineWriter(config.indent_spaces)
    encode_object(value, writer, 0)
    return writer.to_string()
