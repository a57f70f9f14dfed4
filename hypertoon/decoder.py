"""Notation decoding.

The decoder walks the text once with a `Cursor`, using indentation as the only
block delimiter. It never raises for malformed text: lines it cannot interpret
are dropped and ambiguous blocks become empty containers.
"""

from __future__ import annotations

import logging

from .constants import ARRAY_KEY_PATTERN, COMMENT_CHAR, KEY_SEPARATOR, LIST_ITEM_MARKER, TAB_WIDTH
from .models import ArrayHeader, Cursor, Line
from .primitives import decode_scalar, strip_comment
from .tokenizer import split_smart

logger = logging.getLogger(__name__)

# Parent indentation of the document root, below any real indentation.
ROOT_INDENT = -1


def _leading_whitespace_columns(line: str) -> int:
    """Compute the width of leading whitespace.

    Each space counts one column and each tab counts `TAB_WIDTH` columns.

    Examples:
        _leading_whitespace_columns("    key: 1")  # 4
        _leading_whitespace_columns("\\t  key: 1")  # 6
    """
    columns = 0
    for character in line:
        if character == " ":
            columns += 1
        elif character == "\t":
            columns += TAB_WIDTH
        else:
            break
    return columns


def _line_end(cursor: Cursor) -> int:
    end = cursor.text.find("\n", cursor.pos)
    return cursor.length if end == -1 else end


def read_line(cursor: Cursor) -> Line:
    """Split the line under the cursor without consuming it."""
    raw = cursor.text[cursor.pos : _line_end(cursor)]
    return Line(indent=_leading_whitespace_columns(raw), content=raw.strip())


def consume_line(cursor: Cursor) -> None:
    """Advance the cursor past the current line and its newline."""
    cursor.pos = min(_line_end(cursor) + 1, cursor.length)


def peek_indent(cursor: Cursor) -> int:
    """Return the indentation of the next non-blank, non-comment line.

    The cursor is left where it was. Returns 0 at end of input.
    """
    pos = cursor.pos
    while pos < cursor.length:
        end = cursor.text.find("\n", pos)
        if end == -1:
            end = cursor.length
        raw = cursor.text[pos:end]
        content = raw.strip()
        if content and not content.startswith(COMMENT_CHAR):
            return _leading_whitespace_columns(raw)
        pos = end + 1
    return 0


def _next_significant_line(cursor: Cursor) -> Line | None:
    """Consume blank and comment lines and return the next line, unconsumed."""
    while not cursor.at_end:
        line = read_line(cursor)
        if not line.is_blank_or_comment:
            return line
        consume_line(cursor)
    return None


def parse_key_token(key_part: str) -> ArrayHeader | None:
    """Interpret ``name[N]`` and ``name[N]{h1,h2}`` key tokens.

    Returns:
        ArrayHeader | None: The array header, or None for a plain key.

    Examples:
        parse_key_token("tags[3]")  # ArrayHeader("tags", 3, None)
        parse_key_token("rows[2]{id,name}")  # ArrayHeader("rows", 2, ("id", "name"))
        parse_key_token("name")  # None
    """
    match = ARRAY_KEY_PATTERN.match(key_part)
    if match is None:
        return None

    fields_text = match.group("fields")
    fields = None
    if fields_text is not None:
        fields = tuple(field.strip() for field in fields_text[1:-1].split(","))

    return ArrayHeader(
        name=match.group("name").strip(),
        length=int(match.group("length")),
        fields=fields,
    )


def normalize_indexed(value: dict[str, object]) -> dict[str, object] | list[object]:
    """Turn an object keyed exactly ``"0"`` to ``"len-1"`` into a list.

    Empty objects are returned unchanged.

    Examples:
        normalize_indexed({"0": "a", "1": "b"})  # ["a", "b"]
        normalize_indexed({"1": "b"})  # {"1": "b"}
    """
    if not value:
        return value
    indices = [str(index) for index in range(len(value))]
    if set(value) != set(indices):
        return value
    return [value[index] for index in indices]


def _parse_tabular_rows(
    cursor: Cursor, fields: tuple[str, ...], min_indent: int
) -> list[dict[str, object]]:
    rows: list[dict[str, object]] = []
    while True:
        line = _next_significant_line(cursor)
        if line is None or line.indent < min_indent:
            break
        consume_line(cursor)

        values = split_smart(line.content)
        rows.append(
            {field: decode_scalar(strip_comment(token)) for field, token in zip(fields, values)}
        )
    return rows


def _parse_inline_array(value: str) -> list[object]:
    return [decode_scalar(strip_comment(token)) for token in split_smart(value)]


def _parse_block_array(cursor: Cursor, min_indent: int) -> list[object]:
    items: list[object] = []
    while True:
        line = _next_significant_line(cursor)
        if line is None or line.indent < min_indent:
            break

        if line.content.startswith(LIST_ITEM_MARKER):
            consume_line(cursor)
            rest = strip_comment(line.content[len(LIST_ITEM_MARKER) :])
            if rest:
                items.append(decode_scalar(rest))
            else:
                items.append(normalize_indexed(_parse_object_block(cursor, line.indent)))
        elif KEY_SEPARATOR in line.content:
            break
        else:
            consume_line(cursor)
            items.append(decode_scalar(strip_comment(line.content)))
    return items


def _parse_object_block(cursor: Cursor, parent_indent: int) -> dict[str, object]:
    """Parse declarations indented deeper than `parent_indent`.

    Stops without consuming at the first significant line whose indentation
    is not greater than `parent_indent`.
    """
    obj: dict[str, object] = {}

    while True:
        line = _next_significant_line(cursor)
        if line is None or line.indent <= parent_indent:
            break

        consume_line(cursor)
        key_part, separator, value_part = line.content.partition(KEY_SEPARATOR)
        if not separator:
            logger.debug("Dropping line without a key separator: %r", line.content)
            continue

        key_part = key_part.strip()
        value = strip_comment(value_part)
        header = parse_key_token(key_part)

        if header is not None:
            if header.is_tabular:
                obj[header.name] = _parse_tabular_rows(cursor, header.fields, line.indent + 1)
            elif value:
                obj[header.name] = _parse_inline_array(value)
            else:
                obj[header.name] = _parse_block_array(cursor, line.indent + 1)
        elif value:
            obj[key_part] = decode_scalar(value)
        elif peek_indent(cursor) > line.indent:
            obj[key_part] = _parse_object_block(cursor, line.indent)
        else:
            obj[key_part] = {}

    return obj


def decode(text: str) -> dict[str, object]:
    """Decode notation text into a Python object tree.

    The document root is always an object. Decoding is total: unparseable
    lines are skipped rather than reported.

    Args:
        text: Notation text.

    Returns:
        dict[str, object]: The decoded document.

    Examples:
        decode("a: 1\\nb: x")  # {"a": 1, "b": "x"}
        decode("tags[2]: red,blue")  # {"tags": ["red", "blue"]}
    """
    cursor = Cursor(text)
    return _parse_object_block(cursor, ROOT_INDENT)
