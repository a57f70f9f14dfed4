"""Scalar rendering and recovery shared by the encoder and decoder."""

from __future__ import annotations

import json
import logging
import math

from .constants import (
    COMMENT_CHAR,
    FALSE_LITERAL,
    INTEGER_PATTERN,
    LITERALS,
    NULL_LITERAL,
    NUMBER_PATTERN,
    STRUCTURAL_CHARS,
    TRUE_LITERAL,
)
from .models import ValueKind, classify
from .tokenizer import is_escaped

logger = logging.getLogger(__name__)


def strip_comment(text: str) -> str:
    """Remove a trailing ``# ...`` comment from an isolated value.

    A ``#`` inside a double-quoted run does not start a comment.

    Examples:
        strip_comment("50000 # budget")  # "50000"
        strip_comment('"a#b" # note')  # '"a#b"'
    """
    in_quote = False
    for i, char in enumerate(text):
        if char == '"' and not is_escaped(text, i):
            in_quote = not in_quote
        elif char == COMMENT_CHAR and not in_quote:
            return text[:i].strip()
    return text.strip()


def parse_number(text: str) -> int | float | None:
    """Return the number spelled by `text`, or None when it is not one.

    Accepts decimal spellings with an optional sign, leading zeros, and a
    bare leading or trailing point. Integer spellings yield ``int``; a point or
    exponent yields ``float``. ``Infinity`` and ``NaN`` are not numbers here.

    Examples:
        parse_number("007")  # 7
        parse_number(".5")  # 0.5
        parse_number("1e3")  # 1000.0
    """
    if NUMBER_PATTERN.fullmatch(text) is None:
        return None
    if INTEGER_PATTERN.fullmatch(text) is not None:
        try:
            return int(text)
        except ValueError:
            # Past the interpreter's integer string conversion limit
            logger.debug("Integer %.20r... too long, reading as float", text)
    return float(text)


def _is_wrapped(text: str, opener: str, closer: str) -> bool:
    return len(text) >= 2 and text[0] == opener and text[-1] == closer


def decode_scalar(text: str) -> object:
    """Recover a value from a scalar token.

    Rules are tried in order: ``true``/``false``/``null``; a double-quoted
    JSON string (raw inner text when it is not valid JSON); a single-quoted
    raw string; an embedded JSON array or object (skipped when invalid); a
    number; the raw text.

    Args:
        text: Token with surrounding whitespace and comments already removed.

    Returns:
        object: Decoded Python value.

    Examples:
        decode_scalar("42")  # 42
        decode_scalar('"10"')  # "10"
        decode_scalar("[1, 2]")  # [1, 2]
        decode_scalar("Sarah Chen")  # "Sarah Chen"
    """
    if text in LITERALS:
        return LITERALS[text]

    if _is_wrapped(text, '"', '"'):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            logger.debug("Falling back to raw text for quoted value %r", text)
            return text[1:-1]

    if _is_wrapped(text, "'", "'"):
        return text[1:-1]

    if _is_wrapped(text, "[", "]") or _is_wrapped(text, "{", "}"):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            logger.debug("Embedded literal %r is not valid JSON", text)

    number = parse_number(text)
    if number is not None:
        return number

    return text


def needs_quotes(text: str) -> bool:
    """Check whether a string must be quoted to decode back unchanged."""
    if not text or text != text.strip():
        return True
    if text in LITERALS or parse_number(text) is not None:
        return True
    if text[0] == "'":
        return True
    return any(char in STRUCTURAL_CHARS for char in text)


def to_json(value: object) -> str:
    """Render a composite value as compact JSON text."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=str)


def encode_scalar(value: object) -> str:
    """Render a value for a scalar slot.

    Containers found in a scalar slot, such as a tabular cell, are embedded
    as compact JSON. Non-finite floats render as ``null``.

    Examples:
        encode_scalar(None)  # "null"
        encode_scalar("10")  # '"10"'
        encode_scalar({"a": 1})  # '{"a":1}'
    """
    kind = classify(value)

    if kind in (ValueKind.NULL, ValueKind.UNDEFINED):
        return NULL_LITERAL
    if kind is ValueKind.BOOLEAN:
        return TRUE_LITERAL if value else FALSE_LITERAL
    if kind is ValueKind.NUMBER:
        if isinstance(value, float):
            return repr(value) if math.isfinite(value) else NULL_LITERAL
        return str(int(value))
    if kind.is_container:
        return to_json(value)

    text = value if isinstance(value, str) else str(value)
    return json.dumps(text, ensure_ascii=False) if needs_quotes(text) else text
