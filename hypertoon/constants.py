"""Constants used across the hypertoon package."""

from __future__ import annotations

import re

# Indentation
DEFAULT_INDENT_SPACES = 4
TAB_WIDTH = 4
CACHED_INDENT_LEVELS = 16

# Notation markers
COMMENT_CHAR = "#"
KEY_SEPARATOR = ":"
LIST_ITEM_MARKER = "-"
DEFAULT_DELIMITER = ","

# Scalar literals
TRUE_LITERAL = "true"
FALSE_LITERAL = "false"
NULL_LITERAL = "null"
LITERALS = {TRUE_LITERAL: True, FALSE_LITERAL: False, NULL_LITERAL: None}

# Characters that force a string to be quoted on encode
STRUCTURAL_CHARS = frozenset(',#:[]{}"\n\r')
HEADER_UNSAFE_CHARS = frozenset(",{}:[]\n\r")

# Key tokens: ``name``, ``name[N]`` or ``name[N]{h1,h2}``
ARRAY_KEY_PATTERN = re.compile(
    r"^(?P<name>.*?)\[(?P<length>\d+)\](?P<fields>\{.*\})?$", re.ASCII
)
# Decimal spellings, including ``.5``, ``1.``, ``+3`` and ``007``
NUMBER_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)
INTEGER_PATTERN = re.compile(r"[+-]?\d+", re.ASCII)

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
