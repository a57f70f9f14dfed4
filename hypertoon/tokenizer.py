"""Delimiter splitting that respects quotes and nesting."""

from __future__ import annotations

from .constants import DEFAULT_DELIMITER

_OPENERS = "[{"
_CLOSERS = "]}"


def is_escaped(text: str, pos: int) -> bool:
    r"""Determine whether a character is escaped by preceding backslashes.

    Counts consecutive backslashes immediately before `pos`; an odd count marks
    the character as escaped.

    Args:
        text: Text containing the character.
        pos: Zero-based index of the character to inspect.

    Returns:
        bool: True when the character is escaped, otherwise False.

    Examples:
        is_escaped('"a\\\\"', 4)  # False, two backslashes
        is_escaped('"a\\""', 3)  # True, one backslash
    """
    backslash_count = 0
    i = pos - 1
    while i >= 0 and text[i] == "\\":
        backslash_count += 1
        i -= 1

    return backslash_count % 2 == 1


def split_smart(text: str, delimiter: str = DEFAULT_DELIMITER) -> list[str]:
    """Split `text` on `delimiter` outside quoted runs and nested brackets.

    A delimiter only separates tokens when it is not inside an unescaped
    double-quoted run and the combined ``[``/``{`` nesting depth is zero.
    Unbalanced closers never push the depth below zero.

    Args:
        text: Row or value text to split.
        delimiter: Single-character separator.

    Returns:
        list[str]: Stripped tokens. Always contains at least one element.

    Examples:
        split_smart('a,"b,c",[1,2]')  # ['a', '"b,c"', '[1,2]']
        split_smart("")  # ['']
    """
    tokens: list[str] = []
    start = 0
    depth = 0
    in_quote = False

    for i, char in enumerate(text):
        if in_quote:
            if char == '"' and not is_escaped(text, i):
                in_quote = False
            continue

        if char == '"':
            in_quote = True
        elif char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth = max(depth - 1, 0)
        elif char == delimiter and depth == 0:
            tokens.append(text[start:i].strip())
            start = i + 1

    tokens.append(text[start:].strip())
    return tokens
