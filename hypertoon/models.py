"""Data models for hypertoon."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum, auto

from .constants import COMMENT_CHAR


class _Undefined:
    """Marker for object members that should not be rendered."""

    def __repr__(self) -> str:
        return "UNDEFINED"

    def __bool__(self) -> bool:
        return False


UNDEFINED = _Undefined()


class ValueKind(Enum):
    """Variants of the JSON-compatible value model.

    Attributes:
        NULL: ``None``.
        BOOLEAN: ``True`` or ``False``.
        NUMBER: ``int`` or ``float``.
        STRING: ``str``, and any value without a better match.
        ARRAY: ``list`` or ``tuple``.
        OBJECT: Any ``Mapping``.
        UNDEFINED: The `UNDEFINED` marker.
    """

    NULL = auto()
    BOOLEAN = auto()
    NUMBER = auto()
    STRING = auto()
    ARRAY = auto()
    OBJECT = auto()
    UNDEFINED = auto()

    @property
    def is_container(self) -> bool:
        return self in (ValueKind.ARRAY, ValueKind.OBJECT)


def classify(value: object) -> ValueKind:
    """Map a Python value to its `ValueKind`.

    Booleans are checked before numbers since ``bool`` subclasses ``int``.

    Examples:
        classify({"a": 1})  # ValueKind.OBJECT
        classify(True)  # ValueKind.BOOLEAN
    """
    if value is None:
        return ValueKind.NULL
    if value is UNDEFINED:
        return ValueKind.UNDEFINED
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.STRING
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    return ValueKind.STRING


@dataclass
class Cursor:
    """Read position over the text of a single decode call.

    Attributes:
        text: Full input text.
        pos: Offset of the start of the current line.
        length: Length of `text`.
    """

    text: str
    pos: int = 0
    length: int = 0

    def __post_init__(self) -> None:
        self.length = len(self.text)

    @property
    def at_end(self) -> bool:
        return self.pos >= self.length


@dataclass(frozen=True)
class Line:
    """A single line split into indentation width and stripped content.

    Attributes:
        indent: Leading whitespace width; spaces count 1, tabs count 4.
        content: Remainder of the line with surrounding whitespace removed.
    """

    indent: int
    content: str

    @property
    def is_blank_or_comment(self) -> bool:
        return not self.content or self.content.startswith(COMMENT_CHAR)


@dataclass(frozen=True)
class ArrayHeader:
    """Parsed ``name[N]`` or ``name[N]{fields}`` key token.

    Attributes:
        name: Key the array is stored under.
        length: Declared element count. Informational only.
        fields: Header names for tabular arrays, otherwise None.
    """

    name: str
    length: int
    fields: tuple[str, ...] | None = None

    @property
    def is_tabular(self) -> bool:
        return self.fields is not None
