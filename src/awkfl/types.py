## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import re
from dataclasses import dataclass, field

from .errors import AwkRegexError


_INTEGER_KEY_RE = re.compile(r'0|-?[1-9]\d*')


def format_number(value: float) -> str:
    if value.is_integer() and abs(value) < 2**53:
        return str(int(value))
    return f"{value:.6g}"


class Cell:
    """Tagged scalar value of the global namespace."""
    DOUBLE = 1
    STRING = 2
    MBSTRN = 3  # string that later evaluation may treat as a number

    __slots__ = ('type', 'value')

    def __init__(self, type, value):
        self.type = type
        self.value = value

    @classmethod
    def double(cls, value) -> "Cell":
        return cls(cls.DOUBLE, float(value))

    @classmethod
    def string(cls, text: str) -> "Cell":
        return cls(cls.STRING, text)

    @classmethod
    def maybe_numeric(cls, text: str) -> "Cell":
        return cls(cls.MBSTRN, text)

    def to_str(self) -> str:
        return format_number(self.value) if self.type == Cell.DOUBLE else self.value

    def __eq__(self, other):
        return isinstance(other, Cell) and self.type == other.type and self.value == other.value

    def __hash__(self):
        return hash((self.type, self.value))

    def __repr__(self):
        kind = {Cell.DOUBLE: 'double', Cell.STRING: 'string', Cell.MBSTRN: 'mbstrn'}[self.type]
        return f"Cell.{kind}({self.value!r})"


def array_key(key):
    """Normalize a subscript so that `1`, `1.0` and `"1"` address the same element."""
    if isinstance(key, bool):
        return int(key)
    if isinstance(key, int):
        return key
    if isinstance(key, float):
        return int(key) if key.is_integer() else format_number(key)
    if isinstance(key, str) and _INTEGER_KEY_RE.fullmatch(key):
        return int(key)
    return key


class AwkArray(dict):
    """Associative AWK array; keys are normalized subscripts, values are Cells."""

    def __getitem__(self, key):
        return super().__getitem__(array_key(key))

    def __setitem__(self, key, value):
        super().__setitem__(array_key(key), value)

    def __delitem__(self, key):
        super().__delitem__(array_key(key))

    def __contains__(self, key):
        return super().__contains__(array_key(key))

    def get(self, key, default=None):
        return super().get(array_key(key), default)

    def __repr__(self):
        return f"AwkArray({dict.__repr__(self)})"


class SymbolTable(dict):
    """Global variable namespace: name to `Cell` or `AwkArray`."""

    def insert(self, name: str, value):
        self[name] = value
        return value

    def is_array(self, name: str) -> bool:
        return isinstance(self.get(name), AwkArray)


@dataclass
class ProgramFiles:
    primary: str | None = None
    extra: list[str] | tuple[str, ...] = field(default_factory=list)

    def add(self, filename: str) -> None:
        if isinstance(self.extra, tuple):
            raise ValueError("Program file list is sealed.")
        if self.primary is None:
            self.primary = filename
        else:
            self.extra.append(filename)

    def seal(self) -> None:
        self.extra = tuple(self.extra)

    def __bool__(self):
        return self.primary is not None

    def __iter__(self):
        if self.primary is not None:
            yield self.primary
        yield from self.extra


@dataclass(frozen=True)
class FieldSeparator:
    """How the field splitter should read FS; splitting itself happens elsewhere."""
    SPACE = 'space'
    CHAR = 'char'
    EMPTY = 'empty'
    REGEX = 'regex'

    kind: str
    text: str
    pattern: re.Pattern | None = None

    @classmethod
    def from_text(cls, text: str) -> "FieldSeparator":
        if text == ' ':
            return cls(cls.SPACE, text)
        if text == '':
            return cls(cls.EMPTY, text)
        # Any other single character is literal, regex metacharacters included.
        if len(text) == 1:
            return cls(cls.CHAR, text)
        try:
            return cls(cls.REGEX, text, re.compile(text))
        except re.error as exc:
            raise AwkRegexError(f"regular expression compile failed ({exc.msg})\n{text}", awk_option=text) from exc
