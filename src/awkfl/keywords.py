## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# awkfl — Implementation-specific `-W` options and their abbreviation rules.
#

from enum import IntEnum
from typing import NamedTuple

from .errors import Diagnostics


class WOption(IntEnum):
    UNKNOWN = 0
    BINMODE = 1
    VERSION = 2
    DUMP = 3
    HELP = 4
    INTERACTIVE = 5
    EXEC = 6
    RANDOM = 7
    SPRINTF = 8
    POSIX_SPACE = 9
    USAGE = 10


class Keyword(NamedTuple):
    code: WOption
    name: str


def keyword_table(binmode: bool = False) -> tuple[Keyword, ...]:
    """Ordered canonical names; BINMODE only exists where binary mode is supported."""
    codes = [WOption.VERSION]
    if binmode:
        codes.append(WOption.BINMODE)
    codes += [WOption.DUMP, WOption.HELP, WOption.INTERACTIVE, WOption.EXEC,
              WOption.RANDOM, WOption.SPRINTF, WOption.POSIX_SPACE, WOption.USAGE]
    return tuple(Keyword(code, code.name) for code in codes)


KEYWORDS = keyword_table(binmode=False)


def match_abbrev(full_name: str, part: str) -> bool:
    """True if `part` is a prefix of `full_name`, folding case of ASCII letters only."""
    if len(part) > len(full_name):
        return False
    for ch, expected in zip(part, full_name):
        if ch.isascii() and ch.isalpha():
            ch = ch.upper()
        if ch != expected:
            return False
    return True


def skip_value(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] != ',':
        pos += 1
    return pos


def have_value(text: str, pos: int) -> bool:
    """An `=value` at `pos` whose value is non-empty and not another separator."""
    return text[pos:pos+1] == '=' and pos + 1 < len(text) and text[pos+1] not in '=,'


def parse_w_opt(text: str, pos: int, table=KEYWORDS, diag: Diagnostics | None = None) -> tuple[WOption, int, int]:
    """Resolve the option name starting at `pos` in a comma-joined group.

    Returns `(code, start, next)`: `start` is where the name begins after any
    skipped commas, `next` is the position of the `=`, `,` or end that ended it.
    An empty span (only commas left) returns `UNKNOWN` with `start == next`.
    """
    while pos < len(text) and text[pos] == ',':
        pos += 1
    start = pos
    while pos < len(text) and text[pos] not in ',=':
        pos += 1
    if pos == start:
        return WOption.UNKNOWN, start, pos

    part = text[start:pos]
    matches = [kw for kw in table if match_abbrev(kw.name, part)]
    if not matches:
        return WOption.UNKNOWN, start, pos
    if len(matches) > 1 and diag is not None:
        diag.warn(f"? ambiguous -W value: {matches[0].name} vs {matches[1].name}")
    return matches[0].code, start, pos
