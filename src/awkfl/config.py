## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
import sys
from enum import Enum
from dataclasses import dataclass


class LongOptionPolicy(Enum):
    ERROR = 'error'
    WARN = 'warn'
    IGNORE = 'ignore'
    ALLOW = 'allow'

    @classmethod
    def from_environ(cls, value: str | None) -> "LongOptionPolicy":
        """Only the first character counts, case-sensitive; anything else rejects."""
        return {'w': cls.WARN, 'i': cls.IGNORE, 'a': cls.ALLOW}.get((value or 'e')[:1], cls.ERROR)


def atoi(text: str) -> int:
    """Leading integer of `text` in the manner of C's atoi(), 0 if there is none."""
    text = text.lstrip(' \t\n\r\f\v')
    sign, index = 1, 0
    if text[:1] in ('-', '+'):
        sign, index = (-1 if text[0] == '-' else 1), 1
    digits = ''
    while index < len(text) and text[index] in '0123456789':
        digits += text[index]
        index += 1
    return sign * int(digits) if digits else 0


@dataclass(frozen=True)
class StartupConfig:
    long_options: LongOptionPolicy = LongOptionPolicy.ERROR
    binmode: bool = False
    initial_binmode: int | None = None
    track_arrays: bool = False

    @classmethod
    def from_environ(cls, environ=None, *, binmode: bool | None = None) -> "StartupConfig":
        env = os.environ if environ is None else environ
        if binmode is None:
            binmode = sys.platform in ('win32', 'cygwin')
        initial = env.get('AWKFL_BINMODE')
        return cls(long_options=LongOptionPolicy.from_environ(env.get('AWKFL_LONG_OPTIONS')),
                   binmode=binmode,
                   initial_binmode=atoi(initial) if binmode and initial is not None else None,
                   track_arrays=bool(env.get('AWKFL_NO_LEAKS')))
