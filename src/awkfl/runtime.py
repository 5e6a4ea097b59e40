## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys
import random

from .types import Cell, SymbolTable, ProgramFiles, FieldSeparator
from .errors import Diagnostics
from .config import StartupConfig
from .leaks import ArrayRegistry
from .parser import decode_escapes


VERSION = '0.1.0'
SPRINTF_LIMIT = 8192


class Runtime:
    """Startup state of one interpreter, plus the hooks its collaborators provide.

    The scanner, compiler and execution engine live elsewhere; they receive what
    option processing decided through the methods in the Collaborators section.
    """

    def __init__(self, config: StartupConfig | None = None, stdout=None, stderr=None):
        self.config = config or StartupConfig()
        self.stdout = stdout
        self.stderr = stderr
        self.registry = ArrayRegistry() if self.config.track_arrays else None

        self.symbols = SymbolTable()
        self.progname = 'awkfl'
        self.diagnostics = Diagnostics(self.progname, file=stderr)
        self.program_files = ProgramFiles()
        self.program_text: str | None = None
        self.scanning_started = False

        self.field_separator = FieldSeparator.from_text(' ')
        self.random = random.Random()
        self.random_seed: float | None = None
        self.sprintf_size = SPRINTF_LIMIT
        self.binmode = 0
        self.dump_code = False
        self.interactive = False
        self.posix_space = False

    # Builtin variables ───────────────────────────────────────────────────────────────────────
    def init_builtin_vars(self) -> None:
        for name, cell in (('FS', Cell.string(' ')), ('OFS', Cell.string(' ')), ('ORS', Cell.string('\n')),
                           ('RS', Cell.string('\n')), ('SUBSEP', Cell.string('\x1c')),
                           ('CONVFMT', Cell.string('%.6g')), ('OFMT', Cell.string('%.6g')),
                           ('NR', Cell.double(0)), ('FNR', Cell.double(0)), ('NF', Cell.double(0)),
                           ('RSTART', Cell.double(0)), ('RLENGTH', Cell.double(-1)),
                           ('FILENAME', Cell.string(''))):
            self.symbols.insert(name, cell)

    # Collaborators ───────────────────────────────────────────────────────────────────────────
    def decode_escapes(self, text: str) -> tuple[str, int]:
        return decode_escapes(text)

    def set_field_separator(self, text: str) -> None:
        self.symbols.insert('FS', Cell.string(text))
        self.field_separator = FieldSeparator.from_text(text)

    def seed_random(self, seed) -> None:
        self.random_seed = float(seed)
        self.random.seed(self.random_seed)

    def resize_format_buffer(self, byte_count: int) -> None:
        if byte_count > self.sprintf_size:
            self.sprintf_size = byte_count

    def set_binmode(self, mode: int) -> None:
        self.binmode = mode

    def set_interactive(self) -> None:
        self.interactive = True

    def set_program_source(self, text: str | None) -> None:
        self.program_text = text

    def begin_scanning(self, source: str | None) -> None:
        """Hand the program over to the scanner: command-line text, or None for the files."""
        self.set_program_source(source)
        self.scanning_started = True

    def read_program(self) -> str:
        if self.program_text is not None:
            return self.program_text
        chunks = []
        for filename in self.program_files:
            if filename == '-':
                chunks.append(sys.stdin.read())
            else:
                with open(filename, encoding='utf-8') as f:
                    chunks.append(f.read())
        return '\n'.join(chunks)

    # Output ──────────────────────────────────────────────────────────────────────────────────
    def print_version(self) -> None:
        out = self.stdout or sys.stdout
        print(f"awkfl {VERSION}", file=out)
        print(f"compiled limits:\nsprintf buffer      {self.sprintf_size}", file=out)

    def print_usage(self) -> None:
        lines = USAGE.replace('{progname}', self.progname).splitlines(keepends=True)
        if not self.config.binmode:
            lines = [line for line in lines if '-W binmode' not in line]
        print(''.join(lines), end='', file=self.stderr or sys.stderr)

    def release_arrays(self) -> int:
        return self.registry.release_all() if self.registry is not None else 0


USAGE = """\
Usage: {progname} [Options] [Program] [file ...]

Program:
    The -f option value is the name of a file containing program text.
    If no -f option is given, a "--" ends option processing; the following
    parameters are the program text.

Options:
    -f program-file  Program  text is read from file instead of from the
                     command-line.  Multiple -f options are accepted.
    -F value         sets the field separator, FS, to value.
    -v var=value     assigns value to program variable var.
    --               unambiguous end of options.

    Implementation-specific options are prefixed with "-W".  They can be
    abbreviated:

    -W version       show version information.
    -W binmode=number set binary mode (Windows only).
    -W dump          show assembler-like listing of program and exit.
    -W help          show this message and exit.
    -W interactive   set unbuffered output, line-buffered input.
    -W exec file     use file as program as well as last option.
    -W random=number set initial random seed.
    -W sprintf=number adjust size of sprintf buffer.
    -W posix_space   do not consider "\\n" a space.
    -W usage         show this message and exit.
"""
