## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# awkfl — Materializing ARGV, ARGC, ENVIRON and `-v` assignments in the global namespace.
#

from typing import Iterable, Mapping

from .types import Cell, AwkArray, SymbolTable
from .errors import AwkAssignmentError, AwkParseError
from .leaks import ArrayRegistry
from .parser import parse_assignment


RESERVED_NAMES = frozenset((
    # keywords
    'BEGIN', 'END', 'function', 'func', 'getline', 'print', 'printf', 'if', 'else', 'while', 'for',
    'do', 'break', 'continue', 'next', 'nextfile', 'exit', 'return', 'delete', 'in',
    # builtin functions
    'length', 'substr', 'index', 'split', 'sub', 'gsub', 'match', 'sprintf', 'sin', 'cos', 'atan2',
    'exp', 'log', 'int', 'sqrt', 'rand', 'srand', 'tolower', 'toupper', 'system', 'close', 'fflush',
))


def _new_array(registry: ArrayRegistry | None) -> AwkArray:
    array = AwkArray()
    if registry is not None:
        registry.register(array)
    return array


def set_argv(symbols: SymbolTable, progname: str, args: Iterable[str],
             registry: ArrayRegistry | None = None) -> AwkArray:
    """ARGV[0] is the fixed program name, the remaining arguments may later read as numbers."""
    argv = symbols.insert('ARGV', _new_array(registry))
    argv[0] = Cell.string(progname)
    index = 1
    for arg in args:
        argv[index] = Cell.maybe_numeric(arg)
        index += 1
    symbols.insert('ARGC', Cell.double(index))
    return argv


def load_environ(symbols: SymbolTable, environ: Mapping[str, str] | Iterable[str],
                 registry: ArrayRegistry | None = None) -> AwkArray:
    """Mirror the process environment; accepts a mapping or raw `KEY=VALUE` entries."""
    env = symbols.insert('ENVIRON', _new_array(registry))
    entries = (f"{k}={v}" for k, v in environ.items()) if isinstance(environ, Mapping) else environ
    for entry in entries:
        key, sep, value = entry.partition('=')
        if not sep:
            continue
        env[key] = Cell.maybe_numeric(value)
    return env


def cmdline_assign(runtime, text: str) -> bool:
    """Perform a `-v name=value` assignment; False if `text` is not shaped like one."""
    try:
        name, raw_value = parse_assignment(text)
    except AwkParseError:
        return False

    if name in RESERVED_NAMES or runtime.symbols.is_array(name):
        raise AwkAssignmentError(f"cannot command line assign to {name}\n\ttype clash or keyword", awk_option=text)

    value, _ = runtime.decode_escapes(raw_value)
    if name == 'FS':
        runtime.set_field_separator(value)
    runtime.symbols.insert(name, Cell.maybe_numeric(value))
    return True
