## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# awkfl — Command-line option processing, up to the point where the program text is known.
#

from .types import ProgramFiles
from .config import LongOptionPolicy, atoi
from .errors import Diagnostics, AwkExit, AwkOptionError, AwkMissingArgument, AwkConflictError, AwkAssignmentError
from .keywords import WOption, keyword_table, parse_w_opt, have_value, skip_value
from .seeding import set_argv, cmdline_assign


OPTIONS_WITH_VALUE = 'WFvf'

# Recognizable spellings from other awks; rejected with a softer message.
LEGACY_LONG_OPTIONS = ('--lint', '--lint-old', '--posix', '--re-interval', '--traditional')


def bad_option(arg: str):
    if arg in LEGACY_LONG_OPTIONS:
        raise AwkOptionError(f"option not supported: {arg}", awk_option=arg)
    raise AwkOptionError(f"not an option: {arg}", awk_option=arg)


def allow_long_option(arg: str, policy: LongOptionPolicy, diag: Diagnostics) -> bool:
    """Decide whether a `--name` token is processed (True) or skipped (False)."""
    if policy is LongOptionPolicy.ALLOW:
        return True
    if policy is LongOptionPolicy.IGNORE:
        return False
    if policy is LongOptionPolicy.WARN:
        diag.warn(f"ignored option: {arg}")
        return False
    bad_option(arg)


def _option_value(opt_arg: str, pos: int, name: str) -> tuple[int, int]:
    if not have_value(opt_arg, pos):
        raise AwkMissingArgument(f"missing value for -W {name}", awk_option=name)
    return atoi(opt_arg[pos+1:]), skip_value(opt_arg, pos)


def apply_w_options(opt_arg: str, argv: list[str], next_arg: int, runtime, table) -> int | None:
    """Run every option of a comma-joined `-W` group in order.

    Returns None to keep scanning, or the argument index where the program's
    operands start once `exec` has named the program file.
    """
    diag = runtime.diagnostics
    pos = 0
    while pos < len(opt_arg):
        code, start, pos = parse_w_opt(opt_arg, pos, table, diag)
        segment = opt_arg[start:skip_value(opt_arg, start)]

        if start == pos:
            pass
        elif code == WOption.VERSION:
            runtime.print_version()
        elif code == WOption.BINMODE:
            mode, pos = _option_value(opt_arg, pos, 'binmode')
            runtime.set_binmode(mode)
        elif code == WOption.DUMP:
            runtime.dump_code = True
        elif code == WOption.EXEC:
            if runtime.program_files:
                raise AwkConflictError("-W exec is incompatible with -f", awk_option=segment)
            if have_value(opt_arg, pos):
                runtime.program_files.add(opt_arg[pos+1:])
                return next_arg
            if next_arg >= len(argv):
                raise AwkExit(0)
            runtime.program_files.add(argv[next_arg])
            return next_arg + 1
        elif code == WOption.INTERACTIVE:
            runtime.set_interactive()
        elif code == WOption.POSIX_SPACE:
            runtime.posix_space = True
        elif code == WOption.RANDOM:
            seed, pos = _option_value(opt_arg, pos, 'random')
            runtime.seed_random(seed)
        elif code == WOption.SPRINTF:
            size, pos = _option_value(opt_arg, pos, 'sprintf')
            runtime.resize_format_buffer(size)
        elif code in (WOption.HELP, WOption.USAGE):
            runtime.print_usage()
            raise AwkExit(0)
        else:
            diag.warn(f"vacuous option: -W {segment}")

        if pos < len(opt_arg) and opt_arg[pos] == '=':
            diag.warn(f"unexpected option value {segment}")
            pos = skip_value(opt_arg, pos)
    return None


def process_cmdline(argv: list[str], runtime) -> int:
    """Consume options from `argv`, seed ARGV and start scanning; returns the final cursor."""
    config, diag = runtime.config, runtime.diagnostics
    table = keyword_table(binmode=config.binmode)
    files: ProgramFiles = runtime.program_files

    if len(argv) <= 1:
        runtime.print_usage()
        raise AwkExit(0)

    i = 1
    while i < len(argv) and argv[i].startswith('-'):
        arg = argv[i]
        if arg == '-':
            if not files:
                raise AwkExit(0)
            break

        if len(arg) > 2 and arg.startswith('--'):
            if not allow_long_option(arg, config.long_options, diag):
                i += 1
                continue

        if len(arg) == 2:
            if i == len(argv) - 1 and arg[1] != '-':
                if arg[1] in OPTIONS_WITH_VALUE:
                    raise AwkMissingArgument(f"option {arg} lacks argument", awk_option=arg)
                bad_option(arg)
            opt_arg = argv[i+1] if i + 1 < len(argv) else ''
            next_arg = i + 2
        else:
            opt_arg = arg[2:]
            next_arg = i + 1

        match arg[1]:
            case 'W':
                if (stop := apply_w_options(opt_arg, argv, next_arg, runtime, table)) is not None:
                    i = stop
                    break
            case 'v':
                if not cmdline_assign(runtime, opt_arg):
                    raise AwkAssignmentError(f"improper assignment: -v {opt_arg}", awk_option=opt_arg)
            case 'F':
                separator, _ = runtime.decode_escapes(opt_arg)
                runtime.set_field_separator(separator)
            case '-':
                # An allowed long option: legacy spellings end the options, others are fatal.
                if len(arg) > 2:
                    if arg not in LEGACY_LONG_OPTIONS:
                        bad_option(arg)
                    diag.warn(f"option not supported: {arg}")
                i += 1
                break
            case 'f':
                files.add(opt_arg)
            case _:
                bad_option(arg)
        i = next_arg

    files.seal()
    if files:
        set_argv(runtime.symbols, runtime.progname, argv[i:], runtime.registry)
        runtime.begin_scanning(None)
    else:
        if i >= len(argv):
            raise AwkExit(0)
        set_argv(runtime.symbols, runtime.progname, argv[i+1:], runtime.registry)
        runtime.begin_scanning(argv[i])
    return i
