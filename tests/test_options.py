## awkfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import io

import pytest

from awkfl.types import Cell, FieldSeparator
from awkfl.config import StartupConfig, LongOptionPolicy
from awkfl.errors import AwkError, AwkExit, AwkOptionError, AwkMissingArgument, AwkConflictError, AwkAssignmentError, AwkRegexError
from awkfl.runtime import Runtime, SPRINTF_LIMIT
from awkfl.startup import initialize, display_name


def _runtime(**config) -> Runtime:
    return Runtime(StartupConfig(**config), stdout=io.StringIO(), stderr=io.StringIO())


def run(*args, env=None, **config) -> Runtime:
    runtime = _runtime(**config)
    initialize(['awkfl', *args], runtime, environ=env or {})
    return runtime


def fail(*args, exc=AwkError, **config) -> tuple[Runtime, Exception]:
    runtime = _runtime(**config)
    with pytest.raises(exc) as info:
        initialize(['awkfl', *args], runtime, environ={})
    return runtime, info.value


def argv_of(runtime) -> dict:
    return {k: v.value for k, v in runtime.symbols['ARGV'].items()}


# Program files and operands ─────────────────────────────────────────────────────────────────
def test_multiple_program_files_and_operands():
    runtime = run('-f', 'a.awk', '-f', 'b.awk', 'x', 'y')
    assert runtime.program_files.primary == 'a.awk'
    assert runtime.program_files.extra == ('b.awk',)
    assert argv_of(runtime) == {0: 'awkfl', 1: 'x', 2: 'y'}
    assert runtime.symbols['ARGC'] == Cell.double(3)
    assert runtime.program_text is None
    assert runtime.scanning_started


def test_argv_typing():
    runtime = run('{ print }', '42', 'file')
    argv = runtime.symbols['ARGV']
    assert argv[0].type == Cell.STRING
    assert argv[1] == Cell.maybe_numeric('42')
    assert argv[2] == Cell.maybe_numeric('file')


def test_program_on_command_line():
    runtime = run('BEGIN { print 1 }', 'in.txt')
    assert runtime.program_text == 'BEGIN { print 1 }'
    assert not runtime.program_files
    assert argv_of(runtime) == {0: 'awkfl', 1: 'in.txt'}


def test_glued_program_file():
    runtime = run('-fprog.awk', '-f', 'lib.awk')
    assert list(runtime.program_files) == ['prog.awk', 'lib.awk']
    assert argv_of(runtime) == {0: 'awkfl'}


def test_display_name_strips_directories():
    assert display_name('/usr/local/bin/mawk') == 'mawk'
    assert display_name('awk') == 'awk'
    runtime = _runtime()
    initialize(['/opt/bin/awk', 'BEGIN{}'], runtime, environ={})
    assert runtime.symbols['ARGV'][0] == Cell.string('awk')
    assert runtime.diagnostics.progname == 'awk'


def test_environ_is_seeded():
    runtime = run('BEGIN{}', env={'HOME': '/h', 'N': '5'})
    environ = runtime.symbols['ENVIRON']
    assert environ['N'] == Cell.maybe_numeric('5')
    assert set(environ) == {'HOME', 'N'}


def test_builtin_variables_exist():
    runtime = run('BEGIN{}')
    assert runtime.symbols['FS'] == Cell.string(' ')
    assert runtime.symbols['NR'] == Cell.double(0)


# Termination without a program ──────────────────────────────────────────────────────────────
def test_no_arguments_prints_usage():
    runtime = _runtime()
    with pytest.raises(AwkExit) as info:
        initialize(['awkfl'], runtime, environ={})
    assert info.value.status == 0
    assert runtime.stderr.getvalue().startswith('Usage: awkfl')


def test_options_without_program_exit_cleanly():
    _, exc = fail('-v', 'x=1', exc=AwkExit)
    assert exc.status == 0


def test_lone_dash_without_program_file():
    _, exc = fail('-', 'x', exc=AwkExit)
    assert exc.status == 0


def test_lone_dash_with_program_file_is_an_operand():
    runtime = run('-f', 'p.awk', '-', 'x')
    assert argv_of(runtime) == {0: 'awkfl', 1: '-', 2: 'x'}


def test_double_dash_ends_options():
    runtime = run('--', '-x', 'y')
    assert runtime.program_text == '-x'
    assert argv_of(runtime) == {0: 'awkfl', 1: 'y'}

    runtime = run('-f', 'p.awk', '--', '-v')
    assert argv_of(runtime) == {0: 'awkfl', 1: '-v'}

    _, exc = fail('--', exc=AwkExit)
    assert exc.status == 0


# Fatal option errors ────────────────────────────────────────────────────────────────────────
@pytest.mark.parametrize("letter", ['W', 'F', 'v', 'f'])
def test_missing_value_at_end(letter):
    _, exc = fail(f'-{letter}', exc=AwkMissingArgument)
    assert str(exc) == f"option -{letter} lacks argument"
    assert exc.status == 2


def test_unknown_short_option():
    _, exc = fail('-x', exc=AwkOptionError)
    assert str(exc) == "not an option: -x"
    _, exc = fail('-q', 'BEGIN{}', exc=AwkOptionError)
    assert str(exc) == "not an option: -q"
    assert exc.status == 2


def test_improper_assignment():
    _, exc = fail('-v', 'bad', exc=AwkAssignmentError)
    assert "-v bad" in str(exc)
    assert exc.status == 2


# -v and -F ──────────────────────────────────────────────────────────────────────────────────
def test_variable_assignment():
    runtime = run('-v', 'x=1', '-vname=a\\tb', 'BEGIN{}')
    assert runtime.symbols['x'] == Cell.maybe_numeric('1')
    assert runtime.symbols['name'] == Cell.maybe_numeric('a\tb')


def test_field_separator():
    runtime = run('-F', '\\t', 'BEGIN{}')
    assert runtime.symbols['FS'] == Cell.string('\t')
    assert runtime.field_separator == FieldSeparator(FieldSeparator.CHAR, '\t')

    runtime = run('-F:', 'BEGIN{}')
    assert runtime.symbols['FS'] == Cell.string(':')


@pytest.mark.parametrize('separator', ['[', '|', '(', '.'])
def test_single_metacharacter_separator_is_literal(separator):
    runtime = run('-F', separator, 'BEGIN{}')
    assert runtime.symbols['FS'] == Cell.string(separator)
    assert runtime.field_separator.kind == FieldSeparator.CHAR
    assert runtime.program_text == 'BEGIN{}'


def test_separator_assigned_with_v_is_literal_too():
    runtime = run('-v', 'FS=(', 'BEGIN{}')
    assert runtime.symbols['FS'] == Cell.maybe_numeric('(')
    assert runtime.field_separator.kind == FieldSeparator.CHAR


def test_invalid_separator_regex_is_fatal():
    runtime, exc = fail('-F', '(a', 'BEGIN{}', exc=AwkRegexError)
    assert exc.status == 2
    assert str(exc).startswith('regular expression compile failed')
    assert runtime.program_text is None


# -W options ─────────────────────────────────────────────────────────────────────────────────
def test_random_seed_before_scanning():
    runtime = run('-W', 'random=42', 'BEGIN{print 1}')
    assert runtime.random_seed == 42.0
    assert runtime.program_text == 'BEGIN{print 1}'
    assert runtime.stderr.getvalue() == ''


def test_grouped_values():
    runtime = run('-Wrandom=7,sprintf=20000,dump', 'BEGIN{}')
    assert runtime.random_seed == 7.0
    assert runtime.sprintf_size == 20000
    assert runtime.dump_code


def test_sprintf_buffer_never_shrinks():
    runtime = run('-W', 'sprintf=10', 'BEGIN{}')
    assert runtime.sprintf_size == SPRINTF_LIMIT


def test_flags_and_abbreviations():
    runtime = run('-W', 'Interactive,POSIX,d', 'BEGIN{}')
    assert runtime.interactive
    assert runtime.posix_space
    assert runtime.dump_code


def test_version_continues_scanning():
    runtime = run('-W', 'version', '-v', 'x=1', 'BEGIN{}')
    assert runtime.stdout.getvalue().startswith('awkfl ')
    assert runtime.symbols['x'] == Cell.maybe_numeric('1')


@pytest.mark.parametrize("name", ['help', 'usage', 'u', 'HELP'])
def test_help_and_usage_exit_zero(name):
    runtime, exc = fail('-W', name, 'BEGIN{}', exc=AwkExit)
    assert exc.status == 0
    assert 'Usage: awkfl' in runtime.stderr.getvalue()
    assert '-W binmode' not in runtime.stderr.getvalue()


def test_vacuous_option_is_not_fatal():
    runtime = run('-W', 'bogus', 'BEGIN{}')
    assert runtime.diagnostics.messages == ['vacuous option: -W bogus']
    assert runtime.stderr.getvalue() == 'awkfl: vacuous option: -W bogus\n'
    assert runtime.program_text == 'BEGIN{}'


def test_abbreviations_fold_ascii_case_only():
    runtime = run('-W', 'INTER', 'BEGIN{}')
    assert runtime.interactive
    runtime = run('-W', '\u0131nteractive', 'BEGIN{}')
    assert runtime.diagnostics.messages == ['vacuous option: -W \u0131nteractive']
    assert not runtime.interactive


def test_unexpected_value_is_discarded():
    runtime = run('-W', 'dump=1,posix_space', 'BEGIN{}')
    assert runtime.diagnostics.messages == ['unexpected option value dump=1']
    assert runtime.dump_code and runtime.posix_space


def test_empty_segments_are_skipped():
    runtime = run('-W', ',,dump,,', 'BEGIN{}')
    assert runtime.dump_code
    assert runtime.diagnostics.messages == []


@pytest.mark.parametrize("group", ['random', 'random=', 'random=,dump', 'sprintf'])
def test_missing_value_for_w_option(group):
    _, exc = fail('-W', group, 'BEGIN{}', exc=AwkMissingArgument)
    assert str(exc).startswith("missing value for -W ")
    assert exc.status == 2


def test_non_numeric_value_reads_as_zero():
    runtime = run('-W', 'random=abc', 'BEGIN{}')
    assert runtime.random_seed == 0.0


def test_binmode_only_when_supported():
    runtime = run('-W', 'binmode=3', 'BEGIN{}', binmode=True)
    assert runtime.binmode == 3

    runtime = run('-W', 'binmode=3', 'BEGIN{}')
    assert runtime.binmode == 0
    assert runtime.diagnostics.messages[0] == 'vacuous option: -W binmode=3'


def test_initial_binmode_from_config():
    runtime = run('BEGIN{}', binmode=True, initial_binmode=2)
    assert runtime.binmode == 2


# -W exec ────────────────────────────────────────────────────────────────────────────────────
def test_exec_takes_next_argument_and_stops_options():
    runtime = run('-W', 'exec', 'p.awk', 'a', '-v')
    assert runtime.program_files.primary == 'p.awk'
    assert argv_of(runtime) == {0: 'awkfl', 1: 'a', 2: '-v'}


def test_exec_with_value():
    runtime = run('-Wexec=p.awk', 'a')
    assert runtime.program_files.primary == 'p.awk'
    assert argv_of(runtime) == {0: 'awkfl', 1: 'a'}


def test_exec_after_file_is_a_conflict():
    _, exc = fail('-f', 'a.awk', '-W', 'exec', 'b.awk', exc=AwkConflictError)
    assert str(exc) == "-W exec is incompatible with -f"
    assert exc.status == 2


def test_exec_without_file_means_no_program():
    _, exc = fail('-Wexec', exc=AwkExit)
    assert exc.status == 0


# Long options ───────────────────────────────────────────────────────────────────────────────
def test_long_option_rejected_by_default():
    _, exc = fail('--foo', 'BEGIN{}', exc=AwkOptionError)
    assert str(exc) == "not an option: --foo"
    assert exc.status == 2


def test_legacy_long_option_gets_softer_message_but_fails():
    _, exc = fail('--posix', 'BEGIN{}', exc=AwkOptionError)
    assert str(exc) == "option not supported: --posix"
    assert exc.status == 2


def test_long_option_warn_and_ignore():
    runtime = run('--foo', 'BEGIN{}', long_options=LongOptionPolicy.WARN)
    assert runtime.diagnostics.messages == ['ignored option: --foo']
    assert runtime.program_text == 'BEGIN{}'

    runtime = run('--foo', '--bar', 'BEGIN{}', long_options=LongOptionPolicy.IGNORE)
    assert runtime.diagnostics.messages == []
    assert runtime.program_text == 'BEGIN{}'


@pytest.mark.parametrize('name', ['--posix_space', '--random=5', '--dump', '--bogus'])
def test_allowed_long_option_is_not_a_w_keyword(name):
    runtime, exc = fail(name, 'BEGIN{}', exc=AwkOptionError, long_options=LongOptionPolicy.ALLOW)
    assert str(exc) == f"not an option: {name}"
    assert exc.status == 2
    assert not runtime.posix_space and not runtime.dump_code


def test_allowed_legacy_long_option_ends_options():
    runtime = run('--lint', '{ print }', 'x', long_options=LongOptionPolicy.ALLOW)
    assert runtime.diagnostics.messages == ['option not supported: --lint']
    assert runtime.program_text == '{ print }'
    assert argv_of(runtime) == {0: 'awkfl', 1: 'x'}

    runtime = run('--posix', '-v', 'x=1', long_options=LongOptionPolicy.ALLOW)
    assert runtime.program_text == '-v'
    assert 'x' not in runtime.symbols
    assert argv_of(runtime) == {0: 'awkfl', 1: 'x=1'}
