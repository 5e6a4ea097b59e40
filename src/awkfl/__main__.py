## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘
#
# awkfl — Command-line front end of an AWK dialect.
#

import sys

import click

from .config import StartupConfig
from .errors import AwkError, AwkExit
from .formatting import show_namespace
from .runtime import Runtime
from .startup import initialize


class AwkRunner:
    def __init__(self, config: StartupConfig):
        self.runtime = Runtime(config)

    def _set_stdio(self) -> None:
        if self.runtime.interactive:
            if (reconfigure := getattr(sys.stdout, 'reconfigure', None)) is not None:
                reconfigure(write_through=True)
            if (reconfigure := getattr(sys.stdin, 'reconfigure', None)) is not None:
                reconfigure(line_buffering=True)

    def _dump(self) -> int:
        try:
            self.runtime.read_program()
        except OSError as exc:
            self.runtime.diagnostics.warn(f"couldn't open file {exc.filename}")
            return 2
        show_namespace(self.runtime, names=('ARGC', 'ARGV', 'FS'))
        return 0

    def start(self, argv: list[str]) -> int:
        try:
            initialize(argv, self.runtime)
        except AwkExit as exc:
            return exc.status
        except AwkError as exc:
            self.runtime.diagnostics.fatal(exc)
            return exc.status

        self._set_stdio()
        if self.runtime.dump_code:
            return self._dump()
        return 0

    def finalize(self) -> None:
        self.runtime.release_arrays()


@click.command(context_settings={'ignore_unknown_options': True, 'allow_extra_args': True, 'help_option_names': []})
@click.argument('tokens', nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def cli(ctx: click.Context, tokens: tuple[str, ...]) -> None:
    runner = AwkRunner(StartupConfig.from_environ())
    try:
        status = runner.start([ctx.info_name or 'awkfl', *tokens])
    finally:
        runner.finalize()
    ctx.exit(status)


def main(argv: list[str] | None = None) -> None:
    a = list(sys.argv if argv is None else argv)
    prog = 'awkfl' if not a or a[0].endswith('__main__.py') else a[0]
    # Everything after the leading `--` reaches `tokens` verbatim, including later `--`.
    cli.main(args=['--', *a[1:]], prog_name=prog)


if __name__ == "__main__":
    main()
