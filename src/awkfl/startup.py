## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import os
from typing import Mapping

from .config import StartupConfig
from .runtime import Runtime
from .options import process_cmdline
from .seeding import load_environ


def display_name(argv0: str) -> str:
    return argv0.rpartition('/')[2] or 'awkfl'


def initialize(argv: list[str], runtime: Runtime | None = None, *,
               environ: Mapping[str, str] | None = None) -> Runtime:
    """Prepare `runtime` for execution: builtin variables, options, ARGV and ENVIRON.

    Raises `AwkError` for fatal command-line problems and `AwkExit` when there is
    nothing to run; the caller decides how to turn either into an exit status.
    """
    env = os.environ if environ is None else environ
    if runtime is None:
        runtime = Runtime(StartupConfig.from_environ(env))

    runtime.progname = runtime.diagnostics.progname = display_name(argv[0] if argv else '')
    runtime.init_builtin_vars()

    if runtime.config.initial_binmode is not None:
        runtime.set_binmode(runtime.config.initial_binmode)

    process_cmdline(list(argv), runtime)
    load_environ(runtime.symbols, env, runtime.registry)
    return runtime
