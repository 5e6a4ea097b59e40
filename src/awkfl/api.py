## awkfl — Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

from dataclasses import replace

from .types import Cell, AwkArray, SymbolTable, ProgramFiles
from .errors import *
from .config import StartupConfig, LongOptionPolicy
from .runtime import Runtime
from .startup import initialize


def parse_argv(argv: list[str], environ: dict | None = None, **config) -> Runtime:
    """Run startup on `argv` with an explicit environment; `config` overrides StartupConfig fields."""
    env = {} if environ is None else environ
    base = StartupConfig.from_environ(env)
    runtime = Runtime(replace(base, **config))
    return initialize(argv, runtime, environ=env)
