## Copyright © 2025, Alex J. Champandard.  Licensed under AGPLv3; see LICENSE! ⚘

import sys

import lark


class AwkError(Exception):
    """Base class for all fatal startup errors; `status` is the process exit code."""
    status = 2

    def __init__(self, message: str = "", *, awk_option=None):
        super().__init__(message)
        self.awk_option: str = awk_option

class AwkOptionError(AwkError):
    pass

class AwkMissingArgument(AwkOptionError):
    pass

class AwkConflictError(AwkOptionError):
    pass

class AwkAssignmentError(AwkError, ValueError):
    pass

class AwkRegexError(AwkError):
    pass

class AwkParseError(AwkError, lark.exceptions.LarkError):
    def __init__(self, message, *, text=None, column=None):
        super().__init__(message)
        self.text = text
        self.column = column


class AwkExit(Exception):
    """Orderly termination before any program runs, e.g. no program or usage."""
    def __init__(self, status: int = 0):
        super().__init__(status)
        self.status = status


class Diagnostics:
    def __init__(self, progname: str = 'awkfl', file=None):
        self.progname = progname
        self.file = file
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)
        print(f"{self.progname}: {message}", file=self.file or sys.stderr)

    def fatal(self, exc: AwkError) -> None:
        self.warn(str(exc))
