"""
CLI Error Handling
==================

Maps exceptions to diagnostics and exit codes for the command-line tools.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

from rcc.errors import LexError


USAGE = "Usage: rcc [source-file]"


class ExitCode(IntEnum):
    """Exit codes for the rcc command."""
    SUCCESS = 0
    USAGE_ERROR = 1      # Wrong number of arguments
    LEX_ERROR = 2        # Source text could not be tokenized
    IO_ERROR = 3         # Missing or unreadable source file
    INTERNAL_ERROR = 4   # Unexpected internal error


def usage_error(message: str | None = None) -> NoReturn:
    """Print the usage line (and the reason, if any) to stderr and exit."""
    if message:
        click.echo(f"Error: {message}", err=True)
    click.echo(USAGE, err=True)
    sys.exit(ExitCode.USAGE_ERROR)


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Report an exception raised while running a command and exit.

    Lexer errors are already formatted with location and "error:" prefix,
    so they are printed as-is.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    if isinstance(error, LexError):
        click.echo(str(error), err=True)
        sys.exit(ExitCode.LEX_ERROR)

    elif isinstance(error, (OSError, UnicodeDecodeError)):
        # Missing, unreadable or non-UTF-8 input files
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.IO_ERROR)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
