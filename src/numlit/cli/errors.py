"""
CLI Error Handling
==================

Consistent error reporting and exit codes for the numlit commands.
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click


class ExitCode(IntEnum):
    """Exit codes of the numlit tool."""
    SUCCESS = 0
    VALUE_ERROR = 1      # Rejected literal, failed parse, arithmetic trap
    INVALID_ARGS = 2     # Invalid arguments or unknown type names
    INTERNAL_ERROR = 3   # Unexpected internal error


def handle_cli_exception(
    error: Exception,
    verbose: bool = False,
    error_type: str | None = None
) -> NoReturn:
    """
    Report an exception raised by a command and exit.

    Args:
        error: The exception that was raised
        verbose: If True, print full traceback for internal errors
        error_type: Optional prefix for the error message (e.g., "Conversion")

    Raises:
        SystemExit: Always exits with an appropriate exit code
    """
    from numlit.errors import LiteralSyntaxError, NumlitError, UnknownTypeError

    if isinstance(error, LiteralSyntaxError):
        # Already formatted with location, caret and "error:" prefix
        click.echo(str(error), err=True)
        sys.exit(ExitCode.VALUE_ERROR)

    elif isinstance(error, UnknownTypeError):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    elif isinstance(error, NumlitError):
        prefix = f"{error_type} error: " if error_type else "Error: "
        click.echo(f"{prefix}{error}", err=True)
        sys.exit(ExitCode.VALUE_ERROR)

    elif isinstance(error, click.BadParameter):
        click.echo(f"Error: {error}", err=True)
        sys.exit(ExitCode.INVALID_ARGS)

    else:
        click.echo(f"Internal error: {error}", err=True)
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
