# =============================================================================
# tlafmt - TLA+ Specification Formatter
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2025 Michael Gardner, A Bit of Help, Inc.
# See LICENSE file in the project root.
# =============================================================================

"""
Command-line interface for tlafmt.

Exit codes:
    0  success
    1  read, parse or formatting error
    2  usage or configuration error
    3  --check found differences
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.text import Text
from typing_extensions import Annotated

from returns.io import IOFailure
from returns.result import Failure, Result, safe
from returns.unsafe import unsafe_perform_io

from . import __version__
from .errors import ConfigError, FileEither
from .file_ops import read_stdin, read_text, replace_atomic
from .formatter import check_text, format_text
from .logging_setup import setup_logging
from .options import FormatOptions


EXIT_OK = 0
EXIT_ERROR = 1
EXIT_USAGE = 2
EXIT_NEEDS_FORMATTING = 3


app = typer.Typer(
    name="tlafmt",
    help="Formatter of TLA+ specs.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    pretty_exceptions_enable=False,
)


def version_callback(value: Optional[bool]) -> None:
    """Print the version and exit."""
    if value:
        typer.echo(f"tlafmt {__version__}")
        raise typer.Exit()


def _fail(message: str, code: int) -> typer.Exit:
    typer.echo(message, err=True)
    return typer.Exit(code)


def _load_options(path: Optional[Path]) -> Result[FormatOptions, ConfigError]:
    """Load formatter options, mapping validation and read failures to ConfigError."""
    @safe((ValueError, OSError))
    def _load() -> FormatOptions:
        return FormatOptions.load_from_path_or_default(path)

    return _load().alt(
        lambda exc: ConfigError(message=f"Invalid configuration: {exc}", config_file=path)
    )


def _read_input(file: Optional[Path]) -> FileEither:
    """Read FILE, or stdin when no file is given."""
    if file is None:
        return read_stdin()
    return read_text(file)


def _terminate(text: str) -> str:
    """Ensure non-empty output ends with a newline."""
    if text and not text.endswith("\n"):
        return text + "\n"
    return text


def _print_diff(lines: List[str]) -> None:
    """Print diff lines to stderr, coloured only when stderr is a terminal."""
    console = Console(stderr=True, soft_wrap=True, highlight=False)
    for line in lines:
        if line.startswith("- "):
            console.print(Text(line, style="red"))
        elif line.startswith("+ "):
            console.print(Text(line, style="green"))
        else:
            console.print(Text(line))


@app.command()
def main_command(
    file: Annotated[Optional[Path], typer.Argument(help="Path to the TLA+ file to format")] = None,
    check: Annotated[bool, typer.Option("--check", "-c", help="Print a diff and exit with code 3 if the input needs formatting")] = False,
    in_place: Annotated[bool, typer.Option("--in-place", "-i", help="Overwrite the input file instead of printing to stdout")] = False,
    stdin: Annotated[bool, typer.Option("--stdin", help="Read the input from stdin")] = False,
    config: Annotated[Optional[Path], typer.Option("--config", help="Path to a JSON options file (default: ./tlafmt.json if present)")] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    version: Annotated[Optional[bool], typer.Option("--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit")] = None,
) -> None:
    """Format a TLA+ specification."""
    setup_logging(verbose)

    if stdin == (file is not None):
        raise _fail("Error: provide exactly one of FILE or --stdin", EXIT_USAGE)
    if in_place and (check or stdin):
        raise _fail("Error: --in-place cannot be combined with --check or --stdin", EXIT_USAGE)

    options_result = _load_options(config)
    if isinstance(options_result, Failure):
        raise _fail(f"Configuration error: {options_result.failure().message}", EXIT_USAGE)
    options = options_result.unwrap()

    input_result = _read_input(file)
    if isinstance(input_result, IOFailure):
        raise _fail(f"Error: {unsafe_perform_io(input_result.failure()).message}", EXIT_ERROR)
    text = unsafe_perform_io(input_result.unwrap())

    if check:
        check_result = check_text(text, options, file)
        if isinstance(check_result, Failure):
            raise _fail(f"Error: {check_result.failure().message}", EXIT_ERROR)

        diff = check_result.unwrap()
        if not diff:
            return
        _print_diff(diff)
        raise _fail("input file needs formatting", EXIT_NEEDS_FORMATTING)

    format_result = format_text(text, options, file)
    if isinstance(format_result, Failure):
        raise _fail(f"Error: {format_result.failure().message}", EXIT_ERROR)
    output = _terminate(format_result.unwrap())

    if in_place and file is not None:
        write_result = replace_atomic(file, output)
        if isinstance(write_result, IOFailure):
            raise _fail(f"Error: {unsafe_perform_io(write_result.failure()).message}", EXIT_ERROR)
        return

    typer.echo(output, nl=False)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
