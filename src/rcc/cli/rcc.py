"""
rcc - Compiler Command-Line Interface
=====================================

Reads a C source file, runs the lexer over it and prints one token per
line. The exit status tells whether the file tokenized cleanly.

Usage Examples
--------------
Print the token stream:
    $ rcc hello.c
    Keyword(Int)
    Identifier("main")
    ...

With token locations:
    $ rcc --locations hello.c
    1:1 Keyword(Int)
    1:5 Identifier("main")
    ...

Debug logging:
    $ rcc -v hello.c
"""

import logging
from pathlib import Path

import click

from rcc import __version__
from rcc.cli.errors import handle_cli_exception, usage_error
from rcc.config import RccConfig
from rcc.lexer import Lexer, format_token


logger = logging.getLogger(__name__)


# =============================================================================
# CLI Definition
# =============================================================================

class RccCommand(click.Command):
    """Command that reports every invocation error with the rcc usage line."""

    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as e:
            usage_error(e.format_message())


@click.command(cls=RccCommand)
@click.argument("source_files", nargs=-1, metavar="SOURCE_FILE")
@click.option(
    "--locations",
    is_flag=True,
    help="Prefix each token with its line:column",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging, tracebacks)",
)
@click.version_option(version=__version__, prog_name="rcc")
def main(source_files: tuple[str, ...], locations: bool, verbose: bool) -> None:
    """
    Tokenize a C source file and print the tokens.

    SOURCE_FILE is the C source file (.c) to read. Exactly one is required.

    \b
    Examples:
        rcc hello.c                  # One token per line
        rcc --locations hello.c      # Tokens with line:column
    """
    if len(source_files) != 1:
        usage_error()

    config = RccConfig.from_env()
    config.configure_logging(verbose)

    input_file = Path(source_files[0])
    logger.debug(f"Tokenizing {input_file}")

    try:
        source = input_file.read_text(encoding="utf-8")
        lexer = Lexer(source, str(input_file))

        for spanned in lexer.spanned():
            line = format_token(spanned.token)
            if locations:
                line = f"{spanned.location.line}:{spanned.location.column} {line}"
            click.echo(line)

    except Exception as e:
        handle_cli_exception(e, verbose)


if __name__ == "__main__":
    main()
