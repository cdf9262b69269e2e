"""
sexpc - Compiler Command-Line Interface
=======================================

Command-line driver for the call-syntax compiler.

Usage Examples
--------------
Compile the built-in demo program:
    $ sexpc
    add(2, subtract(4, 2));

Compile a file to stdout or to a file:
    $ sexpc program.lisp
    $ sexpc program.lisp -o program.c

Compile a source string, or standard input:
    $ sexpc -e '(greet "hi")'
    $ echo '(a)' | sexpc -

Debugging:
    $ sexpc --tokens -e '(add 1 2)'
    $ sexpc --ast --transformed -e '(add 1 2)'
    $ sexpc -v program.lisp
"""

import logging
from pathlib import Path
from typing import Optional

import click

from sexpc import __version__
from sexpc.cli.errors import handle_cli_exception
from sexpc.compiler import DEMO_SOURCE, Compiler, CompilerOptions
from sexpc.traverser import ASTPrinter

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    required=False,
    type=click.Path(exists=True, dir_okay=False, allow_dash=True, path_type=Path),
)
@click.option(
    "-e", "--expr",
    default=None,
    help="Compile SOURCE given on the command line instead of a file",
)
@click.option(
    "-o", "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write output to this file (default: stdout)",
)
@click.option(
    "--tokens",
    is_flag=True,
    help="Print tokens and exit (for debugging)",
)
@click.option(
    "--ast",
    is_flag=True,
    help="Print AST and exit (for debugging)",
)
@click.option(
    "--transformed",
    is_flag=True,
    help="With --ast, print the transformed AST instead of the parsed one",
)
@click.option(
    "--drop-top-level-literals",
    is_flag=True,
    help="Drop literals outside any call instead of reporting an error",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="sexpc")
def main(
    input_file: Optional[Path],
    expr: Optional[str],
    output: Optional[Path],
    tokens: bool,
    ast: bool,
    transformed: bool,
    drop_top_level_literals: bool,
    verbose: bool,
) -> None:
    """
    Compile call-syntax source to C-style call statements.

    INPUT_FILE is the source file to compile ('-' for stdin). With no
    INPUT_FILE and no --expr, the built-in demo program is compiled.

    \b
    Examples:
        sexpc                          # Compile (add 2 (subtract 4 2))
        sexpc prog.lisp -o prog.c      # File to file
        sexpc -e '(greet "hi")'        # Compile a string
        sexpc --ast -e '(add 1 2)'     # Show the parse tree
    """
    setup_logging(verbose)

    try:
        source, filename = _read_source(input_file, expr)
        logger.debug(f"Compiling {filename}")

        options = CompilerOptions(
            filename=filename,
            drop_top_level_literals=drop_top_level_literals,
        )
        compiler = Compiler(options)

        # Token dump mode
        if tokens:
            for token in compiler.tokenize(source, filename):
                click.echo(repr(token))
            return

        # AST dump mode
        if ast:
            tree = compiler.parse(compiler.tokenize(source, filename), source, filename)
            if transformed:
                tree = compiler.transform(tree)
            click.echo(ASTPrinter().print(tree))
            return

        result = compiler.compile_source(source, filename)

        if output is None:
            click.echo(result.output, nl=False)
            return

        output.write_text(result.output, encoding="utf-8")
        click.echo(f"Compiled {filename} -> {output}")

    except Exception as e:
        handle_cli_exception(e, verbose)


def _read_source(input_file: Optional[Path], expr: Optional[str]) -> tuple[str, str]:
    """Return (source, filename) for the selected input."""
    if input_file is not None and expr is not None:
        raise click.BadParameter("give either INPUT_FILE or --expr, not both")

    if expr is not None:
        return expr, "<expr>"

    if input_file is None:
        return DEMO_SOURCE, "<demo>"

    if str(input_file) == "-":
        return click.get_text_stream("stdin").read(), "<stdin>"

    return input_file.read_text(encoding="utf-8"), str(input_file)


if __name__ == "__main__":
    main()
