"""
Command-line interface for the lolc front end.

Usage: lolc --path main.lol [--format tree|source] [--color/--no-color] [-v]

Prints the parsed tree (or the re-printed source) on success. On failure the
diagnostic, with the source snippet when the file is readable, goes to
stderr and the exit status is 1.
"""

import logging
import sys
from pathlib import Path

import click
import colorama

from . import __version__
from .compile import compile_file
from .config import DiagnosticOptions, color_from_environment
from .diagnostics import render_error
from .errors import LocalizedError
from .parser.ast_nodes import dump
from .printer import to_source


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-p", "--path", "path", required=True,
              type=click.Path(dir_okay=False, path_type=Path),
              help="The path to the file to read")
@click.option("--format", "output_format", type=click.Choice(["tree", "source"]),
              default="tree", show_default=True,
              help="Print the AST as a located tree, or as re-printed source")
@click.option("--color/--no-color", default=None, envvar="LOLC_COLOR",
              help="Colour diagnostics (default: when stderr is a terminal)")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output")
@click.version_option(__version__, prog_name="lolc")
def main(path: Path, output_format: str, color, verbose: bool):
    """Parse a lolc source file and print its syntax tree."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="[lolc] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )

    if color is None:
        color = color_from_environment(sys.stderr)
    if color:
        colorama.just_fix_windows_console()

    try:
        module = compile_file(path)
    except LocalizedError as error:
        click.echo(render_error(error, DiagnosticOptions(color=color)), err=True, color=color)
        sys.exit(1)

    if output_format == "source":
        click.echo(to_source(module), nl=False)
    else:
        click.echo(dump(module))


if __name__ == "__main__":
    main()
