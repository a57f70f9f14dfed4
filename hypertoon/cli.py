"""
Converts JSON files to the notation and back.
Output is written to stdout; pass ``-`` as the file to read from stdin.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import click
from .config import ConfigError, ToonConfig, build_config
from .decoder import decode
from .encoder import encode
from .exceptions import InvalidInputError
from .filesystem import get_max_file_size, read_source

__all__ = ["cli"]

STDIN_MARKER = "-"


def _resolve_config(filepath: str, **overrides: object) -> ToonConfig:
    search_path = Path.cwd() if filepath == STDIN_MARKER else Path(filepath).parent
    try:
        return build_config(search_path, **overrides)
    except ConfigError as error:
        raise click.BadParameter(str(error)) from error


def _read_input(filepath: str, config: ToonConfig) -> str:
    if filepath == STDIN_MARKER:
        return click.get_text_stream("stdin").read()

    try:
        max_file_size = get_max_file_size(default=config.max_file_size)
    except ValueError as error:
        raise click.ClickException(str(error)) from error

    try:
        return read_source(Path(filepath), max_file_size)
    except IOError as error:
        raise click.ClickException(str(error)) from error


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log decoding diagnostics to stderr")
def cli(verbose: bool = False):
    """
    Convert between JSON and the compact indentation-based notation.

    Examples:
        hypertoon encode data.json
        hypertoon decode data.toon --json-indent 4
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


@cli.command("encode")
@click.option("--indent-spaces", type=int, help="Spaces per nesting level")
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def encode_command(filepath: str, indent_spaces: int | None = None):
    """
    Encode a JSON document and print the notation.

    Args:
        filepath: JSON file to read, or ``-`` for stdin.
        indent_spaces: Override for the indentation width.

    Raises:
        click.BadParameter: If the configuration or overrides are invalid.
        click.ClickException: If the file cannot be read or is not valid JSON.
    """
    config = _resolve_config(filepath, indent_spaces=indent_spaces)
    source = _read_input(filepath, config)

    try:
        text = encode(source, config)
    except InvalidInputError as error:
        raise click.ClickException(str(error)) from error

    if text:
        click.echo(text)


@cli.command("decode")
@click.option("--json-indent", type=int, help="Indentation of the printed JSON")
@click.option(
    "--ensure-ascii/--no-ensure-ascii", default=None, help="Escape non-ASCII characters"
)
@click.argument("filepath", type=click.Path(exists=True, dir_okay=False, allow_dash=True))
def decode_command(
    filepath: str, json_indent: int | None = None, ensure_ascii: bool | None = None
):
    """
    Decode a notation document and print it as JSON.

    Args:
        filepath: Notation file to read, or ``-`` for stdin.
        json_indent: Override for the JSON indentation.
        ensure_ascii: Override for ASCII-only JSON output.

    Raises:
        click.BadParameter: If the configuration or overrides are invalid.
        click.ClickException: If the file cannot be read.
    """
    config = _resolve_config(filepath, json_indent=json_indent, ensure_ascii=ensure_ascii)
    source = _read_input(filepath, config)

    data = decode(source)
    click.echo(json.dumps(data, indent=config.json_indent, ensure_ascii=config.ensure_ascii))


if __name__ == "__main__":
    cli()
