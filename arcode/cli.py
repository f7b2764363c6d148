"""Command-line interface for arcode using Click command groups."""

from __future__ import annotations

from typing import NoReturn
import logging

import click
from arcode import __version__


@click.group()
@click.version_option(version=__version__)
@click.option("verbose", "--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """arcode: order-0 arithmetic coding with Hamming channel protection."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger("arcode").setLevel(logging.DEBUG if verbose else logging.NOTSET)


# Register subcommands
from arcode.commands.encode import encode  # noqa: E402
from arcode.commands.decode import decode  # noqa: E402
from arcode.commands.hamming import hamming  # noqa: E402

cli.add_command(encode)
cli.add_command(decode)
cli.add_command(hamming)


def main() -> NoReturn:
    """Entry point for the CLI."""
    cli()
