"""CLI command adding Hamming parity bits to a bitstring.

Examples
--------
  arcode hamming 1011
  arcode hamming 1011 --trace
"""

from __future__ import annotations

import click

from arcode.coding.hamming import hamming_encode
from arcode.commands.encode import step_observer
from arcode.errors import ArcodeError


@click.command(name="hamming")
@click.argument("bits")
@click.option("trace", "--trace", is_flag=True, help="Print each parity check group")
def hamming(bits: str, trace: bool) -> None:
    """Hamming-encode the bitstring BITS."""

    try:
        codeword = hamming_encode(bits, observer=step_observer(trace))
    except ArcodeError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="BITS") from None

    click.echo(f"m={codeword.m} r={codeword.r} n={codeword.n}")
    click.echo(codeword.bits)
