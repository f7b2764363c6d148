"""CLI command decoding a binary arithmetic codeword.

The probability model is rebuilt from the text it was fitted on, so the
partition matches the one used at encode time.

Examples
--------
  arcode decode 011 --length 4 --model AAAB
"""

from __future__ import annotations

from typing import Optional

import click

from arcode.coding.arithmetic import ArithmeticDecoder
from arcode.coding.partition import build_partition
from arcode.coding.quantize import Codeword
from arcode.commands.encode import build_context, step_observer
from arcode.config import CodingContext
from arcode.errors import ArcodeError, DecodeStallError
from arcode.model import ProbabilityModel


@click.command(name="decode")
@click.argument("bits")
@click.option(
    "length",
    "--length",
    type=click.IntRange(min=0),
    required=True,
    help="Number of symbols to decode",
)
@click.option(
    "model_text",
    "--model",
    type=str,
    required=True,
    help="Text the probability model was fitted on",
)
@click.option("trace", "--trace", is_flag=True, help="Print every decode step")
@click.option("precision", "--precision", type=click.IntRange(min=1), required=False)
@click.option("epsilon", "--epsilon", type=str, required=False)
def decode(
    bits: str,
    length: int,
    model_text: str,
    trace: bool,
    precision: Optional[int],
    epsilon: Optional[str],
) -> None:
    """Decode LENGTH symbols from the binary codeword BITS."""

    try:
        codeword = Codeword.from_bits(bits)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="BITS") from None

    context = build_context(precision, epsilon) or CodingContext.for_message(length, len(model_text))
    try:
        model = ProbabilityModel(context)
        model.fit(model_text)
        partition = build_partition(model.probabilities, context)
        decoder = ArithmeticDecoder(partition, context, step_observer(trace))
        symbols = decoder.decode_codeword(codeword, length)
    except DecodeStallError as e:
        click.echo("".join(str(s) for s in e.partial))
        raise click.ClickException(str(e)) from e
    except ArcodeError as e:
        raise click.ClickException(str(e)) from e

    click.echo("".join(str(s) for s in symbols))
