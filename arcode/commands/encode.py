"""CLI command running the full coding pipeline over a text message.

Fit an order-0 model to the message, arithmetic-code it, quantize the final
interval to a binary codeword, protect that codeword with a Hamming code and
report bits/symbol and the compression rate.

Examples
--------
  arcode encode
  arcode encode "AAAB" --trace
  arcode encode "hello world" --format json
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional
import json
import logging

import click

from arcode.config import CodingContext, Config
from arcode.errors import ArcodeError
from arcode.pipeline import PipelineResult, run_pipeline
from arcode.trace import LoggingObserver, Observer, StepRecord, format_step


def build_context(precision: Optional[int], epsilon: Optional[str]) -> Optional[CodingContext]:
    """Return a context from CLI overrides, or None to auto-scale."""

    if precision is None and epsilon is None:
        return None
    try:
        eps = Decimal(epsilon) if epsilon is not None else Config.EPSILON
    except InvalidOperation:
        raise click.BadParameter(f"not a decimal number: {epsilon!r}", param_hint="--epsilon") from None
    try:
        return CodingContext(
            precision=precision if precision is not None else Config.DECIMAL_PRECISION,
            epsilon=eps,
        )
    except ValueError as e:
        raise click.ClickException(str(e)) from None


def _echo_step(record: StepRecord) -> None:
    click.echo(format_step(record))


def step_observer(trace: bool) -> Optional[Observer]:
    """Echo steps under --trace; otherwise log them when debug logging is on."""

    if trace:
        return _echo_step
    if logging.getLogger("arcode").isEnabledFor(logging.DEBUG):
        return LoggingObserver()
    return None


def _echo_table(result: PipelineResult) -> None:
    ctx = result.context
    click.echo("Symbol probabilities:")
    for symbol, p in result.model.probabilities.items():
        click.echo(f"  {symbol!r}: {p}")
    click.echo("Symbol intervals:")
    for symbol, interval in result.partition.items():
        click.echo(f"  {symbol!r}: [{interval.low}, {interval.high})")
    click.echo(f"Low: {result.interval.low}")
    click.echo(f"High: {result.interval.high}")
    click.echo(f"Range: {result.interval.width(ctx)}")
    click.echo(f"Midpoint: {result.interval.midpoint(ctx)}")
    click.echo(f"q: {result.codeword.q}")
    click.echo(f"p: {result.codeword.p}")
    click.echo(f"Codeword: {result.codeword.bits} ({result.codeword.q} bits)")
    click.echo(f"Bits per symbol: {result.bits_per_symbol:.3f}")
    click.echo(f"Entropy: {result.model.entropy():.3f} bits/symbol")
    click.echo(
        f"Hamming codeword: {result.hamming.bits} "
        f"(m={result.hamming.m}, r={result.hamming.r}, n={result.hamming.n})"
    )
    click.echo(f"Rate: {result.compression_rate:.3f}")


@click.command(name="encode")
@click.argument("text", required=False, default=Config.DEFAULT_MESSAGE)
@click.option(
    "trace",
    "--trace",
    is_flag=True,
    help="Print every encode, decode and parity step",
)
@click.option(
    "output_format",
    "--format",
    type=click.Choice(["table", "json"], case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format",
)
@click.option(
    "precision",
    "--precision",
    type=click.IntRange(min=1),
    required=False,
    help="Decimal digits of working precision (default: scaled to the message)",
)
@click.option(
    "epsilon",
    "--epsilon",
    type=str,
    required=False,
    help="Boundary tolerance, e.g. 1e-50 (default: scaled to the message)",
)
@click.option(
    "no_verify",
    "--no-verify",
    is_flag=True,
    help="Skip decoding the codeword back to the message",
)
def encode(
    text: str,
    trace: bool,
    output_format: str,
    precision: Optional[int],
    epsilon: Optional[str],
    no_verify: bool,
) -> None:
    """Arithmetic-code TEXT and protect the codeword with a Hamming code."""

    context = build_context(precision, epsilon)
    try:
        result = run_pipeline(
            text,
            context=context,
            observer=step_observer(trace),
            verify=not no_verify,
        )
    except ArcodeError as e:
        raise click.ClickException(str(e)) from e

    if output_format.lower() == "json":
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        return
    _echo_table(result)
    if result.decoded is not None:
        click.secho(f"OK: decoded {len(result.decoded)} symbols from the codeword", fg="green")
