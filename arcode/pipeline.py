"""End-to-end orchestration: model, partition, encode, quantize, Hamming.

This module provides the high-level interface used by the CLI. The optional
verification step decodes the quantized code point ``p / 2**q`` rather than
the unquantized midpoint, so the bits that actually leave the pipeline are
the ones checked.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Optional, Sequence
import logging

from arcode.coding.arithmetic import ArithmeticDecoder, ArithmeticEncoder
from arcode.coding.hamming import HammingCodeword, HammingEncoder
from arcode.coding.partition import Interval, IntervalPartition, build_partition
from arcode.coding.quantize import CodeQuantizer, Codeword
from arcode.config import CodingContext
from arcode.errors import DecodeStallError, EmptyInputError, RoundTripError
from arcode.model import ProbabilityModel
from arcode.trace import Observer


_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Outputs and derived metrics of one pipeline run."""

    symbols: tuple[Hashable, ...]
    context: CodingContext
    model: ProbabilityModel
    partition: IntervalPartition
    interval: Interval
    codeword: Codeword
    hamming: HammingCodeword
    decoded: Optional[tuple[Hashable, ...]] = None

    @property
    def compression_rate(self) -> float:
        """Arithmetic code bits per transmitted (Hamming protected) bit."""

        return self.codeword.q / self.hamming.n

    @property
    def bits_per_symbol(self) -> float:
        return self.codeword.q / len(self.symbols)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable summary; decimals are rendered as strings."""

        ctx = self.context
        return {
            "length": len(self.symbols),
            "precision": ctx.precision,
            "epsilon": str(ctx.epsilon),
            "model": self.model.to_dict(),
            "partition": {
                str(s): [str(i.low), str(i.high)] for s, i in self.partition.items()
            },
            "low": str(self.interval.low),
            "high": str(self.interval.high),
            "range": str(self.interval.width(ctx)),
            "midpoint": str(self.interval.midpoint(ctx)),
            "p": str(self.codeword.p),
            "q": self.codeword.q,
            "codeword": self.codeword.bits,
            "hamming": self.hamming.bits,
            "hamming_m": self.hamming.m,
            "hamming_r": self.hamming.r,
            "hamming_n": self.hamming.n,
            "bits_per_symbol": self.bits_per_symbol,
            "compression_rate": self.compression_rate,
            "verified": self.decoded is not None and list(self.decoded) == list(self.symbols),
        }


def run_pipeline(
    symbols: Sequence[Hashable],
    context: Optional[CodingContext] = None,
    observer: Optional[Observer] = None,
    *,
    verify: bool = True,
) -> PipelineResult:
    """Run every stage over ``symbols`` and return a ``PipelineResult``.

    Parameters
    ----------
    symbols:
        Non-empty, totally ordered symbols (a ``str`` works directly).
    context:
        Precision and epsilon; by default scaled to the message length.
    observer:
        Receives encode, decode and parity step records.
    verify:
        Decode ``p / 2**q`` and compare against ``symbols``.

    Raises
    ------
    EmptyInputError, UnknownSymbolError, PartitionInvariantError,
    PrecisionInsufficientError, EmptyDataError
        Propagated from the stages.
    DecodeStallError, RoundTripError
        If verification is enabled and the round trip fails.
    """

    seq = tuple(symbols)
    if not seq:
        raise EmptyInputError("Symbol sequence must be non-empty.")
    ctx = context or CodingContext.for_message(len(seq), len(seq))
    _LOGGER.debug("Coding %d symbols with %d digits, epsilon %s", len(seq), ctx.precision, ctx.epsilon)

    model = ProbabilityModel(ctx)
    model.fit(seq)
    partition = build_partition(model.probabilities, ctx)
    interval = ArithmeticEncoder(partition, ctx, observer).encode(seq)
    codeword = CodeQuantizer(ctx).quantize(interval)
    hamming = HammingEncoder(observer).encode(codeword.bits)

    decoded: Optional[tuple[Hashable, ...]] = None
    if verify:
        try:
            decoded = tuple(ArithmeticDecoder(partition, ctx, observer).decode_codeword(codeword, len(seq)))
        except DecodeStallError as e:
            _LOGGER.warning("Verification stalled after %d of %d symbols", len(e.partial), len(seq))
            raise
        if decoded != seq:
            raise RoundTripError(seq, decoded)

    return PipelineResult(
        symbols=seq,
        context=ctx,
        model=model,
        partition=partition,
        interval=interval,
        codeword=codeword,
        hamming=hamming,
        decoded=decoded,
    )


__all__ = ["PipelineResult", "run_pipeline"]
