"""Error taxonomy for the coding pipeline.

Every failure is reported to the caller as a distinct exception type; none is
recovered internally. Types that describe bad arguments also derive from the
matching builtin so generic ``ValueError``/``KeyError`` handlers keep working.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Hashable, Sequence


class ArcodeError(Exception):
    """Base class for all pipeline errors."""


class EmptyInputError(ArcodeError, ValueError):
    """A symbol sequence of length zero was given to the model or encoder."""


class UnknownSymbolError(ArcodeError, KeyError):
    """A symbol has no entry in the partition."""

    def __init__(self, symbol: Hashable, position: int | None = None) -> None:
        self.symbol = symbol
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Symbol {symbol!r}{where} is not in the partition")

    def __str__(self) -> str:  # KeyError quotes its argument otherwise
        return str(self.args[0])


class PartitionInvariantError(ArcodeError):
    """Probabilities do not form a valid partition of [0, 1)."""


class DecodeStallError(ArcodeError):
    """No partition interval matched the value at some decode step.

    The symbols decoded before the stall are kept in ``partial``.
    """

    def __init__(self, partial: Sequence[Any], step: int, value: Decimal) -> None:
        self.partial = list(partial)
        self.step = step
        self.value = value
        super().__init__(
            f"No matching interval at step {step} for value {value} "
            f"({len(self.partial)} symbols decoded)"
        )


class EmptyDataError(ArcodeError, ValueError):
    """The Hamming encoder was given a zero-length bitstring."""


class PrecisionInsufficientError(ArcodeError):
    """The working precision or the codeword limit cannot hold the result."""


class RoundTripError(ArcodeError):
    """Decoding the quantized code point did not reproduce the input."""

    def __init__(self, expected: Sequence[Any], decoded: Sequence[Any]) -> None:
        self.expected = list(expected)
        self.decoded = list(decoded)
        super().__init__(
            f"Round trip mismatch: expected {len(self.expected)} symbols, "
            f"decoded {self.decoded[:10]!r}..."
        )


__all__ = [
    "ArcodeError",
    "EmptyInputError",
    "UnknownSymbolError",
    "PartitionInvariantError",
    "DecodeStallError",
    "EmptyDataError",
    "PrecisionInsufficientError",
    "RoundTripError",
]
