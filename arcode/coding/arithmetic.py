"""Static arithmetic coding over a decimal interval partition.

The encoder narrows ``[0, 1)`` symbol by symbol to the final message
interval; the decoder inverts the narrowing given a code point inside that
interval and the message length.

All arithmetic runs inside ``decimal.localcontext`` with the precision of
the supplied ``CodingContext``. Boundary comparisons use the context's
epsilon, the same value the partition check uses.

References
----------
- Witten, Neal, and Cleary (1987): Arithmetic coding for data compression.
- MacKay (2003): Information Theory, Inference, and Learning Algorithms, ch. 6.
"""

from __future__ import annotations

from decimal import Decimal, localcontext
from typing import Hashable, Iterable, Optional

from arcode.coding.partition import Interval, IntervalPartition
from arcode.coding.quantize import Codeword
from arcode.config import CodingContext, DEFAULT_CONTEXT
from arcode.errors import (
    DecodeStallError,
    EmptyInputError,
    PrecisionInsufficientError,
    UnknownSymbolError,
)
from arcode.trace import DecodeStep, EncodeStep, Observer, notify


class ArithmeticEncoder:
    """Narrow ``[0, 1)`` over a symbol sequence.

    Parameters
    ----------
    partition:
        Symbol intervals from ``build_partition``.
    context:
        Precision and epsilon shared with the rest of the pipeline.
    observer:
        Optional callable receiving one ``EncodeStep`` per symbol.
    """

    def __init__(
        self,
        partition: IntervalPartition,
        context: CodingContext = DEFAULT_CONTEXT,
        observer: Optional[Observer] = None,
    ) -> None:
        self.partition = partition
        self.context = context
        self.observer = observer

    def encode(self, symbols: Iterable[Hashable]) -> Interval:
        """Return the final interval ``[low, high)`` for ``symbols``.

        Raises
        ------
        EmptyInputError
            If ``symbols`` is empty.
        UnknownSymbolError
            If a symbol has no partition entry.
        PrecisionInsufficientError
            If the interval collapses to zero width at the working precision.
        """

        consumed = 0
        with localcontext(self.context.decimal_context()):
            low = Decimal(0)
            high = Decimal(1)
            for index, symbol in enumerate(symbols):
                try:
                    sub = self.partition[symbol]
                except KeyError:
                    raise UnknownSymbolError(symbol, index) from None
                rng = high - low
                new_low = low + rng * sub.low
                new_high = min(low + rng * sub.high, high)
                if new_high <= new_low:
                    raise PrecisionInsufficientError(
                        f"Interval collapsed at symbol {index} with {self.context.precision} digits; "
                        "increase the precision"
                    )
                low, high = new_low, new_high
                consumed += 1
                notify(self.observer, EncodeStep(index=index, symbol=symbol, low=low, high=high, range=rng))
        if consumed == 0:
            raise EmptyInputError("Symbol sequence must be non-empty for encoding.")
        return Interval(low, high)


class ArithmeticDecoder:
    """Recover symbols from a code point inside the final interval.

    Each step picks the first partition entry (canonical order) containing
    the current value, then rescales the value into that entry:
    ``value = (value - low) / (high - low)``, clamped to ``[0, 1 - eps]``.
    """

    def __init__(
        self,
        partition: IntervalPartition,
        context: CodingContext = DEFAULT_CONTEXT,
        observer: Optional[Observer] = None,
    ) -> None:
        self.partition = partition
        self.context = context
        self.observer = observer

    def decode(self, value: Decimal, length: int) -> list[Hashable]:
        """Decode ``length`` symbols starting from ``value``.

        Raises
        ------
        DecodeStallError
            If no interval matches at some step; the symbols decoded so far
            are attached as ``partial``.
        """

        if length < 0:
            raise ValueError("length must be non-negative")
        eps = self.context.epsilon
        decoded: list[Hashable] = []
        with localcontext(self.context.decimal_context()):
            one = Decimal(1)
            current = Decimal(value)
            for index in range(length):
                match = self.partition.find(current, eps)
                if match is None:
                    raise DecodeStallError(decoded, index, current)
                symbol, sub = match
                decoded.append(symbol)
                value_in = current
                current = (current - sub.low) / (sub.high - sub.low)
                # Absorb rounding drift at the boundaries
                if current > one or abs(current - one) < eps:
                    current = one - eps
                if current < 0:
                    current = Decimal(0)
                notify(
                    self.observer,
                    DecodeStep(index=index, symbol=symbol, value_in=value_in, value_out=current),
                )
        return decoded

    def decode_codeword(self, codeword: Codeword, length: int) -> list[Hashable]:
        """Decode from the dyadic point ``p / 2**q`` carried by ``codeword``."""

        return self.decode(codeword.value(self.context), length)


def encode(
    symbols: Iterable[Hashable],
    partition: IntervalPartition,
    context: CodingContext = DEFAULT_CONTEXT,
    observer: Optional[Observer] = None,
) -> Interval:
    """Functional wrapper around ``ArithmeticEncoder.encode``."""

    return ArithmeticEncoder(partition, context, observer).encode(symbols)


def decode(
    value: Decimal,
    length: int,
    partition: IntervalPartition,
    context: CodingContext = DEFAULT_CONTEXT,
    observer: Optional[Observer] = None,
) -> list[Hashable]:
    """Functional wrapper around ``ArithmeticDecoder.decode``."""

    return ArithmeticDecoder(partition, context, observer).decode(value, length)


__all__ = ["ArithmeticEncoder", "ArithmeticDecoder", "encode", "decode"]
