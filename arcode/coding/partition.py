"""Interval partition of [0, 1) derived from a probability table.

Symbols are laid out in canonical ascending order. The encoder and the
decoder both iterate the partition, so they share that order by
construction; the symbol type must therefore be totally ordered.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from typing import Hashable, Iterator, Mapping, Optional

from arcode.config import CodingContext, DEFAULT_CONTEXT
from arcode.errors import PartitionInvariantError


@dataclass(frozen=True)
class Interval:
    """Half-open interval ``[low, high)`` of decimal numbers."""

    low: Decimal
    high: Decimal

    def __post_init__(self) -> None:
        if not (0 <= self.low < self.high <= 1):
            raise ValueError(f"Interval must satisfy 0 <= low < high <= 1, got [{self.low}, {self.high})")

    def width(self, context: CodingContext = DEFAULT_CONTEXT) -> Decimal:
        with localcontext(context.decimal_context()):
            return self.high - self.low

    def midpoint(self, context: CodingContext = DEFAULT_CONTEXT) -> Decimal:
        with localcontext(context.decimal_context()):
            return (self.low + self.high) / 2

    def contains(self, value: Decimal, epsilon: Decimal) -> bool:
        """Epsilon-tolerant membership test for ``[low, high)``.

        A value within ``epsilon`` below ``low`` counts as inside; a value
        within ``epsilon`` below ``high`` does not.
        """

        at_or_above_low = value > self.low or abs(value - self.low) < epsilon
        below_high = value < self.high and abs(value - self.high) >= epsilon
        return at_or_above_low and below_high


class IntervalPartition(Mapping[Hashable, Interval]):
    """Read-only, ordered mapping from symbol to its sub-interval of [0, 1)."""

    def __init__(self, intervals: Mapping[Hashable, Interval]) -> None:
        self._intervals: dict[Hashable, Interval] = dict(intervals)

    def __getitem__(self, symbol: Hashable) -> Interval:
        return self._intervals[symbol]

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def __repr__(self) -> str:
        body = ", ".join(f"{s!r}: [{i.low}, {i.high})" for s, i in self._intervals.items())
        return f"IntervalPartition({{{body}}})"

    def find(self, value: Decimal, epsilon: Decimal) -> Optional[tuple[Hashable, Interval]]:
        """Return the first ``(symbol, interval)`` containing ``value``, if any."""

        for symbol, interval in self._intervals.items():
            if interval.contains(value, epsilon):
                return symbol, interval
        return None

    def total_width(self, context: CodingContext = DEFAULT_CONTEXT) -> Decimal:
        with localcontext(context.decimal_context()):
            return sum((i.high - i.low for i in self._intervals.values()), Decimal(0))


def build_partition(
    probabilities: Mapping[Hashable, Decimal], context: CodingContext = DEFAULT_CONTEXT
) -> IntervalPartition:
    """Assign each symbol ``[low, low + p)`` in ascending symbol order.

    Raises
    ------
    PartitionInvariantError
        If a probability lies outside (0, 1] or the widths do not add up to 1
        within ``context.epsilon``.
    TypeError
        If the symbols cannot be ordered.
    """

    if not probabilities:
        raise PartitionInvariantError("Probability table is empty")
    intervals: dict[Hashable, Interval] = {}
    with localcontext(context.decimal_context()):
        ordered = [(s, Decimal(probabilities[s])) for s in sorted(probabilities)]
        for symbol, p in ordered:
            if not (Decimal(0) < p <= Decimal(1)):
                raise PartitionInvariantError(
                    f"Probability for {symbol!r} must lie in (0, 1], got {p}"
                )
        total = sum((p for _, p in ordered), Decimal(0))
        if abs(total - Decimal(1)) > context.epsilon:
            raise PartitionInvariantError(
                f"Probabilities sum to {total}, expected 1 within {context.epsilon}"
            )
        low = Decimal(0)
        for symbol, p in ordered:
            # Rounding may overshoot 1 by less than epsilon
            intervals[symbol] = Interval(low, min(low + p, Decimal(1)))
            low += p
    return IntervalPartition(intervals)


__all__ = ["Interval", "IntervalPartition", "build_partition"]
