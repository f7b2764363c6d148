"""Quantize a final coding interval to an integer codeword ``(p, q)``.

The codeword is the shortest dyadic point ``p / 2**q`` inside the interval:
``q`` is the minimum number of fractional bits for which some ``k / 2**q``
lies in ``[low, high)``. At that length ``p`` is ``floor(midpoint * 2**q)``
clamped into the interval.

The interval bounds are converted to ``Fraction`` so the ceiling and floor
steps are exact; only the bounds themselves carry decimal rounding.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, localcontext
from fractions import Fraction
import math
from typing import Optional

from arcode.coding.partition import Interval
from arcode.config import CodingContext, DEFAULT_CONTEXT
from arcode.errors import PrecisionInsufficientError
from arcode.utils import to_binary


@dataclass(frozen=True)
class Codeword:
    """Unsigned integer ``p`` with bit length ``q``; the code point is ``p / 2**q``."""

    p: int
    q: int

    def __post_init__(self) -> None:
        if self.q < 0 or self.p < 0:
            raise ValueError("Codeword p and q must be non-negative")
        if self.p >= (1 << self.q):
            raise ValueError(f"p={self.p} does not fit in q={self.q} bits")

    @property
    def bits(self) -> str:
        """``p`` as exactly ``q`` binary digits, left padded with zeros."""

        return to_binary(self.p, self.q)

    def value(self, context: CodingContext = DEFAULT_CONTEXT) -> Decimal:
        with localcontext(context.decimal_context()):
            return Decimal(self.p) / Decimal(1 << self.q)

    def as_fraction(self) -> Fraction:
        return Fraction(self.p, 1 << self.q)

    @classmethod
    def from_bits(cls, bits: str) -> "Codeword":
        """Parse a binary string; its length is taken as ``q``."""

        if not bits or any(b not in "01" for b in bits):
            raise ValueError(f"Codeword must be a non-empty string of 0/1, got {bits!r}")
        return cls(p=int(bits, 2), q=len(bits))


def code_length_bound(interval: Interval) -> int:
    """Return ``ceil(-log2(high - low))`` computed exactly.

    An interval at least ``2**-q`` wide always holds a point ``k / 2**q``,
    so this bounds the minimal codeword length from above.
    """

    width = Fraction(interval.high) - Fraction(interval.low)
    if width <= 0:
        raise PrecisionInsufficientError("Interval has zero or negative width; increase the precision")
    threshold = math.ceil(1 / width)
    return (threshold - 1).bit_length()


def dyadic_range(interval: Interval, q: int) -> Optional[tuple[int, int]]:
    """Return ``(k_min, k_max)`` with ``k / 2**q`` in ``[low, high)``, or None."""

    scale = 1 << q
    k_min = math.ceil(Fraction(interval.low) * scale)
    k_max = math.ceil(Fraction(interval.high) * scale) - 1
    if k_min > k_max:
        return None
    return k_min, k_max


class CodeQuantizer:
    """Select the minimal codeword length and the point closest to the midpoint."""

    def __init__(self, context: CodingContext = DEFAULT_CONTEXT) -> None:
        self.context = context

    def quantize(self, interval: Interval) -> Codeword:
        """Return the ``Codeword`` for ``interval``.

        Raises
        ------
        PrecisionInsufficientError
            If the required length exceeds ``context.max_code_bits`` or
            ``context.safe_code_bits``.
        """

        bound = max(1, code_length_bound(interval))
        if bound > self.context.max_code_bits:
            raise PrecisionInsufficientError(
                f"Codeword needs up to {bound} bits, limit is {self.context.max_code_bits}"
            )
        if bound > self.context.safe_code_bits:
            raise PrecisionInsufficientError(
                f"Codeword needs up to {bound} bits but {self.context.precision} digits "
                f"with epsilon {self.context.epsilon} decode at most {self.context.safe_code_bits}"
            )

        midpoint = (Fraction(interval.low) + Fraction(interval.high)) / 2
        for q in range(1, bound + 1):
            candidates = dyadic_range(interval, q)
            if candidates is None:
                continue
            k_min, k_max = candidates
            p = min(max(math.floor(midpoint * (1 << q)), k_min), k_max)
            return Codeword(p=p, q=q)
        # Unreachable for a positive-width interval
        raise PrecisionInsufficientError(f"No dyadic point found within {bound} bits")


def quantize(interval: Interval, context: CodingContext = DEFAULT_CONTEXT) -> Codeword:
    """Functional wrapper around ``CodeQuantizer.quantize``."""

    return CodeQuantizer(context).quantize(interval)


__all__ = ["Codeword", "CodeQuantizer", "quantize", "code_length_bound", "dyadic_range"]
