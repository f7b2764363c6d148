"""Centralized configuration for the coding pipeline.

Defines immutable defaults for decimal precision, the boundary tolerance
(epsilon) and codeword limits, plus the ``CodingContext`` value that carries
them into every component. Each comparison against an interval boundary
reads epsilon from the context it was handed; nothing re-declares it.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Context, Decimal, ROUND_HALF_EVEN
import math
from typing import Optional


@dataclass(frozen=True)
class Config:
    """Immutable configuration defaults for the project."""

    # Decimal arithmetic
    DECIMAL_PRECISION: int = 100
    EPSILON: Decimal = Decimal("1e-50")
    PRECISION_GUARD_DIGITS: int = 10

    # Codeword limits
    MAX_CODE_BITS: int = 1 << 20

    # Demonstration input used by the CLI when no text is given
    DEFAULT_MESSAGE: str = "KURBATOVMAKSIMANDREEVIC"


@dataclass(frozen=True)
class CodingContext:
    """Precision and tolerance shared by every stage of one pipeline run.

    Parameters
    ----------
    precision:
        Significant decimal digits used for interval arithmetic.
    epsilon:
        Boundary tolerance for interval membership and partition checks.
    max_code_bits:
        Upper bound on the codeword length ``q``.
    """

    precision: int = Config.DECIMAL_PRECISION
    epsilon: Decimal = Config.EPSILON
    max_code_bits: int = Config.MAX_CODE_BITS

    def __post_init__(self) -> None:
        if self.precision <= 0:
            raise ValueError("precision must be a positive number of digits")
        if not (Decimal(0) < self.epsilon < Decimal(1)):
            raise ValueError("epsilon must lie strictly between 0 and 1")
        if self.max_code_bits <= 0:
            raise ValueError("max_code_bits must be positive")

    def decimal_context(self) -> Context:
        """Return a fresh ``decimal.Context`` for ``decimal.localcontext``."""

        return Context(prec=self.precision, rounding=ROUND_HALF_EVEN)

    @property
    def resolvable_bits(self) -> int:
        """Number of binary digits the working precision can tell apart."""

        return int(self.precision * math.log2(10))

    @property
    def safe_code_bits(self) -> int:
        """Longest codeword that still decodes reliably under this context.

        Narrowing and rescaling need about three times the codeword's digits
        of working precision, and the final interval must stay wider than
        epsilon.
        """

        epsilon_bits = int(float(-self.epsilon.log10()) * math.log2(10))
        return min(self.resolvable_bits // 3, epsilon_bits)

    @classmethod
    def for_message(cls, length: int, total_count: int) -> "CodingContext":
        """Scale precision and epsilon to a message of ``length`` symbols.

        ``total_count`` is the denominator of the model probabilities. The
        exact interval bounds of a message then have at most
        ``D = ceil(length * log10(total_count))`` denominator digits; the
        working precision is ``3*D`` plus guard digits and epsilon sits
        between the accumulated rounding error and the narrowest gap.
        Short messages get the plain defaults.
        """

        if length < 0 or total_count < 0:
            raise ValueError("length and total_count must be non-negative")
        guard = Config.PRECISION_GUARD_DIGITS
        digits = math.ceil(length * math.log10(total_count)) if total_count > 1 and length > 0 else 0
        precision = max(Config.DECIMAL_PRECISION, 3 * digits + 2 * guard)
        epsilon = min(Config.EPSILON, Decimal(1).scaleb(-(2 * digits + guard)))
        return cls(precision=precision, epsilon=epsilon)


_CONFIG_SINGLETON: Optional[Config] = None


def get_config() -> Config:
    """Return a singleton `Config` instance."""

    global _CONFIG_SINGLETON
    if _CONFIG_SINGLETON is None:
        _CONFIG_SINGLETON = Config()
    return _CONFIG_SINGLETON


DEFAULT_CONTEXT: CodingContext = CodingContext()
