"""Order-0 static probability model over a closed symbol alphabet.

Counts symbol occurrences and turns them into decimal probabilities using
the precision of the active ``CodingContext``. Binary floating point is not
enough here: the code point is later quantized to tens or hundreds of bits.

Example
-------
>>> from arcode.model import ProbabilityModel
>>> model = ProbabilityModel()
>>> model.fit("AAAB")
>>> [str(model.probabilities[s]) for s in model.symbols]
['0.75', '0.25']
"""

from __future__ import annotations

from collections import Counter
from decimal import Decimal, localcontext
from types import MappingProxyType
from typing import Any, Hashable, Iterable, Mapping, Sequence

import numpy as np

from arcode.config import CodingContext, DEFAULT_CONTEXT
from arcode.errors import EmptyInputError, UnknownSymbolError


class ProbabilityModel:
    """Empirical symbol-frequency model (no smoothing).

    Parameters
    ----------
    context:
        Coding context whose precision is used for the probability division.

    Notes
    -----
    - Symbols that never occur are absent from the table rather than being
      given zero probability; a zero-width interval can never be decoded.
    - ``symbols`` lists the alphabet in canonical ascending order, the same
      order the partition and the decoder use.
    """

    def __init__(self, context: CodingContext = DEFAULT_CONTEXT) -> None:
        self.context: CodingContext = context
        self._counts: dict[Hashable, int] = {}
        self._total: int = 0
        self._probabilities: Mapping[Hashable, Decimal] = MappingProxyType({})
        self._trained: bool = False

    @classmethod
    def from_counts(
        cls, counts: Mapping[Hashable, int], context: CodingContext = DEFAULT_CONTEXT
    ) -> "ProbabilityModel":
        """Build a model directly from per-symbol occurrence counts."""

        model = cls(context)
        model._set_counts({s: int(c) for s, c in counts.items()})
        return model

    # Training -----------------------------------------------------------------
    def fit(self, symbols: Iterable[Hashable]) -> None:
        """Count occurrences in ``symbols`` and derive the probability table."""

        self._set_counts(dict(Counter(symbols)))
        return None

    def _set_counts(self, counts: dict[Hashable, int]) -> None:
        if any(c < 0 for c in counts.values()):
            raise ValueError("Symbol counts must be non-negative")
        counts = {s: c for s, c in counts.items() if c > 0}
        total = sum(counts.values())
        if total == 0:
            raise EmptyInputError("Symbol sequence must be non-empty to build a probability table.")
        ordered = sorted(counts)
        self._counts = {s: counts[s] for s in ordered}
        self._total = total
        with localcontext(self.context.decimal_context()):
            denom = Decimal(total)
            table = {s: Decimal(self._counts[s]) / denom for s in ordered}
        self._probabilities = MappingProxyType(table)
        self._trained = True

    # Accessors ----------------------------------------------------------------
    def _require_trained(self) -> None:
        if not self._trained:
            raise RuntimeError("Model must be trained via fit() before use.")

    @property
    def probabilities(self) -> Mapping[Hashable, Decimal]:
        self._require_trained()
        return self._probabilities

    @property
    def counts(self) -> Mapping[Hashable, int]:
        self._require_trained()
        return MappingProxyType(self._counts)

    @property
    def total(self) -> int:
        self._require_trained()
        return self._total

    @property
    def symbols(self) -> tuple[Hashable, ...]:
        self._require_trained()
        return tuple(self._counts)

    # Diagnostics --------------------------------------------------------------
    def entropy(self) -> float:
        """Return the entropy of the fitted distribution in bits/symbol."""

        self._require_trained()
        p = np.array(list(self._counts.values()), dtype=np.float64) / float(self._total)
        return float(-(p * np.log2(p)).sum())

    def ideal_codelength(self, symbols: Sequence[Hashable]) -> float:
        """Return the ideal arithmetic codelength of ``symbols`` in bits.

        This is the sum of ``-log2 p(s)``; the quantized codeword length
        exceeds it by less than one bit.
        """

        self._require_trained()
        if not symbols:
            raise EmptyInputError("Symbol sequence must be non-empty for codelength computation.")
        log_p: dict[Hashable, float] = {
            s: float(np.log2(c / self._total)) for s, c in self._counts.items()
        }
        total_bits = 0.0
        for i, s in enumerate(symbols):
            if s not in log_p:
                raise UnknownSymbolError(s, i)
            total_bits -= log_p[s]
        return total_bits

    def to_dict(self) -> dict[str, Any]:
        """Return model metadata suitable for JSON serialization."""

        self._require_trained()
        return {
            "model_type": "order0-static",
            "unique_symbols": len(self._counts),
            "total_symbols": self._total,
            "entropy": self.entropy(),
            "counts": {str(s): c for s, c in self._counts.items()},
            "probabilities": {str(s): str(p) for s, p in self._probabilities.items()},
        }


__all__ = ["ProbabilityModel"]
