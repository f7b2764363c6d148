"""Systematic Hamming encoding of arbitrary-length bitstrings.

Parity bits sit at the power-of-two positions (1-indexed) of the codeword and
data bits fill the remaining positions in their original order. The parity
bit at position ``2**i`` is the XOR of every bit at a position ``j`` with
``j & 2**i``, itself included, so each check group XORs to zero.

Example
-------
>>> from arcode.coding.hamming import hamming_encode
>>> hamming_encode("1011").bits
'0110011'
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import numpy as np

from arcode.errors import EmptyDataError
from arcode.trace import Observer, ParityStep, notify
from arcode.utils import validate_bits


def parity_bit_count(m: int) -> int:
    """Return the minimal ``r`` with ``2**r >= m + r + 1``."""

    if m < 0:
        raise ValueError("data length must be non-negative")
    r = 0
    while (1 << r) < m + r + 1:
        r += 1
    return r


def is_parity_position(position: int) -> bool:
    """True for 1-indexed positions that are powers of two."""

    return position > 0 and (position & (position - 1)) == 0


@dataclass(frozen=True)
class HammingCodeword:
    """A systematic Hamming codeword of ``n = m + r`` bits."""

    bits: str
    m: int
    r: int

    @property
    def n(self) -> int:
        return self.m + self.r

    @property
    def parity_positions(self) -> tuple[int, ...]:
        return tuple(1 << i for i in range(self.r))

    def data_bits(self) -> str:
        """Extract the original data bits (non power-of-two positions)."""

        return "".join(b for pos, b in enumerate(self.bits, start=1) if not is_parity_position(pos))

    def __str__(self) -> str:
        return self.bits


class HammingEncoder:
    """Interleave parity bits into a bitstring.

    Parameters
    ----------
    observer:
        Optional callable receiving one ``ParityStep`` per parity bit.
    """

    def __init__(self, observer: Optional[Observer] = None) -> None:
        self.observer = observer

    def encode(self, data: str) -> HammingCodeword:
        """Return the Hamming codeword for ``data``.

        Steps:
        1. Choose the minimal parity count ``r``.
        2. Place data bits at non power-of-two positions, parity slots at 0.
        3. Compute each parity bit as the XOR over its check group.

        Raises
        ------
        EmptyDataError
            If ``data`` is empty.
        ValueError
            If ``data`` holds characters other than ``0``/``1``.
        """

        validate_bits(data)
        m = len(data)
        if m == 0:
            raise EmptyDataError("Hamming encoder needs at least one data bit.")
        r = parity_bit_count(m)
        n = m + r

        code = [0] * n
        data_iter = iter(data)
        for pos in range(1, n + 1):
            if not is_parity_position(pos):
                code[pos - 1] = int(next(data_iter))

        for i in range(r):
            pos = 1 << i
            checked = tuple(j for j in range(pos, n + 1) if j & pos)
            parity = 0
            for j in checked:
                parity ^= code[j - 1]
            code[pos - 1] = parity
            notify(self.observer, ParityStep(position=pos, checked_positions=checked, value=parity))

        return HammingCodeword(bits="".join(str(b) for b in code), m=m, r=r)


def hamming_encode(data: str, observer: Optional[Observer] = None) -> HammingCodeword:
    """Functional wrapper around ``HammingEncoder.encode``."""

    return HammingEncoder(observer).encode(data)


def parity_check_matrix(n: int) -> np.ndarray:
    """Return the ``r x n`` 0/1 matrix whose row ``i`` marks positions with bit ``i`` set."""

    if n <= 0:
        raise ValueError("codeword length must be positive")
    r = n.bit_length()
    positions = np.arange(1, n + 1, dtype=np.int64)
    return ((positions[np.newaxis, :] >> np.arange(r, dtype=np.int64)[:, np.newaxis]) & 1).astype(np.uint8)


def parity_syndrome(bits: str) -> int:
    """Recompute every parity equation of ``bits`` and return the syndrome.

    The syndrome is the sum of ``2**i`` over failing check groups: ``0``
    when every equation holds, otherwise the 1-indexed position a single
    flipped bit would occupy.
    """

    validate_bits(bits)
    if not bits:
        raise EmptyDataError("Cannot check parity of an empty codeword.")
    vector = np.frombuffer(bits.encode("ascii"), dtype=np.uint8) - ord("0")
    checks = (parity_check_matrix(len(bits)).astype(np.int64) @ vector.astype(np.int64)) % 2
    return int(sum(int(bit) << i for i, bit in enumerate(checks)))


__all__ = [
    "HammingCodeword",
    "HammingEncoder",
    "hamming_encode",
    "parity_bit_count",
    "is_parity_position",
    "parity_check_matrix",
    "parity_syndrome",
]
