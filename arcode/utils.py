"""Shared helpers for bitstrings.

This module centralizes the binary rendering and validation used by the
quantizer, the Hamming encoder and the CLI.
"""

from __future__ import annotations


def to_binary(number: int, length: int = 0) -> str:
    """Return ``number`` in base 2, left padded with zeros to ``length``.

    Parameters
    ----------
    number:
        Non-negative integer to render.
    length:
        Minimum width of the result. ``0`` gives the unpadded form, with
        ``0`` rendering as an empty string.
    """

    if number < 0:
        raise ValueError("number must be non-negative")
    digits = format(number, "b") if number > 0 else ""
    return digits.rjust(length, "0")


def validate_bits(bits: str) -> str:
    """Return ``bits`` unchanged if it only holds ``0``/``1`` characters."""

    invalid = sorted({ch for ch in bits if ch not in "01"})
    if invalid:
        raise ValueError(f"Bitstring may only contain '0' and '1', found {invalid!r}")
    return bits
