"""Arithmetic coding, codeword quantization and Hamming channel coding.

Public API:
- Interval, IntervalPartition, build_partition
- ArithmeticEncoder, ArithmeticDecoder
- Codeword, CodeQuantizer, quantize
- HammingCodeword, HammingEncoder, hamming_encode, parity_syndrome
"""

from __future__ import annotations

from arcode.coding.partition import Interval, IntervalPartition, build_partition
from arcode.coding.quantize import Codeword, CodeQuantizer, quantize
from arcode.coding.arithmetic import ArithmeticDecoder, ArithmeticEncoder
from arcode.coding.hamming import (
    HammingCodeword,
    HammingEncoder,
    hamming_encode,
    parity_bit_count,
    parity_syndrome,
)

__all__ = [
    "Interval",
    "IntervalPartition",
    "build_partition",
    "ArithmeticEncoder",
    "ArithmeticDecoder",
    "Codeword",
    "CodeQuantizer",
    "quantize",
    "HammingCodeword",
    "HammingEncoder",
    "hamming_encode",
    "parity_bit_count",
    "parity_syndrome",
]
