"""
arcode: order-0 arithmetic coding with Hamming channel protection.

Maps a symbol sequence to the shortest binary codeword inside its
arithmetic-coding interval, then interleaves Hamming parity bits into that
codeword.
"""

__all__ = [
    "Config",
    "CodingContext",
    "get_config",
    "__version__",
    # Errors
    "ArcodeError",
    "EmptyInputError",
    "UnknownSymbolError",
    "PartitionInvariantError",
    "DecodeStallError",
    "EmptyDataError",
    "PrecisionInsufficientError",
    "RoundTripError",
    # Components (lazy-imported via __getattr__)
    "ProbabilityModel",
    "Interval",
    "IntervalPartition",
    "build_partition",
    "ArithmeticEncoder",
    "ArithmeticDecoder",
    "Codeword",
    "CodeQuantizer",
    "HammingCodeword",
    "HammingEncoder",
    "hamming_encode",
    "parity_syndrome",
    # Pipeline
    "PipelineResult",
    "run_pipeline",
]

__version__ = "0.1.0"

from typing import Any

from arcode.config import Config, CodingContext, get_config
from arcode.errors import (
    ArcodeError,
    DecodeStallError,
    EmptyDataError,
    EmptyInputError,
    PartitionInvariantError,
    PrecisionInsufficientError,
    RoundTripError,
    UnknownSymbolError,
)


def __getattr__(name: str) -> Any:  # lazy attribute access to avoid importing numpy at package import time
    if name == "ProbabilityModel":
        from arcode.model import ProbabilityModel as _PM

        return _PM
    if name in {"PipelineResult", "run_pipeline"}:
        from arcode import pipeline as _pipeline

        return getattr(_pipeline, name)
    if name in {
        "Interval",
        "IntervalPartition",
        "build_partition",
        "ArithmeticEncoder",
        "ArithmeticDecoder",
        "Codeword",
        "CodeQuantizer",
        "HammingCodeword",
        "HammingEncoder",
        "hamming_encode",
        "parity_syndrome",
    }:
        from arcode import coding as _coding

        return getattr(_coding, name)
    raise AttributeError(f"module 'arcode' has no attribute {name!r}")
