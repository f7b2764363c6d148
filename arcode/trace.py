"""Structured step records and observers for pipeline tracing.

Each coding stage accepts an optional ``observer`` callable and hands it one
record per step. The stages never print or log by themselves; an observer
decides what to do with the records.

Example
-------
>>> from arcode.trace import CollectingObserver
>>> obs = CollectingObserver()
>>> obs(EncodeStep(index=0, symbol="A", low=0, high=1, range=1))
>>> len(obs.records)
1
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Hashable, Optional, Union
import logging


_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodeStep:
    """Interval after consuming ``symbol``; ``range`` is the width before it."""

    index: int
    symbol: Hashable
    low: Decimal
    high: Decimal
    range: Decimal


@dataclass(frozen=True)
class DecodeStep:
    index: int
    symbol: Hashable
    value_in: Decimal
    value_out: Decimal


@dataclass(frozen=True)
class ParityStep:
    """Parity bit at 1-indexed ``position`` and the positions it covers."""

    position: int
    checked_positions: tuple[int, ...]
    value: int


StepRecord = Union[EncodeStep, DecodeStep, ParityStep]
Observer = Callable[[StepRecord], None]


@dataclass
class CollectingObserver:
    """Observer that keeps every record it receives, in order."""

    records: list[StepRecord] = field(default_factory=list)

    def __call__(self, record: StepRecord) -> None:
        self.records.append(record)

    def of_type(self, kind: type) -> list[Any]:
        return [r for r in self.records if isinstance(r, kind)]


class LoggingObserver:
    """Observer that forwards records to a logger at DEBUG level."""

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG) -> None:
        self.logger = logger or _LOGGER
        self.level = level

    def __call__(self, record: StepRecord) -> None:
        self.logger.log(self.level, "%s", format_step(record))


def format_step(record: StepRecord) -> str:
    """Return a one-line human readable rendering of ``record``."""

    if isinstance(record, EncodeStep):
        return (
            f"encode[{record.index}] {record.symbol!r}: "
            f"[{record.low}, {record.high}) range={record.range}"
        )
    if isinstance(record, DecodeStep):
        return (
            f"decode[{record.index}] {record.symbol!r}: "
            f"value {record.value_in} -> {record.value_out}"
        )
    if isinstance(record, ParityStep):
        checked = " ".join(str(p) for p in record.checked_positions)
        return f"p{record.position} checks {checked} -> {record.value}"
    raise TypeError(f"Unsupported step record: {type(record).__name__}")


def notify(observer: Optional[Observer], record: StepRecord) -> None:
    if observer is not None:
        observer(record)


__all__ = [
    "EncodeStep",
    "DecodeStep",
    "ParityStep",
    "StepRecord",
    "Observer",
    "CollectingObserver",
    "LoggingObserver",
    "format_step",
    "notify",
]
