"""Simulation time.

Instant stores time as integer nanoseconds so that summing many fixed tick
intervals never accumulates floating-point drift.
"""

from __future__ import annotations

from typing import Union

_NANOS_PER_SECOND = 1_000_000_000


class Instant:
    """A point on the simulation timeline, measured from Epoch."""

    __slots__ = ("nanoseconds",)

    Epoch: Instant

    def __init__(self, nanoseconds: int):
        self.nanoseconds = int(nanoseconds)

    @classmethod
    def from_seconds(cls, seconds: Union[int, float]) -> Instant:
        if isinstance(seconds, int):
            return cls(seconds * _NANOS_PER_SECOND)
        return cls(round(float(seconds) * _NANOS_PER_SECOND))

    def to_seconds(self) -> float:
        return float(self.nanoseconds) / _NANOS_PER_SECOND

    def __add__(self, other: Union[Instant, int, float]) -> Instant:
        if isinstance(other, Instant):
            return Instant(self.nanoseconds + other.nanoseconds)
        if isinstance(other, (int, float)):
            return Instant(self.nanoseconds + round(other * _NANOS_PER_SECOND))
        return NotImplemented

    def __sub__(self, other: Union[Instant, int, float]) -> Instant:
        if isinstance(other, Instant):
            return Instant(self.nanoseconds - other.nanoseconds)
        if isinstance(other, (int, float)):
            return Instant(self.nanoseconds - round(other * _NANOS_PER_SECOND))
        return NotImplemented

    def __eq__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds == other.nanoseconds

    def __lt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds < other.nanoseconds

    def __le__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds <= other.nanoseconds

    def __gt__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds > other.nanoseconds

    def __ge__(self, other):
        if not isinstance(other, Instant):
            return NotImplemented
        return self.nanoseconds >= other.nanoseconds

    def __hash__(self) -> int:
        return hash(self.nanoseconds)

    def __repr__(self) -> str:
        return f"Instant({self.to_seconds():g}s)"


Instant.Epoch = Instant(0)
