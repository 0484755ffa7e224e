"""Epoch ranges: resolution, time window, and the scaled decimal range.

A run resolves its configuration into a ``TimeRange`` (two points in
time), then scales it into a ``DecimalRange`` of integer epoch values for
the active ``Resolution``. The ``DecimalRange`` is what the matcher is
built from and is read-only for the rest of the run.

Thread Safety:
    All types here are immutable and safe to share.

"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

import pendulum

from unixhuman.errors import RangeError

if TYPE_CHECKING:
    from unixhuman.config import FilterConfig

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class Resolution(Enum):
    """Unit of the epoch values searched for in the stream."""

    SECONDS = 1
    MILLISECONDS = 1000

    @property
    def scale(self) -> int:
        """Number of units per second."""
        return self.value

    def to_epoch(self, dt: datetime) -> int:
        """Convert a point in time to an integer epoch value.

        Uses integer arithmetic only; sub-unit fractions round towards the
        past, so ``to_epoch`` never yields a value later than ``dt``.

        Args:
            dt: Point in time (naive values are taken as UTC)

        Returns:
            Epoch value in this resolution's unit
        """
        moment = pendulum.instance(dt)
        if self is Resolution.SECONDS:
            return moment.int_timestamp
        return moment.int_timestamp * 1000 + moment.microsecond // 1000


@dataclass(frozen=True, slots=True)
class TimeRange:
    """Inclusive window of time in which timestamps are replaced."""

    lower: datetime
    upper: datetime


@dataclass(frozen=True, slots=True)
class DecimalRange:
    """Inclusive integer range with canonical decimal renderings of its bounds.

    Attributes:
        lower: Inclusive lower bound
        upper: Inclusive upper bound
        lower_text: ``str(lower)`` as ASCII bytes
        upper_text: ``str(upper)`` as ASCII bytes

    """

    lower: int
    upper: int
    lower_text: bytes = field(init=False, repr=False)
    upper_text: bytes = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise RangeError(self.lower, self.upper, "lower bound exceeds upper bound")
        if self.lower < INT64_MIN or self.upper > INT64_MAX:
            raise RangeError(self.lower, self.upper, "bounds exceed signed 64-bit range")
        object.__setattr__(self, "lower_text", str(self.lower).encode("ascii"))
        object.__setattr__(self, "upper_text", str(self.upper).encode("ascii"))

    def contains(self, value: int) -> bool:
        """Check ``lower <= value <= upper``."""
        return self.lower <= value <= self.upper

    @classmethod
    def from_time_range(cls, time_range: TimeRange, resolution: Resolution) -> DecimalRange:
        """Scale a time window into epoch values of the given resolution."""
        return cls(resolution.to_epoch(time_range.lower), resolution.to_epoch(time_range.upper))


def resolve_time_range(config: FilterConfig, now: datetime | None = None) -> TimeRange:
    """Resolve the configured window into absolute points in time.

    When either absolute bound is configured, the window is absolute and a
    missing side falls back to ``now`` minus/plus the relative interval.
    Otherwise the window is ``now`` ± the relative interval.

    Args:
        config: Active filter configuration
        now: Reference time (defaults to the current time)

    Returns:
        Resolved TimeRange
    """
    if now is None:
        now = pendulum.now()
    interval = config.relative_interval
    lower = config.from_time if config.from_time is not None else now - interval
    upper = config.to_time if config.to_time is not None else now + interval
    return TimeRange(lower=lower, upper=upper)


__all__ = [
    "DecimalRange",
    "INT64_MAX",
    "INT64_MIN",
    "Resolution",
    "TimeRange",
    "resolve_time_range",
]
