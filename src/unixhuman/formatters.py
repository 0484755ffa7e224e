"""Replacement text for matched timestamps.

Absolute layouts use pendulum format tokens (``YYYY-MM-DD HH:mm:ss``),
relative renderings use pendulum's ``diff_for_humans`` ("2 days ago").
The predefined RFC 3339 renderings write ``Z`` for a zero UTC offset and
drop trailing zeros from the fraction.
"""

from __future__ import annotations

from dataclasses import dataclass

import pendulum

from unixhuman.config import FilterConfig
from unixhuman.protocols import TimeFormatter


@dataclass(frozen=True, slots=True)
class AbsoluteFormatter:
    """Formats with a fixed pendulum layout."""

    layout: str

    def format(self, dt: pendulum.DateTime) -> str:
        return dt.format(self.layout)


@dataclass(frozen=True, slots=True)
class Rfc3339Formatter:
    """RFC 3339 timestamps, optionally with a fractional second.

    Usage:
        >>> dt = pendulum.datetime(2021, 2, 14, 21, 4, 43, 120000)
        >>> Rfc3339Formatter().format(dt)
        '2021-02-14T21:04:43Z'
        >>> Rfc3339Formatter(fraction=True).format(dt)
        '2021-02-14T21:04:43.12Z'

    """

    fraction: bool = False

    def format(self, dt: pendulum.DateTime) -> str:
        text = dt.format("YYYY-MM-DD[T]HH:mm:ss")
        if self.fraction and dt.microsecond:
            text += f".{dt.microsecond:06d}".rstrip("0")
        if not dt.utcoffset():
            return text + "Z"
        return text + dt.format("Z")


@dataclass(frozen=True, slots=True)
class RelativeFormatter:
    """Formats relative to the current time, e.g. "3 hours ago" or "in 2 days"."""

    locale: str | None = None

    def format(self, dt: pendulum.DateTime) -> str:
        return dt.diff_for_humans(locale=self.locale)


@dataclass(frozen=True, slots=True)
class CombinedFormatter:
    """Renders ``base`` followed by ``parenthesis`` in parentheses."""

    base: TimeFormatter
    parenthesis: TimeFormatter

    def format(self, dt: pendulum.DateTime) -> str:
        return f"{self.base.format(dt)} ({self.parenthesis.format(dt)})"


PREDEFINED_FORMATTERS: dict[str, TimeFormatter] = {
    "RFC3339": Rfc3339Formatter(),
    "RFC3339Nano": Rfc3339Formatter(fraction=True),
}


def absolute_formatter(config: FilterConfig) -> TimeFormatter:
    """Formatter selected by ``predefined_format`` (``format`` for "custom")."""
    if config.predefined_format == "custom":
        return AbsoluteFormatter(config.format)
    return PREDEFINED_FORMATTERS[config.predefined_format]


def build_formatter(config: FilterConfig) -> TimeFormatter:
    """Build the formatter for the configured output mode."""
    if config.output_mode == "relative":
        return RelativeFormatter()
    absolute = absolute_formatter(config)
    if config.output_mode == "absolute+relative":
        return CombinedFormatter(base=absolute, parenthesis=RelativeFormatter())
    return absolute


__all__ = [
    "AbsoluteFormatter",
    "CombinedFormatter",
    "PREDEFINED_FORMATTERS",
    "RelativeFormatter",
    "Rfc3339Formatter",
    "absolute_formatter",
    "build_formatter",
]
