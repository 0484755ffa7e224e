"""Epoch value to point-in-time conversion.

Matched integers are turned back into ``pendulum.DateTime`` values in the
rendering timezone. Milliseconds are split with integer ``divmod`` so no
float rounding reaches the rendered fraction.
"""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

import pendulum
from pendulum import FixedTimezone, Timezone

from unixhuman.errors import ConfigError
from unixhuman.ranges import Resolution

Converter = Callable[[int], pendulum.DateTime]
Zone = Timezone | FixedTimezone


def resolve_timezone(name: str | None) -> Zone:
    """Timezone named ``name``, or the local timezone when ``name`` is None.

    Raises:
        ConfigError: If the name is not a known timezone
    """
    if name is None:
        return pendulum.local_timezone()
    try:
        return pendulum.timezone(name)
    except (KeyError, ValueError) as exc:
        raise ConfigError(f"unknown timezone {name!r}") from exc


def seconds_to_datetime(value: int, tz: Zone) -> pendulum.DateTime:
    return pendulum.from_timestamp(value, tz=tz)


def milliseconds_to_datetime(value: int, tz: Zone) -> pendulum.DateTime:
    seconds, millis = divmod(value, 1000)
    return pendulum.from_timestamp(seconds, tz=tz).add(microseconds=millis * 1000)


def build_converter(resolution: Resolution, tz: Zone) -> Converter:
    """Converter from epoch values of ``resolution`` to DateTimes in ``tz``."""
    if resolution is Resolution.MILLISECONDS:
        return partial(milliseconds_to_datetime, tz=tz)
    return partial(seconds_to_datetime, tz=tz)


__all__ = [
    "Converter",
    "build_converter",
    "milliseconds_to_datetime",
    "resolve_timezone",
    "seconds_to_datetime",
]
