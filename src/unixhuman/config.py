"""ContextVar-based filter configuration for unixhuman.

Provides thread-local configuration using Python's ContextVars (PEP 567).
The CLI builds one FilterConfig per run; library entry points read the
context config when none is passed explicitly.

Usage:
    from unixhuman.config import FilterConfig, filter_config_context

    with filter_config_context(FilterConfig(milliseconds=True)):
        out = replace_timestamps(b"at 1613336683000")

"""

from __future__ import annotations

import re
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass
from datetime import datetime, timedelta

import pendulum

from unixhuman.errors import ConfigError
from unixhuman.ranges import Resolution

OUTPUT_MODES = ("absolute", "relative", "absolute+relative")
PREDEFINED_FORMATS = ("RFC3339", "RFC3339Nano", "custom")

DEFAULT_RELATIVE_INTERVAL = timedelta(hours=87600)
DEFAULT_FORMAT = "YYYY-MM-DD[T]HH:mm:ssZ"


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Immutable filter configuration.

    Attributes:
        milliseconds: Match millisecond epoch values instead of seconds
        from_time: Absolute inclusive lower bound
        to_time: Absolute inclusive upper bound
        relative_interval: Window around now used for any unset bound
        output_mode: "absolute", "relative" or "absolute+relative"
        predefined_format: "RFC3339", "RFC3339Nano" or "custom"
        format: pendulum format string used with predefined_format="custom"
        timezone: IANA zone name for rendering; None means the local zone
        unbuffered: Flush the output after every write
        chunk_size: Bytes requested per read

    """

    milliseconds: bool = False
    from_time: datetime | None = None
    to_time: datetime | None = None
    relative_interval: timedelta = DEFAULT_RELATIVE_INTERVAL
    output_mode: str = "absolute"
    predefined_format: str = "RFC3339"
    format: str = DEFAULT_FORMAT
    timezone: str | None = None
    unbuffered: bool = False
    chunk_size: int = 64 * 1024

    def __post_init__(self) -> None:
        if self.output_mode not in OUTPUT_MODES:
            raise ConfigError(
                f"unexpected output mode {self.output_mode!r}, expected one of {', '.join(OUTPUT_MODES)}"
            )
        if self.predefined_format not in PREDEFINED_FORMATS:
            raise ConfigError(
                f"unexpected predefined format {self.predefined_format!r}, "
                f"expected one of {', '.join(PREDEFINED_FORMATS)}"
            )
        if self.chunk_size <= 0:
            raise ConfigError(f"chunk_size must be positive, got {self.chunk_size}")
        if self.relative_interval < timedelta(0):
            raise ConfigError("relative interval must not be negative")

    @property
    def resolution(self) -> Resolution:
        """Epoch unit implied by ``milliseconds``."""
        return Resolution.MILLISECONDS if self.milliseconds else Resolution.SECONDS

    @classmethod
    def from_dict(cls, config_dict: dict) -> FilterConfig:
        """Create FilterConfig from dictionary.

        Only includes keys that are valid FilterConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = FilterConfig.from_dict({"milliseconds": True, "color": "red"})
            >>> config.milliseconds
            True

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Compact duration ("1h30m"): decimal numbers with unit suffixes
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "μs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}


def parse_interval(text: str) -> timedelta:
    """Parse a duration such as ``87600h``, ``1h30m`` or ISO-8601 ``P10Y``.

    Args:
        text: Duration text

    Returns:
        The duration as a timedelta

    Raises:
        ConfigError: If the text is not a valid duration
    """
    text = text.strip()
    if text == "0":
        return timedelta(0)
    if text[:1] in ("P", "p"):
        return _parse_iso_interval(text)

    seconds = 0.0
    pos = 0
    for part in _DURATION_PART.finditer(text):
        if part.start() != pos:
            break
        seconds += float(part.group(1)) * _DURATION_UNITS[part.group(2)]
        pos = part.end()
    if pos == 0 or pos != len(text):
        raise ConfigError(f"invalid duration {text!r}")
    return timedelta(seconds=seconds)


def _parse_iso_interval(text: str) -> timedelta:
    try:
        parsed = pendulum.parse(text.upper())
    except ValueError as exc:
        raise ConfigError(f"invalid duration {text!r}: {exc}") from exc
    if not isinstance(parsed, pendulum.Duration):
        raise ConfigError(f"invalid duration {text!r}")
    # Plain timedelta view: a year counts as 365 days, a month as 30
    return timedelta(seconds=timedelta.total_seconds(parsed))


def parse_time(text: str) -> pendulum.DateTime:
    """Parse an RFC3339 timestamp such as ``2021-02-14T20:24:43Z``.

    Raises:
        ConfigError: If the text is not a valid timestamp
    """
    try:
        parsed = pendulum.parse(text.strip())
    except ValueError as exc:
        raise ConfigError(f"invalid time {text!r}: {exc}") from exc
    if not isinstance(parsed, pendulum.DateTime):
        raise ConfigError(f"invalid time {text!r}: not a date and time")
    return parsed


_DEFAULT_CONFIG: FilterConfig = FilterConfig()

_filter_config: ContextVar[FilterConfig] = ContextVar(
    "filter_config",
    default=_DEFAULT_CONFIG,
)


def get_filter_config() -> FilterConfig:
    """Get current filter configuration (thread-local)."""
    return _filter_config.get()


def set_filter_config(config: FilterConfig) -> None:
    """Set filter configuration for current context."""
    _filter_config.set(config)


def reset_filter_config() -> None:
    """Reset to the default configuration."""
    _filter_config.set(_DEFAULT_CONFIG)


@contextmanager
def filter_config_context(config: FilterConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Example:
        >>> with filter_config_context(FilterConfig(milliseconds=True)):
        ...     get_filter_config().milliseconds
        True

    """
    previous = _filter_config.get()
    _filter_config.set(config)
    try:
        yield
    finally:
        _filter_config.set(previous)


__all__ = [
    "DEFAULT_FORMAT",
    "DEFAULT_RELATIVE_INTERVAL",
    "FilterConfig",
    "OUTPUT_MODES",
    "PREDEFINED_FORMATS",
    "filter_config_context",
    "get_filter_config",
    "parse_interval",
    "parse_time",
    "reset_filter_config",
    "set_filter_config",
]
