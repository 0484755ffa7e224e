"""Exception classes for unixhuman.

Per-candidate outcomes (out of range, unparseable) are never errors; the
matcher reports them as a plain rejection. Exceptions are reserved for bad
configuration, scanner protocol violations, and stream-level I/O failures.
"""

from __future__ import annotations


class UnixHumanError(Exception):
    """Base exception for all unixhuman errors.

    Subclass this for specific error categories.
    """

    pass


class ConfigError(UnixHumanError):
    """Invalid configuration value (bad option, unparseable interval)."""

    pass


class RangeError(ConfigError):
    """Invalid epoch range.

    Raised when the lower bound exceeds the upper bound or either bound
    falls outside signed 64-bit range.
    """

    def __init__(self, lower: int, upper: int, message: str) -> None:
        """Initialize range error with the offending bounds.

        Args:
            lower: Requested inclusive lower bound
            upper: Requested inclusive upper bound
            message: Description of what is wrong with the bounds
        """
        self.lower = lower
        self.upper = upper
        super().__init__(f"invalid range [{lower}, {upper}]: {message}")


class ScanError(UnixHumanError):
    """A split function violated the growing-prefix protocol."""

    pass


class StreamError(UnixHumanError):
    """Fatal I/O failure on the input source or output sink.

    The original OSError is available as ``__cause__``.
    """

    pass


class InputError(StreamError):
    """Reading from (or opening) an input failed."""

    pass


class OutputError(StreamError):
    """Writing to (or flushing) the output sink failed."""

    pass
