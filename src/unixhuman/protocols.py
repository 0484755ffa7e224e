"""Protocols for unixhuman.

Defines the contracts between the scanner, the pipeline, and the byte
endpoints they are wired to.
"""

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from unixhuman.tokens import SplitResult


class ByteReader(Protocol):
    """Binary source read in chunks (a file opened ``"rb"``, ``sys.stdin.buffer``)."""

    def read(self, size: int = -1, /) -> bytes:
        """Return up to ``size`` bytes; ``b""`` only at end of stream."""
        ...


class ByteWriter(Protocol):
    """Binary sink (a file opened ``"wb"``, ``sys.stdout.buffer``)."""

    def write(self, data: bytes, /) -> int | None:
        """Write all of ``data``."""
        ...

    def flush(self) -> None:
        """Push buffered bytes to the underlying device."""
        ...


class SplitFunc(Protocol):
    """Growing-prefix split function.

    Called with every unconsumed byte and an end-of-stream flag; must not
    request more data once ``at_eof`` is set, and must answer ``final`` for
    an empty buffer at end of stream. Advancing without a token absorbs
    bytes into the function's own state.

    """

    def __call__(self, data: memoryview, at_eof: bool, /) -> SplitResult: ...


class TimeFormatter(Protocol):
    """Renders a point in time as replacement text."""

    def format(self, dt: datetime) -> str:
        """Return the text that replaces a matched timestamp."""
        ...
