"""Resumable number splitter with a single rescan per ambiguous boundary.

Implements the growing-prefix split protocol: each call receives the whole
unconsumed buffer plus an end-of-stream flag, and answers with exactly one
of: consume a literal token, consume a candidate token, absorb a zero run,
or consume nothing and ask for more data.

A candidate is ``0*[1-9][0-9]{0,18}``, matched leftmost-longest. The start
is located with a regex that only tries the first byte of a zero run, so
the search stays linear; the significant digits are then taken greedily
up to the cap, which yields the maximal run at the leftmost start.

A buffer made only of ``'0'`` bytes cannot be classified until a later
byte arrives. Such bytes are absorbed into a running count and handed to
the next token as ``Token.zeros``, so the buffer never holds a zero run
longer than one read and no zero is scanned twice.

Thread Safety:
NumberSplitter instances are stateful and single-use. Create one per stream.

"""

from __future__ import annotations

import re

from unixhuman.lexer.modes import MAX_SIGNIFICANT_DIGITS, SplitMode
from unixhuman.tokens import NEED_MORE, SplitResult, absorb, candidate, literal

# Leftmost position where 0*[1-9] matches; a '0' preceded by '0' is never tried
_CANDIDATE_START = re.compile(rb"(?<!0)0*[1-9]")
_SIGNIFICANT = re.compile(rb"[1-9][0-9]{0,%d}" % (MAX_SIGNIFICANT_DIGITS - 1))

# Returned for an empty buffer at end of stream
_DONE = SplitResult(0, None, final=True)


def find_number(data: bytes | memoryview) -> tuple[int, int, int] | None:
    """Find the leftmost-longest candidate in ``data``.

    Args:
        data: Bytes to scan

    Returns:
        ``(start, digits_start, end)`` where ``data[start:end]`` is the full
        span and ``data[digits_start:end]`` its significant digits, or None
        if ``data`` holds no candidate.

    Example:
        >>> find_number(b"id=007 x")
        (3, 5, 6)
        >>> find_number(b"000 and 00") is None
        True
    """
    found = _CANDIDATE_START.search(data)
    if found is None:
        return None
    digits_start = found.end() - 1
    return found.start(), digits_start, _SIGNIFICANT.match(data, digits_start).end()


def trailing_zeros_start(data: bytes | memoryview) -> int:
    """Position where the run of ``'0'`` bytes ending ``data`` begins."""
    return len(bytes(data).rstrip(b"0"))


class NumberSplitter:
    """Splits a byte stream into literal and candidate tokens.

    State machine over SplitMode:
    1. IDLE scans the whole visible buffer once
    2. A literal prefix ahead of a located candidate moves to
       PENDING_CANDIDATE, so the candidate is emitted next without a rescan
    3. A literal prefix ahead of a number touching the buffer end moves to
       AWAIT_MORE, so the next call asks for data instead of rescanning

    Independently of the mode, a buffer of nothing but ``'0'`` bytes is
    absorbed and counted; the count rides on the next token emitted.

    Usage:
            >>> splitter = NumberSplitter()
            >>> splitter.split(b"ts=1613336683;", True).token
            Token(LITERAL, b'ts=', @0)
            >>> splitter.split(b"1613336683;", True).token
            Token(CANDIDATE, b'1613336683', @0, digits=b'1613336683')

    """

    __slots__ = ("_mode", "_pending", "_zeros")

    def __init__(self) -> None:
        self._mode = SplitMode.IDLE
        # (end, digits_start) of the located candidate, relative to the
        # buffer that remains after the literal prefix is consumed
        self._pending: tuple[int, int] | None = None
        # '0' bytes absorbed but not yet attached to a token
        self._zeros = 0

    @property
    def mode(self) -> SplitMode:
        """Current mode (for introspection and tests)."""
        return self._mode

    @property
    def held_zeros(self) -> int:
        """Number of absorbed ``'0'`` bytes waiting for the next token."""
        return self._zeros

    def split(self, data: bytes | memoryview, at_eof: bool) -> SplitResult:
        """Answer one step of the growing-prefix protocol.

        Args:
            data: Every byte not yet consumed, oldest first
            at_eof: True when no more bytes will ever be appended

        Returns:
            SplitResult consuming a literal or candidate prefix of ``data``,
            absorbing an all-zero buffer, or NEED_MORE. NEED_MORE is never
            returned when ``at_eof`` is set.
        """
        if self._mode is SplitMode.PENDING_CANDIDATE:
            return self._emit_pending(data)
        if self._mode is SplitMode.AWAIT_MORE:
            self._mode = SplitMode.IDLE
            if not at_eof:
                return NEED_MORE
        return self._scan(data, at_eof)

    def _take_zeros(self) -> int:
        zeros, self._zeros = self._zeros, 0
        return zeros

    def _emit_pending(self, data: bytes | memoryview) -> SplitResult:
        end, digits_start = self._pending
        self._pending = None
        self._mode = SplitMode.IDLE
        return candidate(data, end, digits_start)

    def _scan(self, data: bytes | memoryview, at_eof: bool) -> SplitResult:
        found = find_number(data)
        size = len(data)

        if found is None:
            if at_eof:
                if size or self._zeros:
                    return literal(data, final=True, zeros=self._take_zeros())
                return _DONE
            # Trailing zeros may be the leading zeros of a number whose
            # significant digits have not arrived yet
            hold = trailing_zeros_start(data)
            if hold:
                return literal(data[:hold], zeros=self._take_zeros())
            if not size:
                return NEED_MORE
            self._zeros += size
            return absorb(size)

        start, digits_start, end = found
        open_ended = end == size and not at_eof

        if start == 0:
            if open_ended:
                # More digits may follow; rescan once the buffer has grown
                return NEED_MORE
            return candidate(data, end, digits_start, zeros=self._take_zeros())

        if open_ended:
            self._mode = SplitMode.AWAIT_MORE
        else:
            self._pending = (end - start, digits_start - start)
            self._mode = SplitMode.PENDING_CANDIDATE
        return literal(data[:start], zeros=self._take_zeros())
