"""Token and TokenType definitions for the number splitter.

The splitter partitions a byte stream into alternating literal and
candidate tokens. Concatenating every token's ``span`` in order rebuilds
the input exactly.

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    """Token types produced by the splitter."""

    LITERAL = auto()  # Bytes with no numeric significance
    CANDIDATE = auto()  # 0*[1-9][0-9]{0,18}


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the splitter.

    Attributes:
        type: LITERAL or CANDIDATE
        value: The raw bytes consumed for this token by the split call that
            emitted it
        offset: Absolute position of the token's first byte in the stream
        digits_start: Start of the significant digits within ``value``
        digits_end: End of the significant digits within ``value``
        zeros: Count of ``'0'`` bytes that precede ``value`` in the stream
            and belong to this token, consumed by earlier split calls

    For literal tokens the digit offsets are both zero. Long zero runs are
    carried as a count in ``zeros`` rather than as bytes, so the token's
    full span is ``zeros`` zero bytes followed by ``value``.

    """

    type: TokenType
    value: bytes
    offset: int = 0
    digits_start: int = 0
    digits_end: int = 0
    zeros: int = 0

    @property
    def digits(self) -> bytes:
        """Significant digits of a candidate (empty for literals)."""
        return self.value[self.digits_start : self.digits_end]

    @property
    def span(self) -> bytes:
        """Every byte of the token as it appeared in the stream."""
        if not self.zeros:
            return self.value
        return b"0" * self.zeros + self.value

    @property
    def size(self) -> int:
        """Number of stream bytes covered by this token."""
        return self.zeros + len(self.value)

    @property
    def end(self) -> int:
        """Absolute stream position just past this token."""
        return self.offset + self.size

    def at(self, offset: int) -> Token:
        """Return a copy of this token placed at an absolute stream offset."""
        return Token(self.type, self.value, offset, self.digits_start, self.digits_end, self.zeros)

    def __repr__(self) -> str:
        held = f", zeros={self.zeros}" if self.zeros else ""
        if self.type is TokenType.CANDIDATE:
            return f"Token({self.type.name}, {self.value!r}, @{self.offset}, digits={self.digits!r}{held})"
        return f"Token({self.type.name}, {self.value!r}, @{self.offset}{held})"


@dataclass(frozen=True, slots=True)
class SplitResult:
    """Response of a split function to one growing-prefix step.

    Attributes:
        advance: Number of bytes consumed from the front of the buffer
        token: Token emitted for those bytes, or None when more data is
            needed or the bytes were only absorbed into the splitter's state
        final: True when this is the last token of the stream

    """

    advance: int
    token: Token | None = None
    final: bool = False

    @property
    def need_more(self) -> bool:
        """True when the split function could not decide without more data."""
        return self.advance == 0 and self.token is None and not self.final


NEED_MORE = SplitResult(0)


def absorb(count: int) -> SplitResult:
    """Consume ``count`` bytes without emitting a token."""
    return SplitResult(count)


def literal(data: bytes | memoryview, *, final: bool = False, zeros: int = 0) -> SplitResult:
    """Emit all of ``data`` as one literal token."""
    value = bytes(data)
    return SplitResult(len(value), Token(TokenType.LITERAL, value, zeros=zeros), final)


def candidate(data: bytes | memoryview, end: int, digits_start: int, *, zeros: int = 0) -> SplitResult:
    """Emit ``data[:end]`` as a candidate whose digits start at ``digits_start``."""
    value = bytes(data[:end])
    return SplitResult(end, Token(TokenType.CANDIDATE, value, 0, digits_start, end, zeros))


__all__ = ["NEED_MORE", "SplitResult", "Token", "TokenType", "absorb", "candidate", "literal"]
