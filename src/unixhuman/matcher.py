"""Range matcher for numeric candidates.

Decides whether a run of significant digits is an epoch value inside the
configured ``DecimalRange``. Cheap structural gates run first so that most
digit runs (IDs, phone numbers, prices) are rejected without parsing:

1. Length gate: digit count outside ``[min_len, max_len]``
2. Prefix gate: digits do not start with the bounds' common prefix
3. Parse: base-10, signed 64-bit; overflow is a rejection
4. Range gate: ``lower <= value <= upper``

Rejection is a normal result, never an exception.

Thread Safety:
    RangeMatcher is immutable after construction and may be shared by any
    number of pipelines.

"""

from __future__ import annotations

from dataclasses import dataclass, field

from unixhuman.ranges import INT64_MAX, DecimalRange


def common_prefix(a: bytes, b: bytes) -> bytes:
    """Longest shared leading run of ``a`` and ``b``, walked over the shorter one."""
    shorter, longer = (a, b) if len(a) < len(b) else (b, a)
    for i, char in enumerate(shorter):
        if longer[i] != char:
            return shorter[:i]
    return shorter


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Outcome of matching one candidate.

    ``value`` is only meaningful when ``matched`` is True.
    """

    value: int
    matched: bool

    def __bool__(self) -> bool:
        return self.matched


NO_MATCH = MatchResult(0, False)


@dataclass(frozen=True, slots=True)
class RangeMatcher:
    """Classifies digit runs as in-range or out-of-range epoch values.

    Attributes:
        bounds: The inclusive range being matched
        min_len: Digit count of the shorter bound
        max_len: Digit count of the longer bound
        prefix: Common leading digits of both bounds (often, though not
            always, empty when the bounds differ in length)

    Usage:
        >>> matcher = RangeMatcher(DecimalRange(1, 9999999999))
        >>> matcher.match(b"1613336683")
        MatchResult(value=1613336683, matched=True)
        >>> matcher.match(b"16133366830000").matched
        False

    """

    bounds: DecimalRange
    min_len: int = field(init=False)
    max_len: int = field(init=False)
    prefix: bytes = field(init=False)

    def __post_init__(self) -> None:
        lower_text, upper_text = self.bounds.lower_text, self.bounds.upper_text
        object.__setattr__(self, "min_len", min(len(lower_text), len(upper_text)))
        object.__setattr__(self, "max_len", max(len(lower_text), len(upper_text)))
        object.__setattr__(self, "prefix", common_prefix(lower_text, upper_text))

    def match(self, digits: bytes | memoryview) -> MatchResult:
        """Match a run of significant digits against the range.

        Args:
            digits: ASCII digits with no sign and no leading zeros

        Returns:
            MatchResult with the parsed value, or NO_MATCH
        """
        length = len(digits)
        if length < self.min_len or length > self.max_len:
            return NO_MATCH
        text = bytes(digits)
        if not text.startswith(self.prefix):
            return NO_MATCH
        # int() would also accept signs, whitespace and underscores
        if not text.isdigit():
            return NO_MATCH
        value = int(text)
        if value > INT64_MAX:
            return NO_MATCH
        if not self.bounds.contains(value):
            return NO_MATCH
        return MatchResult(value, True)


__all__ = ["MatchResult", "NO_MATCH", "RangeMatcher", "common_prefix"]
