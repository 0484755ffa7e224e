"""Pipeline driver: tokens in, substituted bytes out.

For each token from the scanner:
- Literal: written unchanged
- Candidate rejected by the matcher: written unchanged, leading zeros kept
- Candidate accepted: the whole span, leading zeros included, is replaced
  by the formatted rendering of the converted value

Writes happen in encounter order; nothing is buffered beyond the sink.

"""

from __future__ import annotations

import io
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime

from unixhuman.config import FilterConfig, get_filter_config
from unixhuman.convert import Converter, build_converter, resolve_timezone
from unixhuman.formatters import build_formatter
from unixhuman.lexer import NumberSplitter, StreamScanner
from unixhuman.matcher import RangeMatcher
from unixhuman.protocols import ByteReader, TimeFormatter
from unixhuman.ranges import DecimalRange, resolve_time_range
from unixhuman.streams import OutputSink
from unixhuman.tokens import Token, TokenType
from unixhuman.utils.logger import get_logger

logger = get_logger(__name__)

# Held zero runs are written back in slices of this block
_ZERO_BLOCK = b"0" * (64 * 1024)


@dataclass(slots=True)
class FilterStats:
    """Counters for one run."""

    literals: int = 0
    candidates: int = 0
    replaced: int = 0
    bytes_read: int = 0
    bytes_written: int = 0


class TimestampFilter:
    """Replaces in-range epoch candidates with formatted times.

    Usage:
            >>> from unixhuman.ranges import DecimalRange
            >>> f = TimestampFilter(
            ...     RangeMatcher(DecimalRange(10, 99)),
            ...     converter=lambda v: v,
            ...     formatter=type("F", (), {"format": lambda self, v: f"<{v}>"})(),
            ... )
            >>> f.translate(b"a 042 b 500")
            b'a <42> b 500'

    Thread Safety:
        Holds only immutable collaborators; one instance may serve many
        pipelines.

    """

    __slots__ = ("matcher", "converter", "formatter")

    def __init__(
        self,
        matcher: RangeMatcher,
        converter: Converter,
        formatter: TimeFormatter,
    ) -> None:
        self.matcher = matcher
        self.converter = converter
        self.formatter = formatter

    @classmethod
    def from_config(cls, config: FilterConfig, now: datetime | None = None) -> TimestampFilter:
        """Build range, matcher, converter and formatter from ``config``.

        Raises:
            ConfigError: If the range or timezone is invalid
        """
        time_range = resolve_time_range(config, now)
        decimal_range = DecimalRange.from_time_range(time_range, config.resolution)
        matcher = RangeMatcher(decimal_range)
        logger.debug(
            "matching %s values in [%d, %d] (%s .. %s)",
            config.resolution.name.lower(),
            decimal_range.lower,
            decimal_range.upper,
            time_range.lower,
            time_range.upper,
        )
        logger.debug(
            "matcher gates: length %d..%d, prefix %r",
            matcher.min_len,
            matcher.max_len,
            matcher.prefix.decode("ascii"),
        )
        tz = resolve_timezone(config.timezone)
        return cls(matcher, build_converter(config.resolution, tz), build_formatter(config))

    def substitute(self, value: int) -> bytes:
        """Formatted replacement for a matched epoch value."""
        return self.formatter.format(self.converter(value)).encode("utf-8")

    def process(self, tokens: Iterable[Token], sink: OutputSink) -> FilterStats:
        """Write every token's rendering to ``sink`` in order.

        Raises:
            OutputError: If the sink fails (propagated from the sink)
        """
        stats = FilterStats()
        for token in tokens:
            if token.type is TokenType.LITERAL:
                stats.literals += 1
                _write_unchanged(sink, token)
                continue
            stats.candidates += 1
            result = self.matcher.match(token.digits)
            if not result.matched:
                _write_unchanged(sink, token)
                continue
            stats.replaced += 1
            sink.write(self.substitute(result.value))
        return stats

    def translate(self, data: bytes) -> bytes:
        """Filter an in-memory byte string."""
        out = io.BytesIO()
        self.process(_scan(io.BytesIO(data)), OutputSink(out))
        return out.getvalue()


def _write_unchanged(sink: OutputSink, token: Token) -> None:
    remaining = token.zeros
    while remaining > 0:
        block = _ZERO_BLOCK[:remaining]
        sink.write(block)
        remaining -= len(block)
    sink.write(token.value)


def _scan(reader: ByteReader, chunk_size: int | None = None) -> StreamScanner:
    if chunk_size is None:
        return StreamScanner(reader, NumberSplitter().split)
    return StreamScanner(reader, NumberSplitter().split, chunk_size)


def run(
    reader: ByteReader,
    sink: OutputSink,
    config: FilterConfig | None = None,
    *,
    now: datetime | None = None,
) -> FilterStats:
    """Filter ``reader`` into ``sink`` and flush.

    Args:
        reader: Binary input
        sink: Output sink
        config: Filter configuration (defaults to the context config)
        now: Reference time for relative ranges

    Returns:
        FilterStats for the run

    Raises:
        InputError: Reading failed
        OutputError: Writing failed
    """
    if config is None:
        config = get_filter_config()
    timestamp_filter = TimestampFilter.from_config(config, now)
    scanner = _scan(reader, config.chunk_size)
    stats = timestamp_filter.process(scanner, sink)
    sink.flush()
    stats.bytes_read = scanner.bytes_read
    stats.bytes_written = sink.bytes_written
    logger.debug(
        "done: %d bytes in, %d bytes out, %d candidates, %d replaced",
        stats.bytes_read,
        stats.bytes_written,
        stats.candidates,
        stats.replaced,
    )
    return stats


def replace_timestamps(
    data: bytes | str,
    config: FilterConfig | None = None,
    *,
    now: datetime | None = None,
) -> bytes:
    """Replace epoch timestamps in an in-memory document.

    Args:
        data: Input bytes (``str`` is encoded as UTF-8)
        config: Filter configuration (defaults to the context config)
        now: Reference time for relative ranges

    Returns:
        Filtered bytes

    Example:
        >>> from datetime import datetime, timezone
        >>> config = FilterConfig(
        ...     from_time=datetime(1970, 1, 1, 0, 0, 1, tzinfo=timezone.utc),
        ...     to_time=datetime(2286, 11, 20, 17, 46, 39, tzinfo=timezone.utc),
        ...     timezone="UTC",
        ... )
        >>> replace_timestamps("Timestamp: 1613336683", config)
        b'Timestamp: 2021-02-14T21:04:43Z'

    """
    if isinstance(data, str):
        data = data.encode("utf-8")
    out = io.BytesIO()
    run(io.BytesIO(data), OutputSink(out), config, now=now)
    return out.getvalue()


__all__ = ["FilterStats", "TimestampFilter", "replace_timestamps", "run"]
