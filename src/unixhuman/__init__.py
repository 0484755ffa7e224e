"""
unixhuman: replace UNIX timestamps in text streams with readable times.

A streaming text filter: bytes flow through untouched except where a
decimal run is recognized as an epoch value inside a configured window,
which is replaced by a formatted time.

Quick Start:
    >>> from unixhuman import FilterConfig, replace_timestamps
    >>> config = FilterConfig(timezone="UTC")
    >>> replace_timestamps(b"created 1613336683", config)
    b'created 2021-02-14T21:04:43Z'

Command line:
    $ tail -f app.log | unixhuman --output-mode absolute+relative

Architecture:
    bytes -> StreamScanner(NumberSplitter) -> Token
          -> TimestampFilter(RangeMatcher, converter, formatter) -> bytes
"""

from unixhuman.config import (
    FilterConfig,
    filter_config_context,
    get_filter_config,
    parse_interval,
    parse_time,
    reset_filter_config,
    set_filter_config,
)
from unixhuman.errors import (
    ConfigError,
    InputError,
    OutputError,
    RangeError,
    ScanError,
    StreamError,
    UnixHumanError,
)
from unixhuman.lexer import NumberSplitter, SplitMode, StreamScanner
from unixhuman.matcher import MatchResult, RangeMatcher
from unixhuman.pipeline import FilterStats, TimestampFilter, replace_timestamps, run
from unixhuman.ranges import DecimalRange, Resolution, TimeRange, resolve_time_range
from unixhuman.streams import ChainedReader, OutputSink
from unixhuman.tokens import SplitResult, Token, TokenType

__version__ = "0.1.0"

__all__ = [
    # Config
    "FilterConfig",
    "filter_config_context",
    "get_filter_config",
    "parse_interval",
    "parse_time",
    "reset_filter_config",
    "set_filter_config",
    # Errors
    "ConfigError",
    "InputError",
    "OutputError",
    "RangeError",
    "ScanError",
    "StreamError",
    "UnixHumanError",
    # Core
    "DecimalRange",
    "MatchResult",
    "NumberSplitter",
    "RangeMatcher",
    "Resolution",
    "SplitMode",
    "SplitResult",
    "StreamScanner",
    "TimeRange",
    "Token",
    "TokenType",
    "resolve_time_range",
    # Pipeline
    "ChainedReader",
    "FilterStats",
    "OutputSink",
    "TimestampFilter",
    "replace_timestamps",
    "run",
    "__version__",
]
