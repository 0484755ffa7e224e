"""Streaming number splitter for unixhuman.

This package finds numeric candidates in a byte stream that arrives in
arbitrary chunks, without buffering the whole input and without rescanning
bytes already committed to a token.

Architecture:
lexer/
├── __init__.py          # Re-exports
├── core.py              # NumberSplitter (growing-prefix split function)
├── modes.py             # SplitMode enum, digit cap
└── scanner.py           # StreamScanner (buffer owner, reads and dispatches)

Usage:
    >>> import io
    >>> from unixhuman.lexer import NumberSplitter, StreamScanner
    >>> scanner = StreamScanner(io.BytesIO(b"id 0042 x"), NumberSplitter().split)
    >>> for token in scanner:
    ...     print(token)
Token(LITERAL, b'id ', @0)
Token(CANDIDATE, b'0042', @3, digits=b'42')
Token(LITERAL, b' x', @7)

"""

from unixhuman.lexer.core import NumberSplitter, find_number
from unixhuman.lexer.modes import SplitMode
from unixhuman.lexer.scanner import DEFAULT_CHUNK_SIZE, StreamScanner

__all__ = ["DEFAULT_CHUNK_SIZE", "NumberSplitter", "SplitMode", "StreamScanner", "find_number"]
