"""Stream scanner driving a split function over a byte reader.

The scanner owns the unconsumed buffer of the growing-prefix protocol. It
reads fixed-size chunks, hands the split function a zero-copy view of
every unconsumed byte, and yields the tokens it emits, stamped with their
absolute stream offsets.

The buffer is compacted only when a chunk is appended, so consecutive
tokens taken from one chunk never copy the rest of that chunk.

"""

from __future__ import annotations

from collections.abc import Iterator

from unixhuman.errors import InputError, ScanError
from unixhuman.protocols import ByteReader, SplitFunc
from unixhuman.tokens import Token
from unixhuman.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024

# Consecutive empty tokens tolerated before the split function is
# considered stuck
MAX_EMPTY_TOKENS = 100


class StreamScanner:
    """Caller side of the growing-prefix split protocol.

    Usage:
            >>> import io
            >>> from unixhuman.lexer import NumberSplitter
            >>> scanner = StreamScanner(io.BytesIO(b"at 42"), NumberSplitter().split)
            >>> [t.value for t in scanner]
            [b'at ', b'42']

    Thread Safety:
        Scanner instances are single-use. Create one per stream.

    """

    __slots__ = (
        "_reader",
        "_split",
        "_chunk_size",
        "_buf",
        "_start",  # Start of the unconsumed bytes in _buf
        "_eof",
        "_offset",  # Absolute stream offset of _buf[_start]
        "bytes_read",
    )

    def __init__(
        self,
        reader: ByteReader,
        split: SplitFunc,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        """Initialize scanner over a reader.

        Args:
            reader: Binary source
            split: Split function (usually ``NumberSplitter().split``)
            chunk_size: Bytes requested per read
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._reader = reader
        self._split = split
        self._chunk_size = chunk_size
        self._buf = b""
        self._start = 0
        self._eof = False
        self._offset = 0
        self.bytes_read = 0

    def __iter__(self) -> Iterator[Token]:
        return self.scan()

    def scan(self) -> Iterator[Token]:
        """Yield tokens until the stream is exhausted.

        The split function ends the stream by answering ``final`` once the
        buffer is empty at end of stream.

        Yields:
            Tokens in stream order; their spans partition the input.

        Raises:
            InputError: The reader failed
            ScanError: The split function broke the protocol
        """
        empty_tokens = 0
        while True:
            view = memoryview(self._buf)[self._start :]
            # Called even on an empty buffer at end of stream, so the split
            # function can emit whatever it still holds
            result = self._split(view, self._eof)

            if result.need_more:
                if self._eof:
                    raise ScanError("split function requested more data at end of stream")
                self._fill()
                continue
            if result.advance < 0 or result.advance > len(view):
                raise ScanError(
                    f"split function advanced {result.advance} bytes "
                    f"with {len(view)} buffered"
                )

            if result.advance == 0:
                empty_tokens += 1
                if empty_tokens > MAX_EMPTY_TOKENS:
                    raise ScanError("too many empty tokens without progressing")
            else:
                empty_tokens = 0

            position = self._offset
            self._start += result.advance
            self._offset += result.advance
            if result.token is not None:
                # Held zeros were consumed by earlier calls
                yield result.token.at(position - result.token.zeros)
            if result.final:
                return

    def _fill(self) -> None:
        """Append one chunk to the buffer, or mark end of stream."""
        try:
            chunk = self._reader.read(self._chunk_size)
        except OSError as exc:
            raise InputError(f"unable to read input: {exc}") from exc
        if not chunk:
            self._eof = True
            logger.debug("end of input after %d bytes", self.bytes_read)
            return
        self.bytes_read += len(chunk)
        self._buf = self._buf[self._start :] + chunk
        self._start = 0
