"""Byte endpoints for the filter: chained inputs and the output sink.

OSError from either side is fatal for the run and is re-raised as
InputError or OutputError with the original error chained.
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from contextlib import ExitStack

from unixhuman.errors import InputError, OutputError
from unixhuman.protocols import ByteReader, ByteWriter

STDIN_PATH = "-"


class ChainedReader:
    """Reads several binary readers back to back as one stream.

    The end of one reader is not the end of the stream; ``read`` returns
    ``b""`` only once every reader is exhausted.

    Usage:
            >>> import io
            >>> reader = ChainedReader([io.BytesIO(b"ab"), io.BytesIO(b"cd")])
            >>> reader.read(8), reader.read(8), reader.read(8)
            (b'ab', b'cd', b'')

    """

    __slots__ = ("_readers", "_index")

    def __init__(self, readers: Iterable[ByteReader]) -> None:
        self._readers = list(readers)
        self._index = 0

    def read(self, size: int = -1, /) -> bytes:
        while self._index < len(self._readers):
            chunk = self._readers[self._index].read(size)
            if chunk:
                return chunk
            self._index += 1
        return b""


def open_inputs(paths: Iterable[str], stack: ExitStack) -> ChainedReader:
    """Open ``paths`` for binary reading, registering each on ``stack``.

    ``"-"`` reads standard input.

    Raises:
        InputError: If a path cannot be opened
    """
    readers: list[ByteReader] = []
    for path in paths:
        if path == STDIN_PATH:
            readers.append(sys.stdin.buffer)
            continue
        try:
            readers.append(stack.enter_context(open(path, "rb")))
        except OSError as exc:
            raise InputError(f"unable to open {path}: {exc.strerror or exc}") from exc
    return ChainedReader(readers)


class OutputSink:
    """Append-only binary sink with optional flush-per-write.

    Counts bytes written so the pipeline can report them.

    """

    __slots__ = ("_stream", "_unbuffered", "bytes_written")

    def __init__(self, stream: ByteWriter, unbuffered: bool = False) -> None:
        self._stream = stream
        self._unbuffered = unbuffered
        self.bytes_written = 0

    def write(self, data: bytes) -> None:
        """Write ``data``; flush immediately when unbuffered.

        Raises:
            OutputError: If the underlying stream fails
        """
        if not data:
            return
        try:
            self._stream.write(data)
            if self._unbuffered:
                self._stream.flush()
        except OSError as exc:
            raise OutputError(f"unable to write output: {exc}") from exc
        self.bytes_written += len(data)

    def flush(self) -> None:
        try:
            self._stream.flush()
        except OSError as exc:
            raise OutputError(f"unable to write output: {exc}") from exc


__all__ = ["ChainedReader", "OutputSink", "STDIN_PATH", "open_inputs"]
