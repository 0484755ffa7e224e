"""Tests for StreamScanner buffering and protocol enforcement."""

from __future__ import annotations

import io

import pytest

from unixhuman.errors import InputError, ScanError
from unixhuman.lexer import NumberSplitter, StreamScanner
from unixhuman.streams import ChainedReader
from unixhuman.tokens import NEED_MORE, SplitResult, Token, TokenType


class FailingReader:
    def read(self, size: int = -1) -> bytes:
        raise OSError(5, "Input/output error")


def scan(data: bytes, chunk_size: int = 4) -> list[Token]:
    return list(StreamScanner(io.BytesIO(data), NumberSplitter().split, chunk_size))


class TestScanning:
    def test_offsets_are_absolute(self) -> None:
        tokens = scan(b"at 100 and 0200.")
        assert [(t.offset, t.span) for t in tokens if t.type is TokenType.CANDIDATE] == [
            (3, b"100"),
            (11, b"0200"),
        ]

    def test_number_across_chunks(self) -> None:
        tokens = scan(b"Timestamp: 1613336683", chunk_size=13)
        assert tokens[-1].value == b"1613336683"
        assert tokens[-1].type is TokenType.CANDIDATE

    def test_empty_input(self) -> None:
        assert scan(b"") == []

    def test_bytes_read(self) -> None:
        scanner = StreamScanner(io.BytesIO(b"x" * 10), NumberSplitter().split, 3)
        list(scanner)
        assert scanner.bytes_read == 10

    def test_reads_across_chained_inputs(self) -> None:
        reader = ChainedReader([io.BytesIO(b"a 16"), io.BytesIO(b"13 b")])
        tokens = list(StreamScanner(reader, NumberSplitter().split))
        assert [t.value for t in tokens if t.type is TokenType.CANDIDATE] == [b"1613"]

    def test_iter_is_scan(self) -> None:
        scanner = StreamScanner(io.BytesIO(b"1"), NumberSplitter().split)
        assert [t.value for t in scanner] == [b"1"]

    def test_invalid_chunk_size(self) -> None:
        with pytest.raises(ValueError):
            StreamScanner(io.BytesIO(b""), NumberSplitter().split, 0)


class TestProtocolViolations:
    def test_need_more_at_eof(self) -> None:
        scanner = StreamScanner(io.BytesIO(b"abc"), lambda data, at_eof: NEED_MORE)
        with pytest.raises(ScanError, match="end of stream"):
            list(scanner)

    def test_advance_beyond_buffer(self) -> None:
        def split(data, at_eof):
            if not data:
                return NEED_MORE
            return SplitResult(len(data) + 1, Token(TokenType.LITERAL, b"x"))

        with pytest.raises(ScanError, match="advanced"):
            list(StreamScanner(io.BytesIO(b"abc"), split))

    def test_no_progress(self) -> None:
        def split(data, at_eof):
            if not data:
                return NEED_MORE
            return SplitResult(0, Token(TokenType.LITERAL, b""))

        with pytest.raises(ScanError, match="empty tokens"):
            list(StreamScanner(io.BytesIO(b"abc"), split))


class TestReadFailure:
    def test_read_error_becomes_input_error(self) -> None:
        scanner = StreamScanner(FailingReader(), NumberSplitter().split)
        with pytest.raises(InputError) as excinfo:
            list(scanner)
        assert isinstance(excinfo.value.__cause__, OSError)


class TestLongZeroRuns:
    def test_buffer_stays_bounded(self) -> None:
        """A multi-megabyte zero run never accumulates in the buffer."""
        zeros = 4 * 1024 * 1024
        data = b"x" + b"0" * zeros + b" y"
        splitter = NumberSplitter()
        longest = 0

        def split(view, at_eof):
            nonlocal longest
            longest = max(longest, len(view))
            return splitter.split(view, at_eof)

        tokens = list(StreamScanner(io.BytesIO(data), split, 4096))
        assert longest <= 2 * 4096
        assert b"".join(t.span for t in tokens) == data
        assert [t.type for t in tokens] == [TokenType.LITERAL, TokenType.LITERAL]
        assert tokens[1].offset == 1
        assert tokens[1].size == zeros + 2

    def test_zero_run_folded_into_candidate(self) -> None:
        zeros = 1024 * 1024
        tokens = scan(b"at " + b"0" * zeros + b"1613336683.", chunk_size=4096)
        number = tokens[1]
        assert number.type is TokenType.CANDIDATE
        assert number.offset == 3
        assert number.zeros + len(number.value) == zeros + 10
        assert number.digits == b"1613336683"
        assert tokens[-1].value == b"."

    def test_zeros_at_end_of_stream(self) -> None:
        tokens = scan(b"a" + b"0" * 10, chunk_size=3)
        assert b"".join(t.span for t in tokens) == b"a" + b"0" * 10
        assert tokens[-1].offset + tokens[-1].size == 11
