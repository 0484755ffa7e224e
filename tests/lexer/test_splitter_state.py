"""Tests for NumberSplitter responses and mode transitions."""

from __future__ import annotations

from unixhuman.lexer import NumberSplitter, SplitMode, find_number
from unixhuman.tokens import TokenType


class TestFindNumber:
    def test_plain_number(self) -> None:
        assert find_number(b"ts=1613336683;") == (3, 3, 13)

    def test_leading_zeros_belong_to_span(self) -> None:
        assert find_number(b"x 0001613336683") == (2, 5, 15)

    def test_zero_only_runs_skipped(self) -> None:
        assert find_number(b"0 00 a 07") == (7, 8, 9)

    def test_no_number(self) -> None:
        assert find_number(b"") is None
        assert find_number(b"abc 000 def") is None

    def test_significant_digits_capped_at_19(self) -> None:
        data = b"1" * 25
        assert find_number(data) == (0, 0, 19)
        assert find_number(b"00" + b"9" * 30) == (0, 2, 21)

    def test_works_on_memoryview(self) -> None:
        assert find_number(memoryview(b"ab 42")) == (3, 3, 5)


class TestIdleMode:
    def test_empty_buffer_needs_more(self) -> None:
        result = NumberSplitter().split(b"", False)
        assert result.need_more

    def test_empty_buffer_at_eof_is_final(self) -> None:
        result = NumberSplitter().split(b"", True)
        assert result.final
        assert result.token is None
        assert not result.need_more

    def test_no_number_emits_whole_buffer(self) -> None:
        result = NumberSplitter().split(b"hello world", False)
        assert result.advance == 11
        assert result.token.type is TokenType.LITERAL
        assert not result.final

    def test_no_number_at_eof_is_final(self) -> None:
        result = NumberSplitter().split(b"hello", True)
        assert result.token.value == b"hello"
        assert result.final

    def test_trailing_zeros_held_back(self) -> None:
        result = NumberSplitter().split(b"id=000", False)
        assert result.token.value == b"id="

    def test_only_zeros_absorbed(self) -> None:
        splitter = NumberSplitter()
        result = splitter.split(b"000", False)
        assert result.advance == 3
        assert result.token is None
        assert not result.need_more
        assert splitter.held_zeros == 3

    def test_only_zeros_at_eof(self) -> None:
        result = NumberSplitter().split(b"000", True)
        assert result.token.type is TokenType.LITERAL
        assert result.token.value == b"000"

    def test_number_at_start(self) -> None:
        splitter = NumberSplitter()
        result = splitter.split(b"0042 rest", False)
        assert result.advance == 4
        assert result.token.type is TokenType.CANDIDATE
        assert result.token.digits == b"42"
        assert splitter.mode is SplitMode.IDLE

    def test_number_at_start_touching_end_needs_more(self) -> None:
        splitter = NumberSplitter()
        assert splitter.split(b"1613", False).need_more
        assert splitter.mode is SplitMode.IDLE

    def test_number_at_start_touching_end_at_eof(self) -> None:
        result = NumberSplitter().split(b"1613", True)
        assert result.token.type is TokenType.CANDIDATE
        assert result.advance == 4


class TestPendingCandidate:
    def test_literal_prefix_then_cached_candidate(self) -> None:
        splitter = NumberSplitter()
        first = splitter.split(b"x 0012 y", False)
        assert first.token.value == b"x "
        assert splitter.mode is SplitMode.PENDING_CANDIDATE

        second = splitter.split(b"0012 y", False)
        assert second.token.type is TokenType.CANDIDATE
        assert second.token.value == b"0012"
        assert second.token.digits == b"12"
        assert splitter.mode is SplitMode.IDLE

    def test_cached_location_reused_without_rescan(self) -> None:
        """The pending candidate is cut from the cached location, not rescanned."""
        splitter = NumberSplitter()
        splitter.split(b"x 12 y", False)
        result = splitter.split(b"ab c", False)
        assert result.token.value == b"ab"

    def test_prefix_at_eof_still_emits_candidate(self) -> None:
        splitter = NumberSplitter()
        first = splitter.split(b"Timestamp: 1613336683", True)
        assert first.token.value == b"Timestamp: "
        assert splitter.mode is SplitMode.PENDING_CANDIDATE
        second = splitter.split(b"1613336683", True)
        assert second.token.digits == b"1613336683"


class TestAwaitMore:
    def test_prefix_before_open_number(self) -> None:
        splitter = NumberSplitter()
        first = splitter.split(b"Timestamp: 16", False)
        assert first.token.value == b"Timestamp: "
        assert splitter.mode is SplitMode.AWAIT_MORE

        assert splitter.split(b"16", False).need_more
        assert splitter.mode is SplitMode.IDLE

        third = splitter.split(b"1613336683\n", False)
        assert third.token.value == b"1613336683"

    def test_await_more_at_eof_scans(self) -> None:
        splitter = NumberSplitter()
        splitter.split(b"a 16", False)
        result = splitter.split(b"16", True)
        assert result.token.type is TokenType.CANDIDATE
        assert result.token.value == b"16"


class TestHeldZeros:
    def test_zeros_attached_to_following_candidate(self) -> None:
        splitter = NumberSplitter()
        splitter.split(b"00", False)
        splitter.split(b"000", False)
        result = splitter.split(b"042 x", False)
        assert result.token.type is TokenType.CANDIDATE
        assert result.token.zeros == 5
        assert result.token.value == b"042"
        assert result.token.span == b"00000042"
        assert result.token.digits == b"42"
        assert splitter.held_zeros == 0

    def test_zeros_attached_to_following_literal(self) -> None:
        splitter = NumberSplitter()
        splitter.split(b"0000", False)
        result = splitter.split(b"0 and 7;", False)
        assert result.token.type is TokenType.LITERAL
        assert result.token.span == b"00000 and "
        assert splitter.mode is SplitMode.PENDING_CANDIDATE

    def test_zeros_held_through_open_number(self) -> None:
        splitter = NumberSplitter()
        splitter.split(b"00", False)
        assert splitter.split(b"16", False).need_more
        assert splitter.held_zeros == 2
        result = splitter.split(b"1613;", False)
        assert result.token.span == b"001613"

    def test_zeros_flushed_at_end_of_stream(self) -> None:
        splitter = NumberSplitter()
        splitter.split(b"000", False)
        result = splitter.split(b"", True)
        assert result.final
        assert result.advance == 0
        assert result.token.type is TokenType.LITERAL
        assert result.token.span == b"000"

    def test_only_all_zero_buffers_absorbed(self) -> None:
        splitter = NumberSplitter()
        result = splitter.split(b"x00", False)
        assert result.token.value == b"x"
        assert splitter.held_zeros == 0
