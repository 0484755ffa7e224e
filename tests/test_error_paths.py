"""Error hierarchy and message formatting tests."""

import pytest

from unixhuman.errors import (
    ConfigError,
    InputError,
    OutputError,
    RangeError,
    ScanError,
    StreamError,
    UnixHumanError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_type, base",
        [
            (ConfigError, UnixHumanError),
            (RangeError, ConfigError),
            (ScanError, UnixHumanError),
            (StreamError, UnixHumanError),
            (InputError, StreamError),
            (OutputError, StreamError),
        ],
    )
    def test_subclass(self, error_type: type, base: type) -> None:
        assert issubclass(error_type, base)


class TestRangeError:
    def test_message_and_bounds(self) -> None:
        err = RangeError(10, 1, "lower bound exceeds upper bound")
        assert str(err) == "invalid range [10, 1]: lower bound exceeds upper bound"
        assert err.lower == 10
        assert err.upper == 1


class TestChaining:
    def test_stream_error_keeps_cause(self) -> None:
        cause = OSError(5, "Input/output error")
        try:
            try:
                raise cause
            except OSError as exc:
                raise InputError("unable to read input") from exc
        except InputError as err:
            assert err.__cause__ is cause
