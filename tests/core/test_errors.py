"""Tests for error types and codes."""

import pytest

from lcovkit.core.errors import (
    ConfigError,
    CoverageError,
    ErrorCode,
    LcovKitError,
    MalformedRecordError,
    PathResolutionError,
    UnreadableInputError,
)


class TestErrorCode:
    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.MALFORMED_RECORD, 3000),
            (ErrorCode.PATH_RESOLUTION_FAILED, 3000),
            (ErrorCode.UNREADABLE_INPUT, 3000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        assert expected_range <= code.value < expected_range + 1000


class TestLcovKitError:
    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        error = LcovKitError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        assert error.to_dict() == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        error = LcovKitError(code=ErrorCode.MALFORMED_RECORD, message="Something broke")
        assert str(error) == "[3001] MALFORMED_RECORD: Something broke"

    def test_can_be_raised_and_caught(self) -> None:
        with pytest.raises(LcovKitError):
            raise ConfigError.parse_error("/p/config.yaml", "boom")


class TestConfigError:
    def test_parse_error(self) -> None:
        error = ConfigError.parse_error("/p/.lcovkit/config.yaml", "bad indent")
        assert error.code == ErrorCode.CONFIG_PARSE_ERROR
        assert error.details == {"path": "/p/.lcovkit/config.yaml", "reason": "bad indent"}

    def test_invalid_value(self) -> None:
        error = ConfigError.invalid_value("coverage.max_workers", 0, "too small")
        assert error.code == ErrorCode.CONFIG_INVALID_VALUE
        assert error.details["value"] == "0"


class TestCoverageErrors:
    def test_malformed_record(self) -> None:
        error = MalformedRecordError.for_record("DA", "abc", "DA:abc,3")

        assert isinstance(error, CoverageError)
        assert error.kind == "DA"
        assert error.line_token == "abc"
        assert error.message == "Can't save DA data for line abc"
        assert error.retryable is False

    def test_path_resolution(self) -> None:
        error = PathResolutionError.for_path("src/x.ts", "no such file")
        assert error.code == ErrorCode.PATH_RESOLUTION_FAILED
        assert error.raw_path == "src/x.ts"

    def test_unreadable_input(self) -> None:
        error = UnreadableInputError.for_path("/tmp/lcov.info", "file not found")
        assert error.code == ErrorCode.UNREADABLE_INPUT
        assert error.to_dict()["details"] == {"path": "/tmp/lcov.info", "reason": "file not found"}

    def test_raised_from_cause(self) -> None:
        with pytest.raises(UnreadableInputError) as exc_info:
            try:
                raise OSError("denied")
            except OSError as e:
                raise UnreadableInputError.for_path("/x", str(e)) from e

        assert isinstance(exc_info.value.__cause__, OSError)
