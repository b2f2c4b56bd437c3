"""Tests for error types and codes."""

import pytest

from tsvfs.core.errors import (
    ConfigurationError,
    EditError,
    ErrorCode,
    TsVfsError,
    VirtualFileError,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_DIAGNOSTICS, 2000),
            (ErrorCode.FILE_NOT_FOUND, 3000),
            (ErrorCode.SPAN_OUT_OF_RANGE, 4000),
            (ErrorCode.FILE_NOT_IN_PROGRAM, 4000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestTsVfsError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = TsVfsError(
            code=ErrorCode.FILE_NOT_FOUND,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 3001,
            "error": "FILE_NOT_FOUND",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_includes_code_and_name(self) -> None:
        # Given
        error = TsVfsError(code=ErrorCode.SPAN_OUT_OF_RANGE, message="bad span")

        # When
        text = str(error)

        # Then
        assert text == "[4001] SPAN_OUT_OF_RANGE: bad span"

    def test_given_subclass_when_raised_then_caught_as_base(self) -> None:
        # Given
        error = EditError.file_not_in_program("a.ts")

        # When / Then
        with pytest.raises(TsVfsError) as exc_info:
            raise error
        assert exc_info.value.code == ErrorCode.FILE_NOT_IN_PROGRAM


class TestFactories:
    """Factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            (
                ConfigurationError.from_diagnostics,
                {"formatted": "error TS6053: File 'x.ts' not found.\n", "count": 1},
                ErrorCode.CONFIG_DIAGNOSTICS,
            ),
            (VirtualFileError.not_found, {"file_name": "a.ts"}, ErrorCode.FILE_NOT_FOUND),
            (
                EditError.span_out_of_range,
                {"file_name": "a.ts", "start": 5, "length": 10, "text_length": 9},
                ErrorCode.SPAN_OUT_OF_RANGE,
            ),
            (EditError.file_not_in_program, {"file_name": "a.ts"}, ErrorCode.FILE_NOT_IN_PROGRAM),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with correct error codes."""
        # When
        error = factory(**kwargs)

        # Then
        assert error.code == expected_code
        assert error.retryable is False

    def test_given_diagnostics_when_configuration_error_then_message_is_formatted_text(self) -> None:
        # Given
        formatted = "error TS6054: File 'notes.txt' has an unsupported extension.\n"

        # When
        error = ConfigurationError.from_diagnostics(formatted, 1)

        # Then
        assert error.message == formatted
        assert error.details == {"diagnostic_count": 1}

    def test_given_bad_span_when_created_then_details_describe_span(self) -> None:
        # When
        error = EditError.span_out_of_range("a.ts", 5, 10, 9)

        # Then
        assert error.details == {"file_name": "a.ts", "start": 5, "length": 10, "text_length": 9}
        assert "a.ts" in error.message
        assert "text length 9" in error.message
