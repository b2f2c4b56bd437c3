"""Tests for diagnostic construction and formatting."""

from tsvfs.compiler.diagnostics import (
    DECLARATION_OR_STATEMENT_EXPECTED,
    FILE_NOT_FOUND,
    TOKEN_EXPECTED,
    UNTERMINATED_STRING_LITERAL,
    Diagnostic,
    DiagnosticCategory,
    format_diagnostics,
)
from tsvfs.compiler.source_file import create_source_file


class FakeFormatHost:
    def __init__(self, current_directory: str = "/", new_line: str = "\n") -> None:
        self._current_directory = current_directory
        self._new_line = new_line

    def get_current_directory(self) -> str:
        return self._current_directory

    def get_canonical_file_name(self, file_name: str) -> str:
        return file_name

    def get_new_line(self) -> str:
        return self._new_line


class TestDiagnosticCreate:
    def test_given_template_with_args_when_created_then_message_formatted(self) -> None:
        # When
        diagnostic = Diagnostic.create(TOKEN_EXPECTED, "}")

        # Then
        assert diagnostic.code == 1005
        assert diagnostic.message == "'}' expected."
        assert diagnostic.category is DiagnosticCategory.ERROR
        assert diagnostic.file is None


class TestFormatDiagnostics:
    """format_diagnostics() rendering tests."""

    def test_given_located_diagnostic_when_formatted_then_includes_one_based_position(
        self,
    ) -> None:
        # Given
        source_file = create_source_file("a.ts", "let x = 1\nlet s = 'ok'")
        diagnostic = Diagnostic.create(
            UNTERMINATED_STRING_LITERAL, file=source_file, start=18, length=4
        )

        # When
        text = format_diagnostics([diagnostic], FakeFormatHost())

        # Then
        assert text == "a.ts(2,9): error TS1002: Unterminated string literal.\n"

    def test_given_global_diagnostic_when_formatted_then_no_location(self) -> None:
        # Given
        diagnostic = Diagnostic.create(FILE_NOT_FOUND, "/missing.ts")

        # When
        text = format_diagnostics([diagnostic], FakeFormatHost())

        # Then
        assert text == "error TS6053: File '/missing.ts' not found.\n"

    def test_given_file_under_current_directory_when_formatted_then_path_is_relative(
        self,
    ) -> None:
        # Given
        source_file = create_source_file("/lib.es2015.d.ts", "}")
        diagnostic = Diagnostic.create(
            DECLARATION_OR_STATEMENT_EXPECTED, file=source_file, start=0, length=1
        )

        # When
        text = format_diagnostics([diagnostic], FakeFormatHost())

        # Then
        assert text.startswith("lib.es2015.d.ts(1,1): error TS1128:")

    def test_given_host_new_line_when_formatted_then_used_as_separator(self) -> None:
        # Given
        diagnostics = [
            Diagnostic.create(FILE_NOT_FOUND, "a.ts"),
            Diagnostic.create(FILE_NOT_FOUND, "b.ts"),
        ]

        # When
        text = format_diagnostics(diagnostics, FakeFormatHost(new_line="\r\n"))

        # Then
        assert text.split("\r\n") == [
            "error TS6053: File 'a.ts' not found.",
            "error TS6053: File 'b.ts' not found.",
            "",
        ]

    def test_empty(self) -> None:
        assert format_diagnostics([], FakeFormatHost()) == ""
