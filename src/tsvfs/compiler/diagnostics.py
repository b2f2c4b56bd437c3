"""Compiler diagnostics and their text rendering."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tsvfs.compiler.host import FormatDiagnosticsHost
    from tsvfs.compiler.source_file import SourceFile


class DiagnosticCategory(Enum):
    WARNING = "warning"
    ERROR = "error"
    SUGGESTION = "suggestion"
    MESSAGE = "message"


@dataclass(frozen=True)
class DiagnosticMessage:
    """A diagnostic template: code plus message format."""

    code: int
    message: str
    category: DiagnosticCategory = DiagnosticCategory.ERROR

    def format(self, *args: object) -> str:
        return self.message.format(*args)


UNTERMINATED_STRING_LITERAL = DiagnosticMessage(1002, "Unterminated string literal.")
IDENTIFIER_EXPECTED = DiagnosticMessage(1003, "Identifier expected.")
TOKEN_EXPECTED = DiagnosticMessage(1005, "'{}' expected.")
COMMENT_END_EXPECTED = DiagnosticMessage(1010, "'*/' expected.")
INVALID_CHARACTER = DiagnosticMessage(1127, "Invalid character.")
DECLARATION_OR_STATEMENT_EXPECTED = DiagnosticMessage(1128, "Declaration or statement expected.")
EXPRESSION_EXPECTED = DiagnosticMessage(1109, "Expression expected.")
UNTERMINATED_TEMPLATE_LITERAL = DiagnosticMessage(1160, "Unterminated template literal.")
CANNOT_REDECLARE_BLOCK_SCOPED_VARIABLE = DiagnosticMessage(
    2451, "Cannot redeclare block-scoped variable '{}'."
)
FILE_NOT_FOUND = DiagnosticMessage(6053, "File '{}' not found.")
UNSUPPORTED_EXTENSION = DiagnosticMessage(
    6054,
    "File '{}' has an unsupported extension. The only supported extensions are {}.",
)


@dataclass(frozen=True)
class Diagnostic:
    """A single diagnostic, optionally anchored to a span of a source file."""

    code: int
    message: str
    category: DiagnosticCategory = DiagnosticCategory.ERROR
    file: SourceFile | None = None
    start: int | None = None
    length: int | None = None

    @classmethod
    def create(
        cls,
        template: DiagnosticMessage,
        *args: object,
        file: SourceFile | None = None,
        start: int | None = None,
        length: int | None = None,
    ) -> Diagnostic:
        return cls(
            code=template.code,
            message=template.format(*args),
            category=template.category,
            file=file,
            start=start,
            length=length,
        )


def format_diagnostics(diagnostics: Iterable[Diagnostic], host: FormatDiagnosticsHost) -> str:
    """Render diagnostics as ``file(line,col): error TS####: message`` lines."""
    output = []
    for diagnostic in diagnostics:
        if diagnostic.file is not None and diagnostic.start is not None:
            line, character = diagnostic.file.get_line_and_character_of_position(diagnostic.start)
            file_name = _relative_file_name(diagnostic.file.file_name, host)
            output.append(f"{file_name}({line + 1},{character + 1}): ")
        output.append(
            f"{diagnostic.category.value} TS{diagnostic.code}: {diagnostic.message}"
            f"{host.get_new_line()}"
        )
    return "".join(output)


def _relative_file_name(file_name: str, host: FormatDiagnosticsHost) -> str:
    current_directory = host.get_canonical_file_name(host.get_current_directory())
    canonical = host.get_canonical_file_name(file_name)
    if current_directory and canonical.startswith(current_directory):
        return file_name[len(current_directory) :]
    return file_name
