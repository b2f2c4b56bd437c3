"""tsvfs error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Files
- 4xxx: Edits
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_DIAGNOSTICS = 2001

    # Files (3xxx)
    FILE_NOT_FOUND = 3001

    # Edits (4xxx)
    SPAN_OUT_OF_RANGE = 4001
    FILE_NOT_IN_PROGRAM = 4002


@dataclass(frozen=True, slots=True)
class TsVfsError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'FILE_NOT_FOUND')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured logs and embedder responses."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigurationError(TsVfsError):
    """The compiler rejected the environment's configuration."""

    @classmethod
    def from_diagnostics(cls, formatted: str, count: int) -> "ConfigurationError":
        return cls(
            code=ErrorCode.CONFIG_DIAGNOSTICS,
            message=formatted,
            details={"diagnostic_count": count},
        )


class VirtualFileError(TsVfsError):
    """Lookups against the virtual file store."""

    @classmethod
    def not_found(cls, file_name: str) -> "VirtualFileError":
        return cls(
            code=ErrorCode.FILE_NOT_FOUND,
            message=f"File not found in virtual store: {file_name}",
            details={"file_name": file_name},
        )


class EditError(TsVfsError):
    """Span-based text edits that cannot be applied."""

    @classmethod
    def span_out_of_range(cls, file_name: str, start: int, length: int, text_length: int) -> "EditError":
        return cls(
            code=ErrorCode.SPAN_OUT_OF_RANGE,
            message=(
                f"Span ({start}, {length}) is outside '{file_name}' "
                f"(text length {text_length})"
            ),
            details={
                "file_name": file_name,
                "start": start,
                "length": length,
                "text_length": text_length,
            },
        )

    @classmethod
    def file_not_in_program(cls, file_name: str) -> "EditError":
        return cls(
            code=ErrorCode.FILE_NOT_IN_PROGRAM,
            message=f"File is not part of the current program: {file_name}",
            details={"file_name": file_name},
        )
