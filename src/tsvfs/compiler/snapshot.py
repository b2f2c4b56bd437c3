"""Immutable script snapshots handed to the language service."""

from __future__ import annotations

from tsvfs.compiler.source_file import TextChangeRange


class ScriptSnapshot:
    """A fixed view of a script's text."""

    __slots__ = ("_text",)

    def __init__(self, text: str) -> None:
        self._text = text

    @classmethod
    def from_string(cls, text: str) -> ScriptSnapshot:
        return cls(text)

    def get_text(self, start: int, end: int) -> str:
        return self._text[start:end]

    def get_length(self) -> int:
        return len(self._text)

    def get_change_range(self, old_snapshot: ScriptSnapshot) -> TextChangeRange | None:  # noqa: ARG002
        # String snapshots carry no edit history; callers must reparse fully.
        return None
