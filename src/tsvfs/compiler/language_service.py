"""Language service: point queries over a lazily synchronized program.

The service never receives push notifications. Before answering a query it
asks the host for the project version; if that is unchanged the cached
program answers directly. Otherwise it rebuilds, asking each script for its
version and reparsing only scripts whose version moved.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

from tsvfs.compiler.program import Program, create_program
from tsvfs.compiler.source_file import SourceFile, StatementKind, create_source_file

if TYPE_CHECKING:
    from tsvfs.compiler.diagnostics import Diagnostic
    from tsvfs.compiler.host import LanguageServiceHost
    from tsvfs.config.models import CompilerOptions, ScriptTarget

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class NavigationItem:
    """A top-level declaration in one file."""

    name: str
    kind: StatementKind
    file_name: str
    start: int
    exported: bool


@dataclass(frozen=True)
class CompletionEntry:
    name: str
    kind: StatementKind
    file_name: str


@dataclass
class _ScriptEntry:
    version: str
    source_file: SourceFile


class _SnapshotCompilerHost:
    """Compiler host view over the service's synchronized scripts."""

    def __init__(self, host: LanguageServiceHost, scripts: dict[str, _ScriptEntry]) -> None:
        self._host = host
        self._scripts = scripts

    def file_exists(self, file_name: str) -> bool:
        return file_name in self._scripts

    def read_file(self, file_name: str) -> str:
        return self._scripts[file_name].source_file.text

    def get_source_file(self, file_name: str, language_version: ScriptTarget) -> SourceFile | None:  # noqa: ARG002
        entry = self._scripts.get(file_name)
        return entry.source_file if entry is not None else None

    def get_default_lib_file_name(self, options: CompilerOptions) -> str:
        return self._host.get_default_lib_file_name(options)

    def get_current_directory(self) -> str:
        return self._host.get_current_directory()

    def get_canonical_file_name(self, file_name: str) -> str:
        return self._host.get_canonical_file_name(file_name)

    def get_new_line(self) -> str:
        return self._host.get_new_line()

    def get_directories(self, path: str) -> list[str]:  # noqa: ARG002
        return []

    def read_directory(
        self,
        directory: str,  # noqa: ARG002
        extensions: Sequence[str] | None = None,  # noqa: ARG002
        excludes: Sequence[str] | None = None,  # noqa: ARG002
        includes: Sequence[str] | None = None,  # noqa: ARG002
        depth: int | None = None,  # noqa: ARG002
    ) -> list[str]:
        return list(self._scripts)

    def use_case_sensitive_file_names(self) -> bool:
        return True

    def write_file(self, file_name: str, data: str, write_byte_order_mark: bool = False) -> None:  # noqa: ARG002
        return None


class LanguageService:
    """Editor-style queries against the host's current scripts."""

    def __init__(self, host: LanguageServiceHost) -> None:
        self._host = host
        self._scripts: dict[str, _ScriptEntry] = {}
        self._program: Program | None = None
        self._project_version: str | None = None
        self._sync_count = 0

    @property
    def sync_count(self) -> int:
        """How many times the program has been rebuilt."""
        return self._sync_count

    def get_program(self) -> Program:
        self._synchronize()
        assert self._program is not None
        return self._program

    def get_compiler_options_diagnostics(self) -> list[Diagnostic]:
        return self.get_program().get_options_diagnostics()

    def get_syntactic_diagnostics(self, file_name: str) -> list[Diagnostic]:
        program = self.get_program()
        source_file = program.get_source_file(file_name)
        if source_file is None:
            return []
        return program.get_syntactic_diagnostics(source_file)

    def get_semantic_diagnostics(self, file_name: str) -> list[Diagnostic]:
        program = self.get_program()
        source_file = program.get_source_file(file_name)
        if source_file is None:
            return []
        return program.get_semantic_diagnostics(source_file)

    def get_navigation_items(self, file_name: str) -> list[NavigationItem]:
        source_file = self.get_program().get_source_file(file_name)
        if source_file is None:
            return []
        return [
            NavigationItem(
                name=statement.name,
                kind=statement.kind,
                file_name=file_name,
                start=statement.pos + (statement.name_offset or 0),
                exported=statement.exported,
            )
            for statement in source_file.declarations
            if statement.name is not None
        ]

    def get_completions_at_position(self, file_name: str, position: int) -> list[CompletionEntry]:
        """Declared names visible from ``file_name`` matching the word at ``position``.

        Other files contribute only exported declarations, except declaration
        files whose top-level names are global.
        """
        program = self.get_program()
        source_file = program.get_source_file(file_name)
        if source_file is None:
            return []
        prefix = _word_before(source_file.text, position)
        entries: dict[str, CompletionEntry] = {}
        for candidate in program.get_source_files():
            is_local = candidate.file_name == file_name
            for statement in candidate.declarations:
                if statement.name is None or not statement.name.startswith(prefix):
                    continue
                if not (is_local or statement.exported or candidate.is_declaration_file):
                    continue
                entries.setdefault(
                    statement.name,
                    CompletionEntry(statement.name, statement.kind, candidate.file_name),
                )
        return sorted(entries.values(), key=lambda entry: entry.name)

    def _synchronize(self) -> None:
        project_version = self._host.get_project_version()
        if self._program is not None and project_version == self._project_version:
            return

        options = self._host.get_compilation_settings()
        scripts: dict[str, _ScriptEntry] = {}
        reparsed = 0
        for file_name in self._host.get_script_file_names():
            version = self._host.get_script_version(file_name)
            previous = self._scripts.get(file_name)
            if previous is not None and previous.version == version:
                scripts[file_name] = previous
                continue
            snapshot = self._host.get_script_snapshot(file_name)
            if snapshot is None:
                continue
            text = snapshot.get_text(0, snapshot.get_length())
            scripts[file_name] = _ScriptEntry(
                version=version,
                source_file=create_source_file(file_name, text, options.target),
            )
            reparsed += 1

        self._scripts = scripts
        self._program = create_program(
            list(scripts),
            options,
            _SnapshotCompilerHost(self._host, scripts),
            self._program,
        )
        self._project_version = project_version
        self._sync_count += 1
        log.debug(
            "language_service_synchronized",
            project_version=project_version,
            reparsed=reparsed,
        )


def _word_before(text: str, position: int) -> str:
    """The identifier characters immediately before ``position``."""
    position = min(position, len(text))
    start = position
    while start > 0 and (text[start - 1].isalnum() or text[start - 1] in "_$"):
        start -= 1
    return text[start:position]


def create_language_service(host: LanguageServiceHost) -> LanguageService:
    return LanguageService(host)
