"""Host contracts the compiler engine consumes.

The engine never touches a file system. Everything it knows about files comes
through one of these protocols, which the virtual adapters in ``tsvfs.vfs``
implement.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from enum import IntEnum
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from tsvfs.compiler.builder import BuilderProgram
    from tsvfs.compiler.diagnostics import Diagnostic
    from tsvfs.compiler.snapshot import ScriptSnapshot
    from tsvfs.compiler.source_file import SourceFile
    from tsvfs.config.models import CompilerOptions, ScriptTarget


class FileWatcherEventKind(IntEnum):
    """Classification passed to file watch callbacks."""

    CREATED = 0
    CHANGED = 1
    DELETED = 2


FileWatcherCallback = Callable[[str, FileWatcherEventKind], None]
DirectoryWatcherCallback = Callable[[str], None]


class FileWatcher(Protocol):
    def close(self) -> None: ...


class FormatDiagnosticsHost(Protocol):
    def get_current_directory(self) -> str: ...

    def get_canonical_file_name(self, file_name: str) -> str: ...

    def get_new_line(self) -> str: ...


class CompilerHost(FormatDiagnosticsHost, Protocol):
    """Callbacks needed to build a program."""

    def file_exists(self, file_name: str) -> bool: ...

    def read_file(self, file_name: str) -> str: ...

    def get_source_file(
        self, file_name: str, language_version: ScriptTarget
    ) -> SourceFile | None: ...

    def get_default_lib_file_name(self, options: CompilerOptions) -> str: ...

    def get_directories(self, path: str) -> list[str]: ...

    def read_directory(
        self,
        directory: str,
        extensions: Sequence[str] | None = None,
        excludes: Sequence[str] | None = None,
        includes: Sequence[str] | None = None,
        depth: int | None = None,
    ) -> list[str]: ...

    def use_case_sensitive_file_names(self) -> bool: ...

    def write_file(self, file_name: str, data: str, write_byte_order_mark: bool = False) -> None: ...


class CreateProgram(Protocol):
    def __call__(
        self,
        root_names: Sequence[str] | None,
        options: CompilerOptions,
        host: CompilerHost,
        old_program: BuilderProgram | None = None,
        config_file_parsing_diagnostics: Sequence[Diagnostic] | None = None,
        project_references: Sequence[str] | None = None,
    ) -> BuilderProgram: ...


class WatchCompilerHost(CompilerHost, Protocol):
    """Compiler host that can be observed for changes."""

    create_program: CreateProgram

    def watch_file(
        self,
        path: str,
        callback: FileWatcherCallback,
        polling_interval: int | None = None,
        options: object | None = None,
    ) -> FileWatcher: ...

    def watch_directory(
        self,
        path: str,
        callback: DirectoryWatcherCallback,
        recursive: bool = False,
        options: object | None = None,
    ) -> FileWatcher: ...


class LanguageServiceHost(Protocol):
    """Callbacks a language service polls for staleness and content."""

    def get_compilation_settings(self) -> CompilerOptions: ...

    def get_project_version(self) -> str: ...

    def get_script_file_names(self) -> list[str]: ...

    def get_script_version(self, file_name: str) -> str: ...

    def get_script_snapshot(self, file_name: str) -> ScriptSnapshot | None: ...

    def get_current_directory(self) -> str: ...

    def get_canonical_file_name(self, file_name: str) -> str: ...

    def get_new_line(self) -> str: ...

    def get_default_lib_file_name(self, options: CompilerOptions) -> str: ...

    def file_exists(self, file_name: str) -> bool: ...
