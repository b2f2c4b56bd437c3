"""Watch compiler host: the compiler host plus file watching and a builder factory."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from tsvfs.compiler.builder import BuilderProgram, create_abstract_builder
from tsvfs.compiler.host import FileWatcherEventKind
from tsvfs.compiler.program import create_program
from tsvfs.config.constants import DEFAULT_COMPILER_OPTIONS
from tsvfs.vfs.compiler_host import VirtualCompilerHost

if TYPE_CHECKING:
    from tsvfs.compiler.diagnostics import Diagnostic
    from tsvfs.compiler.host import (
        CompilerHost,
        DirectoryWatcherCallback,
        FileWatcher,
        FileWatcherCallback,
    )
    from tsvfs.compiler.source_file import SourceFile
    from tsvfs.config.models import CompilerOptions, ScriptTarget
    from tsvfs.vfs.store import VirtualFileStore

log = structlog.get_logger(__name__)


class WatcherRegistry:
    """File name -> callbacks, each set kept in registration order.

    A callback registered twice for the same name is stored once.
    """

    def __init__(self) -> None:
        self._callbacks: dict[str, dict[FileWatcherCallback, None]] = {}

    def add(self, file_name: str, callback: FileWatcherCallback) -> FileWatcher:
        self._callbacks.setdefault(file_name, {})[callback] = None
        return _RegisteredWatcher(self, file_name, callback)

    def remove(self, file_name: str, callback: FileWatcherCallback) -> None:
        callbacks = self._callbacks.get(file_name)
        if callbacks is not None:
            callbacks.pop(callback, None)

    def callbacks_for(self, file_name: str) -> list[FileWatcherCallback]:
        """Snapshot of the callbacks registered for ``file_name``."""
        return list(self._callbacks.get(file_name, ()))

    def watched_file_names(self) -> list[str]:
        return [name for name, callbacks in self._callbacks.items() if callbacks]


class _RegisteredWatcher:
    __slots__ = ("_registry", "_file_name", "_callback")

    def __init__(self, registry: WatcherRegistry, file_name: str, callback: FileWatcherCallback) -> None:
        self._registry = registry
        self._file_name = file_name
        self._callback = callback

    def close(self) -> None:
        self._registry.remove(self._file_name, self._callback)


class _InertWatcher:
    __slots__ = ()

    def close(self) -> None:
        return None


class VirtualWatchHost:
    """Watch compiler host over a virtual file store.

    Every compiler host callback is forwarded to the wrapped
    ``VirtualCompilerHost``; this class adds watching and program creation.
    Directory watches are accepted but never fire.
    """

    def __init__(
        self,
        store: VirtualFileStore,
        registry: WatcherRegistry,
        options: CompilerOptions = DEFAULT_COMPILER_OPTIONS,
    ) -> None:
        self._compiler_host = VirtualCompilerHost(store)
        self._registry = registry
        self._options = options
        self._file_names = store.project_file_names()

    @property
    def compiler_host(self) -> VirtualCompilerHost:
        return self._compiler_host

    # -- forwarded compiler host callbacks --

    def file_exists(self, file_name: str) -> bool:
        return self._compiler_host.file_exists(file_name)

    def read_file(self, file_name: str) -> str:
        return self._compiler_host.read_file(file_name)

    def get_source_file(self, file_name: str, language_version: ScriptTarget) -> SourceFile | None:
        return self._compiler_host.get_source_file(file_name, language_version)

    def get_canonical_file_name(self, file_name: str) -> str:
        return self._compiler_host.get_canonical_file_name(file_name)

    def use_case_sensitive_file_names(self) -> bool:
        return self._compiler_host.use_case_sensitive_file_names()

    def get_current_directory(self) -> str:
        return self._compiler_host.get_current_directory()

    def get_default_lib_file_name(self, options: CompilerOptions) -> str:
        return self._compiler_host.get_default_lib_file_name(options)

    def get_directories(self, path: str) -> list[str]:
        return self._compiler_host.get_directories(path)

    def read_directory(
        self,
        directory: str,
        extensions: Sequence[str] | None = None,
        excludes: Sequence[str] | None = None,
        includes: Sequence[str] | None = None,
        depth: int | None = None,
    ) -> list[str]:
        return self._compiler_host.read_directory(directory, extensions, excludes, includes, depth)

    def get_new_line(self) -> str:
        return self._compiler_host.get_new_line()

    def write_file(self, file_name: str, data: str, write_byte_order_mark: bool = False) -> None:
        return self._compiler_host.write_file(file_name, data, write_byte_order_mark)

    # -- watch host additions --

    def create_program(
        self,
        root_names: Sequence[str] | None,
        options: CompilerOptions,  # noqa: ARG002
        host: CompilerHost,
        old_program: BuilderProgram | None = None,
        config_file_parsing_diagnostics: Sequence[Diagnostic] | None = None,
        project_references: Sequence[str] | None = None,  # noqa: ARG002
    ) -> BuilderProgram:
        """Build a program with the fixed options, reusing ``old_program``."""
        program = create_program(
            root_names if root_names is not None else self._file_names,
            self._options,
            host,
            old_program.get_program() if old_program is not None else None,
            config_file_parsing_diagnostics,
        )
        return create_abstract_builder(program, old_program)

    def watch_file(
        self,
        path: str,
        callback: FileWatcherCallback,
        polling_interval: int | None = None,  # noqa: ARG002
        options: object | None = None,  # noqa: ARG002
    ) -> FileWatcher:
        return self._registry.add(path, callback)

    def watch_directory(
        self,
        path: str,  # noqa: ARG002
        callback: DirectoryWatcherCallback,  # noqa: ARG002
        recursive: bool = False,  # noqa: ARG002
        options: object | None = None,  # noqa: ARG002
    ) -> FileWatcher:
        return _InertWatcher()

    def update_file(self, source_file: SourceFile) -> None:
        """Store ``source_file`` and notify its watchers before returning."""
        already_exists = self._compiler_host.update_file(source_file)
        kind = FileWatcherEventKind.CHANGED if already_exists else FileWatcherEventKind.CREATED
        callbacks = self._registry.callbacks_for(source_file.file_name)
        log.debug(
            "watchers_notified",
            file=source_file.file_name,
            kind=kind.name,
            callbacks=len(callbacks),
        )
        for callback in callbacks:
            callback(source_file.file_name, kind)
