"""Watch programs: keep a builder program current by listening to the host.

The watch program registers a file watcher for every file in its program.
When any watcher fires it rebuilds synchronously, handing the previous
builder to ``host.create_program`` so unchanged files are reused. There is
no timer-based batching: once the host's callback returns, the watch
program already reflects the change.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from tsvfs.compiler.host import FileWatcherEventKind

if TYPE_CHECKING:
    from tsvfs.compiler.builder import BuilderProgram
    from tsvfs.compiler.host import FileWatcher, WatchCompilerHost
    from tsvfs.config.models import CompilerOptions

log = structlog.get_logger(__name__)


class WatchProgram:
    """A program kept up to date by file watch notifications."""

    def __init__(
        self,
        host: WatchCompilerHost,
        root_files: Sequence[str],
        options: CompilerOptions,
    ) -> None:
        self._host = host
        self._root_files = list(root_files)
        self._options = options
        self._file_watchers: dict[str, FileWatcher] = {}
        self._directory_watcher: FileWatcher | None = None
        self._builder: BuilderProgram | None = None
        self._build_count = 0
        self._closed = False

    def get_program(self) -> BuilderProgram:
        assert self._builder is not None
        return self._builder

    def get_build_count(self) -> int:
        return self._build_count

    def update_root_file_names(self, root_files: Sequence[str]) -> None:
        self._root_files = list(root_files)
        self._build()

    def close(self) -> None:
        """Release every watcher. The last program stays readable."""
        if self._closed:
            return
        self._closed = True
        for watcher in self._file_watchers.values():
            watcher.close()
        self._file_watchers.clear()
        if self._directory_watcher is not None:
            self._directory_watcher.close()
            self._directory_watcher = None

    def _start(self) -> None:
        self._directory_watcher = self._host.watch_directory(
            self._host.get_current_directory(),
            self._on_directory_changed,
        )
        self._build()

    def _build(self) -> None:
        self._builder = self._host.create_program(
            self._root_files,
            self._options,
            self._host,
            self._builder,
        )
        self._build_count += 1
        program = self._builder.get_program()
        log.debug(
            "watch_program_built",
            build=self._build_count,
            changed=len(self._builder.get_changed_files()),
            reused=program.reused_file_count,
        )
        for source_file in program.get_source_files():
            if source_file.file_name not in self._file_watchers:
                self._file_watchers[source_file.file_name] = self._host.watch_file(
                    source_file.file_name,
                    self._on_file_changed,
                )
        after_program_create = getattr(self._host, "after_program_create", None)
        if after_program_create is not None:
            after_program_create(self._builder)

    def _on_file_changed(self, file_name: str, event_kind: FileWatcherEventKind) -> None:
        if self._closed:
            return
        log.debug("watch_file_event", file=file_name, kind=event_kind.name)
        self._build()

    def _on_directory_changed(self, path: str) -> None:
        if self._closed:
            return
        log.debug("watch_directory_event", path=path)
        self._build()


def create_watch_program(
    host: WatchCompilerHost,
    root_files: Sequence[str],
    options: CompilerOptions,
) -> WatchProgram:
    """Build the initial program and start watching its files."""
    watch_program = WatchProgram(host, root_files, options)
    watch_program._start()
    return watch_program
