"""The virtual environment: one store observed by a watch program and a language service.

Construction order matters and is fixed:

1. the file store,
2. the watch host (which owns the compiler host),
3. the language service host, wrapping the watch host,
4. the language service,
5. the watch program.

After that the compiler options are checked; any diagnostic aborts
construction with ``ConfigurationError``.

All mutations go through ``update_file``, which bumps versions first and
then stores the file and fires watchers, so both the language service and
the watch program see the change by the time it returns.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

import structlog

from tsvfs.compiler.diagnostics import format_diagnostics
from tsvfs.compiler.language_service import create_language_service
from tsvfs.compiler.source_file import TextChangeRange, TextSpan, update_source_file
from tsvfs.compiler.watch import create_watch_program
from tsvfs.config.constants import DEFAULT_COMPILER_OPTIONS
from tsvfs.core.errors import ConfigurationError, EditError
from tsvfs.vfs.language_service_host import VersionTable, VirtualLanguageServiceHost
from tsvfs.vfs.store import VirtualFileStore
from tsvfs.vfs.watch_host import VirtualWatchHost, WatcherRegistry

if TYPE_CHECKING:
    from tsvfs.compiler.language_service import LanguageService
    from tsvfs.compiler.source_file import SourceFile
    from tsvfs.compiler.watch import WatchProgram

log = structlog.get_logger(__name__)


class VirtualEnvironment:
    """Compile, rebuild and query TypeScript held entirely in memory.

    Usage::

        env = create_virtual_environment({"a.ts": "let x = 1"}, {})
        env.update_file_from_text("a.ts", "2", TextSpan(start=8, length=1))
        env.language_service.get_semantic_diagnostics("a.ts")
    """

    def __init__(self, store: VirtualFileStore) -> None:
        self._store = store
        self._watchers = WatcherRegistry()
        self._versions = VersionTable()
        self._watch_host = VirtualWatchHost(store, self._watchers, DEFAULT_COMPILER_OPTIONS)
        self._language_service_host = VirtualLanguageServiceHost(
            self._watch_host, self._versions, DEFAULT_COMPILER_OPTIONS
        )
        self._language_service = create_language_service(self._language_service_host)
        self._watch_program = create_watch_program(
            self._watch_host,
            store.project_file_names(),
            DEFAULT_COMPILER_OPTIONS,
        )

        diagnostics = self._language_service.get_compiler_options_diagnostics()
        if diagnostics:
            self._watch_program.close()
            raise ConfigurationError.from_diagnostics(
                format_diagnostics(diagnostics, self._watch_host),
                len(diagnostics),
            )
        log.debug("environment_created", files=len(store.list()))

    @property
    def store(self) -> VirtualFileStore:
        return self._store

    @property
    def watch_host(self) -> VirtualWatchHost:
        return self._watch_host

    @property
    def language_service_host(self) -> VirtualLanguageServiceHost:
        return self._language_service_host

    @property
    def watch_program(self) -> WatchProgram:
        return self._watch_program

    @property
    def language_service(self) -> LanguageService:
        return self._language_service

    def get_text(self, file_name: str) -> str | None:
        source_file = self._store.get(file_name)
        return source_file.text if source_file is not None else None

    def update_file(self, source_file: SourceFile) -> None:
        """Replace one file wholesale.

        Versions are bumped before watchers fire, so a watcher that queries
        the language service already sees the new project version.
        """
        self._language_service_host.update_file(source_file)
        self._watch_host.update_file(source_file)

    def update_file_from_text(
        self,
        file_name: str,
        inserted_text: str,
        previous_span: TextSpan,
    ) -> None:
        """Replace ``previous_span`` of the file's current text with ``inserted_text``.

        Raises:
            EditError: If the file is not in the current program, or the span
                does not lie within its current text.
        """
        previous = self._language_service.get_program().get_source_file(file_name)
        if previous is None:
            raise EditError.file_not_in_program(file_name)

        previous_text = previous.text
        if (
            previous_span.start < 0
            or previous_span.length < 0
            or previous_span.end > len(previous_text)
        ):
            raise EditError.span_out_of_range(
                file_name, previous_span.start, previous_span.length, len(previous_text)
            )

        new_text = (
            previous_text[: previous_span.start]
            + inserted_text
            + previous_text[previous_span.end :]
        )
        updated = update_source_file(
            previous,
            new_text,
            TextChangeRange(span=previous_span, new_length=len(inserted_text)),
        )
        self.update_file(updated)


def create_virtual_environment(
    source_files: Mapping[str, str],
    core_lib_files: Mapping[str, str],
    extra_lib_files: Mapping[str, Sequence[tuple[str, str]]] | None = None,
) -> VirtualEnvironment:
    """Build an environment from raw file contents.

    Args:
        source_files: Project files (the only ones that can change).
        core_lib_files: Standard library declaration files.
        extra_lib_files: Dependency package -> ``(file_name, text)`` pairs.
            Flattened into one collection; a later entry for the same file
            name wins.

    Raises:
        ConfigurationError: If the compiler reports configuration diagnostics.
    """
    store = VirtualFileStore.from_texts(
        source_files,
        core_lib_files,
        extra_lib_files,
        DEFAULT_COMPILER_OPTIONS.target,
    )
    return VirtualEnvironment(store)
