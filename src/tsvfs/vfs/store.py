"""In-memory file store standing in for a real file system.

Three collections, consulted in this order:

1. project sources (the only mutable one),
2. core library declaration files,
3. dependency files, flattened from per-package lists at construction.

Every file lives directly under the synthetic root ``/``; there are no
nested directories.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

import structlog

from tsvfs.compiler.source_file import SourceFile, create_source_file
from tsvfs.config.constants import ROOT_DIRECTORY
from tsvfs.config.models import ScriptTarget
from tsvfs.core.errors import VirtualFileError

log = structlog.get_logger(__name__)


def flatten_dependencies(
    extra_lib_files: Mapping[str, Sequence[SourceFile]],
) -> dict[str, SourceFile]:
    """Flatten package -> files into one mapping; later entries win."""
    flattened: dict[str, SourceFile] = {}
    for files in extra_lib_files.values():
        for source_file in files:
            flattened[source_file.file_name] = source_file
    return flattened


class VirtualFileStore:
    """Name -> source file lookups over project, library and dependency files."""

    def __init__(
        self,
        source_files: Mapping[str, SourceFile],
        core_lib_files: Mapping[str, SourceFile],
        extra_lib_files: Mapping[str, Sequence[SourceFile]] | None = None,
    ) -> None:
        self._project: dict[str, SourceFile] = dict(source_files)
        self._core_libs: dict[str, SourceFile] = dict(core_lib_files)
        self._dependencies = flatten_dependencies(extra_lib_files or {})

    @classmethod
    def from_texts(
        cls,
        source_files: Mapping[str, str],
        core_lib_files: Mapping[str, str],
        extra_lib_files: Mapping[str, Sequence[tuple[str, str]]] | None = None,
        language_version: ScriptTarget = ScriptTarget.ES2015,
    ) -> VirtualFileStore:
        """Build a store by parsing raw file contents."""

        def parse(entries: Iterable[tuple[str, str]]) -> dict[str, SourceFile]:
            return {
                name: create_source_file(name, text, language_version) for name, text in entries
            }

        dependencies = {
            package: [create_source_file(name, text, language_version) for name, text in files]
            for package, files in (extra_lib_files or {}).items()
        }
        return cls(parse(source_files.items()), parse(core_lib_files.items()), dependencies)

    def exists(self, file_name: str) -> bool:
        return (
            file_name in self._project
            or file_name in self._core_libs
            or file_name in self._dependencies
        )

    def get(self, file_name: str) -> SourceFile | None:
        return (
            self._project.get(file_name)
            or self._core_libs.get(file_name)
            or self._dependencies.get(file_name)
        )

    def read(self, file_name: str) -> str:
        """Return the text of ``file_name``.

        Raises:
            VirtualFileError: If no collection holds the file. Check
                ``exists`` first; reading an absent file is a caller bug.
        """
        source_file = self.get(file_name)
        if source_file is None:
            raise VirtualFileError.not_found(file_name)
        return source_file.text

    def list(self) -> list[str]:
        """All file names: project, then core libraries, then dependencies."""
        return [*self._project, *self._core_libs, *self._dependencies]

    def project_file_names(self) -> list[str]:
        return list(self._project)

    def read_directory(self, directory: str) -> list[str]:
        if directory == ROOT_DIRECTORY:
            return self.list()
        return []

    def replace(self, source_file: SourceFile) -> bool:
        """Store ``source_file`` as a project file; return whether it already existed."""
        already_exists = source_file.file_name in self._project
        self._project[source_file.file_name] = source_file
        log.debug("file_replaced", file=source_file.file_name, created=not already_exists)
        return already_exists
