"""Compiler host backed by the virtual file store."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from tsvfs.config.constants import DEFAULT_LIB_FILE_NAME, NEW_LINE, ROOT_DIRECTORY

if TYPE_CHECKING:
    from tsvfs.compiler.source_file import SourceFile
    from tsvfs.config.models import CompilerOptions, ScriptTarget
    from tsvfs.vfs.store import VirtualFileStore


class VirtualCompilerHost:
    """The callbacks a program needs, answered from memory.

    Output is never written: ``write_file`` discards everything, since the
    environment exists for diagnostics and analysis only. ``update_file`` is
    the only way to change what the host serves.
    """

    def __init__(self, store: VirtualFileStore) -> None:
        self._store = store

    @property
    def store(self) -> VirtualFileStore:
        return self._store

    def file_exists(self, file_name: str) -> bool:
        return self._store.exists(file_name)

    def read_file(self, file_name: str) -> str:
        return self._store.read(file_name)

    def get_source_file(self, file_name: str, language_version: ScriptTarget) -> SourceFile | None:  # noqa: ARG002
        return self._store.get(file_name)

    def get_canonical_file_name(self, file_name: str) -> str:
        return file_name

    def use_case_sensitive_file_names(self) -> bool:
        return True

    def get_current_directory(self) -> str:
        return ROOT_DIRECTORY

    def get_default_lib_file_name(self, options: CompilerOptions) -> str:  # noqa: ARG002
        return DEFAULT_LIB_FILE_NAME

    def get_directories(self, path: str) -> list[str]:  # noqa: ARG002
        return []

    def read_directory(
        self,
        directory: str,
        extensions: Sequence[str] | None = None,  # noqa: ARG002
        excludes: Sequence[str] | None = None,  # noqa: ARG002
        includes: Sequence[str] | None = None,  # noqa: ARG002
        depth: int | None = None,  # noqa: ARG002
    ) -> list[str]:
        return self._store.read_directory(directory)

    def get_new_line(self) -> str:
        return NEW_LINE

    def write_file(self, file_name: str, data: str, write_byte_order_mark: bool = False) -> None:  # noqa: ARG002
        return None

    def update_file(self, source_file: SourceFile) -> bool:
        """Replace a project file; return whether it already existed."""
        return self._store.replace(source_file)
