"""Language service host: compiler host callbacks plus version bookkeeping."""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from tsvfs.compiler.snapshot import ScriptSnapshot
from tsvfs.config.constants import DEFAULT_COMPILER_OPTIONS

if TYPE_CHECKING:
    from tsvfs.compiler.host import CompilerHost
    from tsvfs.compiler.source_file import SourceFile
    from tsvfs.config.models import CompilerOptions, ScriptTarget

log = structlog.get_logger(__name__)

INITIAL_VERSION = "0"


class VersionTable:
    """Per-file versions plus one global project counter.

    Every bump raises the counter by one and stamps the bumped file with the
    new value, so a file's version is the project version of its last change.
    """

    def __init__(self) -> None:
        self._project_version = 0
        self._file_versions: dict[str, str] = {}

    @property
    def project_version(self) -> int:
        return self._project_version

    def get(self, file_name: str) -> str:
        return self._file_versions.get(file_name, INITIAL_VERSION)

    def bump(self, file_name: str) -> str:
        self._project_version += 1
        version = str(self._project_version)
        self._file_versions[file_name] = version
        return version


class VirtualLanguageServiceHost:
    """Language service host wrapping any compiler host.

    Script names are captured once, from the root directory listing at
    construction. Snapshots always read through to the wrapped host, so they
    reflect the store as soon as a mutation returns.
    """

    def __init__(
        self,
        compiler_host: CompilerHost,
        versions: VersionTable,
        options: CompilerOptions = DEFAULT_COMPILER_OPTIONS,
    ) -> None:
        self._compiler_host = compiler_host
        self._versions = versions
        self._options = options
        self._file_names = compiler_host.read_directory(
            compiler_host.get_current_directory(), [], None, []
        )

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

    def write_file(self, file_name: str, data: str, write_byte_order_mark: bool = False) -> None:  # noqa: ARG002
        return None

    # -- language service host additions --

    def get_project_version(self) -> str:
        return str(self._versions.project_version)

    def get_compilation_settings(self) -> CompilerOptions:
        return self._options

    def get_script_file_names(self) -> list[str]:
        return list(self._file_names)

    def get_script_snapshot(self, file_name: str) -> ScriptSnapshot | None:
        source_file = self._compiler_host.get_source_file(file_name, self._options.target)
        if source_file is None:
            return None
        return ScriptSnapshot.from_string(source_file.text)

    def get_script_version(self, file_name: str) -> str:
        return self._versions.get(file_name)

    def update_file(self, source_file: SourceFile) -> None:
        """Record a change to ``source_file``. Does not touch the store."""
        version = self._versions.bump(source_file.file_name)
        log.debug("script_version_bumped", file=source_file.file_name, version=version)
