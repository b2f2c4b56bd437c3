"""Programs: the set of source files compiled together.

A program is built once from a host and never changes. Passing the previous
program as ``old_program`` lets the new one carry over per-file analysis for
every source file the host hands back unchanged (same object).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

import structlog

from tsvfs.compiler.diagnostics import (
    CANNOT_REDECLARE_BLOCK_SCOPED_VARIABLE,
    FILE_NOT_FOUND,
    UNSUPPORTED_EXTENSION,
    Diagnostic,
)
from tsvfs.config.constants import SUPPORTED_EXTENSIONS

if TYPE_CHECKING:
    from tsvfs.compiler.host import CompilerHost
    from tsvfs.compiler.source_file import SourceFile, Statement
    from tsvfs.config.models import CompilerOptions

log = structlog.get_logger(__name__)

_JS_EXTENSIONS = (".js", ".jsx")


class Program:
    """An immutable compilation unit over a fixed set of source files.

    Create via ``create_program``.
    """

    def __init__(
        self,
        root_names: list[str],
        options: CompilerOptions,
        source_files: dict[str, SourceFile],
        options_diagnostics: list[Diagnostic],
        semantic_cache: dict[str, tuple[Diagnostic, ...]],
        reused_file_count: int,
    ) -> None:
        self._root_names = root_names
        self._options = options
        self._source_files = source_files
        self._options_diagnostics = options_diagnostics
        self._semantic_cache = semantic_cache
        self._reused_file_count = reused_file_count

    @property
    def reused_file_count(self) -> int:
        """Source files taken over unchanged from the old program."""
        return self._reused_file_count

    def get_root_file_names(self) -> list[str]:
        return list(self._root_names)

    def get_compiler_options(self) -> CompilerOptions:
        return self._options

    def get_source_file(self, file_name: str) -> SourceFile | None:
        return self._source_files.get(file_name)

    def get_source_files(self) -> list[SourceFile]:
        return list(self._source_files.values())

    def get_options_diagnostics(self) -> list[Diagnostic]:
        """Configuration and file-processing diagnostics."""
        return list(self._options_diagnostics)

    def get_syntactic_diagnostics(self, source_file: SourceFile | None = None) -> list[Diagnostic]:
        files = [source_file] if source_file is not None else self.get_source_files()
        return [diagnostic for file in files for diagnostic in file.parse_diagnostics]

    def get_semantic_diagnostics(self, source_file: SourceFile | None = None) -> list[Diagnostic]:
        files = [source_file] if source_file is not None else self.get_source_files()
        result: list[Diagnostic] = []
        for file in files:
            if self._skip_checking(file):
                continue
            cached = self._semantic_cache.get(file.file_name)
            if cached is None:
                cached = _check_source_file(file)
                self._semantic_cache[file.file_name] = cached
            result.extend(cached)
        return result

    def get_cached_semantic_diagnostics(
        self, source_file: SourceFile
    ) -> tuple[Diagnostic, ...] | None:
        """Semantic results already computed for ``source_file``, or None if unchecked."""
        if self._source_files.get(source_file.file_name) is not source_file:
            return None
        return self._semantic_cache.get(source_file.file_name)

    def _skip_checking(self, source_file: SourceFile) -> bool:
        return source_file.is_declaration_file and self._options.skip_lib_check


def create_program(
    root_names: Sequence[str],
    options: CompilerOptions,
    host: CompilerHost,
    old_program: Program | None = None,
    config_file_parsing_diagnostics: Sequence[Diagnostic] | None = None,
) -> Program:
    """Build a program over ``root_names`` using ``host`` for every file read."""
    names = list(root_names)
    diagnostics = list(config_file_parsing_diagnostics or ())
    if not options.no_lib:
        default_lib = host.get_default_lib_file_name(options)
        if default_lib not in names and host.file_exists(default_lib):
            names.append(default_lib)

    source_files: dict[str, SourceFile] = {}
    semantic_cache: dict[str, tuple[Diagnostic, ...]] = {}
    reused = 0
    for name in names:
        if not _has_supported_extension(name, options):
            diagnostics.append(
                Diagnostic.create(UNSUPPORTED_EXTENSION, name, _describe_extensions(options))
            )
            continue
        source_file = host.get_source_file(name, options.target)
        if source_file is None:
            diagnostics.append(Diagnostic.create(FILE_NOT_FOUND, name))
            continue
        source_files[name] = source_file
        if old_program is not None and old_program.get_source_file(name) is source_file:
            reused += 1
            cached = old_program.get_cached_semantic_diagnostics(source_file)
            if cached is not None:
                semantic_cache[name] = cached

    log.debug(
        "program_created",
        files=len(source_files),
        reused=reused,
        diagnostics=len(diagnostics),
    )
    return Program(
        root_names=list(root_names),
        options=options,
        source_files=source_files,
        options_diagnostics=diagnostics,
        semantic_cache=semantic_cache,
        reused_file_count=reused,
    )


def _has_supported_extension(file_name: str, options: CompilerOptions) -> bool:
    if file_name.endswith(SUPPORTED_EXTENSIONS):
        return True
    return options.allow_js and file_name.endswith(_JS_EXTENSIONS)


def _describe_extensions(options: CompilerOptions) -> str:
    extensions = list(SUPPORTED_EXTENSIONS)
    if options.allow_js:
        extensions.extend(_JS_EXTENSIONS)
    return ", ".join(f"'{ext}'" for ext in extensions)


def _check_source_file(source_file: SourceFile) -> tuple[Diagnostic, ...]:
    """Report block-scoped names declared more than once at top level."""
    seen: dict[str, list[Statement]] = {}
    for statement in source_file.declarations:
        if statement.block_scoped and statement.name is not None:
            seen.setdefault(statement.name, []).append(statement)
    diagnostics = []
    for name, statements in seen.items():
        if len(statements) < 2:
            continue
        for statement in statements:
            diagnostics.append(
                Diagnostic.create(
                    CANNOT_REDECLARE_BLOCK_SCOPED_VARIABLE,
                    name,
                    file=source_file,
                    start=statement.pos + (statement.name_offset or 0),
                    length=len(name),
                )
            )
    return tuple(diagnostics)
