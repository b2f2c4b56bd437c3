"""Builder programs: a program plus what changed since the previous build."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tsvfs.compiler.diagnostics import Diagnostic
    from tsvfs.compiler.program import Program
    from tsvfs.compiler.source_file import SourceFile


class BuilderProgram:
    """Retained incremental state between rebuilds."""

    def __init__(self, program: Program, changed_files: frozenset[str]) -> None:
        self._program = program
        self._changed_files = changed_files

    def get_program(self) -> Program:
        return self._program

    def get_changed_files(self) -> frozenset[str]:
        """Files whose source differs from the previous builder's program."""
        return self._changed_files

    def get_source_file(self, file_name: str) -> SourceFile | None:
        return self._program.get_source_file(file_name)

    def get_options_diagnostics(self) -> list[Diagnostic]:
        return self._program.get_options_diagnostics()

    def get_syntactic_diagnostics(self, source_file: SourceFile | None = None) -> list[Diagnostic]:
        return self._program.get_syntactic_diagnostics(source_file)

    def get_semantic_diagnostics(self, source_file: SourceFile | None = None) -> list[Diagnostic]:
        return self._program.get_semantic_diagnostics(source_file)


def create_abstract_builder(
    program: Program,
    old_builder: BuilderProgram | None = None,
) -> BuilderProgram:
    """Wrap ``program``, recording which files differ from ``old_builder``.

    Without an old builder every file counts as changed.
    """
    names = {file.file_name for file in program.get_source_files()}
    if old_builder is None:
        return BuilderProgram(program, frozenset(names))

    old_program = old_builder.get_program()
    old_names = {file.file_name for file in old_program.get_source_files()}
    changed = {
        name
        for name in names
        if old_program.get_source_file(name) is not program.get_source_file(name)
    }
    changed |= old_names - names
    return BuilderProgram(program, frozenset(changed))
