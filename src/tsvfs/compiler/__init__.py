"""Compiler engine: source files, programs, watch programs, language service.

Everything here reads files exclusively through host callbacks (see
``tsvfs.compiler.host``).
"""

from tsvfs.compiler.builder import BuilderProgram, create_abstract_builder
from tsvfs.compiler.diagnostics import Diagnostic, DiagnosticCategory, format_diagnostics
from tsvfs.compiler.host import (
    CompilerHost,
    FileWatcher,
    FileWatcherCallback,
    FileWatcherEventKind,
    LanguageServiceHost,
    WatchCompilerHost,
)
from tsvfs.compiler.language_service import (
    CompletionEntry,
    LanguageService,
    NavigationItem,
    create_language_service,
)
from tsvfs.compiler.program import Program, create_program
from tsvfs.compiler.snapshot import ScriptSnapshot
from tsvfs.compiler.source_file import (
    SourceFile,
    Statement,
    StatementKind,
    TextChangeRange,
    TextSpan,
    create_source_file,
    update_source_file,
)
from tsvfs.compiler.watch import WatchProgram, create_watch_program

__all__ = [
    "BuilderProgram",
    "CompilerHost",
    "CompletionEntry",
    "Diagnostic",
    "DiagnosticCategory",
    "FileWatcher",
    "FileWatcherCallback",
    "FileWatcherEventKind",
    "LanguageService",
    "LanguageServiceHost",
    "NavigationItem",
    "Program",
    "ScriptSnapshot",
    "SourceFile",
    "Statement",
    "StatementKind",
    "TextChangeRange",
    "TextSpan",
    "WatchCompilerHost",
    "WatchProgram",
    "create_abstract_builder",
    "create_language_service",
    "create_program",
    "create_source_file",
    "format_diagnostics",
    "update_source_file",
]
