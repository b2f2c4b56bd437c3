"""Configuration models and fixed compiler settings."""

from tsvfs.config.constants import (
    DEFAULT_COMPILER_OPTIONS,
    DEFAULT_LIB_FILE_NAME,
    NEW_LINE,
    ROOT_DIRECTORY,
    SUPPORTED_EXTENSIONS,
)
from tsvfs.config.models import (
    CompilerOptions,
    JsxEmit,
    LoggingConfig,
    LogOutputConfig,
    ModuleKind,
    ScriptTarget,
)

__all__ = [
    "DEFAULT_COMPILER_OPTIONS",
    "DEFAULT_LIB_FILE_NAME",
    "NEW_LINE",
    "ROOT_DIRECTORY",
    "SUPPORTED_EXTENSIONS",
    "CompilerOptions",
    "JsxEmit",
    "LogOutputConfig",
    "LoggingConfig",
    "ModuleKind",
    "ScriptTarget",
]
