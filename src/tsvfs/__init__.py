"""tsvfs - compile and query TypeScript against an in-memory file system."""

from tsvfs.compiler.source_file import SourceFile, TextSpan, create_source_file
from tsvfs.core.errors import ConfigurationError, EditError, TsVfsError, VirtualFileError
from tsvfs.vfs.environment import VirtualEnvironment, create_virtual_environment

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "EditError",
    "SourceFile",
    "TextSpan",
    "TsVfsError",
    "VirtualEnvironment",
    "VirtualFileError",
    "__version__",
    "create_source_file",
    "create_virtual_environment",
]
