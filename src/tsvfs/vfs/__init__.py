"""Virtual file system hosts and the environment facade."""

from tsvfs.vfs.compiler_host import VirtualCompilerHost
from tsvfs.vfs.environment import VirtualEnvironment, create_virtual_environment
from tsvfs.vfs.language_service_host import VersionTable, VirtualLanguageServiceHost
from tsvfs.vfs.store import VirtualFileStore, flatten_dependencies
from tsvfs.vfs.watch_host import VirtualWatchHost, WatcherRegistry

__all__ = [
    "VersionTable",
    "VirtualCompilerHost",
    "VirtualEnvironment",
    "VirtualFileStore",
    "VirtualLanguageServiceHost",
    "VirtualWatchHost",
    "WatcherRegistry",
    "create_virtual_environment",
    "flatten_dependencies",
]
