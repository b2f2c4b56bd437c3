"""Configuration constants.

These values are fixed for every virtual environment and are never exposed
to embedders for overriding.
"""

from tsvfs.config.models import CompilerOptions, JsxEmit, ModuleKind, ScriptTarget

ROOT_DIRECTORY = "/"
"""The single synthetic directory every virtual file lives under."""

DEFAULT_LIB_FILE_NAME = "/lib.es2015.d.ts"
"""Standard-library declaration unit matching the ES2015 target."""

NEW_LINE = "\n"

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".d.ts", ".ts", ".tsx")
"""Extensions the compiler accepts as root files (allow_js is off)."""

DEFAULT_COMPILER_OPTIONS = CompilerOptions(
    target=ScriptTarget.ES2015,
    module=ModuleKind.ES2015,
    strict=True,
    es_module_interop=True,
    jsx=JsxEmit.REACT,
    lib=("lib.dom.d.ts",),
    skip_lib_check=True,
    skip_default_lib_check=True,
    suppress_output_path_check=True,
)
