"""Pydantic configuration models.

Two groups live here:

- ``LoggingConfig`` / ``LogOutputConfig``: how the embedding process wants
  structlog output routed.
- ``CompilerOptions``: the options handed to the compiler engine. The
  environment uses one fixed instance (``DEFAULT_COMPILER_OPTIONS`` in
  constants.py); embedders never override it.
"""

from enum import Enum, IntEnum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration."""

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG logs every file update and rebuild.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ScriptTarget(IntEnum):
    """Syntax generation level of emitted code."""

    ES3 = 0
    ES5 = 1
    ES2015 = 2
    ES2016 = 3
    ES2017 = 4
    ES2018 = 5
    ES2019 = 6
    ES2020 = 7
    ESNEXT = 99


class ModuleKind(IntEnum):
    """Module output format."""

    NONE = 0
    COMMONJS = 1
    AMD = 2
    UMD = 3
    SYSTEM = 4
    ES2015 = 5
    ESNEXT = 99


class JsxEmit(str, Enum):
    """JSX transform mode."""

    PRESERVE = "preserve"
    REACT = "react"
    REACT_NATIVE = "react-native"


class CompilerOptions(BaseModel):
    """Options understood by the compiler engine."""

    model_config = ConfigDict(frozen=True)

    target: ScriptTarget = ScriptTarget.ES2015
    module: ModuleKind = ModuleKind.ES2015
    strict: bool = True
    es_module_interop: bool = True
    jsx: JsxEmit = JsxEmit.REACT
    lib: tuple[str, ...] = ("lib.dom.d.ts",)
    allow_js: bool = False
    no_lib: bool = False
    skip_lib_check: bool = True
    skip_default_lib_check: bool = True
    suppress_output_path_check: bool = True

    @field_validator("lib")
    @classmethod
    def validate_lib(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        for name in v:
            if not name.endswith(".d.ts"):
                raise ValueError(f"Library entries must be declaration files: {name}")
        return v
