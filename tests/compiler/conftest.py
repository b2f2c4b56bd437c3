"""Shared fixtures for compiler tests."""

from __future__ import annotations

from collections.abc import Callable, Mapping

import pytest

from tsvfs.vfs.compiler_host import VirtualCompilerHost
from tsvfs.vfs.store import VirtualFileStore

LIB_TEXT = "declare const appGlobal: number;\ninterface Array<T> {}\n"


@pytest.fixture
def make_host() -> Callable[..., VirtualCompilerHost]:
    """Build a compiler host over project files plus an optional default lib."""

    def factory(
        files: Mapping[str, str],
        *,
        with_lib: bool = True,
    ) -> VirtualCompilerHost:
        core = {"/lib.es2015.d.ts": LIB_TEXT} if with_lib else {}
        return VirtualCompilerHost(VirtualFileStore.from_texts(files, core))

    return factory
