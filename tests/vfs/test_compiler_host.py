"""Tests for the compiler host over the virtual file store."""

from __future__ import annotations

import pytest

from tsvfs.compiler.source_file import create_source_file
from tsvfs.config.constants import DEFAULT_COMPILER_OPTIONS
from tsvfs.config.models import ScriptTarget
from tsvfs.core.errors import VirtualFileError
from tsvfs.vfs.compiler_host import VirtualCompilerHost
from tsvfs.vfs.store import VirtualFileStore


@pytest.fixture
def host() -> VirtualCompilerHost:
    store = VirtualFileStore.from_texts(
        {"a.ts": "let a = 1"},
        {"/lib.es2015.d.ts": "declare const g: number"},
    )
    return VirtualCompilerHost(store)


class TestVirtualCompilerHost:
    """Callback answers."""

    def test_fixed_answers(self, host: VirtualCompilerHost) -> None:
        assert host.get_current_directory() == "/"
        assert host.get_new_line() == "\n"
        assert host.use_case_sensitive_file_names() is True
        assert host.get_canonical_file_name("A.ts") == "A.ts"
        assert host.get_default_lib_file_name(DEFAULT_COMPILER_OPTIONS) == "/lib.es2015.d.ts"
        assert host.get_directories("/") == []

    def test_file_queries_delegate_to_store(self, host: VirtualCompilerHost) -> None:
        assert host.file_exists("a.ts") is True
        assert host.file_exists("A.ts") is False
        assert host.read_file("a.ts") == "let a = 1"
        assert host.get_source_file("a.ts", ScriptTarget.ES2015) is host.store.get("a.ts")
        assert host.get_source_file("missing.ts", ScriptTarget.ES2015) is None
        assert host.read_directory("/", [".ts"], None, None) == ["a.ts", "/lib.es2015.d.ts"]

    def test_given_missing_file_when_read_then_raises(self, host: VirtualCompilerHost) -> None:
        with pytest.raises(VirtualFileError):
            host.read_file("missing.ts")

    def test_given_output_when_written_then_discarded(self, host: VirtualCompilerHost) -> None:
        # When
        host.write_file("a.js", "var a = 1;", False)

        # Then
        assert host.file_exists("a.js") is False

    def test_given_update_when_applied_then_served_immediately(
        self, host: VirtualCompilerHost
    ) -> None:
        # Given
        updated = create_source_file("a.ts", "let a = 2")

        # When
        existed = host.update_file(updated)

        # Then
        assert existed is True
        assert host.read_file("a.ts") == "let a = 2"
        assert host.get_source_file("a.ts", ScriptTarget.ES2015) is updated
