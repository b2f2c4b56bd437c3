"""Tests for version bookkeeping in the language service host."""

from __future__ import annotations

import pytest

from tsvfs.compiler.source_file import create_source_file
from tsvfs.config.constants import DEFAULT_COMPILER_OPTIONS
from tsvfs.vfs.compiler_host import VirtualCompilerHost
from tsvfs.vfs.language_service_host import (
    INITIAL_VERSION,
    VersionTable,
    VirtualLanguageServiceHost,
)
from tsvfs.vfs.store import VirtualFileStore


@pytest.fixture
def compiler_host() -> VirtualCompilerHost:
    return VirtualCompilerHost(
        VirtualFileStore.from_texts(
            {"a.ts": "let a = 1", "b.ts": "let b = 1"},
            {"/lib.es2015.d.ts": "declare const g: number"},
        )
    )


@pytest.fixture
def ls_host(compiler_host: VirtualCompilerHost) -> VirtualLanguageServiceHost:
    return VirtualLanguageServiceHost(compiler_host, VersionTable())


class TestVersionTable:
    def test_given_fresh_table_when_queried_then_initial_versions(self) -> None:
        table = VersionTable()
        assert table.project_version == 0
        assert table.get("a.ts") == INITIAL_VERSION

    def test_given_bumps_when_queried_then_file_version_is_project_version_of_last_change(
        self,
    ) -> None:
        # Given
        table = VersionTable()

        # When
        table.bump("a.ts")
        table.bump("b.ts")
        table.bump("a.ts")

        # Then
        assert table.project_version == 3
        assert table.get("a.ts") == "3"
        assert table.get("b.ts") == "2"


class TestVirtualLanguageServiceHost:
    """Language service host behavior."""

    def test_script_names_are_the_root_listing(self, ls_host: VirtualLanguageServiceHost) -> None:
        assert ls_host.get_script_file_names() == ["a.ts", "b.ts", "/lib.es2015.d.ts"]

    def test_script_names_are_captured_at_construction(
        self, ls_host: VirtualLanguageServiceHost, compiler_host: VirtualCompilerHost
    ) -> None:
        # When
        compiler_host.update_file(create_source_file("c.ts", "let c = 1"))

        # Then
        assert "c.ts" not in ls_host.get_script_file_names()

    def test_given_update_when_recorded_then_versions_bumped(
        self, ls_host: VirtualLanguageServiceHost
    ) -> None:
        # When
        ls_host.update_file(create_source_file("a.ts", "let a = 2"))

        # Then
        assert ls_host.get_project_version() == "1"
        assert ls_host.get_script_version("a.ts") == "1"
        assert ls_host.get_script_version("b.ts") == INITIAL_VERSION

    def test_given_update_when_recorded_then_store_untouched(
        self, ls_host: VirtualLanguageServiceHost
    ) -> None:
        # When
        ls_host.update_file(create_source_file("a.ts", "let a = 2"))

        # Then
        assert ls_host.read_file("a.ts") == "let a = 1"

    def test_snapshot_reads_through_to_compiler_host(
        self, ls_host: VirtualLanguageServiceHost, compiler_host: VirtualCompilerHost
    ) -> None:
        # Given
        compiler_host.update_file(create_source_file("a.ts", "let a = 42"))

        # When
        snapshot = ls_host.get_script_snapshot("a.ts")

        # Then
        assert snapshot is not None
        assert snapshot.get_text(0, snapshot.get_length()) == "let a = 42"
        assert snapshot.get_change_range(snapshot) is None

    def test_snapshot_of_missing_file_is_none(self, ls_host: VirtualLanguageServiceHost) -> None:
        assert ls_host.get_script_snapshot("missing.ts") is None

    def test_compilation_settings_are_fixed(self, ls_host: VirtualLanguageServiceHost) -> None:
        assert ls_host.get_compilation_settings() is DEFAULT_COMPILER_OPTIONS

    def test_forwarded_callbacks(self, ls_host: VirtualLanguageServiceHost) -> None:
        assert ls_host.file_exists("b.ts") is True
        assert ls_host.get_current_directory() == "/"
        assert ls_host.get_new_line() == "\n"
        assert ls_host.use_case_sensitive_file_names() is True
        assert ls_host.get_directories("/") == []
        assert ls_host.write_file("out.js", "", False) is None
        assert ls_host.file_exists("out.js") is False
