# tests/test_pattern_matching.py
"""Tests for hidden-path detection, extension matching and exclude globs."""

import pytest
from pathlib import Path

from adocfinder.core.discovery.pattern_matching import (
    compile_glob_patterns_to_spec,
    has_source_extension,
    is_path_excluded,
    is_path_hidden,
)


class TestIsPathHidden:

    @pytest.mark.parametrize("rel_path", [
        "_include.adoc",
        "_partials/header.adoc",
        "chapters/_draft/one.adoc",
        "chapters/_snippet.adoc",
    ])
    def test_hidden_paths(self, rel_path):
        assert is_path_hidden(Path(rel_path)) is True

    @pytest.mark.parametrize("rel_path", [
        ".",
        "index.adoc",
        "chapters/one.adoc",
        "chapters/not_hidden.adoc",
        "chapters/one_.adoc",
    ])
    def test_visible_paths(self, rel_path):
        assert is_path_hidden(Path(rel_path)) is False


class TestHasSourceExtension:

    @pytest.mark.parametrize("name,extensions,expected", [
        ("index.adoc", ["adoc"], True),
        ("index.asciidoc", ["ad", "adoc", "asc", "asciidoc"], True),
        ("index.my-adoc", ["ad", "adoc", "asc", "asciidoc"], False),
        ("index.my-adoc", ["my-adoc"], True),
        ("index.adoc", [], False),
        ("index.adoc", ["doc"], False),
        ("archive.tar.adoc", ["adoc"], True),
        ("index.txt", ["adoc"], False),
        (".adoc", ["adoc"], False),
    ])
    def test_matching(self, name, extensions, expected):
        assert has_source_extension(name, extensions) is expected


class TestExcludeSpec:

    def test_no_patterns_compile_to_none(self):
        assert compile_glob_patterns_to_spec([]) is None
        assert is_path_excluded(Path("any.adoc"), None) is False

    def test_directory_pattern_only_matches_directories(self):
        spec = compile_glob_patterns_to_spec(["build/"])
        assert is_path_excluded(Path("build"), spec, is_dir=True) is True
        assert is_path_excluded(Path("build"), spec) is False

    def test_file_glob(self):
        spec = compile_glob_patterns_to_spec(["*.draft.adoc"])
        assert is_path_excluded(Path("chapters/one.draft.adoc"), spec) is True
        assert is_path_excluded(Path("chapters/one.adoc"), spec) is False
