# tests/test_pipeline.py
"""Tests for collecting documents from a FinderConfig and rendering the listing."""

import json
import pytest
from pathlib import Path

from adocfinder.config.settings import FinderConfig, OutputFormat, SortMethod
from adocfinder.core.pipeline import SourceDocumentCollector, render_document_list


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    root = tmp_path / "src" / "docs" / "asciidoc"
    for rel in ["index.adoc", "guide/setup.adoc", "guide/_attrs.adoc", "api/reference.asciidoc", "notes.txt"]:
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"= {rel}")
    return root


class TestSourceDocumentCollector:

    def test_collects_with_default_extensions(self, docs_dir: Path):
        config = FinderConfig(source_directory=docs_dir, sort_method=SortMethod.NAME_ASC)

        documents = SourceDocumentCollector(config).collect()

        assert [d.relative_to(docs_dir).as_posix() for d in documents] == [
            "api/reference.asciidoc",
            "guide/setup.adoc",
            "index.adoc",
        ]

    def test_name_desc_sort(self, docs_dir: Path):
        config = FinderConfig(source_directory=docs_dir, sort_method=SortMethod.NAME_DESC)

        documents = SourceDocumentCollector(config).collect()

        assert [d.name for d in documents] == ["index.adoc", "setup.adoc", "reference.asciidoc"]

    def test_custom_extensions_and_excludes(self, docs_dir: Path):
        config = FinderConfig(
            source_directory=docs_dir,
            source_document_extensions=["adoc"],
            exclude_patterns=["guide/"],
        )

        documents = SourceDocumentCollector(config).collect()

        assert [d.name for d in documents] == ["index.adoc"]

    def test_single_source_document_name(self, docs_dir: Path):
        config = FinderConfig(source_directory=docs_dir, source_document_name="guide/setup.adoc")

        documents = SourceDocumentCollector(config).collect()

        assert documents == [docs_dir / "guide" / "setup.adoc"]

    def test_single_source_document_name_missing(self, docs_dir: Path):
        config = FinderConfig(source_directory=docs_dir, source_document_name="missing.adoc")

        assert SourceDocumentCollector(config).collect() == []

    def test_single_source_document_not_accessible(self, docs_dir: Path, monkeypatch):
        target = docs_dir / "index.adoc"
        real_is_file = Path.is_file

        def guarded_is_file(path, *args, **kwargs):
            if path == target:
                raise PermissionError(13, "Permission denied", str(path))
            return real_is_file(path, *args, **kwargs)

        monkeypatch.setattr(Path, "is_file", guarded_is_file)
        config = FinderConfig(source_directory=docs_dir, source_document_name="index.adoc")

        assert SourceDocumentCollector(config).collect() == []

    def test_missing_source_directory(self, tmp_path: Path):
        config = FinderConfig(source_directory=tmp_path / "nowhere")

        assert SourceDocumentCollector(config).collect() == []


class TestRenderDocumentList:

    def test_text_listing_is_relative(self, docs_dir: Path):
        config = FinderConfig(source_directory=docs_dir)
        documents = [docs_dir / "index.adoc", docs_dir / "guide" / "setup.adoc"]

        assert render_document_list(documents, config) == "index.adoc\nguide/setup.adoc\n"

    def test_text_listing_empty(self, docs_dir: Path):
        assert render_document_list([], FinderConfig(source_directory=docs_dir)) == ""

    def test_absolute_paths(self, docs_dir: Path):
        config = FinderConfig(source_directory=docs_dir, absolute_paths=True)

        rendered = render_document_list([docs_dir / "index.adoc"], config)

        assert rendered == f"{(docs_dir / 'index.adoc').resolve()}\n"

    def test_json_listing(self, docs_dir: Path):
        config = FinderConfig(
            source_directory=docs_dir,
            source_document_extensions=["adoc"],
            output_format=OutputFormat.JSON,
        )

        payload = json.loads(render_document_list([docs_dir / "index.adoc"], config))

        assert payload == {
            "source_directory": str(docs_dir),
            "extensions": ["adoc"],
            "documents": ["index.adoc"],
            "count": 1,
        }
