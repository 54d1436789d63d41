# ABOUTME: Unit tests for collection discovery and batch generation.
# ABOUTME: Tests folder-per-book discovery, the shared preface, ordering, and failure collection.

import logging
from pathlib import Path

import pytest

from repobooks.config import BuildSettings
from repobooks.core.collection import GenerateResult, build_collection
from repobooks.errors import FilesystemError
from tests.fixtures.fakes import FakeRenderer


def _collection(root: Path, settings: BuildSettings):
    return build_collection(
        root,
        name="You Dont Know JS",
        author="Kyle Simpson",
        branch="1st-ed",
        settings=settings,
    )


class TestBuildCollection:
    """build_collection makes one manifest per subfolder."""

    def test_one_book_per_folder(self, content_tree: Path, settings: BuildSettings):
        collection = _collection(content_tree, settings)
        assert [book.folder_name for book in collection.books] == [
            "1-get-started",
            "2-scope-closures",
            "3-es6-beyond",
        ]

    def test_shared_preface(self, content_tree: Path, settings: BuildSettings):
        collection = _collection(content_tree, settings)
        assert collection.preface is not None
        assert collection.preface.path == content_tree / "preface.md"
        assert all(book.preface == collection.preface for book in collection.books)

    def test_shared_identity(self, content_tree: Path, settings: BuildSettings):
        collection = _collection(content_tree, settings)
        for book in collection.books:
            assert book.collection_name == "You Dont Know JS"
            assert book.author == "Kyle Simpson"
            assert book.branch == "1st-ed"

    def test_without_preface(self, content_tree: Path, settings: BuildSettings):
        (content_tree / "preface.md").unlink()
        collection = _collection(content_tree, settings)
        assert collection.preface is None
        assert all(book.preface is None for book in collection.books)

    def test_empty_root(self, tmp_path: Path, settings: BuildSettings):
        root = tmp_path / "empty"
        root.mkdir()
        collection = _collection(root, settings)
        assert collection.books == ()

    def test_missing_root_raises(self, tmp_path: Path, settings: BuildSettings):
        with pytest.raises(FilesystemError):
            _collection(tmp_path / "missing", settings)

    def test_discovery_is_repeatable(self, content_tree: Path, settings: BuildSettings):
        first = _collection(content_tree, settings)
        second = _collection(content_tree, settings)
        assert first == second
        assert [b.pages for b in first.books] == [b.pages for b in second.books]

    def test_output_dir(self, content_tree: Path, settings: BuildSettings):
        collection = _collection(content_tree, settings)
        assert collection.output_dir == settings.output_root / "1st-ed"


class TestGenerateAll:
    """generate_all renders every book and collects failures."""

    def test_creates_output_dir(self, content_tree: Path, settings: BuildSettings):
        collection = _collection(content_tree, settings)
        collection.generate_all(FakeRenderer())
        assert collection.output_dir.is_dir()

    def test_renders_in_folder_order(self, content_tree: Path, settings: BuildSettings):
        collection = _collection(content_tree, settings)
        renderer = FakeRenderer()
        result = collection.generate_all(renderer)

        assert [call.cwd.name for call in renderer.calls] == [
            "1-get-started",
            "2-scope-closures",
            "3-es6-beyond",
        ]
        assert result.ok
        assert result.generated == [book.output_path for book in collection.books]
        assert all(path.exists() for path in result.generated)

    def test_failure_does_not_stop_run(self, content_tree, settings, caplog):
        collection = _collection(content_tree, settings)
        failing = collection.books[0]
        renderer = FakeRenderer(exit_codes={failing.title: 1})

        with caplog.at_level(logging.ERROR, logger="repobooks"):
            result = collection.generate_all(renderer)

        assert len(renderer.calls) == 3
        assert not result.ok
        assert [book for book, _ in result.failures] == [failing]
        assert len(result.generated) == 2
        assert not failing.output_path.exists()
        assert any(failing.title in r.message for r in caplog.records)


class TestGenerateResult:
    def test_merge(self):
        first = GenerateResult(generated=[Path("a.epub")])
        second = GenerateResult(generated=[Path("b.epub")])
        first.merge(second)
        assert first.generated == [Path("a.epub"), Path("b.epub")]
        assert first.ok
