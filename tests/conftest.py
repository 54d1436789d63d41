# ABOUTME: Shared pytest fixtures for Repobooks tests.
# ABOUTME: Provides a sample markdown content tree, build settings, and EPUB files.

from pathlib import Path

import pytest

from repobooks.config import BuildSettings
from tests.fixtures.epubs import write_epub


@pytest.fixture
def content_tree(tmp_path: Path) -> Path:
    """Create a checked-out repository with three book folders.

    Layout:
        You-Dont-Know-JS/
            .git/
            preface.md
            README.md
            1-get-started/
                .hidden
                apA.md
                ch02.md
                ch01.md
                cover.jpg
                foreword.md
            2-scope-closures/
                apB.md
                apA.md
                ch01.md
            3-es6-beyond/
                notes.txt
    """
    root = tmp_path / "You-Dont-Know-JS"
    (root / ".git").mkdir(parents=True)
    (root / "preface.md").write_text("# Preface\n")
    (root / "README.md").write_text("# You Don't Know JS\n")

    book1 = root / "1-get-started"
    book1.mkdir()
    (book1 / ".hidden").write_text("ignored")
    (book1 / "apA.md").write_text("# Appendix A\n")
    (book1 / "ch02.md").write_text("# Chapter 2\n")
    (book1 / "ch01.md").write_text("# Chapter 1\n")
    (book1 / "cover.jpg").write_bytes(b"fake jpg")
    (book1 / "foreword.md").write_text("# Foreword\n")

    book2 = root / "2-scope-closures"
    book2.mkdir()
    (book2 / "apB.md").write_text("# Appendix B\n")
    (book2 / "apA.md").write_text("# Appendix A\n")
    (book2 / "ch01.md").write_text("# Chapter 1\n")

    book3 = root / "3-es6-beyond"
    book3.mkdir()
    (book3 / "notes.txt").write_text("no chapters yet")

    return root


@pytest.fixture
def default_cover(tmp_path: Path) -> Path:
    cover = tmp_path / "cover.jpg"
    cover.write_bytes(b"default jpg")
    return cover


@pytest.fixture
def settings(tmp_path: Path, content_tree: Path, default_cover: Path) -> BuildSettings:
    """Settings pointing at the sample tree with output under tmp_path/books."""
    return BuildSettings(
        source_dir=content_tree,
        output_root=tmp_path / "books",
        stylesheet=tmp_path / "epub.css",
        default_cover=default_cover,
    )


@pytest.fixture
def sample_epub(tmp_path: Path) -> Path:
    """A generated-looking EPUB for the first sample book."""
    return write_epub(
        tmp_path / "sample" / "You Dont Know JS: 1 Get Started.epub",
        "You Dont Know JS: 1 Get Started",
        "Kyle Simpson",
    )


@pytest.fixture
def corrupt_epub(tmp_path: Path) -> Path:
    """A file that is not a valid EPUB."""
    filepath = tmp_path / "corrupt.epub"
    filepath.write_text("this is not a valid epub file")
    return filepath
