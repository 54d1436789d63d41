# ABOUTME: Unit tests for reading metadata back from generated EPUBs.
# ABOUTME: Tests valid, corrupt, and missing files.

from pathlib import Path

import pytest

from repobooks.formats.epub import EpubReadError, read_epub_metadata


class TestReadEpubMetadata:
    def test_reads_title_and_author(self, sample_epub: Path):
        meta = read_epub_metadata(sample_epub)
        assert meta.title == "You Dont Know JS: 1 Get Started"
        assert meta.authors == ["Kyle Simpson"]
        assert meta.author == "Kyle Simpson"
        assert meta.language == "en"

    def test_no_cover(self, sample_epub: Path):
        assert read_epub_metadata(sample_epub).has_cover is False

    def test_corrupt_file(self, corrupt_epub: Path):
        with pytest.raises(EpubReadError, match="Failed to read EPUB"):
            read_epub_metadata(corrupt_epub)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(EpubReadError, match="File not found"):
            read_epub_metadata(tmp_path / "absent.epub")
