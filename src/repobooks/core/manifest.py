# ABOUTME: BookManifest: everything needed to render one folder of markdown into an EPUB.
# ABOUTME: Derives title, ordered pages, cover, output path, and pandoc options from a folder.

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from pathlib import Path

from repobooks.config import BuildSettings
from repobooks.core.renderer import METADATA_PREFIX, DocumentRenderer
from repobooks.core.scanner import DirectoryEntry, filter_prefixed, find_named, list_files
from repobooks.errors import ExternalToolFailure
from repobooks.naming import titleize

logger = logging.getLogger(__name__)

CHAPTER_PREFIX = "ch"
APPENDIX_PREFIX = "ap"
FOREWORD_NAME = "foreword"
COVER_NAME = "cover"


@dataclass(frozen=True)
class BookManifest:
    """One book to produce from a single content folder.

    Page files are listed once per manifest and memoized; build a new
    manifest to pick up changes on disk.
    """

    collection_name: str
    path: Path
    preface: DirectoryEntry | None
    author: str
    branch: str
    settings: BuildSettings

    @property
    def folder_name(self) -> str:
        return self.path.name

    @property
    def title(self) -> str:
        return f"{self.collection_name}: {titleize(self.folder_name)}"

    @property
    def output_filename(self) -> str:
        return f"{self.title}.epub"

    @property
    def output_path(self) -> Path:
        return self.settings.branch_output_dir(self.branch) / self.output_filename

    @cached_property
    def files(self) -> list[DirectoryEntry]:
        return list_files(self.path)

    @property
    def chapters(self) -> list[DirectoryEntry]:
        return filter_prefixed(CHAPTER_PREFIX, self.files)

    @property
    def appendixes(self) -> list[DirectoryEntry]:
        return filter_prefixed(APPENDIX_PREFIX, self.files)

    @property
    def foreword(self) -> DirectoryEntry | None:
        return find_named(FOREWORD_NAME, self.files)

    @property
    def cover(self) -> Path | None:
        """The folder's own cover image, else the shared default cover."""
        entry = find_named(COVER_NAME, self.files)
        if entry is not None:
            return entry.path
        return self.settings.default_cover

    @property
    def pages(self) -> list[DirectoryEntry]:
        """Foreword, shared preface, chapters, then appendixes; absent slots omitted."""
        pages = [page for page in (self.foreword, self.preface) if page is not None]
        return pages + self.chapters + self.appendixes

    @property
    def metadata(self) -> dict[str, str]:
        return {"author": self.author, "title": self.title}

    @property
    def render_options(self) -> dict[str, str]:
        """Pandoc content flags merged with metadata under the "-M " namespace."""
        options = {
            "--read": self.settings.input_format,
            "--output": str(self.output_path),
            "--css": str(self.settings.stylesheet),
            "--highlight-style": self.settings.highlight_style,
        }

        cover = self.cover
        if cover is not None and cover.exists():
            options["--epub-cover-image"] = str(cover)

        for key, value in self.metadata.items():
            options[f"{METADATA_PREFIX}{key}"] = value
        return options

    def generate(self, renderer: DocumentRenderer) -> Path:
        """Render this book with the folder as the renderer's working directory.

        Returns:
            The output path of the rendered EPUB.

        Raises:
            ExternalToolFailure: If the renderer exits non-zero.
        """
        input_files = [page.path for page in self.pages]
        options = self.render_options
        if "--epub-cover-image" not in options:
            logger.warning("No cover image for %s (looked for %s)", self.title, self.cover)
        logger.info("Rendering %s from %d page(s)", self.title, len(input_files))

        outcome = renderer.render(input_files, options, cwd=self.path)
        if not outcome.ok:
            raise ExternalToolFailure(
                outcome.command or (type(renderer).__name__,),
                outcome.returncode,
                outcome.stderr,
            )
        return self.output_path
