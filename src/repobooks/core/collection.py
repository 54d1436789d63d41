# ABOUTME: Collection of books discovered under one content root.
# ABOUTME: One BookManifest per subfolder, all sharing the root's preface, author, and branch.

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from repobooks.config import BuildSettings
from repobooks.core.manifest import BookManifest
from repobooks.core.renderer import DocumentRenderer
from repobooks.core.scanner import DirectoryEntry, find_named, list_files, list_folders
from repobooks.errors import ExternalToolFailure

logger = logging.getLogger(__name__)

PREFACE_NAME = "preface"


@dataclass
class GenerateResult:
    """Summary of rendering every book in one or more collections."""

    generated: list[Path] = field(default_factory=list)
    failures: list[tuple[BookManifest, str]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    def merge(self, other: GenerateResult) -> None:
        self.generated.extend(other.generated)
        self.failures.extend(other.failures)


@dataclass(frozen=True)
class Collection:
    """Books built from one repository branch."""

    name: str
    author: str
    branch: str
    root: Path
    preface: DirectoryEntry | None
    books: tuple[BookManifest, ...]
    settings: BuildSettings

    @property
    def output_dir(self) -> Path:
        return self.settings.branch_output_dir(self.branch)

    def generate_all(self, renderer: DocumentRenderer) -> GenerateResult:
        """Render every book in folder order.

        A book whose render fails is recorded and logged; the remaining
        books are still rendered.
        """
        self.output_dir.mkdir(parents=True, exist_ok=True)

        result = GenerateResult()
        for book in self.books:
            try:
                result.generated.append(book.generate(renderer))
            except ExternalToolFailure as exc:
                logger.error("Failed to render %s: %s", book.title, exc)
                result.failures.append((book, str(exc)))
        return result


def build_collection(
    root: Path,
    name: str,
    author: str,
    branch: str,
    settings: BuildSettings,
) -> Collection:
    """Discover the books under root.

    Every subfolder of root becomes one book, in name order. A file named
    "preface" directly under root is shared by all of them.

    Raises:
        FilesystemError: If root cannot be listed.
    """
    folders = list_folders(root)
    preface = find_named(PREFACE_NAME, list_files(root))

    books = tuple(
        BookManifest(
            collection_name=name,
            path=folder.path,
            preface=preface,
            author=author,
            branch=branch,
            settings=settings,
        )
        for folder in folders
    )
    logger.debug("Discovered %d book(s) under %s", len(books), root)

    return Collection(
        name=name,
        author=author,
        branch=branch,
        root=root,
        preface=preface,
        books=books,
        settings=settings,
    )
