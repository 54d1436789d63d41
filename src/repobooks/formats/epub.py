# ABOUTME: Reads metadata back out of generated EPUB files using ebooklib.
# ABOUTME: Used to confirm pandoc wrote the title and author each manifest asked for.

import logging
from dataclasses import dataclass, field
from pathlib import Path

from ebooklib import epub

from repobooks.errors import RepobooksError

logger = logging.getLogger(__name__)


class EpubReadError(RepobooksError):
    """Raised when an EPUB file cannot be read or parsed."""


@dataclass
class EpubMetadata:
    """The subset of Dublin Core metadata Repobooks writes."""

    title: str
    authors: list[str] = field(default_factory=list)
    language: str | None = None
    has_cover: bool = False

    @property
    def author(self) -> str:
        return ", ".join(self.authors) if self.authors else ""


def _get_metadata_value(book: epub.EpubBook, name: str) -> str | None:
    values = book.get_metadata("DC", name)
    if not values:
        return None
    # Metadata entries are tuples of (value, attributes)
    value = values[0][0]
    return str(value).strip() if value else None


def _get_authors(book: epub.EpubBook) -> list[str]:
    creators = book.get_metadata("DC", "creator")
    return [str(entry[0]).strip() for entry in creators or [] if entry[0]]


def _has_cover(book: epub.EpubBook) -> bool:
    if book.get_metadata("OPF", "cover"):
        return True
    return any(
        "cover" in (item.get_name() or "").lower() and item.get_type() == 3  # ITEM_IMAGE
        for item in book.get_items()
    )


def read_epub_metadata(path: Path) -> EpubMetadata:
    """Extract title, authors, and language from an EPUB file.

    Raises:
        EpubReadError: If the file is missing or cannot be parsed.
    """
    if not path.exists():
        raise EpubReadError(f"File not found: {path}")

    try:
        book = epub.read_epub(str(path), options={"ignore_ncx": True})
    except Exception as exc:
        raise EpubReadError(f"Failed to read EPUB: {path}: {exc}") from exc

    return EpubMetadata(
        title=_get_metadata_value(book, "title") or path.stem,
        authors=_get_authors(book),
        language=_get_metadata_value(book, "language"),
        has_cover=_has_cover(book),
    )
