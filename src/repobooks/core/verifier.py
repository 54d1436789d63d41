# ABOUTME: Verification of rendered books against their manifests.
# ABOUTME: Flags missing EPUBs and EPUBs whose title or author differ from what was requested.

from dataclasses import dataclass, field

from repobooks.core.collection import Collection
from repobooks.core.manifest import BookManifest
from repobooks.formats.epub import EpubReadError, read_epub_metadata


@dataclass
class FieldMismatch:
    """A metadata field whose read-back value differs from the manifest."""

    book: BookManifest
    field: str
    expected: str
    actual: str


@dataclass
class VerifyResult:
    """Aggregated results from verifying a collection's output."""

    ok: int = 0
    missing_output: list[BookManifest] = field(default_factory=list)
    unreadable: list[tuple[BookManifest, str]] = field(default_factory=list)
    mismatches: list[FieldMismatch] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.missing_output) + len(self.unreadable) + len(self.mismatches)


def verify_collection(collection: Collection) -> VerifyResult:
    """Check that every book in the collection was rendered correctly.

    For each manifest:
    1. The output EPUB must exist.
    2. It must be readable by ebooklib.
    3. Its title and author must equal the manifest metadata.
    """
    result = VerifyResult()

    for book in collection.books:
        if not book.output_path.exists():
            result.missing_output.append(book)
            continue

        try:
            read_back = read_epub_metadata(book.output_path)
        except EpubReadError as exc:
            result.unreadable.append((book, str(exc)))
            continue

        expected = book.metadata
        found = {"title": read_back.title, "author": read_back.author}
        mismatches = [
            FieldMismatch(book=book, field=key, expected=expected[key], actual=found[key])
            for key in ("title", "author")
            if expected[key] != found[key]
        ]
        if mismatches:
            result.mismatches.extend(mismatches)
        else:
            result.ok += 1

    return result
