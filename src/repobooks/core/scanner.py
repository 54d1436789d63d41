# ABOUTME: Directory scanner for discovering book folders and page files.
# ABOUTME: Lists immediate children as DirectoryEntry values and finds pages by name or prefix.

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from repobooks.errors import FilesystemError

logger = logging.getLogger(__name__)

# Extensions stripped from a file name to derive its entry name. Anything
# else (for example a trailing version like "notes.v2") is kept whole.
KNOWN_EXTENSIONS: frozenset[str] = frozenset(
    {
        ".md",
        ".mkd",
        ".txt",
        ".htm",
        ".css",
        ".js",
        ".jpg",
        ".png",
        ".gif",
        ".svg",
        ".sh",
        ".yml",
    }
)


@dataclass(frozen=True)
class DirectoryEntry:
    """A single immediate child of a scanned directory."""

    name: str
    path: Path
    extension: str

    @classmethod
    def from_path(cls, path: Path) -> DirectoryEntry:
        """Build an entry, stripping a known short extension from the name."""
        suffix = path.suffix
        if suffix.lower() in KNOWN_EXTENSIONS and path.stem:
            name = path.stem
        else:
            name = path.name
        return cls(name=name, path=path.absolute(), extension=suffix.lstrip("."))


def _entries(path: Path, keep: Callable[[Path], bool]) -> list[DirectoryEntry]:
    """List visible children of path accepted by keep, ordered by file name."""
    try:
        children = sorted(path.iterdir(), key=lambda child: child.name)
    except OSError as exc:
        raise FilesystemError(f"Cannot list directory: {path}: {exc}") from exc

    return [
        DirectoryEntry.from_path(child)
        for child in children
        if not child.name.startswith(".") and keep(child)
    ]


def _warn_shadowed(path: Path, entries: Iterable[DirectoryEntry]) -> None:
    counts = Counter(entry.name for entry in entries)
    for name, count in sorted(counts.items()):
        if count > 1:
            logger.warning(
                "%d files in %s share the name %r; the first one shadows the rest",
                count,
                path,
                name,
            )


def list_folders(path: Path) -> list[DirectoryEntry]:
    """Return the visible subdirectories of path, sorted by name.

    Raises:
        FilesystemError: If path is missing or cannot be read.
    """
    return _entries(path, lambda child: child.is_dir())


def list_files(path: Path) -> list[DirectoryEntry]:
    """Return the visible non-directory children of path, sorted by file name.

    Raises:
        FilesystemError: If path is missing or cannot be read.
    """
    files = _entries(path, lambda child: not child.is_dir())
    _warn_shadowed(path, files)
    return files


def find_named(name: str, entries: Iterable[DirectoryEntry]) -> DirectoryEntry | None:
    """Return the first entry whose derived name is exactly name."""
    return next((entry for entry in entries if entry.name == name), None)


def filter_prefixed(prefix: str, entries: Iterable[DirectoryEntry]) -> list[DirectoryEntry]:
    """Return entries whose name starts with prefix, sorted ascending by name.

    Reading order is encoded in the names, so "ch01" must sort before "ch02".
    """
    matches = [entry for entry in entries if entry.name.startswith(prefix)]
    return sorted(matches, key=lambda entry: entry.name)
