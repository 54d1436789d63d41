# ABOUTME: Build configuration: paths, renderer defaults, and the collections to build.
# ABOUTME: Loads an optional YAML file into immutable BuildSettings and CollectionConfig values.

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from repobooks.errors import ConfigError
from repobooks.naming import titleize

PACKAGE_ASSETS = Path(__file__).parent / "assets"
DEFAULT_STYLESHEET = PACKAGE_ASSETS / "epub.css"

DEFAULT_INPUT_FORMAT = "markdown+smart"
DEFAULT_HIGHLIGHT_STYLE = "tango"

REQUIRED_COLLECTION_FIELDS = ("github", "branch", "author")

# Keys accepted at the top level of the YAML file, mapped to BuildSettings fields.
_PATH_KEYS = {
    "source_dir": "source_dir",
    "output_dir": "output_root",
    "stylesheet": "stylesheet",
    "cover": "default_cover",
    "cleanup_script": "cleanup_script",
}
_STRING_KEYS = {
    "input_format": "input_format",
    "highlight_style": "highlight_style",
}


@dataclass(frozen=True)
class BuildSettings:
    """Paths and renderer defaults shared by every book in a run."""

    source_dir: Path
    output_root: Path
    stylesheet: Path = DEFAULT_STYLESHEET
    default_cover: Path | None = None
    cleanup_script: Path | None = None
    input_format: str = DEFAULT_INPUT_FORMAT
    highlight_style: str = DEFAULT_HIGHLIGHT_STYLE

    @classmethod
    def for_directory(cls, work_dir: Path) -> BuildSettings:
        """Default layout: checkout in .source/, books in books/, cover.jpg beside them."""
        work_dir = work_dir.absolute()
        return cls(
            source_dir=work_dir / ".source",
            output_root=work_dir / "books",
            default_cover=work_dir / "cover.jpg",
        )

    def branch_output_dir(self, branch: str) -> Path:
        return self.output_root / branch


@dataclass(frozen=True)
class CollectionConfig:
    """One repository branch to turn into a collection of books."""

    github: str
    branch: str
    author: str

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.github}.git"

    @property
    def name(self) -> str:
        """Collection name: the titleized repository name."""
        return titleize(self.github.rstrip("/").split("/")[-1])


DEFAULT_COLLECTIONS: tuple[CollectionConfig, ...] = (
    CollectionConfig(github="getify/You-Dont-Know-JS", branch="1st-ed", author="Kyle Simpson"),
    CollectionConfig(github="getify/You-Dont-Know-JS", branch="2nd-ed", author="Kyle Simpson"),
)


@dataclass(frozen=True)
class RepobooksConfig:
    """A loaded configuration file."""

    settings: BuildSettings
    collections: tuple[CollectionConfig, ...] = field(default_factory=tuple)


def _parse_collection(index: int, raw: Any) -> CollectionConfig:
    if not isinstance(raw, dict):
        raise ConfigError(f"collections[{index}] must be a mapping, got {type(raw).__name__}")

    missing = [key for key in REQUIRED_COLLECTION_FIELDS if not raw.get(key)]
    if missing:
        raise ConfigError(f"collections[{index}] missing required fields: {', '.join(missing)}")

    return CollectionConfig(
        github=str(raw["github"]),
        branch=str(raw["branch"]),
        author=str(raw["author"]),
    )


def load_config(path: Path, work_dir: Path | None = None) -> RepobooksConfig:
    """Load and validate a YAML configuration file.

    Relative paths in the file resolve against the file's own directory.
    Settings not named in the file keep the defaults for work_dir (or the
    file's directory when work_dir is None).

    Raises:
        ConfigError: If the file is missing, unparsable, or invalid.
    """
    if not path.exists():
        raise ConfigError(f"No configuration file found at {path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must be a YAML mapping, got {type(data).__name__}")

    base_dir = path.parent.absolute()
    settings = BuildSettings.for_directory(work_dir or base_dir)

    overrides: dict[str, Any] = {}
    for key, attr in _PATH_KEYS.items():
        if data.get(key):
            overrides[attr] = base_dir / Path(str(data[key])).expanduser()
    for key, attr in _STRING_KEYS.items():
        if data.get(key):
            overrides[attr] = str(data[key])
    settings = replace(settings, **overrides)

    raw_collections = data.get("collections")
    if not raw_collections or not isinstance(raw_collections, list):
        raise ConfigError(f"{path.name} must list at least one entry under 'collections'")

    collections = tuple(
        _parse_collection(index, raw) for index, raw in enumerate(raw_collections)
    )
    return RepobooksConfig(settings=settings, collections=collections)
