# ABOUTME: Shared Click options for Repobooks CLI commands.
# ABOUTME: Reusable decorators for collection identity flags, plus settings for local trees.

from dataclasses import replace
from pathlib import Path

import click

from repobooks.config import BuildSettings

output_dir_option = click.option(
    "-o",
    "--output-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding <branch>/<title>.epub (default: ./books).",
)


def collection_options(func):
    """Add --name, --author, and --branch to a command that discovers a local tree."""
    func = click.option(
        "--branch",
        required=True,
        help="Branch name; books are written to <output-dir>/<branch>/.",
    )(func)
    func = click.option("--author", required=True, help="Author recorded in every book.")(func)
    func = click.option(
        "--name",
        required=True,
        help='Collection name used as the title prefix, e.g. "You Dont Know JS".',
    )(func)
    return func


def local_settings(root: Path, output_dir: Path | None) -> BuildSettings:
    """Settings for discovering an already checked-out content tree."""
    settings = BuildSettings.for_directory(Path.cwd())
    return replace(
        settings,
        source_dir=root.absolute(),
        output_root=(output_dir or settings.output_root).absolute(),
    )
