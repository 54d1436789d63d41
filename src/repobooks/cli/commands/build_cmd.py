# ABOUTME: The `repobooks build` command: clone a repository branch and render its books.
# ABOUTME: Runs the configured, command-line, or default collections one after another.

from pathlib import Path

import click
from rich.console import Console

from repobooks.config import (
    DEFAULT_COLLECTIONS,
    BuildSettings,
    CollectionConfig,
    load_config,
)
from repobooks.core.collection import GenerateResult
from repobooks.core.fetcher import GitFetcher
from repobooks.core.generator import generate_collection
from repobooks.core.renderer import PandocRenderer
from repobooks.errors import RepobooksError

console = Console()


def _resolve_run(
    config_path: Path | None,
    repo: str | None,
    branch: str | None,
    author: str | None,
    work_dir: Path | None,
) -> tuple[BuildSettings, tuple[CollectionConfig, ...]]:
    """Pick settings and collections from the config file, flags, or defaults."""
    if config_path is not None:
        loaded = load_config(config_path, work_dir=work_dir)
        settings, collections = loaded.settings, loaded.collections
    else:
        settings = BuildSettings.for_directory(work_dir or Path.cwd())
        collections = DEFAULT_COLLECTIONS

    if repo is not None:
        if not branch or not author:
            raise click.UsageError("--repo requires --branch and --author.")
        collections = (CollectionConfig(github=repo, branch=branch, author=author),)
    elif branch or author:
        raise click.UsageError("--branch and --author are only used together with --repo.")

    return settings, collections


@click.command("build")
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="YAML file listing collections and paths.",
)
@click.option("--repo", default=None, help="GitHub repository as owner/name.")
@click.option("--branch", default=None, help="Branch to clone (with --repo).")
@click.option("--author", default=None, help="Author recorded in every book (with --repo).")
@click.option(
    "-w",
    "--work-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory holding .source/, books/, and cover.jpg (default: current directory).",
)
@click.option(
    "--keep-source",
    is_flag=True,
    default=False,
    help="Leave the cloned checkout in place after building.",
)
def build(
    config_path: Path | None,
    repo: str | None,
    branch: str | None,
    author: str | None,
    work_dir: Path | None,
    keep_source: bool,
) -> None:
    """Clone each collection's branch and render one EPUB per folder."""
    settings, collections = _resolve_run(config_path, repo, branch, author, work_dir)

    fetcher = GitFetcher()
    renderer = PandocRenderer()
    total = GenerateResult()

    for collection in collections:
        console.print(f"[bold]==> {collection.name} ({collection.branch})[/bold]")
        try:
            result = generate_collection(
                collection,
                settings,
                fetcher=fetcher,
                renderer=renderer,
                keep_source=keep_source,
                notify=lambda message: console.print(f"--> {message}"),
            )
        except RepobooksError as exc:
            console.print(f"[red]Error:[/red] {exc}")
            raise SystemExit(1) from exc

        for path in result.generated:
            console.print(f"  [green]Generated:[/green] {path.name}")
        for book, message in result.failures:
            console.print(f"  [red]Failed:[/red] {book.title}: {message}")
        total.merge(result)

    summary = f"{len(total.generated)} book(s) generated"
    if total.failures:
        console.print(f"\n[red]{summary}, {len(total.failures)} failed.[/red]")
        raise SystemExit(1)
    console.print(f"\n[green]{summary}.[/green]")
