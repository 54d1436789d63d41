# ABOUTME: The `repobooks plan` command: show the books a content tree would produce.
# ABOUTME: Runs discovery only and prints each manifest as a Rich table or JSON.

import json as json_lib
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from repobooks.cli.options import collection_options, local_settings, output_dir_option
from repobooks.core.collection import Collection, build_collection
from repobooks.errors import FilesystemError

console = Console()


@click.command("plan")
@click.argument(
    "root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@collection_options
@output_dir_option
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    default=False,
    help="Output manifests as JSON.",
)
def plan(
    root: Path,
    name: str,
    author: str,
    branch: str,
    output_dir: Path | None,
    json_output: bool,
) -> None:
    """Show the books, pages, and output paths discovered under ROOT."""
    settings = local_settings(root, output_dir)
    try:
        collection = build_collection(
            settings.source_dir, name=name, author=author, branch=branch, settings=settings
        )
    except FilesystemError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    if json_output:
        _print_json(collection)
        return

    _print_rich(collection)


def _print_json(collection: Collection) -> None:
    """Print manifests as JSON."""
    data = {
        "name": collection.name,
        "author": collection.author,
        "branch": collection.branch,
        "root": str(collection.root),
        "preface": str(collection.preface.path) if collection.preface else None,
        "books": [
            {
                "title": book.title,
                "folder": str(book.path),
                "output": str(book.output_path),
                "cover": str(book.cover) if book.cover else None,
                "pages": [str(page.path) for page in book.pages],
                "options": book.render_options,
            }
            for book in collection.books
        ],
    }
    click.echo(json_lib.dumps(data, indent=2))


def _print_rich(collection: Collection) -> None:
    """Print manifests with Rich formatting."""
    if not collection.books:
        console.print(f"[dim]0 book(s) found in {collection.root}[/dim]")
        return

    table = Table(title=f"{collection.name} ({collection.branch})")
    table.add_column("Title", style="bold")
    table.add_column("Pages", justify="right")
    table.add_column("Files")

    for book in collection.books:
        table.add_row(
            book.title,
            str(len(book.pages)),
            ", ".join(page.path.name for page in book.pages) or "[dim]none[/dim]",
        )

    console.print(table)
    console.print(f"\n[bold]{len(collection.books)} book(s) found.[/bold]")
    console.print(f"Output: {collection.output_dir}")
