# ABOUTME: The `repobooks verify` command for checking rendered books.
# ABOUTME: Detects missing EPUBs and title or author mismatches for a content tree.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from repobooks.cli.options import collection_options, local_settings, output_dir_option
from repobooks.core.collection import build_collection
from repobooks.core.verifier import verify_collection
from repobooks.errors import FilesystemError

console = Console()


@click.command("verify")
@click.argument(
    "root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@collection_options
@output_dir_option
def verify(
    root: Path, name: str, author: str, branch: str, output_dir: Path | None
) -> None:
    """Verify that every book under ROOT was rendered with the right metadata."""
    settings = local_settings(root, output_dir)
    try:
        collection = build_collection(
            settings.source_dir, name=name, author=author, branch=branch, settings=settings
        )
    except FilesystemError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    result = verify_collection(collection)

    if result.total_issues > 0:
        table = Table()
        table.add_column("Title", style="bold")
        table.add_column("Issue", style="red")

        for book in result.missing_output:
            table.add_row(book.title, "Missing output")

        for book, message in result.unreadable:
            table.add_row(book.title, f"Unreadable: {message}")

        for mismatch in result.mismatches:
            table.add_row(
                mismatch.book.title,
                f"{mismatch.field}: expected {mismatch.expected!r}, got {mismatch.actual!r}",
            )

        console.print(table)
        console.print(
            f"\n[red]{result.total_issues} issue(s) found, {result.ok} book(s) verified.[/red]"
        )
        raise SystemExit(1)

    console.print(f"[green]All {result.ok} book(s) verified.[/green]")
