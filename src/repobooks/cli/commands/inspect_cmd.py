# ABOUTME: The `repobooks inspect` command for viewing a rendered EPUB's metadata.
# ABOUTME: Shows what pandoc actually wrote for title, author, language, and cover.

from pathlib import Path

import click
from rich.console import Console
from rich.table import Table

from repobooks.formats.epub import EpubReadError, read_epub_metadata

console = Console()


@click.command()
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(path: Path) -> None:
    """Show metadata read back from a generated EPUB file."""
    try:
        meta = read_epub_metadata(path)
    except EpubReadError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise SystemExit(1) from exc

    table = Table(title=str(path.name), show_header=False, pad_edge=False)
    table.add_column("Field", style="bold")
    table.add_column("Value")

    table.add_row("Title", meta.title)
    table.add_row("Author", meta.author or "[dim]unknown[/dim]")
    table.add_row("Language", meta.language or "[dim]unknown[/dim]")
    table.add_row("Cover", "yes" if meta.has_cover else "no")

    console.print(table)
