# ABOUTME: CLI package for Repobooks, built on Click.
# ABOUTME: Defines the root command group, configures logging, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from repobooks.cli.commands import build_cmd, inspect_cmd, plan_cmd, verify_cmd


def _configure_logging(verbose: bool) -> None:
    """Route repobooks log records through Rich on stderr."""
    logger = logging.getLogger("repobooks")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(package_name="repobooks")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Repobooks - build EPUB books from a repository's markdown folders."""
    _configure_logging(verbose)


cli.add_command(build_cmd.build)
cli.add_command(plan_cmd.plan)
cli.add_command(verify_cmd.verify)
cli.add_command(inspect_cmd.inspect)
