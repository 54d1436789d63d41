# ABOUTME: Fetching and tidying the source checkout: git clone, post-fetch script, removal.
# ABOUTME: Thin subprocess wrappers behind protocols so the pipeline can run with fakes in tests.

import logging
import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from repobooks.core.renderer import stderr_tail
from repobooks.errors import ExternalToolFailure, FilesystemError

logger = logging.getLogger(__name__)


@runtime_checkable
class VersionControlFetcher(Protocol):
    """Protocol for populating a directory from a remote repository branch."""

    def clone(self, remote_url: str, branch: str, destination: Path) -> None: ...


@runtime_checkable
class PostFetchCleaner(Protocol):
    """Protocol for a step run once against a fresh checkout."""

    def clean(self, checkout: Path) -> None: ...


def run_tool(cmd: Sequence[str], cwd: Path | None = None) -> None:
    """Run an external command, raising ExternalToolFailure on a non-zero exit."""
    logger.debug("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            list(cmd),
            cwd=cwd,
            stdin=subprocess.DEVNULL,
            capture_output=True,
            text=True,
        )
    except FileNotFoundError as exc:
        raise ExternalToolFailure(cmd, None, str(exc)) from exc

    if result.returncode != 0:
        raise ExternalToolFailure(cmd, result.returncode, stderr_tail(result.stderr))


class GitFetcher:
    """Clones a single branch with the git command-line client."""

    def __init__(self, executable: str = "git") -> None:
        self.executable = executable

    def clone(self, remote_url: str, branch: str, destination: Path) -> None:
        run_tool(
            [
                self.executable,
                "clone",
                "--single-branch",
                "--branch",
                branch,
                remote_url,
                str(destination),
            ]
        )
        if not destination.is_dir():
            raise FilesystemError(f"Clone did not create {destination}")


class ScriptCleaner:
    """Runs a shell script with the checkout as its working directory."""

    def __init__(self, script: Path, shell: str = "sh") -> None:
        self.script = script
        self.shell = shell

    def clean(self, checkout: Path) -> None:
        run_tool([self.shell, str(self.script)], cwd=checkout)


class NoopCleaner:
    """Used when no post-fetch script is configured."""

    def clean(self, checkout: Path) -> None:
        logger.debug("No post-fetch cleanup configured for %s", checkout)


def remove_checkout(path: Path) -> bool:
    """Delete a previous checkout. Returns True if anything was removed.

    Raises:
        FilesystemError: If the checkout cannot be removed.
    """
    if not path.exists():
        return False
    try:
        shutil.rmtree(path)
    except OSError as exc:
        raise FilesystemError(f"Cannot remove checkout: {path}: {exc}") from exc
    return True
