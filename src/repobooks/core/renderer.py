# ABOUTME: DocumentRenderer protocol and the pandoc implementation used to write EPUBs.
# ABOUTME: Builds a pandoc argv from content flags and namespaced metadata, then runs it.

import logging
import subprocess
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, runtime_checkable

logger = logging.getLogger(__name__)

# Option keys carrying this prefix are renderer metadata ("-M author"), not content flags.
METADATA_PREFIX = "-M "

# Lines of stderr kept when reporting a failed run.
STDERR_TAIL_LINES = 20


@dataclass(frozen=True)
class RenderOutcome:
    """Exit status and captured stderr of one render."""

    returncode: int
    stderr: str = ""
    command: tuple[str, ...] = ()

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@runtime_checkable
class DocumentRenderer(Protocol):
    """Protocol for an external tool that renders ordered input files to a book."""

    def render(
        self,
        input_files: Sequence[Path],
        options: Mapping[str, str],
        *,
        cwd: Path,
    ) -> RenderOutcome: ...


def stderr_tail(stderr: str | None, lines: int = STDERR_TAIL_LINES) -> str:
    """Return the last few non-empty lines of a tool's stderr."""
    if not stderr:
        return ""
    kept = [line for line in stderr.strip().splitlines() if line.strip()]
    return "\n".join(kept[-lines:])


def build_pandoc_args(
    input_files: Sequence[Path],
    options: Mapping[str, str],
    executable: str = "pandoc",
) -> list[str]:
    """Turn render options into a pandoc command line.

    Content flags become "--flag=value"; keys in the metadata namespace
    become "--metadata key=value". Input files follow, in order.
    """
    cmd = [executable]
    metadata: list[str] = []
    for key, value in options.items():
        if key.startswith(METADATA_PREFIX):
            metadata.extend(["--metadata", f"{key[len(METADATA_PREFIX):]}={value}"])
        else:
            cmd.append(f"{key}={value}")
    cmd.extend(metadata)
    cmd.extend(str(path) for path in input_files)
    return cmd


class PandocRenderer:
    """Renders books by running pandoc as a subprocess."""

    def __init__(self, executable: str = "pandoc") -> None:
        self.executable = executable

    def render(
        self,
        input_files: Sequence[Path],
        options: Mapping[str, str],
        *,
        cwd: Path,
    ) -> RenderOutcome:
        """Run pandoc in cwd with no stdin.

        Returns exit status 127 if pandoc is not installed. With no input
        files pandoc renders an empty document rather than waiting on stdin.
        """
        cmd = build_pandoc_args(input_files, options, self.executable)
        if not cwd.is_dir():
            logger.error("Working directory %s does not exist", cwd)
            return RenderOutcome(1, f"working directory does not exist: {cwd}", tuple(cmd))

        logger.debug("Running %s in %s", " ".join(cmd), cwd)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
            )
        except FileNotFoundError:
            logger.error("%s not found on PATH", self.executable)
            return RenderOutcome(127, f"{self.executable} not found on PATH", tuple(cmd))

        return RenderOutcome(result.returncode, stderr_tail(result.stderr), tuple(cmd))
