# ABOUTME: Exception hierarchy shared across Repobooks.
# ABOUTME: Discovery, external tool, and configuration failures all derive from RepobooksError.

from collections.abc import Sequence


class RepobooksError(Exception):
    """Base class for all Repobooks errors."""


class FilesystemError(RepobooksError):
    """Raised when a directory cannot be listed during discovery."""


class ConfigError(RepobooksError):
    """Raised when a configuration file is missing or invalid."""


class ExternalToolFailure(RepobooksError):
    """Raised when git, a cleanup script, or pandoc fails.

    Carries the command that was run, its exit code (None when the tool
    could not be started), and the tail of its stderr.
    """

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None,
        stderr: str = "",
    ) -> None:
        self.command = list(command)
        self.returncode = returncode
        self.stderr = stderr
        tool = self.command[0] if self.command else "command"
        if returncode is None:
            message = f"{tool} could not be started"
        else:
            message = f"{tool} failed (exit {returncode})"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)
