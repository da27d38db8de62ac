"""Errors raised while discovering and updating repositories."""

from pathlib import Path


class DirUpdateError(Exception):
    """Base error for git-dirupdate."""


class DiscoveryError(DirUpdateError):
    """Raised when the root directory cannot be searched."""


class AdapterExecutionError(DirUpdateError):
    """Raised when a git invocation for a single repository fails."""

    def __init__(self, operation: str, path: Path | str, stderr: str | None = None):
        message = f"git {operation} failed in {path}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message)
        self.operation = operation
        self.path = path
        self.stderr = stderr or ""


class DirtyNotAllowed(DirUpdateError):
    """Raised when a repository has local changes and stashing is disabled."""


class NoMatchingBranch(DirUpdateError):
    """Raised when none of the repository's branches are selected for update."""
