"""
Git operations for a single working tree.

Every operation runs one git command through GitPython's ``git.Git`` command
wrapper and translates a failing invocation into ``AdapterExecutionError``.
"""

import logging
from pathlib import Path

import git

from .exceptions import AdapterExecutionError

log = logging.getLogger(__name__)

# Listing lines starting with these are refs, not local branch short names
NOISE_PREFIXES = ("refs/", "heads/", "origin/")


def _stderr_text(error: git.exc.CommandError) -> str:
    """Unwrap GitPython's ``stderr: '...'`` formatting."""
    text = error.stderr.strip()
    if text.startswith("stderr: '") and text.endswith("'"):
        text = text[len("stderr: '") : -1].strip()
    return text


def parse_branch_listing(output: str) -> list[str]:
    """
    Extract local branch short names from ``git branch`` output.

    Parameters
    ----------
    output : str
        Raw output of ``git branch -l --format=%(refname:short)``.

    Returns
    -------
    list[str]
        Branch names in listing order. Empty lines, lines that look like refs
        (``refs/``, ``heads/``, ``origin/``) and lines containing whitespace
        are dropped.
    """
    branches = []
    for line in output.split("\n"):
        if not line or line.startswith(NOISE_PREFIXES):
            continue
        if any(char.isspace() for char in line):
            continue
        branches.append(line)
    return branches


class Repository:
    """A working tree updated during one run."""

    def __init__(self, path: Path):
        self.path = Path(path)
        # Set once "git fetch --all" succeeded, never reset
        self.remote_updated = False
        self._git = git.Git(self.path)

    def __repr__(self) -> str:
        return f"Repository({str(self.path)!r})"

    def _run(self, operation: str, *args: str) -> str:
        log.debug("Running git %s %s in %s", operation, " ".join(args), self.path)
        try:
            return getattr(self._git, operation)(*args)
        except git.exc.CommandError as e:
            raise AdapterExecutionError(operation, self.path, _stderr_text(e)) from e
        except OSError as e:
            raise AdapterExecutionError(operation, self.path, str(e)) from e

    def is_dirty(self) -> bool:
        """Return True if ``git status --porcelain`` reports anything."""
        return len(self._run("status", "--porcelain")) > 0

    def stash(self, message: str | None = None) -> None:
        args = ["push"]
        if message:
            args.extend(["-m", message])
        self._run("stash", *args)

    def fetch_remote(self) -> None:
        """
        Fetch all remotes once per repository.

        Later calls return immediately. A failed fetch is not memoized, so
        calling again retries it.
        """
        if self.remote_updated:
            return
        self._run("fetch", "--all")
        self.remote_updated = True

    def list_local_branches(self) -> list[str]:
        """Fetch remotes, then list local branch short names."""
        self.fetch_remote()
        output = self._run("branch", "-l", "--format=%(refname:short)")
        return parse_branch_listing(output)

    def update_branch(self, name: str) -> None:
        """
        Check out ``name`` and pull it.

        Raises ``AdapterExecutionError`` whose ``operation`` is ``checkout`` or
        ``pull``. The pull is not attempted when the checkout fails.
        """
        self._run("checkout", name)
        self._run("pull")
