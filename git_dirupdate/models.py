"""Dataclasses shared by discovery, selection and the orchestrator."""

from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

DEFAULT_BRANCHES = ("main", "master")
DEFAULT_WARN_THRESHOLD = 10
DEFAULT_STASH_MESSAGE = "git-dirupdate: auto-stash before update"


@dataclass(frozen=True)
class SelectionMode:
    """
    Which local branches are updated in every repository.

    Either an explicit list of branch names or all local branches.
    """

    names: tuple[str, ...] = DEFAULT_BRANCHES
    all_branches: bool = False

    @classmethod
    def explicit(cls, names: tuple[str, ...] | list[str]) -> "SelectionMode":
        return cls(names=tuple(names), all_branches=False)

    @classmethod
    def every_branch(cls) -> "SelectionMode":
        return cls(names=(), all_branches=True)


@dataclass(frozen=True)
class UpdateOptions:
    """Options for a single run, built once from the command line."""

    root: str = ""  # Directory tree to search, "" means the current directory
    branches: tuple[str, ...] = DEFAULT_BRANCHES  # Ignored when all_branches is set
    all_branches: bool = False  # Update every local branch
    stash_changes: bool = False  # Stash dirty repositories instead of skipping them
    warn_threshold: int = DEFAULT_WARN_THRESHOLD  # Ask before updating more repositories
    stash_message: str = DEFAULT_STASH_MESSAGE
    assume_yes: bool = False  # Skip the confirmation prompt
    verbose: bool = False

    @property
    def selection_mode(self) -> SelectionMode:
        if self.all_branches:
            return SelectionMode.every_branch()
        return SelectionMode.explicit(self.branches)


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    PARTIAL = "partial"
    SKIPPED = "skipped"
    FAILED = "failed"


class SkipReason(StrEnum):
    DIRTY = "dirty"  # Local changes and stashing disabled
    NO_BRANCH = "no-branch"  # None of the requested branches exist


@dataclass
class UpdateOutcome:
    """Terminal result of updating one repository."""

    path: Path
    status: OutcomeStatus
    succeeded: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    reason: SkipReason | None = None
    error: Exception | None = None

    @property
    def total(self) -> int:
        return len(self.succeeded) + len(self.failed)

    @classmethod
    def skipped(cls, path: Path, reason: SkipReason) -> "UpdateOutcome":
        return cls(path=path, status=OutcomeStatus.SKIPPED, reason=reason)

    @classmethod
    def failure(cls, path: Path, error: Exception) -> "UpdateOutcome":
        return cls(path=path, status=OutcomeStatus.FAILED, error=error)

    @classmethod
    def from_branches(cls, path: Path, succeeded: list[str], failed: list[str]) -> "UpdateOutcome":
        """
        Aggregate per-branch results into a repository outcome.

        All branches failing is a repository failure, some failing is partial.
        """
        if failed and not succeeded:
            status = OutcomeStatus.FAILED
        elif failed:
            status = OutcomeStatus.PARTIAL
        else:
            status = OutcomeStatus.SUCCESS
        return cls(path=path, status=status, succeeded=list(succeeded), failed=list(failed))
