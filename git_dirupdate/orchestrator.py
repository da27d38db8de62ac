"""
Update every discovered repository, one after another.

For each repository the steps are: check for local changes, stash or skip,
fetch all remotes, select branches, then check out and pull each selected
branch. Errors never leave a single repository's update, they become its
``UpdateOutcome``.
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path

from .exceptions import AdapterExecutionError, DirtyNotAllowed, DirUpdateError, NoMatchingBranch
from .models import SkipReason, UpdateOptions, UpdateOutcome
from .reporter import StatusReporter, report_outcome
from .repository import Repository
from .selection import select_branches

log = logging.getLogger(__name__)


def stash_if_dirty(repo: Repository, options: UpdateOptions) -> None:
    """
    Stash local changes, or refuse when stashing is disabled.

    Raises
    ------
    DirtyNotAllowed
        If the working tree is dirty and ``options.stash_changes`` is off.
    AdapterExecutionError
        If the status query or the stash fails.
    """
    if not repo.is_dirty():
        return
    if not options.stash_changes:
        raise DirtyNotAllowed(f"{repo.path} has local changes and stashing is not allowed")
    log.info("Stashing local changes in %s", repo.path)
    repo.stash(options.stash_message)


def branches_to_update(repo: Repository, options: UpdateOptions) -> list[str]:
    """Fetch remotes and select the branches of ``repo`` to update."""
    repo.fetch_remote()
    return select_branches(repo.list_local_branches(), options.selection_mode)


def update_branches(repo: Repository, branches: list[str], reporter: StatusReporter) -> tuple[list[str], list[str]]:
    """
    Check out and pull every branch, continuing past failures.

    Returns
    -------
    tuple[list[str], list[str]]
        The (succeeded, failed) branch names.
    """
    succeeded = []
    failed = []
    for branch in branches:
        reporter.branch(repo.path, branch)
        try:
            repo.update_branch(branch)
        except AdapterExecutionError as e:
            log.warning("Updating %s in %s failed: %s", branch, repo.path, e)
            failed.append(branch)
            continue
        succeeded.append(branch)
    return succeeded, failed


def update_repository(repo: Repository, options: UpdateOptions, reporter: StatusReporter) -> UpdateOutcome:
    """
    Run the complete update of one repository.

    Never raises for git-dirupdate errors; they are returned as a skipped or
    failed outcome.
    """
    try:
        stash_if_dirty(repo, options)
        branches = branches_to_update(repo, options)
    except DirtyNotAllowed as e:
        log.info("Skipping %s: %s", repo.path, e)
        return UpdateOutcome.skipped(repo.path, SkipReason.DIRTY)
    except NoMatchingBranch:
        log.info("Skipping %s: no branch to update", repo.path)
        return UpdateOutcome.skipped(repo.path, SkipReason.NO_BRANCH)
    except DirUpdateError as e:
        log.warning("Updating %s failed: %s", repo.path, e)
        return UpdateOutcome.failure(repo.path, e)

    succeeded, failed = update_branches(repo, branches, reporter)
    return UpdateOutcome.from_branches(repo.path, succeeded, failed)


def update_repositories(
    paths: Iterable[Path],
    options: UpdateOptions,
    reporter: StatusReporter,
    repository_factory: Callable[[Path], Repository] = Repository,
) -> list[UpdateOutcome]:
    """
    Update repositories strictly in the given order.

    Parameters
    ----------
    paths : Iterable[Path]
        Working tree roots, usually from ``find_repositories``.
    options : UpdateOptions
        Options shared by every repository.
    reporter : StatusReporter
        Receives a start event and exactly one terminal event per repository.
    repository_factory : Callable[[Path], Repository], optional
        Builds the git adapter for a path, by default ``Repository``.

    Returns
    -------
    list[UpdateOutcome]
        One outcome per path, in order.
    """
    outcomes = []
    for path in paths:
        reporter.start(path)
        repo = repository_factory(path)
        outcome = update_repository(repo, options, reporter)
        report_outcome(reporter, outcome)
        outcomes.append(outcome)
    return outcomes
