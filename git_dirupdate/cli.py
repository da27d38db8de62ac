"""Command line entry point for git-dirupdate."""

import logging

import click
from rich.console import Console

from .discovery import confirm_update, expand_root, find_repositories
from .exceptions import DiscoveryError
from .models import DEFAULT_BRANCHES, DEFAULT_STASH_MESSAGE, DEFAULT_WARN_THRESHOLD, UpdateOptions
from .orchestrator import update_repositories
from .reporter import ConsoleReporter

console = Console()


def _setup_logging(verbose: bool) -> None:
    """
    Setup logging configuration based on verbosity level.

    Parameters
    ----------
    verbose : bool
        If True, enable debug logging; otherwise only warnings are shown
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


def _split_branches(branch_groups: tuple[str, ...]) -> tuple[str, ...]:
    branches = []
    for group in branch_groups:
        branches.extend(name.strip() for name in group.split(",") if name.strip())
    return tuple(branches)


@click.command()
@click.option(
    "--root",
    "-r",
    default="",
    envvar=["GIT_DIRUPDATE_ROOT_DIR", "GIT_DIRCLONE_ROOT_DIR"],
    help="Root directory to search (default: $GIT_DIRUPDATE_ROOT_DIR or the current directory)",
)
@click.option(
    "--branch",
    "-b",
    "branches",
    multiple=True,
    default=DEFAULT_BRANCHES,
    help="Comma-separated branches to update in each repository (default: main,master)",
)
@click.option(
    "--all-branches",
    "-a",
    is_flag=True,
    help="Update all local branches of each repository, --branch is ignored",
)
@click.option(
    "--stash-changes",
    "-s",
    is_flag=True,
    help="Stash local changes of dirty repositories and update them instead of skipping",
)
@click.option(
    "--warn-threshold",
    "-w",
    type=click.IntRange(min=0),
    default=DEFAULT_WARN_THRESHOLD,
    show_default=True,
    help="Ask for confirmation when more repositories than this are found",
)
@click.option(
    "--stash-message",
    default=DEFAULT_STASH_MESSAGE,
    show_default=True,
    help="Message recorded for stashes created by this tool",
)
@click.option("--yes", "-y", "assume_yes", is_flag=True, help="Do not ask for confirmation")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def main(
    root: str,
    branches: tuple[str, ...],
    all_branches: bool,
    stash_changes: bool,
    warn_threshold: int,
    stash_message: str,
    assume_yes: bool,
    verbose: bool,
):
    """
    Update all git repositories below a root directory.

    Every repository is fetched and the selected branches are checked out and
    pulled. Repositories with local changes are skipped unless --stash-changes
    is given.
    """
    _setup_logging(verbose)

    options = UpdateOptions(
        root=root,
        branches=_split_branches(branches),
        all_branches=all_branches,
        stash_changes=stash_changes,
        warn_threshold=warn_threshold,
        stash_message=stash_message,
        assume_yes=assume_yes,
        verbose=verbose,
    )
    reporter = ConsoleReporter(console, verbose=verbose)

    try:
        with console.status("Finding repositories"):
            repositories = find_repositories(options.root)
    except DiscoveryError as e:
        raise click.ClickException(str(e)) from e

    reporter.discovered(expand_root(options.root), len(repositories))
    if not repositories:
        return

    if not confirm_update(len(repositories), options.warn_threshold, options.assume_yes):
        console.print("[yellow]Cancelled.[/yellow]")
        return

    outcomes = update_repositories(repositories, options, reporter)
    reporter.summary(outcomes)


if __name__ == "__main__":
    main()
