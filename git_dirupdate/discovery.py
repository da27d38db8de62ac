"""Find the working trees below a root directory."""

import logging
import os
from collections.abc import Callable, Iterable
from pathlib import Path

from rich.prompt import Confirm

from .exceptions import DiscoveryError

log = logging.getLogger(__name__)

GIT_DIR_NAME = ".git"


def expand_root(root: str) -> str:
    """
    Expand a leading ``~`` to the home directory of the invoking user.

    Only ``~`` on its own or a ``~/`` prefix is expanded, paths like
    ``a/~/b`` are returned unchanged. An empty root means the current
    directory.
    """
    if not root:
        return "."
    if root == "~":
        return str(Path.home())
    if root.startswith("~/"):
        return str(Path.home() / root[2:])
    return root


def get_subdirectories(path: Path) -> Iterable[Path]:
    """
    Get the subdirectories of a path, symlinked directories included.

    Parameters
    ----------
    path : Path
        The directory to list.

    Returns
    -------
    Iterable[Path]
        Subdirectories sorted by name.
    """
    for item in sorted(path.iterdir(), key=lambda p: p.name):
        if item.is_dir():
            yield item


def _walk(current: Path, visited: set[Path], links: list[Path]) -> Iterable[Path]:
    try:
        real = current.resolve()
    except OSError as e:
        log.warning("Skipping %s: %s", current, e)
        return
    if real in visited:
        log.debug("Already visited %s, skipping symlink cycle", current)
        return
    visited.add(real)

    try:
        subdirs = list(get_subdirectories(current))
    except OSError as e:
        log.warning("Skipping unreadable directory %s: %s", current, e)
        return

    for path in subdirs:
        if path.name == GIT_DIR_NAME:
            log.debug("Found git repository at %s", current)
            yield current
            continue
        if path.is_symlink():
            # Followed after all real directories so a real path wins over a link to it
            links.append(path)
            continue
        yield from _walk(path, visited, links)


def find_repositories(root: str) -> list[Path]:
    """
    Find all git working trees below ``root``.

    A working tree is a directory containing a ``.git`` directory. Symlinked
    directories are followed after the real directory tree, each real
    directory is visited once, so a repository reachable both directly and
    through a symlink is reported under its real path.

    Parameters
    ----------
    root : str
        Directory to search, ``~`` is expanded and "" means the current
        directory.

    Returns
    -------
    list[Path]
        Working tree roots in traversal order.

    Raises
    ------
    DiscoveryError
        If the root does not exist or cannot be read.
    """
    start = Path(expand_root(root))
    if not start.is_dir():
        raise DiscoveryError(f"Root directory {start} does not exist or is not a directory")
    if not os.access(start, os.R_OK | os.X_OK):
        raise DiscoveryError(f"Root directory {start} is not accessible")
    try:
        next(iter(start.iterdir()), None)
    except OSError as e:
        raise DiscoveryError(f"Cannot read root directory {start}: {e}") from e

    visited: set[Path] = set()
    links: list[Path] = []
    repositories = list(_walk(start, visited, links))
    while links:
        repositories.extend(_walk(links.pop(0), visited, links))
    log.debug("Found %d repositories in %s", len(repositories), start)
    return repositories


def confirm_update(
    count: int,
    threshold: int,
    assume_yes: bool = False,
    ask: Callable[[str], bool] = Confirm.ask,
) -> bool:
    """
    Ask before updating more repositories than ``threshold``.

    Returns True when the run may proceed.
    """
    if count <= threshold or assume_yes:
        return True
    return bool(ask(f"Are you sure you want to update {count} repositories?"))
