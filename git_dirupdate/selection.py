"""Choose which local branches of a repository get updated."""

from .exceptions import NoMatchingBranch
from .models import SelectionMode


def select_branches(branches: list[str], mode: SelectionMode) -> list[str]:
    """
    Select the branches to update from a repository's local branch list.

    Parameters
    ----------
    branches : list[str]
        Filtered local branch names in listing order.
    mode : SelectionMode
        All branches, or an explicit list of names.

    Returns
    -------
    list[str]
        The selected branches in the repository's listing order. Requested
        names that do not exist in the repository are ignored.

    Raises
    ------
    NoMatchingBranch
        If nothing is selected.
    """
    if mode.all_branches:
        selected = list(branches)
    else:
        wanted = set(mode.names)
        selected = [branch for branch in branches if branch in wanted]

    if not selected:
        raise NoMatchingBranch("no branch to update")
    return selected
