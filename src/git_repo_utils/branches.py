"""Branch operations."""

import logging
from collections.abc import Iterable

import pathspec

from .command import GitCommand
from .repo import GitRepo

logger = logging.getLogger(__name__)


def _branch_lines(output: str) -> list[str]:
    return [branch for line in output.splitlines() if (branch := line.strip())]


def create_branch(repo: GitRepo, name: str) -> str:
    """
    Create a branch at HEAD without switching to it.

    Raises:
        InvalidArgumentError: `name` starts with "-".
        ExecutionFailedError: git rejects the name or the branch exists.

    Example:
        create_branch(repo, "feature/login")
    """
    return repo.run(GitCommand("branch").operand(name)).stdout


def delete_branch(repo: GitRepo, name: str, force: bool = False) -> str:
    """
    Delete a local branch (`-d`, or `-D` when forced).

    Raises:
        ExecutionFailedError: The branch does not exist or is not merged.
    """
    return repo.run(GitCommand("branch", "-D" if force else "-d").operand(name)).stdout


def list_branches(repo: GitRepo, keep_asterisk: bool = False) -> list[str]:
    """
    List local branches.

    Args:
        repo: Repository to operate on.
        keep_asterisk: Keep git's "* " marker on the checked out branch.

    Returns:
        Branch names in git's order.

    Example:
        list_branches(repo)  # ["feature", "main"]
    """
    branches = _branch_lines(repo.run("branch").stdout)
    if keep_asterisk:
        return branches
    return [branch.removeprefix("* ") for branch in branches]


def list_remote_branches(repo: GitRepo) -> list[str]:
    """
    List remote-tracking branches, without symbolic `HEAD -> ...` entries.

    Example:
        list_remote_branches(repo)  # ["origin/main"]
    """
    return [
        branch
        for branch in _branch_lines(repo.run("branch", "-r").stdout)
        if "HEAD -> " not in branch
    ]


def active_branch(repo: GitRepo, keep_asterisk: bool = False) -> str | None:
    """
    Get the checked out branch as shown by `git branch`.

    Returns:
        The branch name, or None when there is none (e.g., no commits yet).
        With a detached HEAD this is git's "(HEAD detached at ...)" label.

    """
    for branch in list_branches(repo, keep_asterisk=True):
        if branch.startswith("* "):
            return branch if keep_asterisk else branch.removeprefix("* ")
    return None


def checkout(repo: GitRepo, branch: str) -> str:
    """
    Switch to a branch (or any revision).

    Example:
        checkout(repo, "main")
    """
    return repo.run(GitCommand("checkout").operand(branch)).stdout


def merge(repo: GitRepo, branch: str) -> str:
    """Merge a branch into the current one, always creating a merge commit."""
    return repo.run(GitCommand("merge", "--no-ff").operand(branch)).stdout


def merge_abort(repo: GitRepo) -> str:
    """Abort an in-progress merge."""
    return repo.run("merge", "--abort").stdout


def get_remote_branches_by_pattern(repo: GitRepo, pattern: str) -> list[str]:
    """
    Find remote-tracking branches matching a gitignore-style pattern.

    Best-effort: any git failure yields an empty list.

    Example:
        get_remote_branches_by_pattern(repo, "origin/release-*")
    """
    result = repo.run("branch", "-r", check=False)
    if not result.succeeded:
        logger.debug("Listing remote branches failed: %s", result.output)
        return []

    spec = pathspec.PathSpec.from_lines("gitwildmatch", [pattern])
    return [
        branch
        for branch in _branch_lines(result.stdout)
        if "HEAD -> " not in branch and spec.match_file(branch)
    ]


def get_remote_branches_count(repo: GitRepo) -> int:
    """
    Count remote-tracking branches.

    Best-effort: any git failure counts as zero.

    """
    result = repo.run("branch", "-r", check=False)
    if not result.succeeded:
        return 0
    return len(_branch_lines(result.stdout))


def delete_remote_branches(
    repo: GitRepo,
    branches: Iterable[str],
    remote: str = "origin",
) -> str:
    """
    Delete branches on a remote.

    Example:
        delete_remote_branches(repo, ["old-feature", "stale-fix"])
    """
    command = GitCommand("push", "--delete").operand(remote, *branches)
    return repo.run(command).stdout
