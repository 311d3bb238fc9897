"""Operations that talk to other repositories."""

from pathlib import Path

from .command import GitCommand
from .repo import GitRepo


def clone_to(repo: GitRepo, target: str | Path) -> str:
    """
    Clone this repository into another directory with `--local`.

    A relative `target` is interpreted relative to the repository.

    Example:
        clone_to(repo, "/tmp/backup")
    """
    command = GitCommand("clone", "--local").end_of_options().arg(repo.path, target)
    return repo.run(command).stdout


def fetch(repo: GitRepo, dry_run: bool = False) -> str:
    """Fetch from the default remote."""
    return repo.run(GitCommand("fetch").flag("--dry-run", dry_run)).stdout


def push(
    repo: GitRepo,
    remote: str | None = None,
    branch: str | None = None,
    tags: bool = False,
) -> str:
    """
    Push a branch to a remote.

    With neither remote nor branch this is a bare `git push`, which follows
    the `push.default` configuration.

    Raises:
        InvalidArgumentError: `remote` or `branch` starts with "-".

    Example:
        push(repo, "origin", "main")
    """
    command = GitCommand("push").flag("--tags", tags).operand(remote, branch)
    return repo.run(command).stdout


def pull(
    repo: GitRepo,
    remote: str | None = None,
    branch: str | None = None,
) -> str:
    """
    Pull a branch from a remote.

    Raises:
        InvalidArgumentError: `remote` or `branch` starts with "-".

    Example:
        pull(repo, "origin", "main")
    """
    return repo.run(GitCommand("pull").operand(remote, branch)).stdout


def remote_prune(repo: GitRepo, remote: str = "origin") -> str:
    """Drop remote-tracking branches that no longer exist on the remote."""
    return repo.run(GitCommand("remote", "prune").operand(remote)).stdout
