"""Working tree, index and configuration operations."""

import logging
from collections.abc import Iterable

from .command import GitCommand
from .errors import ExecutionFailedError
from .repo import GitRepo

logger = logging.getLogger(__name__)

Files = str | Iterable[str]


def _files(files: Files) -> list[str]:
    return [files] if isinstance(files, str) else list(files)


def config_get(
    repo: GitRepo,
    key: str,
    default: str | None = None,
) -> str | None:
    """
    Get a git config value.

    Best-effort: an unset key (or any git failure) yields `default`.
    A key starting with "-" raises `InvalidArgumentError`.

    Args:
        repo: Repository to read config from.
        key: Config key to retrieve (e.g., "user.name", "core.bare")
        default: Default value if config key is not set.

    Returns:
        Config value if set, otherwise default.

    Example:
        email = config_get(repo, "user.email")
    """
    result = repo.run(GitCommand("config").operand(key), check=False)
    if result.succeeded and result.stdout.strip():
        return result.stdout.strip()
    return default


def config_get_all(repo: GitRepo, key: str) -> set[str]:
    """
    Get all values for a multi-value git config key.

    Returns:
        Set of config values, empty set if key is not set.

    Example:
        refspecs = config_get_all(repo, "remote.origin.fetch")
    """
    result = repo.run(GitCommand("config", "--get-all").operand(key), check=False)
    if result.succeeded and result.stdout.strip():
        return set(result.stdout.strip().split("\n"))
    return set()


def config_set(repo: GitRepo, key: str, value: str) -> None:
    """
    Set a repository-local git config value.

    Example:
        config_set(repo, "user.email", "bot@example.com")
    """
    repo.run(GitCommand("config").operand(key).arg(value))


def status(repo: GitRepo, porcelain: bool = False) -> str:
    """Run `git status` and return its output."""
    return repo.run(GitCommand("status").flag("--porcelain", porcelain)).stdout


def has_uncommitted_changes(repo: GitRepo) -> bool:
    """
    Check if there are uncommitted changes in the working tree.

    This includes both tracked and untracked files.

    Example:
        if has_uncommitted_changes(repo):
            stash(repo)
    """
    result = repo.run("status", "--porcelain", check=False)
    return result.succeeded and bool(result.stdout.strip())


def add(repo: GitRepo, files: Files = "*") -> str:
    """
    Stage files.

    Args:
        repo: Repository to operate on.
        files: A pathspec or list of pathspecs (default: everything).

    Example:
        add(repo, ["README.md", "src/"])
    """
    return repo.run(GitCommand("add", "--verbose").paths(_files(files))).stdout


def rm(repo: GitRepo, files: Files = "*", cached: bool = False) -> str:
    """
    Remove files from the index (and the working tree unless `cached`).

    Example:
        rm(repo, "secrets.env", cached=True)
    """
    command = GitCommand("rm").flag("--cached", cached).paths(_files(files))
    return repo.run(command).stdout


def commit(
    repo: GitRepo,
    message: str,
    commit_all: bool = True,
    author: str | None = None,
) -> str:
    """
    Record a commit.

    The message is passed as a single literal argument; quotes, `$`,
    backticks and semicolons are kept as written.

    Args:
        repo: Repository to operate on.
        message: Commit message.
        commit_all: Stage modified tracked files first (`-a`, default: True).
        author: Override the author, e.g. "Name <email>".

    Example:
        commit(repo, "Fix parser; handle `$VAR` in paths")
    """
    command = (
        GitCommand("commit")
        .flag("-a", commit_all)
        .arg(f"--author={author}" if author else None)
        .option("-m", message)
    )
    return repo.run(command).stdout


def clean(repo: GitRepo, dirs: bool = False, force: bool = False) -> str:
    """Run `git clean`, optionally removing directories (`-d`) and forcing (`-f`)."""
    command = GitCommand("clean").flag("-f", force).flag("-d", dirs)
    return repo.run(command).stdout


def reset(repo: GitRepo, *args: str) -> str:
    """
    Run `git reset` with the given arguments.

    Example:
        reset(repo, "--hard", "HEAD~1")
    """
    return repo.run(GitCommand("reset", *args)).stdout


def stash(repo: GitRepo) -> str:
    return repo.run("stash").stdout


def stash_pop(repo: GitRepo) -> str:
    return repo.run("stash", "pop").stdout


def rev_parse_head(repo: GitRepo) -> str:
    """Return the full hash of HEAD."""
    return repo.run("rev-parse", "HEAD").stdout.strip()


def gc(repo: GitRepo, *args: str) -> bool:
    """
    Run `git gc`.

    Best-effort: returns False instead of raising when gc fails.

    Example:
        gc(repo, "--prune=now")
    """
    try:
        repo.run(GitCommand("gc", *args))
    except ExecutionFailedError as e:
        logger.debug("git gc failed in %s: %s", repo.path, e.output)
        return False
    return True
