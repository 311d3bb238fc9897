"""Log, show and diff."""

from .command import GitCommand
from .repo import GitRepo


def _pretty(format: str | None) -> str | None:
    return f"--pretty=format:{format}" if format is not None else None


def log(
    repo: GitRepo,
    format: str | None = None,
    file: str | None = None,
    limit: int | None = None,
    offset: int = 0,
    search: str | None = None,
    full_diff: bool = False,
    follow: bool = False,
) -> str:
    """
    List log entries.

    Args:
        repo: Repository to operate on.
        format: `--pretty=format:` string (e.g., "%H %s").
        file: Restrict to one path.
        limit: Maximum number of commits.
        offset: Number of commits to skip.
        search: Only commits adding or removing this string (`-S`).
        full_diff: Include full patches (`--full-diff -p`).
        follow: Follow renames of `file`; takes precedence over `full_diff`.

    Returns:
        Raw log output.

    Example:
        log(repo, format="%H%x00%s", limit=10)
    """
    command = GitCommand("log")
    if limit and limit > 0:
        command.arg(f"-{limit}")
    if offset > 0:
        command.arg(f"--skip={offset}")
    if search:
        command.arg(f"-S{search}")
    command.arg(_pretty(format))
    if follow:
        command.flag("--follow")
    elif full_diff:
        command.flag("--full-diff").flag("-p")
    command.paths(file)
    return repo.run(command).stdout


def log_grep(repo: GitRepo, pattern: str, format: str | None = None) -> str:
    """
    List log entries whose message matches `pattern`.

    Example:
        log_grep(repo, "JIRA-123", format="%h %s")
    """
    command = GitCommand("log", f"--grep={pattern}").arg(_pretty(format))
    return repo.run(command).stdout


def log_revision_range(
    repo: GitRepo,
    start: str,
    end: str,
    format: str | None = None,
    file: str | None = None,
) -> str:
    """
    List log entries in `start..end`.

    Example:
        log_revision_range(repo, "v1.0", "HEAD", format="%s")
    """
    command = GitCommand("log").arg(_pretty(format)).operand(f"{start}..{end}").paths(file)
    return repo.run(command).stdout


def show(repo: GitRepo, file: str | None = None, commit: str | None = None) -> str:
    """
    Show a commit, or a file's content at a commit.

    With only `file`, shows HEAD limited to changes touching that file.

    Example:
        show(repo, "README.md", "HEAD~1")  # git show HEAD~1:README.md
    """
    command = GitCommand("show")
    if commit and file:
        command.operand(f"{commit}:{file}")
    else:
        command.operand(commit).paths(file)
    return repo.run(command).stdout


def diff(repo: GitRepo, *args: str) -> str:
    """
    Run `git diff` with the given arguments.

    Example:
        diff(repo, "--stat", "HEAD~1")
    """
    return repo.run(GitCommand("diff", *args)).stdout


def diff_cached(repo: GitRepo) -> str:
    """Diff of staged changes."""
    return repo.run("diff", "--cached").stdout
