"""Tag operations."""

from .command import GitCommand
from .repo import GitRepo


def add_tag(
    repo: GitRepo,
    tag: str,
    message: str | None = None,
    commit: str | None = None,
) -> str:
    """
    Create an annotated tag.

    Args:
        repo: Repository to operate on.
        tag: Tag name.
        message: Annotation. Defaults to the tag name.
        commit: Revision to tag. Defaults to HEAD.

    Example:
        add_tag(repo, "v1.2.0", "Release 1.2.0")
    """
    if message is None:
        message = tag
    command = GitCommand("tag", "-a").option("-m", message).operand(tag, commit)
    return repo.run(command).stdout


def list_tags(repo: GitRepo, pattern: str | None = None) -> list[str]:
    """
    List tags, optionally only those matching a shell wildcard pattern.

    Example:
        list_tags(repo, "v1.*")  # ["v1.0.0", "v1.1.0"]
    """
    output = repo.run(GitCommand("tag", "-l").operand(pattern)).stdout
    return [tag for line in output.splitlines() if (tag := line.strip())]
