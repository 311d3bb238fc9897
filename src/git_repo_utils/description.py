"""Repository description file (used by gitweb and similar tools)."""

from .repo import GitRepo

DESCRIPTION_FILE = "description"


def set_description(repo: GitRepo, text: str) -> None:
    """
    Write the repository description.

    The text is stored byte-for-byte (UTF-8, no newline translation), so
    `get_description` returns exactly what was written. Linked worktrees
    share the main repository's description file.

    Example:
        set_description(repo, "Deployment scripts")
    """
    (repo.common_dir / DESCRIPTION_FILE).write_bytes(text.encode("utf-8"))


def get_description(repo: GitRepo) -> str:
    """
    Read the repository description verbatim.

    Example:
        get_description(repo)  # "Unnamed repository; edit this file ..."
    """
    return (repo.common_dir / DESCRIPTION_FILE).read_bytes().decode("utf-8")
