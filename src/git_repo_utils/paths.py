"""Path canonicalization and on-disk repository metadata detection."""

import configparser
import logging
import re
from pathlib import Path

logger = logging.getLogger(__name__)

GIT_MARKER = ".git"

_GITDIR_RE = re.compile(r"^gitdir:\s*(.+?)\s*$", re.MULTILINE)
_TRUE_VALUES = {"true", "yes", "on", "1"}


def resolve_path(path: str | Path) -> Path:
    """
    Resolve an existing path to an absolute, symlink-free Path object.

    Args:
        path: Path to resolve. `~` is expanded.

    Returns:
        Canonical absolute Path.

    Raises:
        FileNotFoundError: If the path does not exist.

    Example:
        resolve_path("~/projects")  # Returns /home/user/projects
    """
    return Path(path).expanduser().resolve(strict=True)


def absolute_path(path: str | Path) -> Path:
    """Make a possibly non-existent path absolute without requiring it to exist."""
    return Path(path).expanduser().resolve()


def read_gitdir_file(marker: Path) -> Path | None:
    """
    Read the metadata location from a `.git` indirection file.

    Worktrees and submodules use a `.git` file containing a single
    `gitdir: <path>` line. Relative targets are resolved against the
    directory holding the file.

    Returns:
        Absolute path of the metadata directory, or None if the file
        has no `gitdir:` line.

    """
    try:
        content = marker.read_text()
    except (OSError, UnicodeDecodeError):
        return None

    if not (match := _GITDIR_RE.search(content)):
        return None

    target = Path(match.group(1))
    if not target.is_absolute():
        target = marker.parent / target
    return target.resolve()


def find_git_dir(path: Path) -> Path | None:
    """
    Locate the metadata directory of a working tree.

    Returns `<path>/.git` for a regular repository, the target of a
    `gitdir:` file for worktrees and submodules, or None.

    """
    marker = path / GIT_MARKER
    if marker.is_dir():
        return marker
    if marker.is_file():
        return read_gitdir_file(marker)
    return None


def find_common_dir(git_dir: Path) -> Path:
    """
    Locate the metadata directory shared by all worktrees of a repository.

    A linked worktree's git dir (`.git/worktrees/<name>`) holds a
    `commondir` file pointing back at the main one, relative to itself.
    Any other git dir is its own common dir.

    """
    try:
        target = (git_dir / "commondir").read_text().strip()
    except (OSError, UnicodeDecodeError):
        return git_dir
    if not target:
        return git_dir
    return (git_dir / target).resolve()


def is_bare_repository(path: Path) -> bool:
    """
    Check whether a directory is a bare repository.

    The directory must contain a `config` file whose `core.bare` setting
    parses as true. A missing, unreadable or non-bare config is False;
    callers must not guess bareness from anything else.

    """
    config_file = path / "config"
    if not config_file.is_file():
        return False

    parser = configparser.ConfigParser(
        allow_no_value=True,
        strict=False,
        interpolation=None,
    )
    try:
        parser.read(config_file)
    except (configparser.Error, UnicodeDecodeError) as e:
        logger.debug("Could not parse %s: %s", config_file, e)
        return False

    if not parser.has_option("core", "bare"):
        return False

    # A key with no "=" means true in git config syntax
    value = parser.get("core", "bare")
    if value is None:
        return True
    return value.strip().lower() in _TRUE_VALUES
