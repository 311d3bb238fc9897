"""Git executable configuration."""

import os
import shutil
import subprocess
from dataclasses import dataclass, replace
from pathlib import Path

DEFAULT_GIT_BIN = "/usr/bin/git"
FALLBACK_GIT_BIN = "git"
GIT_BIN_ENV_VAR = "GIT_REPO_UTILS_GIT_BIN"


def _initial_git_bin() -> str:
    """
    Pick the executable used when nothing else is configured.

    Order: `$GIT_REPO_UTILS_GIT_BIN`, then `/usr/bin/git` if it exists,
    then plain `git` looked up on PATH.

    """
    if env_bin := os.environ.get(GIT_BIN_ENV_VAR):
        return env_bin
    if Path(DEFAULT_GIT_BIN).exists():
        return DEFAULT_GIT_BIN
    return FALLBACK_GIT_BIN


_git_bin = _initial_git_bin()


def get_git_bin() -> str:
    """
    Get the process-wide default git executable.

    Example:
        get_git_bin()  # "/usr/bin/git"
    """
    return _git_bin


def set_git_bin(path: str | Path) -> None:
    """
    Set the process-wide default git executable.

    Meant to be called once at startup. Handles that already exist keep
    the `GitConfig` they were constructed with.

    Example:
        set_git_bin("/opt/git/bin/git")
    """
    global _git_bin
    _git_bin = str(path)


def windows_mode() -> None:
    """Use `git` from PATH, as a default Windows installation requires."""
    set_git_bin(FALLBACK_GIT_BIN)


@dataclass(frozen=True)
class GitConfig:
    """
    Settings injected into handles and runners at construction.

    `timeout` is in seconds; None waits for the process indefinitely.

    """

    executable: str = FALLBACK_GIT_BIN
    timeout: float | None = None

    @classmethod
    def default(cls) -> "GitConfig":
        """Build a config from the current process-wide executable."""
        return cls(executable=get_git_bin())

    def with_timeout(self, timeout: float | None) -> "GitConfig":
        return replace(self, timeout=timeout)


def is_git_available(config: GitConfig | None = None) -> bool:
    """
    Check whether the configured git executable can be started.

    Args:
        config: Config to check. Defaults to `GitConfig.default()`.

    Returns:
        True if `git --version` runs and exits successfully.

    Example:
        if not is_git_available():
            raise SystemExit("git is not installed")
    """
    executable = (config or GitConfig.default()).executable
    if os.sep not in executable and shutil.which(executable) is None:
        return False
    try:
        result = subprocess.run(
            [executable, "--version"],
            capture_output=True,
            text=True,
        )
    except OSError:
        return False
    return result.returncode == 0
