"""Exceptions raised by repository resolution and git command execution."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .runner import CommandOutcome


class GitError(Exception):
    """Base class for every error raised by this package."""


class RepositoryError(GitError):
    """A path could not be resolved to a usable repository."""

    def __init__(self, message: str, path: str | Path | None = None):
        super().__init__(message)
        self.path = path


class RepositoryNotFoundError(RepositoryError, FileNotFoundError):
    """The path does not exist and creation was not requested."""


class InvalidPathError(RepositoryError, ValueError):
    """The path cannot hold a repository (empty, not a directory, or parent missing)."""


class NotAGitRepositoryError(RepositoryError):
    """An existing directory has no valid git metadata."""


class AlreadyExistsError(RepositoryError, FileExistsError):
    """Creation was requested on a path that is already a repository."""


class ReferenceInvalidError(RepositoryError):
    """A clone reference path is not itself a git repository."""


class InvalidArgumentError(GitError, ValueError):
    """A value meant as a positional operand (branch, remote, tag, ...) looks like an option."""

    def __init__(self, message: str, value: str | None = None):
        super().__init__(message)
        self.value = value


class CommandError(GitError):
    """A git command could not be run or did not succeed."""

    def __init__(self, message: str, args: tuple[str, ...] = ()):
        super().__init__(message)
        self.cmd = args


class SpawnFailureError(CommandError):
    """The executable could not be started at all."""


class GitTimeoutError(CommandError, TimeoutError):
    """The command did not finish within its timeout and was killed."""

    def __init__(self, message: str, args: tuple[str, ...] = (), timeout: float | None = None):
        super().__init__(message, args)
        self.timeout = timeout


class ExecutionFailedError(CommandError):
    """
    The command ran and exited with a nonzero status.

    `output` is the verbatim stderr followed by stdout, so the tool's own
    error message is preserved for the operator.

    """

    def __init__(self, outcome: CommandOutcome):
        super().__init__(outcome.output, outcome.args)
        self.outcome = outcome

    @property
    def returncode(self) -> int:
        return self.outcome.returncode

    @property
    def stdout(self) -> str:
        return self.outcome.stdout

    @property
    def stderr(self) -> str:
        return self.outcome.stderr

    @property
    def output(self) -> str:
        return self.outcome.output
