"""Execution of a single git command against a repository handle."""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .command import GitCommand, split_args
from .config import GitConfig
from .errors import ExecutionFailedError, GitTimeoutError, SpawnFailureError

if TYPE_CHECKING:
    from .repo import GitRepo

logger = logging.getLogger(__name__)

Command = GitCommand | Sequence[str] | str

# Undecodable bytes survive as lone surrogates and can be re-encoded exactly
OUTPUT_ENCODING = "utf-8"
OUTPUT_ERRORS = "surrogateescape"


def decode_output(data: bytes | None) -> str:
    """
    Decode captured output without newline translation.

    `decode_output(b).encode("utf-8", "surrogateescape") == b` for any bytes.

    """
    if not data:
        return ""
    return data.decode(OUTPUT_ENCODING, OUTPUT_ERRORS)


@dataclass(frozen=True)
class CommandOutcome:
    """Result of a command that was spawned and ran to exit."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Combined diagnostic text: stderr, then stdout (not every error goes to stderr)."""
        return f"{self.stderr}\n{self.stdout}"


def to_argv(command: Command) -> list[str]:
    """
    Normalize a command to a list of literal tokens.

    A plain string is treated as an already-escaped argument string and
    split with POSIX rules; see `escape_arg`.

    """
    if isinstance(command, GitCommand):
        return list(command.argv)
    if isinstance(command, str):
        return split_args(command)
    return [str(arg) for arg in command]


def build_env(overrides: dict[str, str]) -> dict[str, str]:
    """Merge overrides on top of the ambient environment; overrides win."""
    return {**os.environ, **overrides}


class CommandRunner:
    """
    Runs one external command per call, blocking until it exits.

    Both output streams are drained concurrently, so large output cannot
    deadlock the child on a full pipe. Calls on the same handle are not
    serialized; git's own locks surface as ordinary failures.

    """

    def __init__(self, config: GitConfig | None = None):
        self.config = config or GitConfig.default()

    def execute(
        self,
        repo: GitRepo,
        executable: str,
        command: Command,
        *,
        timeout: float | None = None,
        check: bool = True,
    ) -> CommandOutcome:
        """
        Run `executable` with `command` inside `repo.path`.

        Args:
            repo: Handle providing working directory and environment overrides.
            executable: Path or name of the program to run.
            command: A `GitCommand`, a sequence of literal tokens, or an
                argument string whose untrusted parts went through `escape_arg`.
            timeout: Seconds before the process is killed. Falls back to
                `config.timeout`; None waits indefinitely.
            check: Raise `ExecutionFailedError` on a nonzero exit (default: True).

        Returns:
            CommandOutcome with fully captured stdout and stderr.

        Raises:
            SpawnFailureError: The executable could not be started.
            GitTimeoutError: The timeout expired; the process was killed.
            ExecutionFailedError: Nonzero exit status and `check` is True.

        Example:
            runner.execute(repo, "/usr/bin/git", GitCommand("status", "--short"))
            runner.execute(repo, "/usr/bin/git", "commit -m " + escape_arg(message))
        """
        argv = [executable, *to_argv(command)]
        overrides = repo.env_overrides
        if timeout is None:
            timeout = self.config.timeout

        logger.debug(
            "Executing %s in %s (env overrides: %s)",
            argv,
            repo.path,
            sorted(overrides) or "none",
        )

        try:
            result = subprocess.run(
                argv,
                cwd=repo.path,
                env=build_env(overrides),
                capture_output=True,
                timeout=timeout,
            )
        except subprocess.TimeoutExpired as e:
            raise GitTimeoutError(
                f"Command timed out after {timeout}s: {' '.join(argv)}",
                tuple(argv),
                timeout=timeout,
            ) from e
        except OSError as e:
            raise SpawnFailureError(
                f"Could not run {executable!r}: {e}",
                tuple(argv),
            ) from e

        outcome = CommandOutcome(
            args=tuple(argv),
            returncode=result.returncode,
            stdout=decode_output(result.stdout),
            stderr=decode_output(result.stderr),
        )

        if check and not outcome.succeeded:
            logger.debug("Command %s exited with %d", argv, outcome.returncode)
            raise ExecutionFailedError(outcome)

        return outcome

    def run(
        self,
        repo: GitRepo,
        command: Command,
        *,
        timeout: float | None = None,
        check: bool = True,
    ) -> CommandOutcome:
        """
        Run a git command with the configured executable.

        Example:
            runner.run(repo, GitCommand("branch", "--show-current"))
        """
        return self.execute(
            repo,
            self.config.executable,
            command,
            timeout=timeout,
            check=check,
        )
