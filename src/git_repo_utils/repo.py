"""Repository handle: a validated path plus the settings used to run git in it."""

import threading
from pathlib import Path

from .command import GitCommand
from .config import GitConfig
from .errors import InvalidPathError, NotAGitRepositoryError
from .paths import find_common_dir, find_git_dir
from .runner import Command, CommandOutcome, CommandRunner


class GitRepo:
    """
    A git repository bound to a directory on disk.

    Instances are normally obtained from `resolve_repository`,
    `open_repository`, `create_repository` or `clone_repository`, which
    classify the path first. The handle keeps no process or file open
    between calls.

    Environment overrides are merged over `os.environ` for every command.
    They may be changed at any time; each command sees a snapshot taken
    when it starts. Commands on one handle are not serialized: callers
    running operations concurrently on the same repository must add their
    own locking if git's index lock contention is a problem.

    Example:
        repo = open_repository("~/src/project")
        repo.setenv("GIT_AUTHOR_NAME", "Release Bot")
        repo.run("status", "--short").stdout
    """

    def __init__(
        self,
        path: str | Path,
        bare: bool = False,
        *,
        config: GitConfig | None = None,
        runner: CommandRunner | None = None,
    ):
        path = Path(path)
        if not path.is_dir():
            raise InvalidPathError(f'"{path}" is not a directory', path)

        self._path = path
        self._bare = bare
        self._env: dict[str, str] = {}
        self._env_lock = threading.Lock()
        self.config = config or GitConfig.default()
        self.runner = runner or CommandRunner(self.config)

    @property
    def path(self) -> Path:
        """Working tree directory, or the repository itself when bare."""
        return self._path

    @property
    def bare(self) -> bool:
        return self._bare

    @property
    def git_dir(self) -> Path:
        """
        The metadata directory (the ".git" directory).

        Follows `gitdir:` indirection files used by worktrees and submodules.

        Raises:
            NotAGitRepositoryError: If no metadata directory can be found.
        """
        if self._bare:
            return self._path
        if git_dir := find_git_dir(self._path):
            return git_dir
        raise NotAGitRepositoryError(f"could not find git dir for {self._path}", self._path)

    @property
    def common_dir(self) -> Path:
        """
        The metadata directory shared by all worktrees.

        Same as `git_dir` except in a linked worktree, where it is the main
        repository's ".git" directory.
        """
        return find_common_dir(self.git_dir)

    @property
    def env_overrides(self) -> dict[str, str]:
        """Snapshot of the environment overrides, in insertion order."""
        with self._env_lock:
            return dict(self._env)

    def setenv(self, key: str, value: str) -> None:
        """
        Set an environment variable for every subsequent git command.

        Example:
            repo.setenv("GIT_SSH_COMMAND", "ssh -i ~/.ssh/deploy_key")
        """
        with self._env_lock:
            self._env[key] = str(value)

    def unsetenv(self, key: str) -> None:
        """Remove an override; the ambient value (if any) applies again."""
        with self._env_lock:
            self._env.pop(key, None)

    def run(
        self,
        *args: str | GitCommand,
        check: bool = True,
        timeout: float | None = None,
    ) -> CommandOutcome:
        """
        Run a git command in this repository.

        Args:
            *args: Literal git arguments (e.g., "status", "--porcelain"),
                or a single prepared `GitCommand`.
            check: Raise `ExecutionFailedError` on nonzero exit (default: True).
            timeout: Seconds before the process is killed. Defaults to
                `config.timeout`.

        Returns:
            CommandOutcome with captured stdout and stderr.

        Example:
            repo.run("branch", "--show-current").stdout.strip()
            repo.run(GitCommand("log").option("-n", 5))
        """
        if len(args) == 1 and isinstance(args[0], GitCommand):
            command = args[0]
        else:
            command = GitCommand(*args)
        return self.execute(self.config.executable, command, check=check, timeout=timeout)

    def execute(
        self,
        executable: str,
        command: Command,
        *,
        check: bool = True,
        timeout: float | None = None,
    ) -> CommandOutcome:
        """Run an arbitrary executable with this repository's cwd and environment."""
        if timeout is None:
            timeout = self.config.timeout
        return self.runner.execute(
            self,
            executable,
            command,
            check=check,
            timeout=timeout,
        )

    def __repr__(self) -> str:
        kind = "bare" if self._bare else "worktree"
        return f"GitRepo({str(self._path)!r}, {kind})"
