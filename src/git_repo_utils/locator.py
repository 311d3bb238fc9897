"""Resolving filesystem paths to repository handles."""

import logging
import os
import shutil
from collections.abc import Iterable, Iterator
from pathlib import Path

import pathspec

from .command import GitCommand
from .config import GitConfig
from .errors import (
    AlreadyExistsError,
    GitError,
    InvalidPathError,
    NotAGitRepositoryError,
    ReferenceInvalidError,
    RepositoryNotFoundError,
)
from .paths import (
    GIT_MARKER,
    absolute_path,
    find_git_dir,
    is_bare_repository,
    resolve_path,
)
from .repo import GitRepo
from .runner import CommandRunner

logger = logging.getLogger(__name__)


def resolve_repository(
    path: str | Path,
    allow_create: bool = False,
    auto_init: bool = True,
    *,
    config: GitConfig | None = None,
    runner: CommandRunner | None = None,
) -> GitRepo:
    """
    Classify a path and return a handle for the repository it denotes.

    Resolution order for an existing directory:
    1. Contains `.git` (directory or `gitdir:` file): working tree
    2. Contains a `config` with `core.bare = true`: bare repository
    3. `allow_create`: use it as a new repository (run `git init` if `auto_init`)
    4. Otherwise: `NotAGitRepositoryError`

    A missing path is created when `allow_create` is set and its parent
    exists. Either a complete handle is returned or an error is raised;
    a directory created here is removed again if initialization fails.

    Args:
        path: Path to the repository. `~` is expanded.
        allow_create: Create/initialize when the path is not a repository.
        auto_init: Run `git init` on paths accepted for creation.
        config: Executable settings for the handle. Defaults to `GitConfig.default()`.
        runner: Runner for the handle. Defaults to one built from `config`.

    Returns:
        GitRepo handle with `bare` resolved from the on-disk layout.

    Raises:
        RepositoryNotFoundError: Path does not exist and creation is not allowed.
        InvalidPathError: Path is empty, not a directory, or its parent is missing.
        NotAGitRepositoryError: Existing directory without valid git metadata.
        AlreadyExistsError: Creation requested but the path is already a repository.

    Example:
        repo = resolve_repository("~/src/project")
        new_repo = resolve_repository("/tmp/scratch", allow_create=True)
    """
    if path is None or not str(path).strip():
        if allow_create:
            raise InvalidPathError("cannot create repository at an empty path", path)
        raise RepositoryNotFoundError("empty repository path", path)

    config = config or GitConfig.default()

    try:
        repo_path = resolve_path(path)
    except (OSError, RuntimeError):
        if not allow_create:
            raise RepositoryNotFoundError(f'"{path}" does not exist', path) from None
        return _create_directory(absolute_path(path), auto_init, config, runner)

    if not repo_path.is_dir():
        raise InvalidPathError(f'"{repo_path}" is not a directory', repo_path)

    if find_git_dir(repo_path) is not None:
        logger.debug("%s is a working tree", repo_path)
        if allow_create:
            raise AlreadyExistsError(f'"{repo_path}" is already a git repository', repo_path)
        return GitRepo(repo_path, bare=False, config=config, runner=runner)

    if is_bare_repository(repo_path):
        logger.debug("%s is a bare repository", repo_path)
        if allow_create:
            raise AlreadyExistsError(f'"{repo_path}" is already a git repository', repo_path)
        return GitRepo(repo_path, bare=True, config=config, runner=runner)

    if not allow_create:
        raise NotAGitRepositoryError(f'"{repo_path}" is not a git repository', repo_path)

    logger.debug("%s is an existing directory accepted for creation", repo_path)
    repo = GitRepo(repo_path, bare=False, config=config, runner=runner)
    if auto_init:
        _initialize(repo, created=False)
    return repo


def _create_directory(
    target: Path,
    auto_init: bool,
    config: GitConfig,
    runner: CommandRunner | None,
) -> GitRepo:
    """Create `target` (parent must exist) and optionally initialize it."""
    if not target.parent.is_dir():
        raise InvalidPathError(
            f'cannot create repository "{target}" in non-existent directory',
            target,
        )

    try:
        target.mkdir()
    except OSError as e:
        raise InvalidPathError(f'cannot create directory "{target}": {e}', target) from e

    logger.info("Created repository directory %s", target)
    repo = GitRepo(target, bare=False, config=config, runner=runner)
    if auto_init:
        _initialize(repo, created=True)
    return repo


def _initialize(repo: GitRepo, created: bool) -> None:
    """Run `git init`, removing a directory we created if it fails."""
    try:
        repo.run("init")
    except GitError:
        if created:
            _discard_created(repo.path)
        raise
    logger.info("Initialized git repository in %s", repo.path)


def _discard_created(path: Path) -> None:
    logger.warning("Removing %s after failed repository setup", path)
    shutil.rmtree(path, ignore_errors=True)


def open_repository(
    path: str | Path,
    *,
    config: GitConfig | None = None,
    runner: CommandRunner | None = None,
) -> GitRepo:
    """
    Open an existing repository.

    Example:
        repo = open_repository("/srv/git/project.git")
        repo.bare  # True
    """
    return resolve_repository(path, allow_create=False, config=config, runner=runner)


def _validate_reference(reference: str | Path) -> Path:
    """Return the absolute reference path, or raise if it is not a repository."""
    ref_path = absolute_path(reference)
    if not ref_path.is_dir() or not (
        find_git_dir(ref_path) or is_bare_repository(ref_path)
    ):
        raise ReferenceInvalidError(
            f'"{reference}" is not a git repository. Cannot use as reference.',
            reference,
        )
    return ref_path


def _clone_source(source: str) -> str:
    """Anchor a local source path to the caller's cwd; URLs pass through."""
    local = Path(source).expanduser()
    if local.exists():
        return str(local.resolve())
    return source


def create_repository(
    path: str | Path,
    source: str | None = None,
    *,
    remote_source: bool = False,
    reference: str | Path | None = None,
    config: GitConfig | None = None,
    runner: CommandRunner | None = None,
) -> GitRepo:
    """
    Create a new repository, empty or cloned from a source.

    Args:
        path: Where to create the repository. The parent must exist.
        source: Repository to clone from. None runs `git init`.
        remote_source: Clone `source` as a remote URL rather than with `--local`.
        reference: Local repository passed as `--reference` for remote clones.
        config: Executable settings for the handle.
        runner: Runner for the handle.

    Returns:
        GitRepo handle for the new working tree.

    Raises:
        AlreadyExistsError: `path` is already a repository.
        ReferenceInvalidError: `reference` is not a repository.
        ExecutionFailedError: `git init` or `git clone` failed.

    Example:
        repo = create_repository("/tmp/new")
        mirror = create_repository("/tmp/copy", source="/tmp/new")
    """
    ref_path = None
    if remote_source and reference:
        ref_path = _validate_reference(reference)

    existed = bool(str(path).strip()) and absolute_path(path).exists()

    repo = resolve_repository(
        path,
        allow_create=True,
        auto_init=False,
        config=config,
        runner=runner,
    )

    if source is None:
        command = GitCommand("init")
    elif remote_source:
        command = GitCommand("clone")
        command.option("--reference", ref_path and str(ref_path))
        command.end_of_options().arg(source, repo.path)
    else:
        command = GitCommand("clone", "--local").end_of_options()
        command.arg(_clone_source(source), repo.path)

    try:
        repo.run(command)
    except GitError:
        if not existed:
            _discard_created(repo.path)
        raise

    if source is None:
        logger.info("Initialized git repository in %s", repo.path)
    else:
        logger.info("Cloned %s into %s", source, repo.path)
    return repo


def clone_repository(
    path: str | Path,
    remote: str,
    reference: str | Path | None = None,
    *,
    config: GitConfig | None = None,
    runner: CommandRunner | None = None,
) -> GitRepo:
    """
    Clone a remote repository into `path` and return its handle.

    Example:
        repo = clone_repository("/tmp/work", "https://github.com/user/repo.git")
    """
    return create_repository(
        path,
        remote,
        remote_source=True,
        reference=reference,
        config=config,
        runner=runner,
    )


def is_repo(value: object) -> bool:
    """Check if a value is a repository handle."""
    return isinstance(value, GitRepo)


def find_repositories(
    root_dir: str | Path,
    include_worktrees: bool = True,
    *,
    config: GitConfig | None = None,
    runner: CommandRunner | None = None,
) -> Iterator[GitRepo]:
    """
    Find every repository under root_dir and yield a handle for each.

    Directories are classified the same way as `resolve_repository`:
    a `.git` directory or `gitdir:` file marks a working tree, a `config`
    with `core.bare = true` marks a bare repository. Working trees are
    searched for nested repositories; bare repositories are not.

    Args:
        root_dir: Directory to search (included in the search).
        include_worktrees: If False, skip linked worktrees and submodules
            (where .git is a file).
        config: Executable settings for the yielded handles.
        runner: Runner for the yielded handles.

    Yields:
        GitRepo handles in directory-walk order.

    Example:
        for repo in find_repositories(Path.home() / "develop"):
            print(repo.path, repo.bare)
    """
    config = config or GitConfig.default()

    for dirpath, dirnames, filenames in os.walk(Path(root_dir).expanduser()):
        dirnames.sort()
        current = Path(dirpath)

        if GIT_MARKER in dirnames:
            dirnames.remove(GIT_MARKER)
            logger.debug("Found working tree %s", current)
            yield GitRepo(current, bare=False, config=config, runner=runner)
        elif GIT_MARKER in filenames:
            if include_worktrees and find_git_dir(current) is not None:
                logger.debug("Found linked working tree %s", current)
                yield GitRepo(current, bare=False, config=config, runner=runner)
        elif is_bare_repository(current):
            dirnames.clear()
            logger.debug("Found bare repository %s", current)
            yield GitRepo(current, bare=True, config=config, runner=runner)


def filter_ignored(
    repos: Iterable[GitRepo],
    root_dir: str | Path,
    ignore_filename: str,
) -> Iterator[GitRepo]:
    """
    Drop repositories matched by gitignore-style ignore files.

    Ignore files named `ignore_filename` are read from root_dir and each
    of its parents, outermost first, so deeper files can re-include with
    `!pattern`. Repositories are matched by their path relative to
    root_dir; those outside root_dir are always kept.

    Example:
        repos = find_repositories(root)
        for repo in filter_ignored(repos, root, ".repoignore"):
            fetch(repo)
    """
    root_dir = Path(root_dir).expanduser().resolve()

    patterns: list[str] = []
    for parent in reversed([root_dir, *root_dir.parents]):
        ignore_file = parent / ignore_filename
        if ignore_file.is_file():
            patterns.extend(ignore_file.read_text().splitlines())

    spec = pathspec.PathSpec.from_lines("gitwildmatch", patterns)

    for repo in repos:
        try:
            rel_path = repo.path.resolve().relative_to(root_dir)
        except ValueError:
            # Outside root_dir, nothing to match against
            yield repo
            continue

        # Directory patterns such as "archive/" only match with a trailing slash
        if rel_path == Path(".") or not spec.match_file(f"{rel_path.as_posix()}/"):
            yield repo
