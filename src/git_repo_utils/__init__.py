"""Run git against repositories on disk without assembling command strings.

A repository is resolved once into a `GitRepo` handle (working tree or bare,
plus environment overrides). Operations build a `GitCommand` and execute it
through a `CommandRunner` with the handle's directory and environment.
"""

# Re-export all public names from submodules
from .branches import (
    active_branch,
    checkout,
    create_branch,
    delete_branch,
    delete_remote_branches,
    get_remote_branches_by_pattern,
    get_remote_branches_count,
    list_branches,
    list_remote_branches,
    merge,
    merge_abort,
)
from .command import GitCommand, escape_arg, join_args, split_args
from .config import (
    GitConfig,
    get_git_bin,
    is_git_available,
    set_git_bin,
    windows_mode,
)
from .description import get_description, set_description
from .errors import (
    AlreadyExistsError,
    CommandError,
    ExecutionFailedError,
    GitError,
    GitTimeoutError,
    InvalidArgumentError,
    InvalidPathError,
    NotAGitRepositoryError,
    ReferenceInvalidError,
    RepositoryError,
    RepositoryNotFoundError,
    SpawnFailureError,
)
from .git import (
    add,
    clean,
    commit,
    config_get,
    config_get_all,
    config_set,
    gc,
    has_uncommitted_changes,
    reset,
    rev_parse_head,
    rm,
    stash,
    stash_pop,
    status,
)
from .history import diff, diff_cached, log, log_grep, log_revision_range, show
from .locator import (
    clone_repository,
    create_repository,
    filter_ignored,
    find_repositories,
    is_repo,
    open_repository,
    resolve_repository,
)
from .remote import clone_to, fetch, pull, push, remote_prune
from .repo import GitRepo
from .runner import CommandOutcome, CommandRunner
from .tags import add_tag, list_tags

__all__ = (
    "AlreadyExistsError",
    "CommandError",
    "CommandOutcome",
    "CommandRunner",
    "ExecutionFailedError",
    "GitCommand",
    "GitConfig",
    "GitError",
    "GitRepo",
    "GitTimeoutError",
    "InvalidArgumentError",
    "InvalidPathError",
    "NotAGitRepositoryError",
    "ReferenceInvalidError",
    "RepositoryError",
    "RepositoryNotFoundError",
    "SpawnFailureError",
    "active_branch",
    "add",
    "add_tag",
    "checkout",
    "clean",
    "clone_repository",
    "clone_to",
    "commit",
    "config_get",
    "config_get_all",
    "config_set",
    "create_branch",
    "create_repository",
    "delete_branch",
    "delete_remote_branches",
    "diff",
    "diff_cached",
    "escape_arg",
    "fetch",
    "filter_ignored",
    "find_repositories",
    "gc",
    "get_description",
    "get_git_bin",
    "get_remote_branches_by_pattern",
    "get_remote_branches_count",
    "has_uncommitted_changes",
    "is_git_available",
    "is_repo",
    "join_args",
    "list_branches",
    "list_remote_branches",
    "list_tags",
    "log",
    "log_grep",
    "log_revision_range",
    "merge",
    "merge_abort",
    "open_repository",
    "pull",
    "push",
    "remote_prune",
    "reset",
    "resolve_repository",
    "rev_parse_head",
    "rm",
    "set_description",
    "set_git_bin",
    "show",
    "split_args",
    "stash",
    "stash_pop",
    "status",
    "windows_mode",
)
