"""Shared pytest fixtures for git-repo-utils tests."""

import subprocess

import pytest

from git_repo_utils import GitRepo, open_repository


@pytest.fixture(autouse=True)
def git_identity(monkeypatch, tmp_path_factory):
    """
    Give every git invocation a fixed identity and default branch.

    Global and system config are ignored so results do not depend on
    the machine running the tests.
    """
    global_config = tmp_path_factory.mktemp("gitconfig") / "config"
    global_config.write_text("")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_COUNT", "1")
    monkeypatch.setenv("GIT_CONFIG_KEY_0", "init.defaultBranch")
    monkeypatch.setenv("GIT_CONFIG_VALUE_0", "main")
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")


def git(*args, cwd):
    """Run git directly, bypassing the library under test."""
    return subprocess.run(
        ["git", *args],
        cwd=cwd,
        check=True,
        capture_output=True,
        text=True,
    )


@pytest.fixture
def git_repo_path(tmp_path):
    """
    Create a temporary git repository with one commit.

    Returns:
        Path: Path to the temporary git repository
    """
    repo = tmp_path / "test-repo"
    repo.mkdir()

    git("init", cwd=repo)
    git("config", "user.email", "test@example.com", cwd=repo)
    git("config", "user.name", "Test User", cwd=repo)

    (repo / "README.md").write_text("# Test Repo\n")
    git("add", "README.md", cwd=repo)
    git("commit", "-m", "Initial commit", cwd=repo)

    return repo


@pytest.fixture
def git_repo(git_repo_path) -> GitRepo:
    """Handle for the temporary repository."""
    return open_repository(git_repo_path)


@pytest.fixture
def bare_repo_path(tmp_path):
    """Create an empty bare repository."""
    bare = tmp_path / "bare.git"
    bare.mkdir()
    git("init", "--bare", cwd=bare)
    return bare


@pytest.fixture
def git_repo_with_remote(git_repo, bare_repo_path):
    """
    Create a git repository with a bare repository as `origin`.

    Returns:
        tuple: (repo handle, remote_repo_path)
    """
    git("remote", "add", "origin", str(bare_repo_path), cwd=git_repo.path)
    git("push", "-u", "origin", "main", cwd=git_repo.path)

    return git_repo, bare_repo_path
