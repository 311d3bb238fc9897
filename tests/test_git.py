"""Tests for git module."""

import pytest

from conftest import git
from git_repo_utils import (
    CommandRunner,
    ExecutionFailedError,
    GitCommand,
    GitRepo,
    InvalidArgumentError,
    add,
    clean,
    commit,
    config_get,
    config_get_all,
    config_set,
    escape_arg,
    gc,
    has_uncommitted_changes,
    log,
    reset,
    rev_parse_head,
    rm,
    stash,
    stash_pop,
    status,
)

TRICKY_MESSAGE = "Fix \"quotes\" and 'apostrophes'; $HOME `whoami` && echo pwned | cat"


class TestConfig:
    """Tests for config_get, config_get_all and config_set functions."""

    def test_get_existing(self, git_repo):
        assert config_get(git_repo, "user.email") == "test@example.com"

    def test_get_missing_returns_default(self, git_repo):
        assert config_get(git_repo, "workflow.nothing", default="fallback") == "fallback"

    def test_get_missing_returns_none(self, git_repo):
        assert config_get(git_repo, "workflow.nothing") is None

    def test_set_then_get(self, git_repo):
        config_set(git_repo, "workflow.ticket.prefix", "SE-")
        assert config_get(git_repo, "workflow.ticket.prefix") == "SE-"

    def test_get_all(self, git_repo):
        git("config", "--add", "workflow.link", ".envrc.local", cwd=git_repo.path)
        git("config", "--add", "workflow.link", ".ipython", cwd=git_repo.path)
        assert config_get_all(git_repo, "workflow.link") == {".envrc.local", ".ipython"}

    def test_get_all_missing(self, git_repo):
        assert config_get_all(git_repo, "workflow.link") == set()


class TestStatus:
    """Tests for status function."""

    def test_clean(self, git_repo):
        assert "On branch main" in status(git_repo)

    def test_porcelain(self, git_repo):
        (git_repo.path / "new.txt").write_text("new")
        assert status(git_repo, porcelain=True) == "?? new.txt\n"


class TestHasUncommittedChanges:
    """Tests for has_uncommitted_changes function."""

    def test_clean_repo_returns_false(self, git_repo):
        assert has_uncommitted_changes(git_repo) is False

    def test_modified_file_returns_true(self, git_repo):
        (git_repo.path / "README.md").write_text("# Modified\n")
        assert has_uncommitted_changes(git_repo) is True

    def test_new_file_returns_true(self, git_repo):
        (git_repo.path / "new.txt").write_text("new content")
        assert has_uncommitted_changes(git_repo) is True


class TestAdd:
    """Tests for add function."""

    def test_add_single_file(self, git_repo):
        (git_repo.path / "a.txt").write_text("a")
        output = add(git_repo, "a.txt")
        assert "add 'a.txt'" in output

    def test_add_list(self, git_repo):
        (git_repo.path / "a.txt").write_text("a")
        (git_repo.path / "b.txt").write_text("b")
        add(git_repo, ["a.txt", "b.txt"])
        assert status(git_repo, porcelain=True).splitlines() == ["A  a.txt", "A  b.txt"]

    def test_add_everything_by_default(self, git_repo):
        (git_repo.path / "a.txt").write_text("a")
        (git_repo.path / "sub").mkdir()
        (git_repo.path / "sub" / "b.txt").write_text("b")
        add(git_repo)
        assert status(git_repo, porcelain=True).splitlines() == ["A  a.txt", "A  sub/b.txt"]

    def test_filename_with_metacharacters(self, git_repo):
        name = "we;ird $name `x`.txt"
        (git_repo.path / name).write_text("x")
        add(git_repo, name)
        assert f"A  {name}" in status(git_repo, porcelain=True).splitlines()

    def test_filename_starting_with_dash(self, git_repo):
        (git_repo.path / "-f").write_text("x")
        add(git_repo, "-f")
        assert "A  -f" in status(git_repo, porcelain=True)


class TestRm:
    """Tests for rm function."""

    def test_rm_cached_keeps_file(self, git_repo):
        rm(git_repo, "README.md", cached=True)
        assert (git_repo.path / "README.md").exists()
        assert "D  README.md" in status(git_repo, porcelain=True)

    def test_rm_deletes_file(self, git_repo):
        rm(git_repo, "README.md")
        assert not (git_repo.path / "README.md").exists()


class TestCommit:
    """Tests for commit function."""

    def test_commit_all(self, git_repo):
        (git_repo.path / "README.md").write_text("# Changed\n")
        commit(git_repo, "Update readme")
        assert log(git_repo, format="%s", limit=1) == "Update readme"
        assert has_uncommitted_changes(git_repo) is False

    def test_commit_staged_only(self, git_repo):
        (git_repo.path / "README.md").write_text("# Changed\n")
        (git_repo.path / "new.txt").write_text("new")
        add(git_repo, "new.txt")
        commit(git_repo, "Add new file", commit_all=False)
        assert status(git_repo, porcelain=True) == " M README.md\n"

    def test_author(self, git_repo):
        (git_repo.path / "README.md").write_text("# Changed\n")
        commit(git_repo, "Authored", author="Jane Roe <jane@example.com>")
        assert log(git_repo, format="%an <%ae>", limit=1) == "Jane Roe <jane@example.com>"

    def test_message_with_shell_metacharacters_is_verbatim(self, git_repo):
        (git_repo.path / "README.md").write_text("# Changed\n")
        commit(git_repo, TRICKY_MESSAGE)
        assert log(git_repo, format="%B", limit=1).strip() == TRICKY_MESSAGE

    def test_escaped_argument_string_is_verbatim(self, git_repo):
        (git_repo.path / "README.md").write_text("# Changed\n")
        git_repo.execute(
            git_repo.config.executable,
            "commit -a -m " + escape_arg(TRICKY_MESSAGE),
        )
        assert log(git_repo, format="%B", limit=1).strip() == TRICKY_MESSAGE

    def test_nothing_to_commit_raises(self, git_repo):
        with pytest.raises(ExecutionFailedError) as excinfo:
            commit(git_repo, "Nothing")
        assert "nothing to commit" in excinfo.value.output


class TestClean:
    """Tests for clean function."""

    def test_force_removes_untracked(self, git_repo):
        (git_repo.path / "junk.txt").write_text("junk")
        clean(git_repo, force=True)
        assert not (git_repo.path / "junk.txt").exists()

    def test_dirs(self, git_repo):
        (git_repo.path / "junkdir").mkdir()
        (git_repo.path / "junkdir" / "f").write_text("x")
        clean(git_repo, dirs=True, force=True)
        assert not (git_repo.path / "junkdir").exists()


class TestReset:
    """Tests for reset function."""

    def test_hard_reset(self, git_repo):
        first = rev_parse_head(git_repo)
        (git_repo.path / "README.md").write_text("# Changed\n")
        commit(git_repo, "Second")
        reset(git_repo, "--hard", first)
        assert rev_parse_head(git_repo) == first
        assert (git_repo.path / "README.md").read_text() == "# Test Repo\n"


class TestStash:
    """Tests for stash and stash_pop functions."""

    def test_stash_and_pop(self, git_repo):
        (git_repo.path / "README.md").write_text("# Work in progress\n")
        stash(git_repo)
        assert has_uncommitted_changes(git_repo) is False
        stash_pop(git_repo)
        assert (git_repo.path / "README.md").read_text() == "# Work in progress\n"


class TestRevParseHead:
    """Tests for rev_parse_head function."""

    def test_full_sha(self, git_repo):
        sha = rev_parse_head(git_repo)
        assert len(sha) == 40
        assert sha == git("rev-parse", "HEAD", cwd=git_repo.path).stdout.strip()


class TestGc:
    """Tests for gc function."""

    def test_success(self, git_repo):
        assert gc(git_repo) is True

    def test_failure_returns_false(self, git_repo):
        assert gc(git_repo, "--no-such-option") is False

    def test_uses_command_builder(self, git_repo):
        assert git_repo.run(GitCommand("gc", "--quiet")).succeeded


class RecordingRunner(CommandRunner):
    """Runner that remembers the argv of every command it executes."""

    def __init__(self, config=None):
        super().__init__(config)
        self.calls = []

    def execute(self, repo, executable, command, **kwargs):
        outcome = super().execute(repo, executable, command, **kwargs)
        self.calls.append(outcome.args[1:])
        return outcome


class TestCommandLines:
    """Tests for the exact argument lists sent to git."""

    def test_commit(self, git_repo_path):
        runner = RecordingRunner()
        repo = GitRepo(git_repo_path, runner=runner)
        (git_repo_path / "README.md").write_text("# Changed\n")
        commit(repo, "Message", author="Jane Roe <jane@example.com>")
        assert runner.calls == [
            ("commit", "-a", "--author=Jane Roe <jane@example.com>", "-m", "Message"),
        ]

    def test_config_set_value_may_start_with_dash(self, git_repo):
        config_set(git_repo, "workflow.flags", "--no-verify")
        assert config_get(git_repo, "workflow.flags") == "--no-verify"

    def test_config_key_cannot_be_option(self, git_repo):
        with pytest.raises(InvalidArgumentError):
            config_get(git_repo, "--file=/etc/passwd")
        with pytest.raises(InvalidArgumentError):
            config_set(git_repo, "--global", "x")
