"""Tests for git/repository.py."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

from modrel.core.result import Err, Ok
from modrel.git.repository import GitError, Repository
from modrel.platform.process import ProcessError


def _fail(args: list[str], returncode: int = 128, stdout: str = "", stderr: str = "fatal") -> Err:
    return Err(ProcessError(tuple(args), returncode, stdout, stderr))


def _git_args(mock_run: MagicMock, call: int = -1) -> list[str]:
    """Arguments after `git -C <path>` for one recorded call."""
    return mock_run.call_args_list[call].args[0][3:]


class TestCurrentBranch:
    def test_branch(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("main\n")):
            assert Repository(tmp_path).current_branch() == "main"

    def test_detached_head(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("HEAD\n")):
            assert Repository(tmp_path).current_branch() is None

    def test_error(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=_fail(["git"])):
            assert Repository(tmp_path).current_branch() is None


class TestTags:
    def test_runs_git_in_repo(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("")) as mock_run:
            Repository(tmp_path).tag_exists("v1.0.0")

        cmd = mock_run.call_args.args[0]
        assert cmd[:3] == ["git", "-C", str(tmp_path)]
        assert mock_run.call_args.kwargs["cwd"] == tmp_path

    def test_tag_exists(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("sdk/v1.0.0\n")):
            assert Repository(tmp_path).tag_exists("sdk/v1.0.0") == Ok(True)

    def test_tag_missing(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("")):
            assert Repository(tmp_path).tag_exists("sdk/v1.0.0") == Ok(False)

    def test_create_signed_tag(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("")) as mock_run:
            result = Repository(tmp_path).create_tag("v1.0.0", "abc", "Version v1.0.0")

        assert result == Ok(None)
        assert _git_args(mock_run) == ["tag", "-a", "v1.0.0", "-s", "-m", "Version v1.0.0", "abc"]

    def test_create_unsigned_tag(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("")) as mock_run:
            Repository(tmp_path).create_tag("v1.0.0", "abc", "Version v1.0.0", sign=False)

        assert "-s" not in _git_args(mock_run)

    def test_create_tag_failure(self, tmp_path: Path) -> None:
        failure = _fail(["git"], stderr="fatal: tag 'v1.0.0' already exists")
        with patch("modrel.git.repository.run_process", return_value=failure):
            result = Repository(tmp_path).create_tag("v1.0.0", "abc", "m")

        assert result == Err(
            GitError(
                command="tag v1.0.0",
                message="fatal: tag 'v1.0.0' already exists",
                returncode=128,
            )
        )

    def test_delete_tag(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("")) as mock_run:
            assert Repository(tmp_path).delete_tag("v1.0.0") == Ok(None)

        assert _git_args(mock_run) == ["tag", "-d", "v1.0.0"]


class TestWorkingTree:
    def test_clean(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("")):
            repo = Repository(tmp_path)
            assert repo.working_tree_diff() == Ok("")
            assert repo.is_working_tree_clean() is True

    def test_dirty(self, tmp_path: Path) -> None:
        dirty = _fail(["git"], returncode=1, stdout="diff --git a/x b/x\n", stderr="")
        with patch("modrel.git.repository.run_process", return_value=dirty):
            repo = Repository(tmp_path)
            assert repo.working_tree_diff() == Ok("diff --git a/x b/x\n")
            assert repo.is_working_tree_clean() is False

    def test_diff_error(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=_fail(["git"])):
            repo = Repository(tmp_path)
            assert isinstance(repo.working_tree_diff(), Err)
            assert repo.is_working_tree_clean() is False


class TestBranchAndCommit:
    def test_create_branch(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("")) as mock_run:
            assert Repository(tmp_path).create_branch("pre_release_x", "main") == Ok(None)

        assert _git_args(mock_run) == ["checkout", "-b", "pre_release_x", "main"]

    def test_commit_all_stages_then_commits(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=Ok("")) as mock_run:
            assert Repository(tmp_path).commit_all("Prepare for releasing v1.0.0") == Ok(None)

        assert _git_args(mock_run, 0) == ["add", "."]
        assert _git_args(mock_run, 1) == ["commit", "-m", "Prepare for releasing v1.0.0"]

    def test_commit_all_stops_when_add_fails(self, tmp_path: Path) -> None:
        with patch("modrel.git.repository.run_process", return_value=_fail(["git"])) as mock_run:
            result = Repository(tmp_path).commit_all("msg")

        assert isinstance(result, Err)
        assert result.error.command == "add ."
        assert mock_run.call_count == 1
