"""Unit tests for the git command runner."""

import io
from unittest.mock import patch

import pytest
from git.exc import GitCommandError, GitCommandNotFound

from shipyard.exceptions import GitOperationError
from shipyard.git.runner import GitCommandRunner


class TestGitCommandRunner:
    @patch("shipyard.git.runner.git.Git")
    def test_captures_output(self, mock_git_class, tmp_path):
        mock_git_class.return_value.execute.return_value = "main"
        buffer = io.StringIO()

        GitCommandRunner(tmp_path).run("git", ["rev-parse", "--abbrev-ref", "HEAD"], stdout=buffer)

        mock_git_class.assert_called_once_with(str(tmp_path.resolve()))
        mock_git_class.return_value.execute.assert_called_once_with(["git", "rev-parse", "--abbrev-ref", "HEAD"])
        assert buffer.getvalue() == "main"

    @patch("shipyard.git.runner.git.Git")
    def test_non_zero_exit(self, mock_git_class, tmp_path):
        mock_git_class.return_value.execute.side_effect = GitCommandError(
            ["git", "remote", "-v"], 128, stderr="fatal: not a git repository"
        )

        with pytest.raises(GitOperationError) as exc_info:
            GitCommandRunner(tmp_path).run("git", ["remote", "-v"])

        assert exc_info.value.message.startswith("run git remote -v: exit status 128:")
        assert "not a git repository" in exc_info.value.message

    @patch("shipyard.git.runner.git.Git")
    def test_missing_executable(self, mock_git_class, tmp_path):
        mock_git_class.return_value.execute.side_effect = GitCommandNotFound("git", "No such file or directory")

        with pytest.raises(GitOperationError) as exc_info:
            GitCommandRunner(tmp_path).run("git", ["remote", "-v"])

        assert exc_info.value.message == "command git not found"

    @patch("shipyard.git.runner.git.Git")
    def test_executable_not_runnable(self, mock_git_class, tmp_path):
        """Test OS-level launch failures become GitOperationError."""
        mock_git_class.return_value.execute.side_effect = PermissionError(13, "Permission denied", "git")

        with pytest.raises(GitOperationError) as exc_info:
            GitCommandRunner(tmp_path).run("git", ["rev-parse", "--abbrev-ref", "HEAD"])

        assert exc_info.value.message.startswith("run git rev-parse --abbrev-ref HEAD: ")
        assert "Permission denied" in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, PermissionError)
