"""Unit tests for repository discovery.

Tests cover:
- Parsing ``git remote -v`` output
- Filtering unsupported and malformed remotes
- De-duplication in first-seen order
- Repository URL selection (none, one, several)
- Branch resolution and its fallback
"""

from unittest.mock import patch

import pytest

from shipyard.exceptions import GitOperationError, ShipyardError
from shipyard.git.discovery import GitDiscovery, parse_remote_listing, parse_remotes, resolve_branch
from shipyard.git.exceptions import NoRepositoryFoundError
from shipyard.git.runner import GitCommandRunner
from tests.fakes import FakePrompter, FakeRunner

REMOTES = "\n".join(
    [
        "badgoose\tgit@github.com:badgoose/grit.git (fetch)",
        "badgoose\tgit@github.com:badgoose/grit.git (push)",
        "origin\thttps://github.com/koke/grit.git (fetch)",
        "mirror\thttps://github.com/koke/grit (fetch)",
        "verybad\tverybad@gitlab.com/whatever (fetch)",
        "http\thttp://github.com/koke/grit.git (fetch)",
        "cc\thttps://git-codecommit.us-west-2.amazonaws.com/v1/repos/repo-man (fetch)",
        "grc\tcodecommit::us-east-1://aws-sample (fetch)",
        "ccssh\tssh://git-codecommit.us-west-2.amazonaws.com/v1/repos/aws-sample (fetch)",
        "bb\thttps://huanjani@bitbucket.org/huanjani/aws-copilot-sample-service (fetch)",
        "",
    ]
)


class TestParseRemoteListing:
    """Tests for turning ``git remote -v`` output into candidate URLs."""

    def test_filters_and_deduplicates(self):
        """Test supported URLs are kept once, in first-seen order."""
        assert parse_remote_listing(REMOTES) == [
            "git@github.com:badgoose/grit",
            "https://github.com/koke/grit",
            "https://git-codecommit.us-west-2.amazonaws.com/v1/repos/repo-man",
            "codecommit::us-east-1://aws-sample",
            "ssh://git-codecommit.us-west-2.amazonaws.com/v1/repos/aws-sample",
            "https://huanjani@bitbucket.org/huanjani/aws-copilot-sample-service",
        ]

    def test_single_github_among_unsupported(self):
        """Test one GitHub remote and one unsupported remote."""
        output = "origin\tgit@github.com:koke/grit.git (fetch)\nverybad\tverybad@gitlab.com/whatever (fetch)\n"

        assert parse_remote_listing(output) == ["git@github.com:koke/grit"]

    def test_empty_output(self):
        assert parse_remote_listing("") == []

    def test_short_lines_are_skipped(self):
        remotes = parse_remotes("origin\n\norigin\tgit@github.com:koke/grit.git (push)")

        assert len(remotes) == 1
        assert remotes[0].name == "origin"
        assert remotes[0].url == "git@github.com:koke/grit.git"


class TestGitDiscoveryCandidates:
    """Tests for running git to list candidates."""

    def test_candidate_urls_runs_git_remote(self):
        runner = FakeRunner(outputs={"remote": REMOTES})

        urls = GitDiscovery(runner).candidate_urls()

        assert runner.calls == [("git", ["remote", "-v"])]
        assert len(urls) == 6

    def test_runner_failure_is_wrapped(self):
        runner = FakeRunner(errors={"remote": GitOperationError("command git not found")})

        with pytest.raises(GitOperationError) as exc_info:
            GitDiscovery(runner).candidate_urls()

        assert exc_info.value.message == (
            "get remote repository info: command git not found, run `git remote add` first please"
        )

    def test_os_error_is_wrapped(self):
        """Test a launch failure surfaces as a remote listing error."""
        runner = FakeRunner(errors={"remote": PermissionError(13, "Permission denied", "git")})

        with pytest.raises(GitOperationError) as exc_info:
            GitDiscovery(runner).candidate_urls()

        assert exc_info.value.message == (
            "get remote repository info: [Errno 13] Permission denied: 'git', run `git remote add` first please"
        )


class TestSelectRepositoryURL:
    """Tests for picking the repository URL."""

    def test_no_candidates(self):
        runner = FakeRunner(outputs={"remote": "verybad\tverybad@gitlab.com/whatever (fetch)\n"})

        with pytest.raises(NoRepositoryFoundError) as exc_info:
            GitDiscovery(runner).select_repository_url(FakePrompter())

        assert "Hint:" in str(exc_info.value)

    def test_single_candidate_is_auto_selected(self):
        """Test one candidate is used without prompting."""
        runner = FakeRunner(outputs={"remote": "origin\tgit@github.com:koke/grit.git (fetch)\n"})
        prompter = FakePrompter()

        url = GitDiscovery(runner).select_repository_url(prompter)

        assert url == "git@github.com:koke/grit"
        assert prompter.select_one_calls == []

    def test_several_candidates_prompt(self):
        runner = FakeRunner(outputs={"remote": REMOTES})
        prompter = FakePrompter(one="codecommit::us-east-1://aws-sample")

        url = GitDiscovery(runner).select_repository_url(prompter)

        assert url == "codecommit::us-east-1://aws-sample"
        assert prompter.select_one_calls == [parse_remote_listing(REMOTES)]

    def test_prompt_failure_is_wrapped(self):
        runner = FakeRunner(outputs={"remote": REMOTES})

        class FailingPrompter(FakePrompter):
            def select_one(self, message, help_text, options):
                raise ShipyardError("no terminal")

        with pytest.raises(GitOperationError) as exc_info:
            GitDiscovery(runner).select_repository_url(FailingPrompter())

        assert exc_info.value.message == "select URL: no terminal"


class TestResolveBranch:
    """Tests for branch resolution."""

    def test_explicit_branch_wins(self):
        runner = FakeRunner(outputs={"rev-parse": "develop\n"})

        assert resolve_branch("release", runner) == "release"
        assert runner.calls == []

    def test_detected_branch(self):
        runner = FakeRunner(outputs={"rev-parse": "  feature/pipelines  \nextra\n"})

        assert resolve_branch("", runner) == "feature/pipelines"
        assert runner.calls == [("git", ["rev-parse", "--abbrev-ref", "HEAD"])]

    def test_command_failure_falls_back_to_main(self, git_error):
        runner = FakeRunner(errors={"rev-parse": git_error})

        assert resolve_branch("", runner) == "main"

    def test_empty_output_falls_back_to_main(self):
        runner = FakeRunner(outputs={"rev-parse": "\n"})

        assert GitDiscovery(runner).resolve_branch() == "main"

    @pytest.mark.parametrize(
        "error",
        [
            PermissionError(13, "Permission denied", "git"),
            FileNotFoundError(2, "No such file or directory", "git"),
            RuntimeError("unexpected"),
        ],
    )
    def test_any_detection_failure_falls_back_to_main(self, error):
        """Test failures that are not GitOperationError still yield main."""
        runner = FakeRunner(errors={"rev-parse": error})

        assert resolve_branch("", runner) == "main"

    @patch("shipyard.git.runner.git.Git")
    def test_unrunnable_git_falls_back_to_main(self, mock_git_class, tmp_path):
        """Test a git executable that cannot be launched yields main."""
        mock_git_class.return_value.execute.side_effect = PermissionError(13, "Permission denied", "git")

        assert GitDiscovery(GitCommandRunner(tmp_path)).resolve_branch("") == "main"
