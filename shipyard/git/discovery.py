"""Repository discovery from the local Git checkout.

This module finds candidate pipeline source repositories among the remotes
of the current checkout and detects the branch the pipeline should track.

The discovery system can:
    - List remotes from ``git remote -v`` output
    - Keep only remotes that point at GitHub, CodeCommit or Bitbucket
    - Pick a repository URL, prompting only when there is a real choice
    - Detect the current branch, falling back to "main"

Key Exports:
    GitDiscovery: Runs git through a CommandRunner and interprets the output.
    parse_remote_listing: Pure parser for ``git remote -v`` output.
    resolve_branch: Branch resolution with the "main" fallback.

Example:
    >>> from shipyard.git.discovery import GitDiscovery
    >>> discovery = GitDiscovery()
    >>> discovery.candidate_urls()
    ['git@github.com:badgoose/grit', 'https://github.com/badgoose/cli']
    >>> discovery.resolve_branch("")
    'main'

See Also:
    - shipyard.git.parser: Repository URL classification
    - shipyard.git.runner: Command execution
"""

import io
from typing import TYPE_CHECKING

import structlog

from shipyard.exceptions import GitOperationError, ShipyardError
from shipyard.git.exceptions import NoRepositoryFoundError
from shipyard.git.models import GitRemote
from shipyard.git.parser import try_parse_repo_url
from shipyard.git.runner import CommandRunner, GitCommandRunner

if TYPE_CHECKING:
    from shipyard.prompt import Prompter

log = structlog.get_logger(__name__)

DEFAULT_BRANCH = "main"

SELECT_URL_PROMPT = "Which repository would you like to use for your pipeline?"
SELECT_URL_HELP = "The repository linked to your pipeline. Pushing to the selected branch will trigger a release."


def parse_remotes(output: str) -> list[GitRemote]:
    """Parse ``git remote -v`` output into remote entries.

    Lines with fewer than two whitespace-separated fields are skipped.

    Args:
        output: Raw command output, one ``alias url (direction)`` per line

    Returns:
        Remotes in listing order, one per line.
    """
    remotes = []
    for line in output.splitlines():
        fields = line.split()
        if len(fields) < 2:
            continue
        remotes.append(GitRemote(name=fields[0], url=fields[1]))
    return remotes


def parse_remote_listing(output: str) -> list[str]:
    """Extract candidate repository URLs from ``git remote -v`` output.

    Each URL has its ``.git`` suffix removed and is kept only if it parses as
    a GitHub, CodeCommit or Bitbucket repository. Duplicates (the fetch and
    push lines of the same remote, or two aliases of one URL) are dropped,
    keeping the first occurrence.

    Args:
        output: Raw command output

    Returns:
        Unique supported URLs in first-seen order.

    Example:
        >>> parse_remote_listing(
        ...     "origin\\tgit@github.com:koke/grit.git (fetch)\\n"
        ...     "origin\\tgit@github.com:koke/grit.git (push)\\n"
        ...     "mirror\\tverybad@gitlab.com/whatever (fetch)\\n"
        ... )
        ['git@github.com:koke/grit']
    """
    candidates: dict[str, None] = {}
    for remote in parse_remotes(output):
        url = remote.url.removesuffix(".git")
        if try_parse_repo_url(url) is None:
            log.debug("remote_skipped", remote=remote.name, url=url)
            continue
        candidates.setdefault(url, None)
    return list(candidates)


class GitDiscovery:
    """Discovers pipeline source information from the local checkout.

    Attributes:
        runner: CommandRunner used to invoke git.
    """

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner or GitCommandRunner()

    def _remote_listing(self) -> str:
        buffer = io.StringIO()
        try:
            self.runner.run("git", ["remote", "-v"], stdout=buffer)
        except (ShipyardError, OSError) as e:
            cause = e.message if isinstance(e, ShipyardError) else str(e)
            raise GitOperationError(
                f"get remote repository info: {cause}, run `git remote add` first please"
            ) from e
        return buffer.getvalue()

    def candidate_urls(self) -> list[str]:
        """Return the supported repository URLs among the local remotes.

        Raises:
            GitOperationError: If git cannot list the remotes.
        """
        return parse_remote_listing(self._remote_listing())

    def select_repository_url(self, prompter: "Prompter") -> str:
        """Pick the repository URL for a pipeline.

        Selection logic:
            1. No supported remote: raise NoRepositoryFoundError
            2. Exactly one: use it without prompting
            3. Several: ask the user to choose

        Args:
            prompter: Prompter used when there is more than one candidate.

        Returns:
            The selected URL.

        Raises:
            NoRepositoryFoundError: If no remote points at a supported provider.
            GitOperationError: If listing remotes or prompting fails.
        """
        urls = self.candidate_urls()
        if not urls:
            raise NoRepositoryFoundError()
        if len(urls) == 1:
            log.info("repository_url_auto_selected", url=urls[0])
            return urls[0]

        try:
            return prompter.select_one(SELECT_URL_PROMPT, SELECT_URL_HELP, urls)
        except ShipyardError as e:
            raise GitOperationError(f"select URL: {e.message}") from e

    def _detect_branch(self) -> str | None:
        buffer = io.StringIO()
        try:
            self.runner.run("git", ["rev-parse", "--abbrev-ref", "HEAD"], stdout=buffer)
        except Exception as e:
            log.debug("branch_detection_failed", error=str(e))
            return None

        lines = buffer.getvalue().strip().splitlines()
        if not lines or not lines[0].strip():
            return None
        return lines[0].strip()

    def resolve_branch(self, explicit: str = "") -> str:
        """Return the branch the pipeline should track.

        An explicit branch wins. Otherwise the current local branch is used,
        and when it cannot be detected for any reason the result is "main".
        Detection failures are never raised.
        """
        if explicit:
            return explicit
        branch = self._detect_branch()
        if branch is None:
            log.info("branch_defaulted", branch=DEFAULT_BRANCH)
            return DEFAULT_BRANCH
        return branch


def resolve_branch(explicit: str = "", runner: CommandRunner | None = None) -> str:
    """Convenience wrapper around GitDiscovery.resolve_branch."""
    return GitDiscovery(runner).resolve_branch(explicit)
