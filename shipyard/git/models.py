"""Repository data models.

Provider-specific details parsed from a repository URL, plus the remote
entries read from ``git remote -v``.

Example:
    >>> from shipyard.git.models import GitHubRepoDetails
    >>> details = GitHubRepoDetails(name="grit.git", owner="koke")
    >>> details.name
    'grit'
"""

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, field_validator

from shipyard.enums import ProviderKind


@dataclass(frozen=True)
class GitRemote:
    """One line of ``git remote -v`` output.

    Attributes:
        name: Remote alias (e.g., 'origin')
        url: Raw URL from git config
    """

    name: str
    url: str


class RepoDetails(BaseModel):
    """Identity shared by every provider: the repository name.

    The name never contains a path separator and never ends with ``.git``.
    """

    model_config = ConfigDict(frozen=True)

    name: str

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Strip the .git suffix and reject empty or nested names.

        Args:
            v: The repository name

        Returns:
            Name without .git suffix

        Raises:
            ValueError: If the name is empty or contains '/'
        """
        v = v.strip().removesuffix(".git")
        if not v:
            raise ValueError("Repository name must not be empty")
        if "/" in v:
            raise ValueError(f"Repository name must not contain '/': {v}")
        return v


class GitHubRepoDetails(RepoDetails):
    """GitHub repository identity."""

    owner: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class CodeCommitRepoDetails(RepoDetails):
    """CodeCommit repository identity; CodeCommit repositories are regional."""

    region: str


class BitbucketRepoDetails(RepoDetails):
    """Bitbucket repository identity."""

    owner: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class ParsedRepository:
    """A classified repository URL together with its parsed details.

    Attributes:
        url: The URL exactly as supplied or discovered
        provider: Hosting provider
        details: Provider-specific identity
    """

    url: str
    provider: ProviderKind
    details: GitHubRepoDetails | CodeCommitRepoDetails | BitbucketRepoDetails

    @property
    def name(self) -> str:
        return self.details.name

    @property
    def repository_url(self) -> str:
        """Canonical HTTPS URL of the repository, as written to the pipeline manifest."""
        details = self.details
        if isinstance(details, GitHubRepoDetails):
            return f"https://github.com/{details.owner}/{details.name}"
        if isinstance(details, CodeCommitRepoDetails):
            return f"https://git-codecommit.{details.region}.amazonaws.com/v1/repos/{details.name}"
        return f"https://bitbucket.org/{details.owner}/{details.name}"
