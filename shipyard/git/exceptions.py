"""Repository discovery and classification exceptions.

All exceptions inherit from GitDiscoveryError. Classification errors keep the
offending URL on the exception so the CLI can echo it back to the user.

Example:
    >>> from shipyard.git.exceptions import UnsupportedProviderError
    >>> raise UnsupportedProviderError("https://gitlab.com/group/project")
    Traceback (most recent call last):
        ...
    UnsupportedProviderError: repository https://gitlab.com/group/project must be from a supported provider: GitHub, CodeCommit or Bitbucket
"""

from shipyard.enums import ProviderKind
from shipyard.exceptions import GitOperationError

SUPPORTED_PROVIDERS = "GitHub, CodeCommit or Bitbucket"


class GitDiscoveryError(GitOperationError):
    """Base exception for repository discovery errors.

    Attributes:
        message: Error message
        hint: Optional hint for resolution
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        """Initialize exception.

        Args:
            message: Error message
            hint: Optional hint for resolution
        """
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message}\n\nHint: {self.hint}"
        return self.message


class NoRepositoryFoundError(GitDiscoveryError):
    """Raised when no local remote points at a supported provider."""

    def __init__(self) -> None:
        super().__init__(
            message=f"no {SUPPORTED_PROVIDERS} repository URL found in the remotes of this repository",
            hint="Pass the repository with --url or add a remote with: git remote add origin <url>",
        )


class RepositoryURLError(GitDiscoveryError):
    """Base exception for repository URLs that cannot be classified.

    Attributes:
        url: The rejected URL
    """

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class UnsupportedProviderError(RepositoryURLError):
    """Raised when a URL does not name GitHub, CodeCommit or Bitbucket."""

    def __init__(self, url: str) -> None:
        super().__init__(url, f"repository {url} must be from a supported provider: {SUPPORTED_PROVIDERS}")


class MalformedRepoURLError(RepositoryURLError):
    """Raised when a URL names a provider but not in any of its formats.

    Attributes:
        url: The rejected URL
        provider: The provider the URL was classified as
    """

    def __init__(self, url: str, provider: ProviderKind, message: str) -> None:
        super().__init__(url, message)
        self.provider = provider


class GitHubURLError(MalformedRepoURLError):
    def __init__(self, url: str) -> None:
        super().__init__(
            url,
            ProviderKind.GITHUB,
            f"unable to parse the GitHub repository owner and name from {url}: "
            "please pass the repository URL with the format `--url https://github.com/{owner}/{repositoryName}`",
        )


class CodeCommitURLError(MalformedRepoURLError):
    def __init__(self, url: str) -> None:
        super().__init__(url, ProviderKind.CODECOMMIT, f"unknown CodeCommit URL format: {url}")


class CodeCommitRegionError(MalformedRepoURLError):
    """Raised when a CodeCommit URL carries something that is not an AWS region."""

    def __init__(self, url: str) -> None:
        super().__init__(url, ProviderKind.CODECOMMIT, f"unable to parse the AWS region from {url}")


class BitbucketURLError(MalformedRepoURLError):
    def __init__(self, url: str) -> None:
        super().__init__(url, ProviderKind.BITBUCKET, f"unable to parse the Bitbucket repository name from {url}")
