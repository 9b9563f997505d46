"""Git repository discovery and repository URL classification.

The classifier recognises GitHub, CodeCommit and Bitbucket repository URLs
in each provider's accepted formats. Discovery scans the remotes of the
local checkout for such URLs and detects the current branch.

Example:
    >>> from shipyard.git import parse_repo_url
    >>> repo = parse_repo_url("git@github.com:koke/grit.git")
    >>> repo.provider, repo.details.full_name
    (<ProviderKind.GITHUB: 'GitHub'>, 'koke/grit')

Error Handling:
    All exceptions inherit from GitDiscoveryError and carry the offending
    URL when there is one.

    >>> from shipyard.git import UnsupportedProviderError
    >>> try:
    ...     parse_repo_url("https://gitlab.company.com/group/project.git")
    ... except UnsupportedProviderError as e:
    ...     print(e)
    repository https://gitlab.company.com/group/project.git must be from a supported provider: GitHub, CodeCommit or Bitbucket
"""

from shipyard.git.discovery import GitDiscovery, parse_remote_listing, resolve_branch
from shipyard.git.exceptions import (
    BitbucketURLError,
    CodeCommitRegionError,
    CodeCommitURLError,
    GitDiscoveryError,
    GitHubURLError,
    MalformedRepoURLError,
    NoRepositoryFoundError,
    RepositoryURLError,
    UnsupportedProviderError,
)
from shipyard.git.models import (
    BitbucketRepoDetails,
    CodeCommitRepoDetails,
    GitHubRepoDetails,
    GitRemote,
    ParsedRepository,
)
from shipyard.git.parser import classify, parse_repo_url, try_parse_repo_url
from shipyard.git.runner import CommandRunner, GitCommandRunner

__all__ = [
    # Main API
    "GitDiscovery",
    "parse_remote_listing",
    "resolve_branch",
    # Parser
    "classify",
    "parse_repo_url",
    "try_parse_repo_url",
    # Command execution
    "CommandRunner",
    "GitCommandRunner",
    # Models
    "BitbucketRepoDetails",
    "CodeCommitRepoDetails",
    "GitHubRepoDetails",
    "GitRemote",
    "ParsedRepository",
    # Exceptions
    "BitbucketURLError",
    "CodeCommitRegionError",
    "CodeCommitURLError",
    "GitDiscoveryError",
    "GitHubURLError",
    "MalformedRepoURLError",
    "NoRepositoryFoundError",
    "RepositoryURLError",
    "UnsupportedProviderError",
]
