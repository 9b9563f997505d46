"""Repository URL classification and parsing.

A repository URL is first classified by the provider it names, then parsed
against that provider's accepted formats. Classification never falls through
to another provider once one has claimed the URL.

Supported URL formats:
    GitHub:
        - https://github.com/owner/repo[.git]
        - git@github.com:owner/repo[.git]
        - git://github.com/owner/repo[.git]

    CodeCommit:
        - https://git-codecommit.us-west-2.amazonaws.com/v1/repos/repo
        - ssh://[KEY-ID@]git-codecommit.us-west-2.amazonaws.com/v1/repos/repo
        - codecommit::us-west-2://[profile@]repo

    Bitbucket:
        - https://[user@]bitbucket.org/owner/repo[.git]
        - ssh://git@bitbucket.org:owner/repo[.git]
        - git@bitbucket.org:owner/repo[.git]

Key Exports:
    parse_repo_url: Classify and parse a URL, raising on failure.
    try_parse_repo_url: Same, returning None instead of raising.
    classify: Wrap a URL in its provider's URL type without parsing it.

Example:
    >>> from shipyard.git.parser import parse_repo_url
    >>> repo = parse_repo_url("codecommit::us-west-2://repo-man")
    >>> repo.provider, repo.details.region, repo.name
    (<ProviderKind.CODECOMMIT: 'CodeCommit'>, 'us-west-2', 'repo-man')

Thread Safety:
    Everything here is pure; compiled patterns are shared read-only.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from shipyard.enums import ProviderKind
from shipyard.git.exceptions import (
    BitbucketURLError,
    CodeCommitRegionError,
    CodeCommitURLError,
    GitHubURLError,
    RepositoryURLError,
    UnsupportedProviderError,
)
from shipyard.git.models import (
    BitbucketRepoDetails,
    CodeCommitRepoDetails,
    GitHubRepoDetails,
    ParsedRepository,
    RepoDetails,
)

_OWNER = r"(?P<owner>[^/\s:@]+)"
_NAME = r"(?P<name>[^/\s]+?)"
_REGION = r"(?P<region>[a-z0-9-]+)"
_SUFFIX = r"(?:\.git)?/?"

# Partition prefix, optional gov/iso marker, direction, number: us-gov-west-1
AWS_REGION_PATTERN = re.compile(
    r"^(?:af|ap|ca|cn|eu|il|me|mx|sa|us)(?:-gov|-iso|-isob)?"
    r"-(?:north|south|east|west|central|northeast|northwest|southeast|southwest)-\d+$"
)


def is_valid_region(region: str) -> bool:
    """Check that a string has the shape of an AWS region name."""
    return AWS_REGION_PATTERN.match(region) is not None


@dataclass(frozen=True)
class RepoURL(ABC):
    """A repository URL known to belong to one provider.

    Subclasses declare the marker used to recognise the provider and the
    patterns of the formats they accept.
    """

    url: str

    provider: ClassVar[ProviderKind]
    host_marker: ClassVar[str]
    patterns: ClassVar[tuple[re.Pattern[str], ...]]

    @classmethod
    def matches(cls, url: str) -> bool:
        """Check whether the URL names this provider at all."""
        return cls.host_marker in url

    def _match(self) -> re.Match[str] | None:
        for pattern in self.patterns:
            match = pattern.match(self.url)
            if match:
                return match
        return None

    @abstractmethod
    def parse(self) -> RepoDetails:
        """Parse provider-specific details out of the URL.

        Raises:
            MalformedRepoURLError: If the URL matches none of the accepted formats
        """
        pass


@dataclass(frozen=True)
class GitHubRepoURL(RepoURL):
    provider = ProviderKind.GITHUB
    host_marker = "github.com"
    patterns = (
        re.compile(rf"^https://github\.com/{_OWNER}/{_NAME}{_SUFFIX}$"),
        re.compile(rf"^git@github\.com:{_OWNER}/{_NAME}(?:\.git)?$"),
        re.compile(rf"^git://github\.com/{_OWNER}/{_NAME}{_SUFFIX}$"),
    )

    def parse(self) -> GitHubRepoDetails:
        """Extract owner and name.

        Raises:
            GitHubURLError: If the URL is in none of the GitHub formats.
        """
        match = self._match()
        if match is None or not match.group("name").removesuffix(".git"):
            raise GitHubURLError(self.url)
        return GitHubRepoDetails(name=match.group("name"), owner=match.group("owner"))


@dataclass(frozen=True)
class CodeCommitRepoURL(RepoURL):
    provider = ProviderKind.CODECOMMIT
    host_marker = "codecommit"
    patterns = (
        re.compile(rf"^https://git-codecommit\.{_REGION}\.amazonaws\.com(?:\.cn)?/v1/repos/{_NAME}{_SUFFIX}$"),
        re.compile(
            rf"^ssh://(?:[^@/\s]+@)?git-codecommit\.{_REGION}\.amazonaws\.com(?:\.cn)?/v1/repos/{_NAME}{_SUFFIX}$"
        ),
        # git-remote-codecommit: codecommit::region://[profile@]repo
        re.compile(rf"^codecommit::{_REGION}://(?:[^@/\s]+@)?{_NAME}$"),
    )

    def parse(self) -> CodeCommitRepoDetails:
        """Extract region and name.

        Raises:
            CodeCommitURLError: If the URL is in none of the CodeCommit formats.
            CodeCommitRegionError: If the region segment is not an AWS region.
        """
        match = self._match()
        if match is None or not match.group("name").removesuffix(".git"):
            raise CodeCommitURLError(self.url)
        region = match.group("region")
        if not is_valid_region(region):
            raise CodeCommitRegionError(self.url)
        return CodeCommitRepoDetails(name=match.group("name"), region=region)


@dataclass(frozen=True)
class BitbucketRepoURL(RepoURL):
    provider = ProviderKind.BITBUCKET
    host_marker = "bitbucket.org"
    patterns = (
        re.compile(rf"^https://(?:[^@/\s]+@)?bitbucket\.org/{_OWNER}/{_NAME}{_SUFFIX}$"),
        re.compile(rf"^ssh://git@bitbucket\.org[:/]{_OWNER}/{_NAME}(?:\.git)?$"),
        re.compile(rf"^git@bitbucket\.org:{_OWNER}/{_NAME}(?:\.git)?$"),
    )

    def parse(self) -> BitbucketRepoDetails:
        """Extract owner and name.

        Raises:
            BitbucketURLError: If the URL is in none of the Bitbucket formats.
        """
        match = self._match()
        if match is None or not match.group("name").removesuffix(".git"):
            raise BitbucketURLError(self.url)
        return BitbucketRepoDetails(name=match.group("name"), owner=match.group("owner"))


# Classification order: the first provider whose marker appears wins.
REPO_URL_TYPES: tuple[type[RepoURL], ...] = (GitHubRepoURL, CodeCommitRepoURL, BitbucketRepoURL)


def classify(url: str) -> RepoURL:
    """Wrap a URL in the type of the provider it names.

    Args:
        url: Raw repository URL.

    Returns:
        GitHubRepoURL, CodeCommitRepoURL or BitbucketRepoURL.

    Raises:
        UnsupportedProviderError: If the URL names none of the providers.
    """
    for url_type in REPO_URL_TYPES:
        if url_type.matches(url):
            return url_type(url)
    raise UnsupportedProviderError(url)


def parse_repo_url(url: str) -> ParsedRepository:
    """Classify a URL and parse the provider-specific details out of it.

    Args:
        url: Raw repository URL. Leading/trailing whitespace is ignored.

    Returns:
        ParsedRepository carrying the provider and details.

    Raises:
        UnsupportedProviderError: If no provider claims the URL.
        MalformedRepoURLError: If the claiming provider cannot parse it.

    Example:
        >>> repo = parse_repo_url("https://github.com/koke/grit.git")
        >>> repo.details.owner, repo.name
        ('koke', 'grit')
    """
    repo_url = classify(url.strip())
    details = repo_url.parse()
    return ParsedRepository(url=repo_url.url, provider=repo_url.provider, details=details)


def try_parse_repo_url(url: str) -> ParsedRepository | None:
    """Tolerant variant of parse_repo_url used while scanning remotes."""
    try:
        return parse_repo_url(url)
    except RepositoryURLError:
        return None
