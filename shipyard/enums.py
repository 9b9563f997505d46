"""Enumerations for shipyard source providers and provisioning outcomes."""

from enum import Enum


class ProviderKind(str, Enum):
    """Source-code hosting providers a pipeline can track.

    The value is the provider name written to the pipeline manifest.
    """

    GITHUB = "GitHub"
    CODECOMMIT = "CodeCommit"
    BITBUCKET = "Bitbucket"

    def __str__(self) -> str:
        return self.value

    @property
    def is_region_bound(self) -> bool:
        """Check if repositories of this provider live in a single AWS region."""
        return self is ProviderKind.CODECOMMIT


class ProvisionStatus(str, Enum):
    """Outcome of one idempotent provisioning step."""

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"
    SKIPPED = "skipped"

    def __str__(self) -> str:
        return self.value
