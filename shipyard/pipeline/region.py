"""Region checks for region-bound source repositories.

CodeCommit repositories live in one region and a pipeline can only use a
repository in the region the CLI operates in. The operating region is the
default session's region, not the region of any environment.
"""

from typing import cast

from shipyard.config.session import SessionProvider
from shipyard.exceptions import PipelineError, RegionMismatchError, ShipyardError
from shipyard.git.models import CodeCommitRepoDetails, ParsedRepository


def reconcile_region(repo_region: str, effective_region: str, repo_name: str, app_name: str) -> None:
    """Fail unless the repository region equals the operating region.

    Raises:
        RegionMismatchError: If the regions differ
    """
    if repo_region != effective_region:
        raise RegionMismatchError(repo_name, repo_region, app_name, effective_region)


def check_repository_region(repo: ParsedRepository, sessions: SessionProvider, app_name: str) -> None:
    """Run reconcile_region for region-bound repositories; no-op otherwise.

    The session is only consulted when the provider is region-bound.

    Raises:
        PipelineError: If the default session cannot be retrieved
        RegionMismatchError: If the regions differ
    """
    if not repo.provider.is_region_bound:
        return
    details = cast(CodeCommitRepoDetails, repo.details)

    try:
        session = sessions.default()
    except ShipyardError as e:
        raise PipelineError(f"retrieve default session: {e.message}") from e
    reconcile_region(details.region, session.region, details.name, app_name)
