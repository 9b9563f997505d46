"""Resolution of requested environment names against the configuration store."""

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from shipyard.config.store import ConfigStore
from shipyard.exceptions import PipelineError, ShipyardError

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class PipelineEnvironment:
    """A deployment stage of the pipeline.

    Attributes:
        name: Environment name
        region: Region the environment deploys to
        is_production: Whether deployments need manual approval
    """

    name: str
    region: str
    is_production: bool = False


def resolve_environments(store: ConfigStore, app_name: str, names: Sequence[str]) -> list[PipelineEnvironment]:
    """Look up each environment in order, stopping at the first failure.

    Order is preserved and duplicates are kept. Environments after a failing
    name are never looked up.

    Raises:
        PipelineError: ``get config of environment {name}: {cause}``
    """
    environments = []
    for name in names:
        try:
            env = store.get_environment(app_name, name)
        except ShipyardError as e:
            raise PipelineError(f"get config of environment {name}: {e.message}") from e
        environments.append(PipelineEnvironment(name=env.name, region=env.region, is_production=env.prod))

    log.debug("environments_resolved", app=app_name, environments=[env.name for env in environments])
    return environments
