"""Artifact provisioning for a new pipeline.

Provisioning runs these steps in order and stops at the first failure:

    1. Create the access-token secret (only when a token was given)
    2. Look up the application
    3. Look up the application's regional resources
    4. Render the buildspec
    5. Write the pipeline manifest
    6. Write the buildspec

Every step that creates something is idempotent: a secret or file that
already exists is reported as ``ProvisionStatus.ALREADY_EXISTS`` and never
overwritten, so provisioning can be re-run safely after a partial failure.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

import structlog

from shipyard.config.store import AppResourcesGetter, ConfigStore
from shipyard.enums import ProviderKind, ProvisionStatus
from shipyard.exceptions import (
    FileExistsInWorkspaceError,
    PipelineError,
    SecretAlreadyExistsError,
    ShipyardError,
)
from shipyard.git.models import ParsedRepository
from shipyard.pipeline.environments import PipelineEnvironment
from shipyard.pipeline.manifest import PipelineManifest
from shipyard.rendering.engine import TemplateParser
from shipyard.secrets.store import SecretsManager
from shipyard.workspace import PipelineWriter

log = structlog.get_logger(__name__)

BUILDSPEC_TEMPLATE = "cicd/buildspec.yml.j2"


def secret_name(app_name: str, repo_name: str) -> str:
    return f"github-token-{app_name}-{repo_name}"


@dataclass(frozen=True)
class StepResult:
    """Outcome of one idempotent step.

    Attributes:
        status: Created, already there, or not attempted
        location: File path or secret reference, when known
    """

    status: ProvisionStatus
    location: str | None = None


@dataclass(frozen=True)
class ProvisionResult:
    pipeline_name: str
    secret: StepResult = field(default_factory=lambda: StepResult(ProvisionStatus.SKIPPED))
    manifest: StepResult = field(default_factory=lambda: StepResult(ProvisionStatus.SKIPPED))
    buildspec: StepResult = field(default_factory=lambda: StepResult(ProvisionStatus.SKIPPED))


class ArtifactProvisioner:
    """Creates the secret and workspace files of a pipeline.

    Attributes:
        store: Application lookup
        resources: Regional resource lookup
        secrets: Secret creation
        writer: Workspace file creation
        renderer: Buildspec rendering
    """

    def __init__(
        self,
        store: ConfigStore,
        resources: AppResourcesGetter,
        secrets: SecretsManager,
        writer: PipelineWriter,
        renderer: TemplateParser,
    ) -> None:
        self.store = store
        self.resources = resources
        self.secrets = secrets
        self.writer = writer
        self.renderer = renderer

    def provision(
        self,
        pipeline_name: str,
        app_name: str,
        repository: ParsedRepository,
        branch: str,
        environments: Sequence[PipelineEnvironment],
        github_token: str = "",
    ) -> ProvisionResult:
        """Provision every artifact of the pipeline.

        Raises:
            PipelineError: If a step fails with anything but an already-exists condition
            TemplateError: If the buildspec fails to render
        """
        secret_result = StepResult(ProvisionStatus.SKIPPED)
        token_secret: str | None = None
        if github_token:
            token_secret = secret_name(app_name, repository.name)
            secret_result = self._create_secret(token_secret, github_token)

        try:
            app = self.store.get_application(app_name)
        except ShipyardError as e:
            raise PipelineError(f"get application {app_name}: {e.message}") from e

        try:
            regional_resources = self.resources.get_regional_app_resources(app)
        except ShipyardError as e:
            raise PipelineError(f"get regional application resources: {e.message}") from e

        buildspec = self.renderer.parse(
            BUILDSPEC_TEMPLATE,
            {
                "pipeline_name": pipeline_name,
                "app_name": app_name,
                "provider": str(repository.provider),
                "branch": branch,
                "environments": [
                    {"name": env.name, "region": env.region, "is_production": env.is_production}
                    for env in environments
                ],
                "artifact_buckets": {res.region: res.s3_bucket for res in regional_resources},
            },
        )

        manifest = PipelineManifest.new(
            pipeline_name,
            repository,
            branch,
            environments,
            access_token_secret=token_secret if repository.provider is ProviderKind.GITHUB else None,
        )
        manifest_result = self._write(
            self.writer.write_pipeline_manifest, manifest.marshal(), "write pipeline manifest to workspace"
        )
        buildspec_result = self._write(self.writer.write_pipeline_buildspec, buildspec, "write buildspec to workspace")

        log.info(
            "pipeline_provisioned",
            pipeline=pipeline_name,
            secret=str(secret_result.status),
            manifest=str(manifest_result.status),
            buildspec=str(buildspec_result.status),
        )
        return ProvisionResult(
            pipeline_name=pipeline_name,
            secret=secret_result,
            manifest=manifest_result,
            buildspec=buildspec_result,
        )

    def _create_secret(self, name: str, value: str) -> StepResult:
        try:
            reference = self.secrets.create_secret(name, value)
        except SecretAlreadyExistsError as e:
            log.info("pipeline_secret_exists", secret=name)
            return StepResult(ProvisionStatus.ALREADY_EXISTS, e.reference)
        except ShipyardError as e:
            raise PipelineError(f"create pipeline secret: {e.message}") from e
        return StepResult(ProvisionStatus.CREATED, reference)

    @staticmethod
    def _write(write: Callable[[str], Path], data: str, stage: str) -> StepResult:
        try:
            path = write(data)
        except FileExistsInWorkspaceError as e:
            log.info("workspace_file_exists", path=e.file_name)
            return StepResult(ProvisionStatus.ALREADY_EXISTS, e.file_name)
        except (ShipyardError, OSError) as e:
            cause = e.message if isinstance(e, ShipyardError) else str(e)
            raise PipelineError(f"{stage}: {cause}") from e
        return StepResult(ProvisionStatus.CREATED, str(path))
