"""Pipeline manifest model, persisted as ``shipyard/pipeline.yml``.

Example:
    >>> manifest = PipelineManifest.new("pipeline-demo-repo-man", repo, "main", environments)
    >>> print(manifest.marshal())
    # The manifest for the "pipeline-demo-repo-man" pipeline.
    name: pipeline-demo-repo-man
    version: 1
    source:
      provider: GitHub
      properties:
        repository: https://github.com/koke/repo-man
        branch: main
    stages:
    - name: test
      requires_approval: false
"""

from __future__ import annotations

from collections.abc import Sequence

import yaml
from pydantic import BaseModel, Field, ValidationError

from shipyard.enums import ProviderKind
from shipyard.exceptions import WorkspaceError
from shipyard.git.models import ParsedRepository
from shipyard.pipeline.environments import PipelineEnvironment

MANIFEST_VERSION = 1


class SourceProperties(BaseModel):
    repository: str
    branch: str
    access_token_secret: str | None = None


class PipelineSource(BaseModel):
    provider: ProviderKind
    properties: SourceProperties


class PipelineStage(BaseModel):
    name: str
    requires_approval: bool = False


class PipelineManifest(BaseModel):
    """Definition of a pipeline: its source and its ordered deployment stages."""

    name: str
    version: int = MANIFEST_VERSION
    source: PipelineSource
    stages: list[PipelineStage] = Field(default_factory=list)

    @classmethod
    def new(
        cls,
        name: str,
        repository: ParsedRepository,
        branch: str,
        environments: Sequence[PipelineEnvironment],
        access_token_secret: str | None = None,
    ) -> PipelineManifest:
        """Build the manifest of a freshly initialized pipeline.

        Production environments require manual approval.
        """
        return cls(
            name=name,
            source=PipelineSource(
                provider=repository.provider,
                properties=SourceProperties(
                    repository=repository.repository_url,
                    branch=branch,
                    access_token_secret=access_token_secret,
                ),
            ),
            stages=[PipelineStage(name=env.name, requires_approval=env.is_production) for env in environments],
        )

    def marshal(self) -> str:
        """Serialize to the YAML written to the workspace."""
        body = yaml.safe_dump(self.model_dump(mode="json", exclude_none=True), sort_keys=False)
        return f'# The manifest for the "{self.name}" pipeline.\n{body}'

    @classmethod
    def parse(cls, data: str) -> PipelineManifest:
        """Load a manifest from YAML.

        Raises:
            WorkspaceError: If the YAML is invalid or misses required fields
        """
        try:
            raw = yaml.safe_load(data)
        except yaml.YAMLError as e:
            raise WorkspaceError(f"invalid pipeline manifest: {e}") from e
        try:
            return cls.model_validate(raw)
        except ValidationError as e:
            raise WorkspaceError(f"invalid pipeline manifest: {e}") from e
