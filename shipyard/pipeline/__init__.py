"""Pipeline bootstrapping: naming, environment resolution, provisioning."""

from shipyard.pipeline.describe import PipelineDescriber, PipelineDescription
from shipyard.pipeline.environments import PipelineEnvironment, resolve_environments
from shipyard.pipeline.init import InitPipelineOpts, InitPipelineVars
from shipyard.pipeline.manifest import PipelineManifest
from shipyard.pipeline.naming import build_pipeline_name
from shipyard.pipeline.provisioner import ArtifactProvisioner, ProvisionResult, StepResult
from shipyard.pipeline.region import check_repository_region, reconcile_region

__all__ = [
    "ArtifactProvisioner",
    "InitPipelineOpts",
    "InitPipelineVars",
    "PipelineDescriber",
    "PipelineDescription",
    "PipelineEnvironment",
    "PipelineManifest",
    "ProvisionResult",
    "StepResult",
    "build_pipeline_name",
    "check_repository_region",
    "reconcile_region",
    "resolve_environments",
]
