"""Description of the workspace pipeline for ``shipyard pipeline show``."""

import json
from dataclasses import dataclass

from shipyard.pipeline.manifest import PipelineManifest
from shipyard.workspace import Workspace


@dataclass(frozen=True)
class PipelineDescription:
    manifest: PipelineManifest

    def human_string(self) -> str:
        """Render About, Source and Stages sections as aligned text."""
        manifest = self.manifest
        props = manifest.source.properties
        lines = [
            "About",
            "",
            f"  {'Name':<12}{manifest.name}",
            f"  {'Version':<12}{manifest.version}",
            "",
            "Source",
            "",
            f"  {'Provider':<12}{manifest.source.provider}",
            f"  {'Repository':<12}{props.repository}",
            f"  {'Branch':<12}{props.branch}",
        ]
        if props.access_token_secret:
            lines.append(f"  {'Secret':<12}{props.access_token_secret}")
        lines.extend(["", "Stages", ""])
        if not manifest.stages:
            lines.append("  (none)")
        else:
            lines.append(f"  {'Name':<16}{'Approval':<10}")
            lines.append(f"  {'----':<16}{'--------':<10}")
            for stage in manifest.stages:
                approval = "required" if stage.requires_approval else "-"
                lines.append(f"  {stage.name:<16}{approval:<10}")
        return "\n".join(lines) + "\n"

    def json_string(self) -> str:
        """Render the manifest as a single JSON line."""
        return json.dumps(self.manifest.model_dump(mode="json", exclude_none=True)) + "\n"


class PipelineDescriber:
    def __init__(self, workspace: Workspace) -> None:
        self.workspace = workspace

    def describe(self) -> PipelineDescription:
        """Load the workspace pipeline.

        Raises:
            WorkspaceError: If there is no manifest or it is invalid
        """
        return PipelineDescription(PipelineManifest.parse(self.workspace.read_pipeline_manifest()))
