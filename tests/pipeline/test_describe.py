"""Unit tests for the pipeline describer."""

import json

import pytest

from shipyard.exceptions import WorkspaceError
from shipyard.git.parser import parse_repo_url
from shipyard.pipeline.describe import PipelineDescriber
from shipyard.pipeline.environments import PipelineEnvironment
from shipyard.pipeline.manifest import PipelineManifest


@pytest.fixture
def described_workspace(workspace):
    manifest = PipelineManifest.new(
        "pipeline-demo-repo-man",
        parse_repo_url("https://github.com/koke/repo-man"),
        "main",
        [PipelineEnvironment("test", "us-west-2"), PipelineEnvironment("prod", "us-east-1", is_production=True)],
        access_token_secret="github-token-demo-repo-man",
    )
    workspace.write_pipeline_manifest(manifest.marshal())
    return workspace


class TestPipelineDescriber:
    def test_human_string(self, described_workspace):
        text = PipelineDescriber(described_workspace).describe().human_string()

        assert text.startswith("About\n")
        assert "  Name        pipeline-demo-repo-man\n" in text
        assert "  Provider    GitHub\n" in text
        assert "  Repository  https://github.com/koke/repo-man\n" in text
        assert "  Secret      github-token-demo-repo-man\n" in text
        assert "prod            required" in text
        assert text.index("Source") < text.index("Stages")

    def test_json_string(self, described_workspace):
        data = PipelineDescriber(described_workspace).describe().json_string()

        assert data.count("\n") == 1
        parsed = json.loads(data)
        assert parsed["name"] == "pipeline-demo-repo-man"
        assert parsed["source"]["properties"]["branch"] == "main"
        assert [stage["name"] for stage in parsed["stages"]] == ["test", "prod"]

    def test_no_stages(self, workspace):
        manifest = PipelineManifest.new("pipeline-demo-x", parse_repo_url("https://github.com/koke/x"), "main", [])
        workspace.write_pipeline_manifest(manifest.marshal())

        assert "  (none)" in PipelineDescriber(workspace).describe().human_string()

    def test_missing_manifest(self, workspace):
        with pytest.raises(WorkspaceError) as exc_info:
            PipelineDescriber(workspace).describe()

        assert exc_info.value.message.startswith("no pipeline manifest found")
