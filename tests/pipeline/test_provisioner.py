"""Unit tests for pipeline artifact provisioning.

Tests cover:
- Secret creation only when a token is given
- Idempotent re-runs (secret and both files already present)
- Both workspace writes attempted independently
- Stage-prefixed error wrapping
- Renderer errors propagating unchanged
"""

from unittest.mock import Mock

import pytest
import yaml

from shipyard.enums import ProvisionStatus
from shipyard.exceptions import (
    ConfigurationError,
    PipelineError,
    SecretError,
    TemplateError,
    WorkspaceError,
)
from shipyard.git.parser import parse_repo_url
from shipyard.pipeline.environments import PipelineEnvironment
from shipyard.pipeline.provisioner import ArtifactProvisioner, secret_name
from shipyard.rendering.engine import TemplateEngine
from tests.fakes import FakeSecrets

ENVIRONMENTS = [
    PipelineEnvironment(name="test", region="us-west-2"),
    PipelineEnvironment(name="prod", region="us-east-1", is_production=True),
]
GITHUB = parse_repo_url("git@github.com:koke/repo-man.git")
CODECOMMIT = parse_repo_url("codecommit::us-west-2://repo-man")


@pytest.fixture
def secrets():
    return FakeSecrets()


@pytest.fixture
def provisioner(store, workspace, secrets):
    return ArtifactProvisioner(store, store, secrets, workspace, TemplateEngine())


def provision(provisioner, repository=GITHUB, token="ghp_token"):
    return provisioner.provision(
        "pipeline-demo-repo-man", "demo", repository, "main", ENVIRONMENTS, github_token=token
    )


class TestProvisionArtifacts:
    """Tests for a first provisioning run."""

    def test_creates_secret_and_files(self, provisioner, secrets, workspace):
        result = provision(provisioner)

        assert secrets.created == {"github-token-demo-repo-man": "ghp_token"}
        assert result.secret.status is ProvisionStatus.CREATED
        assert result.manifest.status is ProvisionStatus.CREATED
        assert result.buildspec.status is ProvisionStatus.CREATED
        assert result.manifest.location == str(workspace.pipeline_manifest_path)

    def test_manifest_contents(self, provisioner, workspace):
        provision(provisioner)

        manifest = yaml.safe_load(workspace.pipeline_manifest_path.read_text())
        assert manifest == {
            "name": "pipeline-demo-repo-man",
            "version": 1,
            "source": {
                "provider": "GitHub",
                "properties": {
                    "repository": "https://github.com/koke/repo-man",
                    "branch": "main",
                    "access_token_secret": "github-token-demo-repo-man",
                },
            },
            "stages": [
                {"name": "test", "requires_approval": False},
                {"name": "prod", "requires_approval": True},
            ],
        }

    def test_buildspec_contents(self, provisioner, workspace):
        provision(provisioner)

        buildspec = workspace.buildspec_path.read_text()
        assert "pipeline-demo-repo-man" in buildspec
        assert "--env test" in buildspec
        assert "--env prod" in buildspec
        assert "demo-artifacts-us-east-1" in buildspec
        assert yaml.safe_load(buildspec)["env"]["variables"]["SOURCE_BRANCH"] == "main"

    def test_no_token_skips_secret(self, provisioner, secrets, workspace):
        result = provision(provisioner, token="")

        assert secrets.created == {}
        assert result.secret.status is ProvisionStatus.SKIPPED
        manifest = yaml.safe_load(workspace.pipeline_manifest_path.read_text())
        assert "access_token_secret" not in manifest["source"]["properties"]

    def test_token_secret_only_referenced_for_github(self, provisioner, secrets, workspace):
        provision(provisioner, repository=CODECOMMIT)

        assert secret_name("demo", "repo-man") in secrets.created
        manifest = yaml.safe_load(workspace.pipeline_manifest_path.read_text())
        assert manifest["source"]["provider"] == "CodeCommit"
        assert "access_token_secret" not in manifest["source"]["properties"]


class TestProvisionIdempotence:
    """Tests for re-running provisioning."""

    def test_rerun_reports_already_exists(self, store, workspace):
        secrets = FakeSecrets(existing={"github-token-demo-repo-man"})
        provisioner = ArtifactProvisioner(store, store, secrets, workspace, TemplateEngine())
        provision(provisioner)
        workspace.pipeline_manifest_path.write_text("# edited by hand\n")

        result = provision(provisioner)

        assert result.secret.status is ProvisionStatus.ALREADY_EXISTS
        assert result.manifest.status is ProvisionStatus.ALREADY_EXISTS
        assert result.buildspec.status is ProvisionStatus.ALREADY_EXISTS
        assert workspace.pipeline_manifest_path.read_text() == "# edited by hand\n"

    def test_existing_manifest_does_not_stop_buildspec(self, provisioner, workspace):
        workspace.path.mkdir(parents=True, exist_ok=True)
        workspace.pipeline_manifest_path.write_text("name: pipeline-demo-repo-man\n")

        result = provision(provisioner)

        assert result.manifest.status is ProvisionStatus.ALREADY_EXISTS
        assert result.buildspec.status is ProvisionStatus.CREATED
        assert workspace.buildspec_path.exists()


class TestProvisionErrors:
    """Tests for failing steps."""

    def test_secret_failure(self, store, workspace):
        secrets = FakeSecrets(error=SecretError("keyring locked"))
        provisioner = ArtifactProvisioner(store, store, secrets, workspace, TemplateEngine())

        with pytest.raises(PipelineError) as exc_info:
            provision(provisioner)

        assert exc_info.value.message == "create pipeline secret: keyring locked"
        assert not workspace.pipeline_manifest_path.exists()

    def test_unknown_application(self, provisioner):
        with pytest.raises(PipelineError) as exc_info:
            provisioner.provision("pipeline-ghost-repo-man", "ghost", GITHUB, "main", ENVIRONMENTS)

        assert exc_info.value.message == (
            "get application ghost: couldn't find an application named ghost in the store"
        )

    def test_regional_resources_failure(self, store, workspace, secrets):
        resources = Mock()
        resources.get_regional_app_resources.side_effect = ConfigurationError("throttled")
        provisioner = ArtifactProvisioner(store, resources, secrets, workspace, TemplateEngine())

        with pytest.raises(PipelineError) as exc_info:
            provision(provisioner)

        assert exc_info.value.message == "get regional application resources: throttled"
        assert resources.get_regional_app_resources.call_args.args[0].name == "demo"

    def test_renderer_error_is_not_wrapped(self, store, workspace, secrets):
        renderer = Mock()
        renderer.parse.side_effect = TemplateError("template cicd/buildspec.yml.j2 not found")
        provisioner = ArtifactProvisioner(store, store, secrets, workspace, renderer)

        with pytest.raises(TemplateError) as exc_info:
            provision(provisioner)

        assert not isinstance(exc_info.value, PipelineError)
        assert exc_info.value.message == "template cicd/buildspec.yml.j2 not found"
        assert renderer.parse.call_args.args[0] == "cicd/buildspec.yml.j2"

    def test_manifest_write_failure(self, store, secrets):
        writer = Mock()
        writer.write_pipeline_manifest.side_effect = WorkspaceError("disk full")
        provisioner = ArtifactProvisioner(store, store, secrets, writer, TemplateEngine())

        with pytest.raises(PipelineError) as exc_info:
            provision(provisioner)

        assert exc_info.value.message == "write pipeline manifest to workspace: disk full"
        writer.write_pipeline_buildspec.assert_not_called()

    def test_buildspec_write_failure(self, store, secrets, tmp_path):
        writer = Mock()
        writer.write_pipeline_manifest.return_value = tmp_path / "pipeline.yml"
        writer.write_pipeline_buildspec.side_effect = PermissionError("read-only file system")
        provisioner = ArtifactProvisioner(store, store, secrets, writer, TemplateEngine())

        with pytest.raises(PipelineError) as exc_info:
            provision(provisioner)

        assert exc_info.value.message == "write buildspec to workspace: read-only file system"
