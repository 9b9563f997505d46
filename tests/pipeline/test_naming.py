"""Unit tests for pipeline naming."""

import pytest

from shipyard.exceptions import PipelineNameError
from shipyard.pipeline.naming import MAX_PIPELINE_NAME_LENGTH, build_pipeline_name


class TestBuildPipelineName:
    def test_short_names(self):
        assert build_pipeline_name("goodmoose", "repo-man") == "pipeline-goodmoose-repo-man"

    def test_long_names_truncate_repository(self):
        """Test the repository segment is cut to reach exactly 100 characters."""
        app = "goodmoose01234567820123456783012345678401234567850"
        repo = "repo-man101234567820123456783012345678401234567850"

        name = build_pipeline_name(app, repo)

        assert name == (
            "pipeline-goodmoose01234567820123456783012345678401234567850-"
            "repo-man10123456782012345678301234567840"
        )
        assert len(name) == MAX_PIPELINE_NAME_LENGTH

    @pytest.mark.parametrize("app_len,repo_len", [(1, 200), (40, 60), (80, 11), (88, 90)])
    def test_application_segment_is_never_cut(self, app_len, repo_len):
        app = "a" * app_len
        repo = "r" * repo_len

        name = build_pipeline_name(app, repo)

        assert name.startswith(f"pipeline-{app}-")
        assert len(name) == min(MAX_PIPELINE_NAME_LENGTH, len(f"pipeline-{app}-{repo}"))

    def test_deterministic(self):
        assert build_pipeline_name("demo", "repo") == build_pipeline_name("demo", "repo")

    @pytest.mark.parametrize("app_len", [90, 91, 150])
    def test_application_name_too_long(self, app_len):
        """Test an application name leaving no room for the repository."""
        with pytest.raises(PipelineNameError):
            build_pipeline_name("a" * app_len, "repo-man")

    def test_one_repository_character_left(self):
        name = build_pipeline_name("a" * 89, "repo-man")

        assert name == f"pipeline-{'a' * 89}-r"
