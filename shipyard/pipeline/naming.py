"""Pipeline naming."""

from shipyard.exceptions import PipelineNameError

PIPELINE_NAME_PREFIX = "pipeline"
MAX_PIPELINE_NAME_LENGTH = 100


def build_pipeline_name(app_name: str, repo_name: str) -> str:
    """Return ``pipeline-{app}-{repo}`` capped at 100 characters.

    Only the repository segment is shortened; the application segment is
    always kept whole. Two long repository names sharing a prefix can
    therefore produce the same pipeline name.

    Raises:
        PipelineNameError: If the application name leaves no room for the repository

    Example:
        >>> build_pipeline_name("goodmoose", "repo-man")
        'pipeline-goodmoose-repo-man'
    """
    prefix = f"{PIPELINE_NAME_PREFIX}-{app_name}-"
    if len(prefix) >= MAX_PIPELINE_NAME_LENGTH:
        raise PipelineNameError(
            f"application name {app_name} is too long to build a pipeline name of at most "
            f"{MAX_PIPELINE_NAME_LENGTH} characters"
        )
    return (prefix + repo_name)[:MAX_PIPELINE_NAME_LENGTH]
