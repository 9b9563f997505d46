"""CLI commands for shipyard.

Command groups:
    pipeline (shipyard.cli.pipeline):
        ``init`` bootstraps a pipeline for the workspace application and
        ``show`` describes the workspace pipeline.

    app (shipyard.cli.app):
        ``link`` associates the current directory with an application.

The group objects are registered on the root ``shipyard`` command in
shipyard.main.
"""

from shipyard.cli.app import app_group
from shipyard.cli.pipeline import pipeline_group

__all__ = ["app_group", "pipeline_group"]
