"""The project workspace: the ``shipyard/`` directory next to the code.

Layout:
    shipyard/.workspace     YAML summary linking the directory to an application
    shipyard/pipeline.yml   pipeline manifest
    shipyard/buildspec.yml  rendered buildspec

Pipeline files are created exclusively and never overwritten.
"""

from pathlib import Path
from typing import Protocol

import structlog
import yaml

from shipyard.exceptions import FileExistsInWorkspaceError, NoAppInWorkspaceError, WorkspaceError

log = structlog.get_logger(__name__)

WORKSPACE_DIR = "shipyard"
SUMMARY_FILE = ".workspace"
PIPELINE_MANIFEST_FILE = "pipeline.yml"
BUILDSPEC_FILE = "buildspec.yml"


class PipelineWriter(Protocol):
    def write_pipeline_manifest(self, data: str) -> Path:
        """Create the pipeline manifest.

        Raises:
            FileExistsInWorkspaceError: If the manifest already exists
        """
        ...

    def write_pipeline_buildspec(self, data: str) -> Path:
        """Create the buildspec.

        Raises:
            FileExistsInWorkspaceError: If the buildspec already exists
        """
        ...


class Workspace:
    """File access to a project's ``shipyard/`` directory.

    Attributes:
        root: Project directory containing the workspace
    """

    def __init__(self, root: str | Path = ".") -> None:
        self.root = Path(root)

    @property
    def path(self) -> Path:
        return self.root / WORKSPACE_DIR

    @property
    def pipeline_manifest_path(self) -> Path:
        return self.path / PIPELINE_MANIFEST_FILE

    @property
    def buildspec_path(self) -> Path:
        return self.path / BUILDSPEC_FILE

    def app_name(self) -> str:
        """Name of the application this workspace is linked to.

        Raises:
            NoAppInWorkspaceError: If the workspace was never linked
            WorkspaceError: If the summary file is unreadable
        """
        summary_path = self.path / SUMMARY_FILE
        if not summary_path.exists():
            raise NoAppInWorkspaceError()
        try:
            summary = yaml.safe_load(summary_path.read_text()) or {}
        except (OSError, yaml.YAMLError) as e:
            raise WorkspaceError(f"read workspace summary {summary_path}: {e}") from e

        app = summary.get("application") if isinstance(summary, dict) else None
        if not app:
            raise NoAppInWorkspaceError()
        return str(app)

    def link(self, app_name: str) -> Path:
        """Record ``app_name`` as the workspace's application.

        Raises:
            WorkspaceError: If the workspace is linked to a different application
        """
        try:
            current = self.app_name()
        except NoAppInWorkspaceError:
            current = None
        if current and current != app_name:
            raise WorkspaceError(f"workspace is already registered with application {current}")

        summary_path = self.path / SUMMARY_FILE
        self.path.mkdir(parents=True, exist_ok=True)
        summary_path.write_text(yaml.safe_dump({"application": app_name}, sort_keys=False))
        log.info("workspace_linked", app=app_name, path=str(summary_path))
        return summary_path

    def _create(self, path: Path, data: str) -> Path:
        self.path.mkdir(parents=True, exist_ok=True)
        try:
            with open(path, "x") as f:
                f.write(data)
        except FileExistsError as e:
            raise FileExistsInWorkspaceError(str(path)) from e
        log.info("workspace_file_written", path=str(path))
        return path

    def write_pipeline_manifest(self, data: str) -> Path:
        return self._create(self.pipeline_manifest_path, data)

    def write_pipeline_buildspec(self, data: str) -> Path:
        return self._create(self.buildspec_path, data)

    def read_pipeline_manifest(self) -> str:
        """Return the raw pipeline manifest.

        Raises:
            WorkspaceError: If there is no manifest yet
        """
        try:
            return self.pipeline_manifest_path.read_text()
        except FileNotFoundError as e:
            raise WorkspaceError(
                f"no pipeline manifest found at {self.pipeline_manifest_path}, run `shipyard pipeline init` first"
            ) from e
