"""Sandboxed Jinja2 template rendering.

Templates ship inside the package under ``shipyard/templates`` and are
addressed by their path relative to that directory, for example
``cicd/buildspec.yml.j2``.

Security Features:
    - Sandboxed environment prevents arbitrary code execution
    - StrictUndefined fails fast on missing variables
    - Template path validation prevents directory traversal

Example:
    >>> from shipyard.rendering.engine import TemplateEngine
    >>> engine = TemplateEngine()
    >>> buildspec = engine.parse(
    ...     "cicd/buildspec.yml.j2",
    ...     {"pipeline_name": "pipeline-demo-repo-man", "app_name": "demo", ...},
    ... )
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any, Protocol, cast

from jinja2 import FileSystemLoader, StrictUndefined, TemplateNotFound
from jinja2.exceptions import TemplateError as JinjaTemplateError
from jinja2.sandbox import SandboxedEnvironment

from shipyard.exceptions import TemplateError

DEFAULT_TEMPLATE_DIR = Path(__file__).parent.parent / "templates"


class TemplateParser(Protocol):
    def parse(self, template_id: str, data: Mapping[str, Any]) -> str:
        """Render template ``template_id`` with ``data``.

        Raises:
            TemplateError: If the template is missing or fails to render
        """
        ...


class TemplateEngine:
    """Jinja2 rendering with a hardened configuration.

    Configuration:
        - Autoescape disabled (YAML doesn't need HTML escaping)
        - trim_blocks/lstrip_blocks enabled for clean YAML output
        - keep_trailing_newline preserves file format

    Attributes:
        template_dir: Resolved template directory
        env: The SandboxedEnvironment instance
    """

    def __init__(self, template_dir: Path | None = None) -> None:
        """Initialize the engine.

        Args:
            template_dir: Root directory for templates, defaults to the
                package's built-in templates

        Raises:
            ValueError: If template_dir doesn't exist or isn't a directory
        """
        self.template_dir = (template_dir or DEFAULT_TEMPLATE_DIR).resolve()
        if not self.template_dir.is_dir():
            raise ValueError(f"Template directory does not exist: {self.template_dir}")

        self.env = SandboxedEnvironment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

    def validate_template_path(self, template_id: str) -> Path:
        """Resolve ``template_id`` inside the template directory.

        Raises:
            ValueError: If the path escapes the template directory
            TemplateNotFound: If the template file doesn't exist
        """
        requested_path = (self.template_dir / template_id).resolve()
        try:
            requested_path.relative_to(self.template_dir)
        except ValueError as e:
            raise ValueError(f"Template path escapes template directory: {template_id}") from e

        if not requested_path.is_file():
            raise TemplateNotFound(template_id)
        return requested_path

    def parse(self, template_id: str, data: Mapping[str, Any]) -> str:
        try:
            self.validate_template_path(template_id)
            template = self.env.get_template(template_id)
            return cast(str, template.render(**data))
        except TemplateNotFound as e:
            raise TemplateError(f"template {template_id} not found") from e
        except ValueError as e:
            raise TemplateError(str(e)) from e
        except JinjaTemplateError as e:
            raise TemplateError(f"render template {template_id}: {e}") from e
