"""Template rendering for generated pipeline files."""

from shipyard.rendering.engine import TemplateEngine, TemplateParser

__all__ = ["TemplateEngine", "TemplateParser"]
