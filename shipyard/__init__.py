"""shipyard: bootstrap continuous-delivery pipelines for containerized applications."""

__version__ = "0.1.0"
