"""relver - semantic version resolution for tag-driven release pipelines."""

__version__ = "0.1.0"
