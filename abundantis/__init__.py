"""Configuration, errors, path and resolution caches, dependency graphs and events for environment variables."""

__version__ = "0.1.0"
__all__ = ["__version__"]