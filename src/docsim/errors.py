from __future__ import annotations


class DocsimError(Exception):
    """Base class for errors raised by docsim."""


class ExtractionError(DocsimError):
    """A handler could not turn file bytes into text."""


class ConfigError(DocsimError, ValueError):
    """A configuration value is out of its accepted range."""
