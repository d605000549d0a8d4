"""Exceptions raised by depsort."""


class DepsortError(Exception):
    """Base class for fatal depsort errors."""


class ManifestNotFoundError(DepsortError):
    """No package.json was found in the start directory or its parents."""


class ManifestError(DepsortError):
    """package.json exists but could not be read as a JSON object."""


class ConfigError(DepsortError):
    """A depsort.toml file could not be parsed."""
