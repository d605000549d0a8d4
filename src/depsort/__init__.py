"""depsort - find runtime dependencies that only development code needs."""

__version__ = "0.1.0"
